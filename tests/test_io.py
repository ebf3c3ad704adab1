import pytest

from recordkmeans.dataset import DataSet
from recordkmeans.io import MalformedFileError, load_dataset, write_dataset


def write_text(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_load_well_formed_file(tmp_path):
    path = write_text(tmp_path / "data.csv", "a,b,c\n1,2,3\n4,5,6\n-1.5,0,2e3\n")
    data = load_dataset(path)
    assert data.attribute_names == ["a", "b", "c"]
    assert len(data) == 3
    assert data[2].values == {"a": -1.5, "b": 0.0, "c": 2000.0}
    assert data.get_min("a") == -1.5
    assert data.get_max("c") == 2000.0


def test_load_skips_blank_lines(tmp_path):
    path = write_text(tmp_path / "data.csv", "a,b\r\n1,2\r\n\r\n3,4\r\n\n")
    data = load_dataset(str(path))
    assert len(data) == 2
    assert data[1].values == {"a": 3.0, "b": 4.0}


@pytest.mark.parametrize("body", [
    "a,b\n1,2\n3\n",
    "a,b\n1,2,3\n",
    "a,b\n1,2\n3,4,\n",
])
def test_row_width_mismatch_is_malformed(tmp_path, body):
    path = write_text(tmp_path / "bad.csv", body)
    with pytest.raises(MalformedFileError):
        load_dataset(path)


@pytest.mark.parametrize("body", [
    "",
    "a,b\n1,two\n",
    "a,b\n1,nan\n",
    "a,b\n1,inf\n",
    "a,a\n1,2\n",
])
def test_other_malformed_inputs(tmp_path, body):
    path = write_text(tmp_path / "bad.csv", body)
    with pytest.raises(MalformedFileError):
        load_dataset(path)


def test_malformed_error_is_value_error():
    assert issubclass(MalformedFileError, ValueError)


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_dataset(tmp_path / "missing.csv")


def test_write_dataset(tmp_path):
    data = DataSet.from_rows(["x", "y"], [(0, 1), (2.5, 3)])
    data[0].cluster = 1
    data[1].cluster = 0
    out = tmp_path / "out.csv"
    write_dataset(data, out)
    assert out.read_text(encoding="utf-8").splitlines() == [
        "x,y,ClusterId",
        "0.0,1.0,1",
        "2.5,3.0,0",
    ]


def test_write_unlabelled_record(tmp_path):
    data = DataSet.from_rows(["x"], [(4,)])
    out = tmp_path / "out.csv"
    write_dataset(data, out)
    assert out.read_text(encoding="utf-8").splitlines() == ["x,ClusterId", "4.0,"]


def test_write_error_propagates(tmp_path):
    data = DataSet.from_rows(["x"], [(4,)])
    with pytest.raises(OSError):
        write_dataset(data, tmp_path / "no_such_dir" / "out.csv")


def test_written_file_reloads(tmp_path):
    src = write_text(tmp_path / "in.csv", "x,y\n0,0\n0,1\n10,10\n10,11\n")
    data = load_dataset(src)
    for i, record in enumerate(data):
        record.cluster = i // 2
    out = tmp_path / "out.csv"
    write_dataset(data, out)

    reloaded = load_dataset(out)
    assert reloaded.attribute_names == ["x", "y", "ClusterId"]
    assert [r["ClusterId"] for r in reloaded] == [0.0, 0.0, 1.0, 1.0]


def test_write_uses_csv_row_terminators(tmp_path):
    data = DataSet.from_rows(["x", "y"], [(1, 2)])
    data[0].cluster = 0
    out = tmp_path / "out.csv"
    write_dataset(data, out)
    assert out.read_bytes() == b"x,y,ClusterId\r\n1.0,2.0,0\r\n"
