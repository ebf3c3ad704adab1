from recordkmeans.cli import default_output_path, main

SAMPLE = "x,y,Class\n0,0,1\n0,1,1\n10,10,2\n10,11,2\n"


def test_default_output_path():
    assert default_output_path("files/sample.csv") == "files/sampleClustered.csv"
    assert default_output_path("data") == "dataClustered.csv"


def test_main_clusters_and_drops_class(tmp_path):
    src = tmp_path / "sample.csv"
    src.write_text(SAMPLE, encoding="utf-8")

    assert main([str(src), "-k", "2", "--seed", "1"]) == 0

    lines = (tmp_path / "sampleClustered.csv").read_text(encoding="utf-8").splitlines()
    assert lines[0] == "x,y,ClusterId"
    labels = [line.split(",")[-1] for line in lines[1:]]
    assert labels[0] == labels[1]
    assert labels[2] == labels[3]
    assert labels[0] != labels[2]


def test_main_explicit_output_and_verbose(tmp_path, capsys):
    src = tmp_path / "sample.csv"
    src.write_text(SAMPLE, encoding="utf-8")
    out = tmp_path / "result.csv"

    assert main([str(src), "-k", "1", "-o", str(out), "--drop", "--verbose"]) == 0

    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "x,y,Class,ClusterId"
    assert all(line.endswith(",0") for line in lines[1:])
    assert "Wrote 4 records in 1 clusters" in capsys.readouterr().out


def test_main_reports_malformed_input(tmp_path, capsys):
    src = tmp_path / "bad.csv"
    src.write_text("x,y\n1\n", encoding="utf-8")

    assert main([str(src)]) == 1
    assert "error" in capsys.readouterr().err
    assert not (tmp_path / "badClustered.csv").exists()


def test_main_rejects_too_many_clusters(tmp_path, capsys):
    src = tmp_path / "sample.csv"
    src.write_text(SAMPLE, encoding="utf-8")
    assert main([str(src), "-k", "9"]) == 1
    assert "exceeds" in capsys.readouterr().err
