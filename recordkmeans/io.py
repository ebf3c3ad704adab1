"""
Reading and writing comma-separated record files.

The input format is a header line of attribute names followed by one line of
numeric values per record. The output repeats the header with a trailing
``ClusterId`` column and appends each record's label.
"""

import csv
import math
import os
from typing import Union

from .dataset import DataSet

CLUSTER_COLUMN = 'ClusterId'

PathLike = Union[str, os.PathLike]


class MalformedFileError(ValueError):
    """Raised when an input file does not match the expected layout."""


def _parse_value(text: str, line_no: int) -> float:
    try:
        value = float(text)
    except ValueError:
        raise MalformedFileError(f"Line {line_no}: '{text}' is not a number") from None
    if not math.isfinite(value):
        raise MalformedFileError(f"Line {line_no}: '{text}' is not a finite number")
    return value


def load_dataset(path: PathLike) -> DataSet:
    """
    Load a dataset from a comma-separated file.

    Args:
        path: File to read

    Returns:
        The loaded dataset

    Raises:
        MalformedFileError: If the header is missing or a row is not a full row of numbers
        OSError: If the file cannot be read
    """
    with open(path, encoding='utf-8') as f:
        header = f.readline().rstrip('\r\n')
        if not header:
            raise MalformedFileError(f"{path}: missing header line")
        names = header.split(',')
        if len(set(names)) != len(names):
            raise MalformedFileError(f"{path}: duplicate attribute names in header")
        dataset = DataSet(names)
        n_attrs = len(dataset.attribute_names)

        for line_no, line in enumerate(f, start=2):
            line = line.rstrip('\r\n')
            if not line.strip():
                continue
            fields = line.split(',')
            if len(fields) != n_attrs:
                raise MalformedFileError(
                    f"{path}: line {line_no} has {len(fields)} values, expected {n_attrs}"
                )
            dataset.add_record({
                name: _parse_value(text, line_no)
                for name, text in zip(dataset.attribute_names, fields)
            })

    return dataset


def write_dataset(dataset: DataSet, path: PathLike) -> None:
    """Write the records and their cluster labels; an unset label is left empty."""
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(dataset.attribute_names + [CLUSTER_COLUMN])
        for record in dataset:
            fields = [str(record.values[name]) for name in dataset.attribute_names]
            fields.append('' if record.cluster is None else str(record.cluster))
            writer.writerow(fields)
