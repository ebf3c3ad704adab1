"""
In-memory table of numeric records used by the clustering engine.

Records are addressed by their position in the dataset; cluster SSE,
centroid recomputation and the seeder all work with these integer indices.
"""

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

import numpy as np

from .distance import DistanceFunc, euclidean_distance

Centroid = Dict[str, float]


class EmptyClusterError(ValueError):
    """Raised when a mean is requested over no records."""


class Record(object):
    """A single observation: attribute values plus an optional cluster label."""

    def __init__(self, values: Dict[str, float], cluster: Optional[int] = None) -> None:
        self.values = values
        self.cluster = cluster

    def __getitem__(self, name: str) -> float:
        return self.values[name]

    def __repr__(self) -> str:
        return f"Record({self.values!r}, cluster={self.cluster!r})"


class AttributeStats(object):
    """Observed minimum and maximum of every attribute."""

    def __init__(self) -> None:
        self.minimums: Dict[str, float] = {}
        self.maximums: Dict[str, float] = {}

    def update(self, name: str, value: float) -> None:
        if name not in self.minimums or value < self.minimums[name]:
            self.minimums[name] = value
        if name not in self.maximums or value > self.maximums[name]:
            self.maximums[name] = value

    def remove(self, name: str) -> None:
        self.minimums.pop(name, None)
        self.maximums.pop(name, None)

    def bounds(self, name: str):
        return self.minimums[name], self.maximums[name]

    def __contains__(self, name: str) -> bool:
        return name in self.minimums


class DataSet(object):
    """
    Ordered collection of records sharing one set of attribute names.

    Args:
        attribute_names: Attribute names in output order
    """

    def __init__(self, attribute_names: Optional[Iterable[str]] = None) -> None:
        self.attribute_names: List[str] = list(attribute_names or [])
        self.records: List[Record] = []
        self.stats = AttributeStats()

    @classmethod
    def from_rows(cls, attribute_names: Sequence[str], rows: Iterable[Sequence[float]]) -> "DataSet":
        """Build a dataset from rows of values given in ``attribute_names`` order."""
        dataset = cls(attribute_names)
        for row in rows:
            if len(row) != len(dataset.attribute_names):
                raise ValueError(
                    f"Row has {len(row)} values, expected {len(dataset.attribute_names)}"
                )
            dataset.add_record(dict(zip(dataset.attribute_names, (float(v) for v in row))))
        return dataset

    def add_record(self, values: Mapping[str, float]) -> Record:
        """Append a record and widen the attribute statistics."""
        if set(values) != set(self.attribute_names):
            raise ValueError(
                f"Record attributes {sorted(values)} do not match dataset attributes "
                f"{sorted(self.attribute_names)}"
            )
        record = Record({name: float(values[name]) for name in self.attribute_names})
        for name, value in record.values.items():
            self.stats.update(name, value)
        self.records.append(record)
        return record

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    @property
    def labels(self) -> List[Optional[int]]:
        return [record.cluster for record in self.records]

    def get_min(self, name: str) -> float:
        return self.stats.minimums[name]

    def get_max(self, name: str) -> float:
        return self.stats.maximums[name]

    def to_array(self) -> np.ndarray:
        """Return the values as an (n_records, n_attributes) array in attribute order."""
        return np.array(
            [[record.values[name] for name in self.attribute_names] for record in self.records],
            dtype=np.float64,
        ).reshape(len(self.records), len(self.attribute_names))

    def remove_attribute(self, name: str) -> None:
        """Drop an attribute from the names, every record and the statistics."""
        if name not in self.attribute_names:
            return
        self.attribute_names.remove(name)
        for record in self.records:
            del record.values[name]
        self.stats.remove(name)

    def mean_of_attribute(self, name: str, indices: Sequence[int]) -> float:
        """
        Arithmetic mean of one attribute over a subset of records.

        Args:
            name: Attribute name
            indices: Positions of the records to average

        Returns:
            The mean value

        Raises:
            IndexError: If an index does not address a record
            EmptyClusterError: If ``indices`` is empty
        """
        if not indices:
            raise EmptyClusterError(f"Cannot average attribute '{name}' over no records")
        n_records = len(self.records)
        total = 0.0
        for i in indices:
            if not 0 <= i < n_records:
                raise IndexError(f"Record index {i} out of range for {n_records} records")
            total += self.records[i].values[name]
        return total / len(indices)

    def cluster_indices(self, cluster_no: int) -> List[int]:
        return [i for i, record in enumerate(self.records) if record.cluster == cluster_no]

    def calculate_centroid(self, cluster_no: int) -> Optional[Centroid]:
        """Mean of every attribute over the cluster, or None if the cluster is empty."""
        indices = self.cluster_indices(cluster_no)
        if not indices:
            return None
        return {name: self.mean_of_attribute(name, indices) for name in self.attribute_names}

    def recompute_centroids(self, k: int, previous: Optional[Sequence[Centroid]] = None) -> List[Centroid]:
        """
        Compute the centroids of clusters ``0..k-1`` from the current labels.

        An empty cluster keeps its centroid from ``previous``.

        Raises:
            EmptyClusterError: If a cluster is empty and no previous centroid is given
        """
        centroids = []
        for cluster_no in range(k):
            centroid = self.calculate_centroid(cluster_no)
            if centroid is None:
                if previous is None:
                    raise EmptyClusterError(f"Cluster {cluster_no} has no records")
                centroid = dict(previous[cluster_no])
            centroids.append(centroid)
        return centroids

    def random_data_point(self, rng: np.random.Generator) -> Centroid:
        """Draw each attribute uniformly from its observed [min, max] range."""
        point = {}
        for name in self.attribute_names:
            low, high = self.stats.bounds(name)
            point[name] = low + (high - low) * rng.random()
        return point

    def random_from_dataset(self, rng: np.random.Generator) -> Centroid:
        """Return a copy of the values of a uniformly chosen record."""
        index = int(rng.integers(len(self.records)))
        return dict(self.records[index].values)

    def calculate_cluster_sse(
        self,
        centroid: Mapping[str, float],
        cluster_no: int,
        distance_func: DistanceFunc = euclidean_distance,
    ) -> float:
        sse = 0.0
        for record in self.records:
            if record.cluster == cluster_no:
                sse += distance_func(centroid, record.values) ** 2
        return sse

    def calculate_total_sse(
        self,
        centroids: Sequence[Mapping[str, float]],
        distance_func: DistanceFunc = euclidean_distance,
    ) -> float:
        """Sum of the cluster SSEs; centroid ``i`` belongs to cluster label ``i``."""
        sse = 0.0
        for i, centroid in enumerate(centroids):
            sse += self.calculate_cluster_sse(centroid, i, distance_func)
        return sse
