"""
K-means clustering of numeric record tables.

Example:
    >>> from recordkmeans import DataSet, run_kmeans
    >>> data = DataSet.from_rows(['x', 'y'], [(0, 0), (0, 1), (10, 10), (10, 11)])
    >>> model = run_kmeans(data, 2, rng_seed=0)
    >>> sorted(model.get_cluster_info()['cluster_sizes'].values())
    [2, 2]
"""

from .version import __version__
from .dataset import AttributeStats, DataSet, EmptyClusterError, Record
from .distance import DistanceFunc, euclidean_distance
from .seeding import CentroidSeeder
from .kmeans import KMeans, PRECISION, run_kmeans
from .io import MalformedFileError, load_dataset, write_dataset
from .utils import create_sample_dataset, evaluate_clustering

__all__ = [
    "__version__",
    "AttributeStats", "DataSet", "EmptyClusterError", "Record",
    "DistanceFunc", "euclidean_distance",
    "CentroidSeeder",
    "KMeans", "PRECISION", "run_kmeans",
    "MalformedFileError", "load_dataset", "write_dataset",
    "create_sample_dataset", "evaluate_clustering",
]
