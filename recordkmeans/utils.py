"""
Helpers for generating sample data and scoring a clustering.
"""

from typing import Dict, Optional

import numpy as np
from sklearn.metrics import silhouette_score

from .dataset import DataSet
from .distance import DistanceFunc, euclidean_distance


def create_sample_dataset(
    n_samples: int = 300,
    n_features: int = 2,
    n_clusters: int = 3,
    cluster_std: float = 1.0,
    center_spread: float = 10.0,
    random_state: Optional[int] = None
) -> DataSet:
    """
    Create a dataset of Gaussian blobs for demos and tests.

    Args:
        n_samples: Total number of records
        n_features: Number of attributes, named x0, x1, ...
        n_clusters: Number of blobs
        cluster_std: Standard deviation of each blob
        center_spread: Blob centers are drawn uniformly from [-spread, spread]
        random_state: Random seed for reproducibility

    Returns:
        Dataset with unlabelled records
    """
    rng = np.random.default_rng(random_state)
    centers = rng.uniform(-center_spread, center_spread, size=(n_clusters, n_features))
    blob_ids = np.arange(n_samples) % n_clusters
    X = centers[blob_ids] + rng.normal(scale=cluster_std, size=(n_samples, n_features))

    names = [f"x{i}" for i in range(n_features)]
    return DataSet.from_rows(names, X.tolist())


def evaluate_clustering(data: DataSet, distance_func: DistanceFunc = euclidean_distance) -> Dict:
    """
    Score the current labels of a clustered dataset.

    Returns:
        Dictionary with the total SSE, cluster sizes and the silhouette score
        (None when fewer than two clusters are populated)
    """
    labels = data.labels
    if not labels:
        raise ValueError("Dataset has no records")
    if any(label is None for label in labels):
        raise ValueError("Dataset has unlabelled records")

    n_clusters = max(labels) + 1
    centroids = [data.calculate_centroid(k) or {} for k in range(n_clusters)]
    sizes = {k: len(data.cluster_indices(k)) for k in range(n_clusters)}

    populated = sum(1 for size in sizes.values() if size > 0)
    silhouette = None
    if 2 <= populated < len(data):
        silhouette = float(silhouette_score(data.to_array(), np.array(labels)))

    sse = sum(
        data.calculate_cluster_sse(centroid, k, distance_func)
        for k, centroid in enumerate(centroids)
        if sizes[k] > 0
    )

    return {
        'sse': float(sse),
        'cluster_sizes': sizes,
        'silhouette': silhouette,
    }
