"""
K-means clustering (Lloyd's algorithm) over a DataSet of named attributes.
"""

import sys
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from .dataset import Centroid, DataSet
from .distance import DistanceFunc, euclidean_distance
from .seeding import CentroidSeeder

# Iteration stops once the total SSE fails to drop by more than this
PRECISION = 0.0


class KMeans:
    """
    K-means clustering that labels the records of a DataSet in place.

    Features:
    - Distance-weighted (k-means++ style) or random initialization
    - Stops at the first iteration that does not lower the total SSE
    - Iteration cap as a safety bound
    - Pluggable distance function
    - Empty clusters keep their previous centroid
    """

    def __init__(
        self,
        n_clusters: int,
        max_iters: int = 300,
        tol: float = PRECISION,
        init: str = 'k-means++',
        random_state: Optional[int] = None,
        distance_func: DistanceFunc = euclidean_distance,
        verbose: bool = False
    ):
        """
        Initialize K-means clustering.

        Args:
            n_clusters: Number of clusters
            max_iters: Maximum number of iterations
            tol: Minimum SSE decrease required to keep iterating
            init: Initialization method ('k-means++' or 'random')
            random_state: Random seed for reproducibility
            distance_func: Distance between two attribute mappings
            verbose: Whether to print progress information
        """
        if n_clusters < 1:
            raise ValueError(f"n_clusters must be at least 1, got {n_clusters}")
        if init not in ('k-means++', 'random'):
            raise ValueError(f"Unknown initialization method: {init}")

        self.n_clusters = n_clusters
        self.max_iters = max_iters
        self.tol = tol
        self.init = init
        self.random_state = random_state
        self.distance_func = distance_func
        self.verbose = verbose
        self.rng = np.random.default_rng(random_state)

        # Results
        self.cluster_centers_: Optional[List[Centroid]] = None
        self.labels_: Optional[List[int]] = None
        self.inertia_: Optional[float] = None
        self.n_iter_: Optional[int] = None
        self.sse_history_: List[float] = []
        self.converged_ = False
        self.seed_indices_: List[int] = []

    def _init_centroids(self, data: DataSet) -> List[Centroid]:
        """Initialize centroids by weighted seeding or random points in the data range."""
        if self.init == 'k-means++':
            seeder = CentroidSeeder(data, distance_func=self.distance_func, rng=self.rng)
            centroids = seeder.seed(self.n_clusters)
            self.seed_indices_ = list(seeder.chosen_indices)
            return centroids
        return [data.random_data_point(self.rng) for _ in range(self.n_clusters)]

    def _nearest(self, values: Mapping[str, float], centroids: Sequence[Centroid]) -> Optional[int]:
        """Index of the closest centroid; ties go to the lowest index."""
        best = None
        min_dist = sys.float_info.max
        for i, centroid in enumerate(centroids):
            dist = self.distance_func(centroid, values)
            if dist < min_dist:
                min_dist = dist
                best = i
        return best

    def _assign_clusters(self, data: DataSet, centroids: Sequence[Centroid]) -> None:
        """Label every record with its nearest centroid."""
        for record in data:
            nearest = self._nearest(record.values, centroids)
            if nearest is not None:
                record.cluster = nearest

    def fit(self, data: DataSet, initial_centroids: Optional[Sequence[Mapping[str, float]]] = None) -> 'KMeans':
        """
        Cluster the records of ``data``, writing each record's cluster label.

        Args:
            data: Dataset to cluster
            initial_centroids: Starting centroids; seeded from the data if None

        Returns:
            self
        """
        n_records = len(data)
        if n_records == 0:
            raise ValueError("Cannot cluster an empty dataset")
        if self.n_clusters > n_records:
            raise ValueError(
                f"n_clusters={self.n_clusters} exceeds the number of records ({n_records})"
            )

        if initial_centroids is not None:
            if len(initial_centroids) != self.n_clusters:
                raise ValueError(
                    f"Expected {self.n_clusters} initial centroids, got {len(initial_centroids)}"
                )
            centroids = [dict(c) for c in initial_centroids]
        else:
            centroids = self._init_centroids(data)

        if self.verbose:
            print(f"Fitting K-means with {self.n_clusters} clusters on {n_records} records...")

        sse = sys.float_info.max
        self.sse_history_ = []
        self.converged_ = False
        iteration = 0

        while iteration < self.max_iters:
            iteration += 1

            self._assign_clusters(data, centroids)
            centroids = data.recompute_centroids(self.n_clusters, previous=centroids)

            new_sse = data.calculate_total_sse(centroids, self.distance_func)
            self.sse_history_.append(new_sse)

            if sse - new_sse <= self.tol:
                self.converged_ = True
                if self.verbose:
                    print(f"Converged after {iteration} iterations")
                break
            sse = new_sse

            if self.verbose:
                print(f"Iteration {iteration}, SSE: {new_sse:.4f}")
        else:
            if self.verbose:
                print(f"Stopped after reaching max_iters={self.max_iters}")

        self.cluster_centers_ = centroids
        self.labels_ = data.labels
        self.inertia_ = self.sse_history_[-1] if self.sse_history_ else None
        self.n_iter_ = iteration

        if self.verbose and self.inertia_ is not None:
            print(f"Final SSE: {self.inertia_:.4f}")

        return self

    def predict(self, values: Mapping[str, float]) -> int:
        """
        Predict the cluster of a new attribute mapping.

        Args:
            values: Attribute name to value

        Returns:
            Cluster label
        """
        if self.cluster_centers_ is None:
            raise ValueError("Model must be fitted before prediction")

        nearest = self._nearest(values, self.cluster_centers_)
        if nearest is None:
            raise ValueError(f"Attributes {sorted(values)} do not match the fitted centroids")
        return nearest

    def fit_predict(self, data: DataSet) -> List[int]:
        """Fit the model and return the record labels."""
        return self.fit(data).labels_

    def get_cluster_info(self) -> Dict:
        """Get information about the clustering results."""
        if self.cluster_centers_ is None:
            raise ValueError("Model must be fitted first")

        sizes = {k: 0 for k in range(self.n_clusters)}
        for label in self.labels_:
            if label is not None:
                sizes[label] += 1
        counts = np.array(list(sizes.values()))

        return {
            'n_clusters': self.n_clusters,
            'inertia': self.inertia_,
            'n_iterations': self.n_iter_,
            'converged': self.converged_,
            'cluster_sizes': sizes,
            'avg_cluster_size': float(np.mean(counts)),
            'std_cluster_size': float(np.std(counts)),
            'min_cluster_size': int(np.min(counts)),
            'max_cluster_size': int(np.max(counts))
        }


def run_kmeans(
    data: DataSet,
    k: int,
    rng_seed: Optional[int] = None,
    iteration_cap: int = 300,
    verbose: bool = False
) -> KMeans:
    """Cluster ``data`` into ``k`` groups in place and return the fitted model."""
    return KMeans(
        n_clusters=k,
        max_iters=iteration_cap,
        random_state=rng_seed,
        verbose=verbose
    ).fit(data)
