"""
Distance-weighted centroid initialization (k-means++ style).

Each new centroid is drawn from the records not chosen yet, with probability
proportional to the distance to the nearest already-chosen centroid. The
weight is the plain distance, not its square.
"""

from typing import List, Optional

import numpy as np

from .dataset import Centroid, DataSet
from .distance import DistanceFunc, euclidean_distance


class CentroidSeeder:
    """
    Picks initial centroids among the records of a dataset.

    Args:
        dataset: Records to seed from
        distance_func: Metric used to weight the candidates
        rng: Random generator; a fresh unseeded one is created if None
    """

    def __init__(
        self,
        dataset: DataSet,
        distance_func: DistanceFunc = euclidean_distance,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.dataset = dataset
        self.distance_func = distance_func
        self.rng = rng if rng is not None else np.random.default_rng()
        self.chosen_indices: List[int] = []

    def _nearest_chosen_distance(self, index: int) -> float:
        values = self.dataset[index].values
        return min(
            self.distance_func(values, self.dataset[chosen].values)
            for chosen in self.chosen_indices
        )

    def _choose(self, index: int) -> Centroid:
        self.chosen_indices.append(index)
        return dict(self.dataset[index].values)

    def first_centroid(self) -> Centroid:
        """Choose a record uniformly at random."""
        return self._choose(int(self.rng.integers(len(self.dataset))))

    def weighted_centroid(self) -> Centroid:
        """
        Choose the next centroid among the unchosen records.

        Returns an empty mapping when every record has already been chosen.
        """
        if not self.chosen_indices:
            return self.first_centroid()

        chosen = set(self.chosen_indices)
        candidates = [i for i in range(len(self.dataset)) if i not in chosen]
        if not candidates:
            return {}

        weights = [self._nearest_chosen_distance(i) for i in candidates]
        total = sum(weights)
        if total <= 0.0:
            # Every candidate coincides with a chosen record
            return self._choose(candidates[0])

        threshold = total * self.rng.random()
        running = 0.0
        for index, weight in zip(candidates, weights):
            running += weight
            if running > threshold:
                return self._choose(index)
        # threshold rounded up to the total
        last = max(i for i, weight in zip(candidates, weights) if weight > 0.0)
        return self._choose(last)

    def seed(self, k: int) -> List[Centroid]:
        """Produce ``k`` initial centroids; ``chosen_indices`` holds their record indices."""
        self.chosen_indices = []
        centroids = [self.first_centroid()]
        for _ in range(1, k):
            centroids.append(self.weighted_centroid())
        return centroids
