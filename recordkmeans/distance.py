"""
Distance functions between attribute mappings.

Any callable with the ``DistanceFunc`` signature can be passed to the seeder,
the clustering engine and the SSE computations in place of
``euclidean_distance``.
"""

import math
from typing import Callable, Mapping

DistanceFunc = Callable[[Mapping[str, float], Mapping[str, float]], float]


def euclidean_distance(a: Mapping[str, float], b: Mapping[str, float]) -> float:
    """
    Euclidean distance between two attribute mappings.

    Mappings over different attribute names are not comparable; the result is
    then ``math.inf`` so that such a pair never wins a nearest-centroid search.

    Args:
        a: First mapping of attribute name to value
        b: Second mapping of attribute name to value

    Returns:
        The distance, or ``math.inf`` if the key sets differ
    """
    if a.keys() != b.keys():
        return math.inf

    total = 0.0
    for name in a:
        diff = a[name] - b[name]
        total += diff * diff
    return math.sqrt(total)
