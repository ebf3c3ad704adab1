import numpy as np
import pytest

from recordkmeans.dataset import DataSet
from recordkmeans.kmeans import KMeans
from recordkmeans.utils import create_sample_dataset, evaluate_clustering


def test_create_sample_dataset_shape():
    data = create_sample_dataset(n_samples=50, n_features=4, n_clusters=5, random_state=0)
    assert len(data) == 50
    assert data.attribute_names == ["x0", "x1", "x2", "x3"]
    assert data.to_array().shape == (50, 4)


def test_evaluate_separated_clusters():
    rng = np.random.default_rng(0)
    X = np.vstack([
        rng.normal(loc=(0.0, 0.0), scale=0.3, size=(40, 2)),
        rng.normal(loc=(15.0, 15.0), scale=0.3, size=(40, 2)),
    ])
    data = DataSet.from_rows(["x", "y"], X.tolist())
    model = KMeans(n_clusters=2).fit(data, initial_centroids=[data[0].values, data[40].values])

    scores = evaluate_clustering(data)
    assert scores["cluster_sizes"] == {0: 40, 1: 40}
    assert scores["sse"] == pytest.approx(model.inertia_)
    assert scores["silhouette"] > 0.9


def test_evaluate_single_cluster_has_no_silhouette():
    data = DataSet.from_rows(["x"], [(1,), (2,), (3,)])
    for record in data:
        record.cluster = 0
    scores = evaluate_clustering(data)
    assert scores["silhouette"] is None
    assert scores["sse"] == pytest.approx(2.0)


def test_evaluate_requires_labels():
    data = DataSet.from_rows(["x"], [(1,), (2,)])
    with pytest.raises(ValueError):
        evaluate_clustering(data)
