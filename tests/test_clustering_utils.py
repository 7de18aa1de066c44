import unittest

import numpy as np
import pandas as pd

from smartwatch_segmentation.data_processing.clustering_utils import (
    _candidate_range,
    cluster_size_table,
    compute_distance_matrix,
    compute_gap_statistic,
    cut_height,
    find_optimal_clusters,
    merge_height_curve,
    perform_hierarchical_clustering,
    relabel_by_first_appearance,
)
from smartwatch_segmentation.data_processing.normalization_utils import (
    scale_features,
    select_analysis_columns,
)
from smartwatch_segmentation.exceptions import DataValidationError
from tests.conftest import make_survey


def scaled_survey(n_per_segment=10):
    X, _ = scale_features(select_analysis_columns(make_survey(n_per_segment, missing=False)))
    return X


class TestDistanceMatrix(unittest.TestCase):
    def test_symmetric_with_zero_diagonal(self):
        X = scaled_survey()
        D = compute_distance_matrix(X)
        self.assertEqual(D.shape, (len(X), len(X)))
        np.testing.assert_allclose(D, D.T)
        np.testing.assert_allclose(np.diag(D), 0.0)
        self.assertAlmostEqual(D[0, 1], float(np.linalg.norm(X[0] - X[1])))

    def test_distances_on_sample_sd_scale(self):
        features = pd.DataFrame({"a": [1.0, 4.0, 7.0], "b": [2.0, 2.0, 5.0]})
        X, _ = scale_features(features)
        z = (features - features.mean()) / features.std(ddof=1)
        expected = float(np.sqrt(((z.iloc[0] - z.iloc[2]) ** 2).sum()))
        self.assertAlmostEqual(compute_distance_matrix(X)[0, 2], expected)


class TestHierarchicalClustering(unittest.TestCase):
    def test_four_non_empty_segments(self):
        X = scaled_survey()
        labels, Z = perform_hierarchical_clustering(X, 4)
        self.assertEqual(len(labels), len(X))
        self.assertSetEqual(set(labels), {1, 2, 3, 4})
        self.assertEqual(np.bincount(labels)[1:].sum(), len(X))
        self.assertEqual(Z.shape, (len(X) - 1, 4))

    def test_recovers_separated_groups(self):
        X = scaled_survey()
        labels, _ = perform_hierarchical_clustering(X, 4)
        for start in range(0, 40, 10):
            self.assertEqual(len(set(labels[start:start + 10])), 1)

    def test_labels_numbered_by_first_appearance(self):
        labels, _ = perform_hierarchical_clustering(scaled_survey(), 4)
        self.assertEqual(labels[0], 1)
        _, first = np.unique(labels, return_index=True)
        self.assertListEqual(list(labels[np.sort(first)]), [1, 2, 3, 4])

    def test_two_obvious_groups(self):
        X = np.array([[0.0], [0.1], [10.0], [10.1]])
        labels, _ = perform_hierarchical_clustering(X, 2)
        self.assertListEqual(labels.tolist(), [1, 1, 2, 2])

    def test_invalid_cluster_count(self):
        X = scaled_survey()
        with self.assertRaises(ValueError):
            perform_hierarchical_clustering(X, 0)
        with self.assertRaises(ValueError):
            perform_hierarchical_clustering(X, len(X) + 1)

    def test_single_observation(self):
        labels, Z = perform_hierarchical_clustering(np.array([[1.0, 2.0]]), 1)
        self.assertListEqual(labels.tolist(), [1])
        self.assertEqual(len(Z), 0)

    def test_rejects_non_finite(self):
        X = scaled_survey()
        X[0, 0] = np.nan
        with self.assertRaises(DataValidationError):
            perform_hierarchical_clustering(X, 4)

    def test_relabel_by_first_appearance(self):
        self.assertListEqual(relabel_by_first_appearance(np.array([5, 5, 2, 7, 2])).tolist(), [1, 1, 2, 3, 2])

    def test_cut_height_and_merge_curve(self):
        _, Z = perform_hierarchical_clustering(scaled_survey(), 4)
        heights = np.sort(Z[:, 2])
        h = cut_height(Z, 4)
        self.assertTrue(heights[-4] <= h <= heights[-3])
        curve = merge_height_curve(Z, 10)
        self.assertEqual(len(curve), 10)
        self.assertTrue(np.all(np.diff(curve) <= 0))
        self.assertAlmostEqual(curve[0], heights[-1])

    def test_cluster_size_table(self):
        table = cluster_size_table(np.array([1, 1, 2, 3, 3, 3]))
        self.assertListEqual(table["n"].tolist(), [2, 1, 3])
        self.assertAlmostEqual(table["pct"].sum(), 100.0)
        self.assertListEqual(table["Cluster_Hierarchical"].tolist(), [1, 2, 3])


class TestClusterDiagnostics(unittest.TestCase):
    def test_candidate_range_capped_by_rows(self):
        self.assertEqual(list(_candidate_range(6, 2, 10)), [2, 3, 4, 5])
        self.assertEqual(list(_candidate_range(100, 2, 10)), list(range(2, 11)))
        with self.assertRaises(ValueError):
            _candidate_range(2, 2, 10)

    def test_find_optimal_clusters(self):
        X = scaled_survey()
        opt = find_optimal_clusters(X, max_clusters=6, n_init=3, n_refs=3)
        self.assertListEqual(opt["cluster_range"], [2, 3, 4, 5, 6])
        for key in ("inertias", "silhouette_scores", "gap", "gap_se"):
            self.assertEqual(len(opt[key]), 5)
        for key in ("optimal_elbow", "optimal_silhouette", "optimal_gap"):
            self.assertIn(opt[key], opt["cluster_range"])

    def test_without_gap(self):
        opt = find_optimal_clusters(scaled_survey(), max_clusters=4, n_init=2, include_gap=False)
        self.assertNotIn("gap", opt)
        self.assertNotIn("optimal_gap", opt)

    def test_gap_statistic(self):
        X = scaled_survey()
        gap = compute_gap_statistic(X, range(2, 6), n_refs=4, n_init=3)
        self.assertListEqual(gap["cluster_range"], [2, 3, 4, 5])
        self.assertTrue(all(se >= 0 for se in gap["gap_se"]))
        np.testing.assert_allclose(
            np.asarray(gap["gap"]), np.asarray(gap["ref_log_wk"]) - np.asarray(gap["log_wk"])
        )
        # smallest k within one standard error of the best gap
        best = int(np.argmax(gap["gap"]))
        k_idx = gap["cluster_range"].index(gap["optimal_gap"])
        self.assertLessEqual(k_idx, best)
        self.assertGreaterEqual(gap["gap"][k_idx], gap["gap"][best] - gap["gap_se"][best])


if __name__ == '__main__':
    unittest.main()
