"""
Clustering Utilities for Survey Segmentation

Cluster-count diagnostics (elbow, silhouette, gap statistic) and Ward
hierarchical clustering of the standardized survey features. The diagnostics
only inform the operator; the pipeline clusters with the configured
``N_CLUSTERS``.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy.cluster.hierarchy import cut_tree, linkage
from scipy.spatial.distance import pdist, squareform
from sklearn.cluster import KMeans
from sklearn.metrics import silhouette_score

from . import segmentation_params as params
from ..utils.validate import expect_finite

_LOG = logging.getLogger(__name__)


def _candidate_range(n_samples: int, min_clusters: int, max_clusters: int) -> range:
    # silhouette needs at least one sample more than clusters
    upper = min(max_clusters, n_samples - 1)
    if upper < min_clusters:
        raise ValueError(
            f"Need at least {min_clusters + 1} observations to evaluate k={min_clusters}..{max_clusters}; got {n_samples}"
        )
    return range(min_clusters, upper + 1)


def _elbow_point(cluster_range: range, inertias: List[float]) -> int:
    # Find the point where improvement slows down significantly
    if len(inertias) < 3:
        return cluster_range[0]
    improvements = [inertias[i] - inertias[i + 1] for i in range(len(inertias) - 1)]
    improvement_ratios = [
        improvements[i] / improvements[i + 1] if improvements[i + 1] > 0 else 1
        for i in range(len(improvements) - 1)
    ]
    elbow_idx = int(np.argmax(improvement_ratios))
    return cluster_range[elbow_idx + 1]


def compute_gap_statistic(
    X: np.ndarray,
    cluster_range: range,
    n_refs: int = params.GAP_N_REFERENCES,
    n_init: int = params.KMEANS_N_INIT,
    random_state: int = params.RANDOM_STATE,
) -> Dict[str, Any]:
    """
    Gap statistic (Tibshirani, Walther & Hastie) against uniform reference data.

    For every k the observed log within-cluster sum of squares is compared with
    its mean over ``n_refs`` data sets drawn uniformly inside the bounding box of
    X. The suggested k is the smallest one whose gap is within one standard
    error of the maximum gap.

    Returns:
        Dict with 'cluster_range', 'gap', 'gap_se', 'log_wk', 'ref_log_wk'
        and 'optimal_gap'.
    """
    rng = np.random.default_rng(random_state)
    mins, maxs = X.min(axis=0), X.max(axis=0)
    log_wk, ref_mean, gap_se = [], [], []
    for k in cluster_range:
        km = KMeans(n_clusters=k, random_state=random_state, n_init=n_init).fit(X)
        log_wk.append(np.log(km.inertia_))
        ref = np.empty(n_refs)
        for b in range(n_refs):
            X_ref = rng.uniform(mins, maxs, size=X.shape)
            ref_km = KMeans(n_clusters=k, random_state=random_state, n_init=n_init).fit(X_ref)
            ref[b] = np.log(ref_km.inertia_)
        ref_mean.append(ref.mean())
        gap_se.append(ref.std() * np.sqrt(1 + 1 / n_refs))
        _LOG.debug("gap k=%d log_wk=%.4f ref=%.4f", k, log_wk[-1], ref_mean[-1])

    gap = np.asarray(ref_mean) - np.asarray(log_wk)
    gap_se = np.asarray(gap_se)
    best = int(np.argmax(gap))
    within = np.flatnonzero(gap >= gap[best] - gap_se[best])
    optimal_gap = cluster_range[int(within[0])]
    return {
        "cluster_range": list(cluster_range),
        "gap": gap.tolist(),
        "gap_se": gap_se.tolist(),
        "log_wk": list(log_wk),
        "ref_log_wk": list(ref_mean),
        "optimal_gap": optimal_gap,
    }


def find_optimal_clusters(
    X: np.ndarray,
    max_clusters: int = params.MAX_CLUSTERS,
    min_clusters: int = params.MIN_CLUSTERS,
    random_state: int = params.RANDOM_STATE,
    n_init: int = params.KMEANS_N_INIT,
    include_gap: bool = True,
    n_refs: int = params.GAP_N_REFERENCES,
) -> Dict[str, Any]:
    """
    Evaluate candidate cluster counts with the elbow, silhouette and gap diagnostics.

    Args:
        X (np.ndarray): Scaled feature array.
        min_clusters (int): Minimum number of clusters to test.
        max_clusters (int): Maximum number of clusters to test.
        random_state (int): Random state for reproducibility.
        n_init (int): K-means restarts per k.
        include_gap (bool): Also compute the (slower) gap statistic.
        n_refs (int): Reference data sets for the gap statistic.

    Returns:
        Dict[str, Any]: Cluster numbers, per-k scores and suggested k per method.
    """
    print("🔍 Evaluating candidate numbers of clusters...")
    expect_finite(X)
    cluster_range = _candidate_range(len(X), min_clusters, max_clusters)

    silhouette_scores = []
    inertias = []
    for n_clusters in cluster_range:
        kmeans = KMeans(n_clusters=n_clusters, random_state=random_state, n_init=n_init)
        cluster_labels = kmeans.fit_predict(X)
        silhouette_avg = silhouette_score(X, cluster_labels)
        silhouette_scores.append(float(silhouette_avg))
        inertias.append(float(kmeans.inertia_))
        print(f"   {n_clusters} clusters: WSS={kmeans.inertia_:.1f}, Silhouette={silhouette_avg:.3f}")

    results: Dict[str, Any] = {
        "cluster_range": list(cluster_range),
        "inertias": inertias,
        "silhouette_scores": silhouette_scores,
        "optimal_silhouette": cluster_range[int(np.argmax(silhouette_scores))],
        "optimal_elbow": _elbow_point(cluster_range, inertias),
    }
    if include_gap:
        gap = compute_gap_statistic(X, cluster_range, n_refs=n_refs, n_init=n_init, random_state=random_state)
        results.update({key: gap[key] for key in ("gap", "gap_se", "optimal_gap")})

    summary = f"Elbow: {results['optimal_elbow']}, Silhouette: {results['optimal_silhouette']}"
    if include_gap:
        summary += f", Gap: {results['optimal_gap']}"
    print(f"✅ Suggested clusters - {summary}")
    return results


def compute_distance_matrix(X: np.ndarray, metric: str = params.DISTANCE_METRIC) -> np.ndarray:
    """Full symmetric pairwise distance matrix with a zero diagonal."""
    return squareform(pdist(X, metric=metric))


def relabel_by_first_appearance(labels: np.ndarray) -> np.ndarray:
    """Renumber labels 1..k in the order they first occur."""
    labels = np.asarray(labels)
    _, first_idx = np.unique(labels, return_index=True)
    order = labels[np.sort(first_idx)]
    mapping = {old: new for new, old in enumerate(order, start=1)}
    return np.array([mapping[v] for v in labels], dtype=int)


def perform_hierarchical_clustering(
    X: np.ndarray,
    n_clusters: int = params.N_CLUSTERS,
    method: str = params.LINKAGE_METHOD,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Perform Ward hierarchical clustering and cut the tree into n_clusters groups.

    Args:
        X: Standardized feature matrix
        n_clusters: Number of clusters
        method: Linkage criterion

    Returns:
        Tuple of (cluster labels 1..n_clusters, linkage matrix)
    """
    print(f"🌳 Performing hierarchical clustering with {n_clusters} clusters...")
    expect_finite(X)
    n = len(X)
    if not 1 <= n_clusters <= n:
        raise ValueError(f"n_clusters must be between 1 and {n}; got {n_clusters}")
    if n < 2:
        return np.ones(n, dtype=int), np.empty((0, 4))

    # Ward on Euclidean distances; heights are the Ward merge distances
    linkage_matrix = linkage(pdist(X, metric="euclidean"), method=method)
    raw = cut_tree(linkage_matrix, n_clusters=n_clusters).ravel()
    cluster_labels = relabel_by_first_appearance(raw)

    sizes = np.bincount(cluster_labels)[1:]
    print(f"✅ Hierarchical clustering completed - cluster sizes: {sizes.tolist()}")
    return cluster_labels, linkage_matrix


def merge_height_curve(linkage_matrix: np.ndarray, n_points: int = params.MERGE_HEIGHT_POINTS) -> np.ndarray:
    """Largest merge heights in descending order (hierarchical elbow)."""
    return np.sort(linkage_matrix[:, 2])[::-1][:n_points]


def cut_height(linkage_matrix: np.ndarray, n_clusters: int) -> float:
    """Height between the merges that separate n_clusters groups."""
    heights = np.sort(linkage_matrix[:, 2])
    if n_clusters <= 1:
        return float(heights[-1]) * 1.05
    if n_clusters > len(heights):
        return 0.0
    return float((heights[-n_clusters] + heights[-(n_clusters - 1)]) / 2)


def cluster_size_table(labels: np.ndarray) -> pd.DataFrame:
    counts = pd.Series(labels).value_counts().sort_index()
    table = pd.DataFrame({params.CLUSTER_COLUMN: counts.index, "n": counts.to_numpy()})
    table["pct"] = table["n"] / table["n"].sum() * 100
    return table
