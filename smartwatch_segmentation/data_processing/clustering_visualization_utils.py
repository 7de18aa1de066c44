"""
clustering_visualization_utils.py

Figures for the survey segmentation.

Key functions
-------------
- plot_cluster_diagnostics(opt): elbow, silhouette and gap statistic panels
- plot_dendrogram(Z, k): Ward dendrogram with the k-cluster cut highlighted
- plot_merge_height_elbow(Z): largest merge heights (hierarchical elbow)
- radar_frame(profiles) / plot_segment_radar(profiles): normalized segment profiles
- plot_competitor_comparison(df): grouped bars of the competitor scores

Every function returns its matplotlib Figure. ``show`` displays it and
``save_path`` writes it to disk; the caller owns closing it.
"""
from __future__ import annotations

from math import pi
from typing import Any, Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from scipy.cluster.hierarchy import dendrogram

from . import segmentation_params as params
from .clustering_utils import cut_height, merge_height_curve

# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _finish(fig: plt.Figure, show: bool, save_path: Optional[str]) -> plt.Figure:
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=params.FIGURE_DPI, bbox_inches="tight")
    if show:
        plt.show()
    return fig


def _colors(n: int) -> List[Any]:
    base = list(params.CLUSTER_COLORS)
    if n <= len(base):
        return base[:n]
    cmap = plt.get_cmap("tab10")
    return [cmap(i % 10) for i in range(n)]

# -----------------------------------------------------------------------------
# Cluster-count diagnostics
# -----------------------------------------------------------------------------

def plot_cluster_diagnostics(
    optimization_results: Dict[str, Any],
    chosen_k: Optional[int] = params.N_CLUSTERS,
    figsize: Tuple[int, int] = (16, 5),
    show: bool = True,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """
    Plot the diagnostics used to pick the number of clusters.

    Args:
        optimization_results: Results from find_optimal_clusters
        chosen_k: The operator's choice, drawn as a dotted line
        figsize: Figure size for the plots
    """
    cluster_range = optimization_results["cluster_range"]
    has_gap = "gap" in optimization_results
    fig, axes = plt.subplots(1, 3 if has_gap else 2, figsize=figsize)

    panels = [
        (axes[0], optimization_results["inertias"], "optimal_elbow",
         "Elbow Method for Optimal Clusters", "Total Within Sum of Squares", "bo-"),
        (axes[1], optimization_results["silhouette_scores"], "optimal_silhouette",
         "Silhouette Analysis for Optimal Clusters", "Average Silhouette Width", "go-"),
    ]
    for ax, values, key, title, ylabel, style in panels:
        ax.plot(cluster_range, values, style)
        ax.axvline(x=optimization_results[key], color="red", linestyle="--",
                   label=f"Suggested: {optimization_results[key]}")
        ax.set_title(title)
        ax.set_xlabel("Number of Clusters k")
        ax.set_ylabel(ylabel)

    if has_gap:
        ax = axes[2]
        ax.errorbar(cluster_range, optimization_results["gap"], yerr=optimization_results["gap_se"],
                    fmt="ro-", capsize=3)
        ax.axvline(x=optimization_results["optimal_gap"], color="red", linestyle="--",
                   label=f"Suggested: {optimization_results['optimal_gap']}")
        ax.set_title("Gap Statistic")
        ax.set_xlabel("Number of Clusters k")
        ax.set_ylabel("Gap statistic (k)")

    for ax in np.atleast_1d(axes):
        if chosen_k is not None:
            ax.axvline(x=chosen_k, color="grey", linestyle=":", label=f"Chosen: {chosen_k}")
        ax.legend()
        ax.grid(True, alpha=0.3)
    return _finish(fig, show, save_path)

# -----------------------------------------------------------------------------
# Dendrogram
# -----------------------------------------------------------------------------

def plot_dendrogram(
    linkage_matrix: np.ndarray,
    n_clusters: int = params.N_CLUSTERS,
    truncate_level: Optional[int] = None,
    show: bool = True,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """
    Plot the Ward dendrogram; branches below the cut are colored per cluster
    and the cut itself is drawn as a dashed line.

    Args:
        linkage_matrix: Linkage matrix from hierarchical clustering
        n_clusters: Number of clusters to highlight
        truncate_level: Show only this many merge levels (None for the full tree)
    """
    fig, ax = plt.subplots(figsize=(15, 8))
    threshold = cut_height(linkage_matrix, n_clusters)
    n_leaves = len(linkage_matrix) + 1
    kwargs = {"truncate_mode": "level", "p": truncate_level} if truncate_level else {}
    dendrogram(
        linkage_matrix,
        ax=ax,
        color_threshold=threshold,
        above_threshold_color="grey",
        no_labels=n_leaves > 60,
        leaf_rotation=90,
        **kwargs,
    )
    ax.axhline(y=threshold, color="black", linestyle="--", linewidth=1,
               label=f"Cut for k={n_clusters}")
    ax.set_title("Cluster Dendrogram")
    ax.set_xlabel("Observations")
    ax.set_ylabel("Height")
    ax.legend()
    return _finish(fig, show, save_path)


def plot_merge_height_elbow(
    linkage_matrix: np.ndarray,
    n_points: int = params.MERGE_HEIGHT_POINTS,
    show: bool = True,
    save_path: Optional[str] = None,
) -> plt.Figure:
    heights = merge_height_curve(linkage_matrix, n_points)
    x = np.arange(1, len(heights) + 1)
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(x, heights, "o-", color="blue")
    ax.set_title("Elbow Plot")
    ax.set_xlabel("Number of Clusters")
    ax.set_ylabel("Height")
    ax.grid(True, alpha=0.3)
    return _finish(fig, show, save_path)

# -----------------------------------------------------------------------------
# Segment radar chart
# -----------------------------------------------------------------------------

def radar_bounds(
    profiles: pd.DataFrame,
    features: Sequence[str] = params.RADAR_FEATURES,
    likert_features: Sequence[str] = params.RADAR_LIKERT_FEATURES,
) -> pd.DataFrame:
    """Axis bounds per feature: fixed Likert scale, data-driven for the rest."""
    bounds = {}
    for feat in features:
        if feat in likert_features:
            bounds[feat] = (params.LIKERT_MIN, params.LIKERT_MAX)
        else:
            col = profiles[f"{feat}_mean"]
            bounds[feat] = (col.min(skipna=True), col.max(skipna=True))
    return pd.DataFrame(bounds, index=["min", "max"])


def radar_frame(
    profiles: pd.DataFrame,
    features: Sequence[str] = params.RADAR_FEATURES,
    cluster_col: str = params.CLUSTER_COLUMN,
) -> pd.DataFrame:
    """Segment means rescaled to [0, 1] per radar axis (missing means count as 0)."""
    bounds = radar_bounds(profiles, features)
    values = profiles.set_index(cluster_col)[[f"{f}_mean" for f in features]]
    values.columns = list(features)
    values = values.fillna(0)
    span = bounds.loc["max"] - bounds.loc["min"]
    scaled = (values - bounds.loc["min"]) / span.replace(0, np.nan)
    scaled = scaled.fillna(0.5)
    return scaled.clip(0, 1)


def plot_segment_radar(
    profiles: pd.DataFrame,
    features: Sequence[str] = params.RADAR_FEATURES,
    cluster_col: str = params.CLUSTER_COLUMN,
    show: bool = True,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Radar chart for market segments (one polygon per cluster)."""
    scaled = radar_frame(profiles, features, cluster_col)
    n_features = len(features)
    angles = [n / float(n_features) * 2 * pi for n in range(n_features)]
    angles += angles[:1]

    fig, ax = plt.subplots(figsize=(9, 9), subplot_kw=dict(polar=True))
    colors = _colors(len(scaled))
    for color, (cluster_id, row) in zip(colors, scaled.iterrows()):
        values = row.tolist()
        values += values[:1]
        ax.plot(angles, values, linewidth=2, linestyle="solid", color=color, label=f"Cluster {cluster_id}")
        ax.fill(angles, values, alpha=0.1, color=color)

    ax.set_xticks(angles[:-1])
    ax.set_xticklabels(features, fontsize=9)
    ax.set_ylim(0, 1)
    ax.set_title("Radar Chart for Market Segments (Hierarchical Clustering)", fontweight="bold", pad=20)
    ax.legend(loc="upper right", bbox_to_anchor=(1.25, 1.05), fontsize=8)
    return _finish(fig, show, save_path)

# -----------------------------------------------------------------------------
# Competitor comparison
# -----------------------------------------------------------------------------

def plot_competitor_comparison(
    competitors: pd.DataFrame,
    id_col: str = "Brand",
    show: bool = True,
    save_path: Optional[str] = None,
) -> plt.Figure:
    melted = competitors.melt(id_vars=id_col, var_name="variable", value_name="value")
    brands = " vs. ".join(competitors[id_col].astype(str))
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.barplot(data=melted, x=id_col, y="value", hue="variable", ax=ax)
    sns.despine(ax=ax)
    ax.set_title(f"Competitor Comparison: {brands}")
    ax.set_ylabel("Score")
    return _finish(fig, show, save_path)
