"""
Survey Segmentation Pipeline

Linear, single-pass pipeline:
load -> impute -> select & scale -> diagnostics -> Ward clustering -> profile
-> rank & recommend -> report & export.

Every stage is a function that takes values and returns new values; the run
is captured in an immutable ``SegmentationResult``.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
import logging
import os
from typing import Any, Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from . import segmentation_params as params
from .analysis_utils import competitor_table, pca_summary, swot_table
from .clustering_utils import (
    cluster_size_table,
    find_optimal_clusters,
    perform_hierarchical_clustering,
)
from .clustering_visualization_utils import (
    plot_cluster_diagnostics,
    plot_competitor_comparison,
    plot_dendrogram,
    plot_merge_height_elbow,
    plot_segment_radar,
)
from .data_loading import detect_outliers, load_survey, print_outliers, summarize_survey
from .export_utils import export_segment_profiles
from .formatting_utils import safe_filename
from .imputation_utils import count_missing, impute_missing
from .normalization_utils import scale_features, select_analysis_columns
from .profiling_utils import (
    assign_segment_names,
    label_observations,
    profile_segments,
    rank_segments,
)
from .recommendation import recommend_for_profiles

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class SegmentationResult:
    """Everything one run produced. Fields are never reassigned."""

    n_clusters: int
    raw_data: pd.DataFrame = field(repr=False)
    imputed_data: pd.DataFrame = field(repr=False)
    n_missing: int
    outliers: Dict[str, List[float]] = field(repr=False)
    X_scaled: np.ndarray = field(repr=False)
    linkage_matrix: np.ndarray = field(repr=False)
    labels: np.ndarray = field(repr=False)
    labelled_data: pd.DataFrame = field(repr=False)
    cluster_sizes: pd.DataFrame = field(repr=False)
    profiles: pd.DataFrame = field(repr=False)
    ranked_profiles: pd.DataFrame = field(repr=False)
    recommendation: str
    pca: pd.DataFrame = field(repr=False)
    optimization_results: Dict[str, Any] = field(default_factory=dict, repr=False)
    export_path: Optional[str] = None

    @property
    def top_segment(self) -> Optional[pd.Series]:
        if self.ranked_profiles.empty:
            return None
        return self.ranked_profiles.iloc[0]


def segment_survey(
    df: pd.DataFrame,
    n_clusters: int = params.N_CLUSTERS,
    run_diagnostics: bool = True,
    gap_references: int = params.GAP_N_REFERENCES,
    random_state: int = params.RANDOM_STATE,
) -> SegmentationResult:
    """
    Run the analysis stages on an in-memory survey table (no I/O, no plots).

    Args:
        df: Observation table containing the analysis columns.
        n_clusters: Operator-chosen number of segments.
        run_diagnostics: Evaluate elbow / silhouette / gap for k in the candidate range.
        gap_references: Reference data sets for the gap statistic.
        random_state: Seed shared by imputation and the diagnostics.
    """
    print("\n🔧 Step 1: Imputing missing values...")
    n_missing = count_missing(df)
    print(f"   Missing values: {n_missing}")
    imputed = impute_missing(df, random_state=random_state)

    print("\n🔧 Step 2: Selecting and scaling analysis features...")
    features = select_analysis_columns(imputed)
    outliers = detect_outliers(features)
    X_scaled, _ = scale_features(features)

    optimization_results: Dict[str, Any] = {}
    if run_diagnostics:
        print("\n🔍 Step 3: Cluster-count diagnostics (advisory)...")
        optimization_results = find_optimal_clusters(
            X_scaled, random_state=random_state, n_refs=gap_references
        )

    print(f"\n🎯 Step 4: Hierarchical clustering (k={n_clusters})...")
    labels, linkage_matrix = perform_hierarchical_clustering(X_scaled, n_clusters)

    print("\n📊 Step 5: Profiling segments...")
    profiles = assign_segment_names(profile_segments(imputed, labels))
    ranked = rank_segments(profiles)
    recommendation = recommend_for_profiles(profiles)

    print("\n🧪 Step 6: PCA summary...")
    pca = pca_summary(imputed, random_state=random_state)

    return SegmentationResult(
        n_clusters=n_clusters,
        raw_data=df,
        imputed_data=imputed,
        n_missing=n_missing,
        outliers=outliers,
        X_scaled=X_scaled,
        linkage_matrix=linkage_matrix,
        labels=labels,
        labelled_data=label_observations(imputed, labels),
        cluster_sizes=cluster_size_table(labels),
        profiles=profiles,
        ranked_profiles=ranked,
        recommendation=recommendation,
        pca=pca,
        optimization_results=optimization_results,
    )


def print_report(result: SegmentationResult) -> None:
    """Console summary of a run."""
    print("\n" + "=" * 60)
    print("SURVEY SEGMENTATION REPORT")
    print("=" * 60)
    print(f"Missing values before imputation: {result.n_missing}")
    print_outliers(result.outliers)

    opt = result.optimization_results
    if opt:
        print(
            f"\nSuggested k - Elbow: {opt.get('optimal_elbow')}, "
            f"Silhouette: {opt.get('optimal_silhouette')}, Gap: {opt.get('optimal_gap', 'n/a')}"
        )
    print(f"Clusters used: {result.n_clusters} (operator choice; diagnostics are advisory)")

    print("\nCluster sizes:")
    print(result.cluster_sizes.to_string(index=False))

    print("\nSegment profiles:")
    print(result.profiles.to_string(index=False))

    top = result.top_segment
    print("\nMost lucrative segment:")
    print(top.to_string() if top is not None else params.NO_SEGMENT_SENTINEL)
    print(f"\nRecommended Partner for {params.RECOMMENDATION_CLIENT}: {result.recommendation}")

    print("\nSWOT analysis of potential partners:")
    print(swot_table().to_string(index=False))

    print("\nImportance of components (PCA):")
    print(result.pca.round(4).to_string())


def render_figures(
    result: SegmentationResult,
    show: bool = params.SHOW_VISUALIZATIONS,
    save_dir: Optional[str] = None,
) -> Dict[str, Optional[str]]:
    """Draw all charts; returns figure name -> saved path (None when not saved)."""
    def _path(name: str) -> Optional[str]:
        if not save_dir:
            return None
        os.makedirs(save_dir, exist_ok=True)
        return os.path.join(save_dir, safe_filename(f"{name}.png"))

    jobs = []
    if result.optimization_results:
        jobs.append(("cluster_diagnostics",
                     lambda p: plot_cluster_diagnostics(result.optimization_results, result.n_clusters, show=show, save_path=p)))
    if len(result.linkage_matrix):
        jobs.append(("dendrogram",
                     lambda p: plot_dendrogram(result.linkage_matrix, result.n_clusters, show=show, save_path=p)))
        jobs.append(("merge_height_elbow",
                     lambda p: plot_merge_height_elbow(result.linkage_matrix, show=show, save_path=p)))
    jobs.append(("segment_radar", lambda p: plot_segment_radar(result.profiles, show=show, save_path=p)))
    jobs.append(("competitor_comparison", lambda p: plot_competitor_comparison(competitor_table(), show=show, save_path=p)))

    saved: Dict[str, Optional[str]] = {}
    for name, draw in jobs:
        path = _path(name)
        fig = draw(path)
        plt.close(fig)
        saved[name] = path
        _LOG.debug("Rendered %s%s", name, f" -> {path}" if path else "")
    return saved


def run_segmentation(
    input_path: str,
    output_dir: str = ".",
    n_clusters: int = params.N_CLUSTERS,
    show_plots: bool = params.SHOW_VISUALIZATIONS,
    save_figures: bool = params.SAVE_FIGURES,
    run_diagnostics: bool = True,
    gap_references: int = params.GAP_N_REFERENCES,
) -> SegmentationResult:
    """Full run: load, analyse, report, draw charts and export the profile workbook."""
    print("🚀 Starting survey segmentation pipeline...")
    print(f"   Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    _LOG.debug("Parameters: %s", params.get_segmentation_params())

    df = load_survey(input_path)
    print("\n📋 Survey summary:")
    print(summarize_survey(df).to_string())
    result = segment_survey(
        df,
        n_clusters=n_clusters,
        run_diagnostics=run_diagnostics,
        gap_references=gap_references,
    )
    print_report(result)
    if show_plots or save_figures:
        render_figures(result, show=show_plots, save_dir=output_dir if save_figures else None)
    export_path = export_segment_profiles(result.profiles, output_dir)

    print("\n✅ Segmentation pipeline completed successfully!")
    print(f"   Completion time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    return replace(result, export_path=export_path)
