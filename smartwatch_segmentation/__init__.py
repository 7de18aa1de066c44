"""Top-level package exports

Curated re-exports for notebook ergonomics:

    from smartwatch_segmentation import run_segmentation, segment_survey

    result = run_segmentation("survey.xlsx", output_dir="out", show_plots=False)
    result.ranked_profiles.head()

Individual stages (imputation, scaling, clustering, profiling, recommendation)
are exported as well so they can be run one at a time.
"""
import logging

from .data_processing.segmentation_pipeline import (
	SegmentationResult,
	segment_survey,
	run_segmentation,
	print_report,
	render_figures,
)
from .data_processing.data_loading import load_survey, detect_outliers
from .data_processing.imputation_utils import impute_missing, count_missing
from .data_processing.normalization_utils import select_analysis_columns, scale_features
from .data_processing.clustering_utils import (
	find_optimal_clusters,
	compute_gap_statistic,
	compute_distance_matrix,
	perform_hierarchical_clustering,
)
from .data_processing.profiling_utils import (
	profile_segments,
	rank_segments,
	assign_segment_names,
	most_lucrative_segment,
)
from .data_processing.recommendation import recommend_partner, recommend_for_profiles
from .data_processing.analysis_utils import pca_summary
from .data_processing.export_utils import export_segment_profiles
from .exceptions import (
	SegmentationError,
	DataValidationError,
	MissingColumnsError,
	ZeroVarianceError,
	ImputationError,
)

__version__ = "1.0.0"

__all__ = [
	# Pipeline
	"SegmentationResult",
	"segment_survey",
	"run_segmentation",
	"print_report",
	"render_figures",
	# Stages
	"load_survey",
	"detect_outliers",
	"impute_missing",
	"count_missing",
	"select_analysis_columns",
	"scale_features",
	"find_optimal_clusters",
	"compute_gap_statistic",
	"compute_distance_matrix",
	"perform_hierarchical_clustering",
	"profile_segments",
	"rank_segments",
	"assign_segment_names",
	"most_lucrative_segment",
	"recommend_partner",
	"recommend_for_profiles",
	"pca_summary",
	"export_segment_profiles",
	# Errors
	"SegmentationError",
	"DataValidationError",
	"MissingColumnsError",
	"ZeroVarianceError",
	"ImputationError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
