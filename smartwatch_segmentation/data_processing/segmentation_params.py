"""
Centralized Parameters for the Survey Segmentation Analysis

This module provides a single place to define all segmentation parameters,
including the business rules layered on top of the clustering. Simple, clean,
and easy to modify without touching pipeline code.
"""

# =============================================================================
# FEATURE CONFIGURATION
# =============================================================================

# Survey items (Likert 1-7) plus demographics used for clustering
ANALYSIS_COLUMNS = [
    "ConstCom", "TimelyInf", "TaskMgm", "DeviceSt", "Wellness",
    "Athlete", "Style", "AmznP", "Female", "Degree", "Income", "Age",
]

# Likert scale bounds (used for radar chart axes)
LIKERT_MIN = 1
LIKERT_MAX = 7

# Radar chart axes: Likert axes use the fixed scale, the rest are data-driven
RADAR_FEATURES = ["Wellness", "TaskMgm", "Style", "Income", "Age"]
RADAR_LIKERT_FEATURES = ["Wellness", "TaskMgm", "Style"]

# Boxplot whisker coefficient for outlier listings
OUTLIER_COEF = 1.5

# =============================================================================
# IMPUTATION PARAMETERS
# =============================================================================

IMPUTATION_MAX_ITER = 5     # Sweeps over the incomplete columns
IMPUTATION_N_DONORS = 5     # Candidate donors for predictive mean matching

# =============================================================================
# CLUSTERING PARAMETERS
# =============================================================================

# Range of cluster numbers evaluated by the diagnostics
MIN_CLUSTERS = 2
MAX_CLUSTERS = 10

# Operator-chosen cluster count. The diagnostics are advisory only.
N_CLUSTERS = 4

# Random state for reproducible results
RANDOM_STATE = 123

KMEANS_N_INIT = 25          # Restarts per k for elbow/silhouette/gap
GAP_N_REFERENCES = 50       # Uniform reference sets for the gap statistic

LINKAGE_METHOD = "ward"
DISTANCE_METRIC = "euclidean"

# Number of merge heights shown in the hierarchical elbow plot
MERGE_HEIGHT_POINTS = 10

CLUSTER_COLUMN = "Cluster_Hierarchical"
SEGMENT_NAME_COLUMN = "Target_Group"

# =============================================================================
# SEGMENT NAMING & RANKING
# =============================================================================

# Names are bound to the raw cluster id, not to the desirability ranking.
SEGMENT_NAMES = {
    1: "Tech-Savvy Professionals",
    2: "Fitness Enthusiasts",
    3: "Budget-Conscious Users",
    4: "Luxury Seekers",
}

# Lexicographic desirability ordering, all descending
RANKING_KEYS = ["Income_mean", "Wellness_mean", "Style_mean"]

# =============================================================================
# PARTNER RECOMMENDATION RULES
# =============================================================================

# Evaluated top-down on the most lucrative segment; first match wins.
# (profile column, strict lower bound, recommendation)
PARTNER_RULES = [
    ("Wellness_mean", 5, "Aetna (Health Focus)"),
    ("TaskMgm_mean", 5, "Amazon (Alexa AI Focus)"),
]
DEFAULT_PARTNER = "Google (Android Wear Integration)"
NO_SEGMENT_SENTINEL = "No valid segment found"
RECOMMENDATION_CLIENT = "Intel"

# =============================================================================
# STATIC MARKET TABLES
# =============================================================================

COMPETITOR_DATA = {
    "Brand": ["Intel", "Apple", "Samsung"],
    "Wellness_Features": [8, 9, 7],
    "Price_Competitiveness": [7, 5, 6],
    "Innovation": [9, 10, 8],
    "Market_Reach": [6, 10, 9],
}

SWOT_DATA = {
    "Partner": ["Aetna", "Amazon", "Google"],
    "Strengths": ["Health expertise", "AI-powered features", "Integration with Android"],
    "Weaknesses": ["Limited consumer brand power", "Privacy concerns", "Competing smartwatch brands"],
    "Opportunities": ["Growing wellness market", "Expanding AI in wearables", "Wear OS adoption"],
    "Threats": ["Regulatory issues", "Strong competition", "Fragmentation in Android ecosystem"],
}

# =============================================================================
# OUTPUT AND VISUALIZATION
# =============================================================================

EXPORT_FILENAME = "segments_hierarchical.xlsx"
CLUSTER_COLORS = ["red", "blue", "green", "purple"]
SHOW_VISUALIZATIONS = True
SAVE_FIGURES = False
FIGURE_DPI = 150

# Environment variables read by the CLI (optionally from a .env file)
ENV_INPUT_PATH = "SEGMENTATION_INPUT"
ENV_OUTPUT_DIR = "SEGMENTATION_OUTPUT_DIR"


def get_segmentation_params() -> dict:
    """Return the run parameters as a dictionary (for logging and reports)."""
    return {
        "analysis_columns": list(ANALYSIS_COLUMNS),
        "imputation_max_iter": IMPUTATION_MAX_ITER,
        "imputation_n_donors": IMPUTATION_N_DONORS,
        "min_clusters": MIN_CLUSTERS,
        "max_clusters": MAX_CLUSTERS,
        "n_clusters": N_CLUSTERS,
        "random_state": RANDOM_STATE,
        "kmeans_n_init": KMEANS_N_INIT,
        "gap_n_references": GAP_N_REFERENCES,
        "linkage_method": LINKAGE_METHOD,
        "distance_metric": DISTANCE_METRIC,
        "ranking_keys": list(RANKING_KEYS),
        "show_visualizations": SHOW_VISUALIZATIONS,
        "save_figures": SAVE_FIGURES,
    }
