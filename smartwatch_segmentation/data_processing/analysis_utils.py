"""
analysis_utils.py

Supplementary analyses reported next to the segmentation:
- PCA variance summary of the analysis columns
- Static competitor scores and partner SWOT tables
"""
from __future__ import annotations

from typing import List, Optional

import numpy as np
import pandas as pd
from sklearn.decomposition import PCA

from . import segmentation_params as params
from .normalization_utils import select_analysis_columns, zero_variance_columns
from ..exceptions import ZeroVarianceError

__all__ = [
    "pca_summary",
    "competitor_table",
    "swot_table",
]


def pca_summary(
    df: pd.DataFrame,
    columns: Optional[List[str]] = None,
    random_state: int = params.RANDOM_STATE,
) -> pd.DataFrame:
    """
    Principal components of the standardized analysis columns.

    Returns a table with rows 'Standard deviation', 'Proportion of Variance'
    and 'Cumulative Proportion' and one column per component (PC1..PCn).
    """
    features = select_analysis_columns(df, columns)
    flat = zero_variance_columns(features)
    if flat:
        raise ZeroVarianceError(flat)
    # unit sample variance per column, so component sdevs are on the correlation scale
    Z = (features - features.mean()) / features.std(ddof=1)
    pca = PCA(random_state=random_state).fit(Z.to_numpy(dtype=float))
    names = [f"PC{i}" for i in range(1, pca.n_components_ + 1)]
    return pd.DataFrame(
        [
            np.sqrt(pca.explained_variance_),
            pca.explained_variance_ratio_,
            np.cumsum(pca.explained_variance_ratio_),
        ],
        index=["Standard deviation", "Proportion of Variance", "Cumulative Proportion"],
        columns=names,
    )


def competitor_table() -> pd.DataFrame:
    return pd.DataFrame(params.COMPETITOR_DATA)


def swot_table() -> pd.DataFrame:
    return pd.DataFrame(params.SWOT_DATA)
