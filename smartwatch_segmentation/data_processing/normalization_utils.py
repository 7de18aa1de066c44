from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.preprocessing import StandardScaler

from . import segmentation_params as params
from ..exceptions import ZeroVarianceError
from ..utils.validate import expect_columns, expect_finite, expect_numeric


def select_analysis_columns(df: pd.DataFrame, columns: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Restrict the observation table to the analysis columns, in configured order.
    Raises MissingColumnsError / DataValidationError for absent or non-numeric columns.
    """
    columns = list(columns) if columns is not None else list(params.ANALYSIS_COLUMNS)
    expect_columns(df, columns)
    expect_numeric(df, columns)
    return df[columns].copy()


def zero_variance_columns(features: pd.DataFrame) -> List[str]:
    return [c for c in features.columns if features[c].nunique(dropna=True) < 2]


def scale_features(features: pd.DataFrame) -> Tuple[np.ndarray, StandardScaler]:
    """
    Z-score every column using its own sample mean and sample standard deviation.

    Args:
        features: Complete numeric analysis table.

    Returns:
        Tuple[np.ndarray, StandardScaler]: Scaled matrix (same shape) and fitted
        scaler whose ``scale_`` holds the sample (ddof=1) standard deviations.
    """
    print("Scaling features...")
    X = features.to_numpy(dtype=float)
    expect_finite(X)
    flat = zero_variance_columns(features)
    if flat:
        raise ZeroVarianceError(flat)
    scaler = StandardScaler().fit(X)
    # StandardScaler divides by the population sd; scale by the sample sd instead
    scaler.scale_ = X.std(axis=0, ddof=1)
    scaler.var_ = scaler.scale_ ** 2
    X_scaled = scaler.transform(X)
    return X_scaled, scaler
