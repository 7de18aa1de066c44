from __future__ import annotations
import numpy as np
import pandas as pd

from ..exceptions import DataValidationError, MissingColumnsError


def expect_columns(df: pd.DataFrame, cols: list[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise MissingColumnsError(missing)


def expect_non_empty(df: pd.DataFrame) -> None:
    if df.empty:
        raise DataValidationError("DataFrame is empty")


def expect_numeric(df: pd.DataFrame, cols: list[str]) -> None:
    bad = [c for c in cols if not pd.api.types.is_numeric_dtype(df[c])]
    if bad:
        raise DataValidationError(f"Non-numeric analysis columns: {bad}")


def expect_finite(X: np.ndarray) -> None:
    if not np.isfinite(X).all():
        raise DataValidationError("Feature matrix contains NaN or infinite values")
