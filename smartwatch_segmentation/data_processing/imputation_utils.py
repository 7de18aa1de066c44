"""
Missing-value imputation for survey tables.

Numeric columns are filled by predictive mean matching (PMM): each incomplete
column is regressed on the other numeric columns, and every missing cell takes
the observed value of a donor respondent whose prediction is close to its own.
Imputed values are therefore always values that actually occur in the column,
which keeps Likert items on their 1-7 scale.

Non-numeric columns are filled with their most frequent observed value.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np
import pandas as pd
from sklearn.linear_model import BayesianRidge

from . import segmentation_params as params
from ..exceptions import ImputationError

_LOG = logging.getLogger(__name__)


def count_missing(df: pd.DataFrame, columns: Optional[List[str]] = None) -> int:
    sub = df if columns is None else df[columns]
    return int(sub.isna().sum().sum())


def _check_imputable(df: pd.DataFrame, col: str, numeric: bool) -> None:
    observed = df[col].dropna()
    if observed.empty:
        raise ImputationError(col, "all values are missing")
    if numeric and observed.nunique() < 2:
        raise ImputationError(col, "observed values have no variance")


def _pmm_draw(
    pred_obs: np.ndarray,
    pred_mis: np.ndarray,
    y_obs: np.ndarray,
    n_donors: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Pick one observed value per missing row among its n_donors closest predictions."""
    k = min(n_donors, len(y_obs))
    dist = np.abs(pred_mis[:, None] - pred_obs[None, :])
    nearest = np.argpartition(dist, k - 1, axis=1)[:, :k]
    choice = rng.integers(0, k, size=len(pred_mis))
    return y_obs[nearest[np.arange(len(pred_mis)), choice]]


def impute_missing(
    df: pd.DataFrame,
    max_iter: int = params.IMPUTATION_MAX_ITER,
    n_donors: int = params.IMPUTATION_N_DONORS,
    random_state: int = params.RANDOM_STATE,
) -> pd.DataFrame:
    """
    Return a copy of df with every missing cell filled.

    Args:
        df: Observation table (respondents x columns).
        max_iter: Number of PMM sweeps over the incomplete numeric columns.
        n_donors: Candidate donors per missing cell.
        random_state: Seed for initial draws and donor selection.

    Returns:
        DataFrame with the same shape, index and columns and no missing values.

    Raises:
        ImputationError: a column is entirely missing, or a numeric column's
            observed values are constant.
    """
    out = df.copy()
    missing_mask = out.isna()
    total_missing = int(missing_mask.values.sum())
    if total_missing == 0:
        return out

    numeric_cols = out.select_dtypes(include=[np.number]).columns.tolist()
    incomplete = [c for c in out.columns if missing_mask[c].any()]
    incomplete_num = [c for c in incomplete if c in numeric_cols]
    incomplete_cat = [c for c in incomplete if c not in numeric_cols]

    for col in incomplete:
        _check_imputable(out, col, numeric=col in numeric_cols)

    for col in incomplete_cat:
        mode = out[col].dropna().mode().iloc[0]
        out[col] = out[col].fillna(mode)
        _LOG.debug("Filled %d missing values of %s with mode %r", missing_mask[col].sum(), col, mode)

    rng = np.random.default_rng(random_state)
    for col in incomplete_num:
        miss = missing_mask[col].to_numpy()
        observed = out.loc[~miss, col].to_numpy(dtype=float)
        out[col] = out[col].astype(float)
        out.loc[miss, col] = rng.choice(observed, size=int(miss.sum()))

    for it in range(max_iter):
        for col in incomplete_num:
            predictors = [c for c in numeric_cols if c != col]
            if not predictors:
                # Nothing to regress on; the random draws from the observed values stand
                continue
            miss = missing_mask[col].to_numpy()
            X = out[predictors].to_numpy(dtype=float)
            y_obs = out.loc[~miss, col].to_numpy(dtype=float)
            model = BayesianRidge().fit(X[~miss], y_obs)
            drawn = _pmm_draw(model.predict(X[~miss]), model.predict(X[miss]), y_obs, n_donors, rng)
            out.loc[miss, col] = drawn
        _LOG.debug("PMM sweep %d/%d done over %d columns", it + 1, max_iter, len(incomplete_num))

    print(
        f"🛠️ Imputed {total_missing} missing values "
        f"(PMM: {', '.join(incomplete_num) or '-'}; mode: {', '.join(incomplete_cat) or '-'})"
    )
    return out
