"""Segment profiling: size, per-feature means, names and desirability ranking.

Segment names come from ``SEGMENT_NAMES`` keyed by the raw cluster id. Cluster
numbering follows first appearance in the data, so a name is not guaranteed to
describe the content of its segment after reclustering; the ranking columns are
the reliable view of which segment is which.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

import numpy as np
import pandas as pd

from . import segmentation_params as params
from ..utils.validate import expect_columns

_LOG = logging.getLogger(__name__)


def label_observations(
    df: pd.DataFrame,
    labels: np.ndarray,
    cluster_col: str = params.CLUSTER_COLUMN,
    name_col: str = params.SEGMENT_NAME_COLUMN,
    names: Optional[Dict[int, str]] = None,
) -> pd.DataFrame:
    """Copy of df with the cluster id and segment name of every respondent."""
    if len(labels) != len(df):
        raise ValueError(f"Got {len(labels)} labels for {len(df)} rows")
    out = df.copy()
    out[cluster_col] = np.asarray(labels, dtype=int)
    out[name_col] = out[cluster_col].map(lambda cid: name_for_cluster(cid, names))
    return out


def profile_segments(
    df: pd.DataFrame,
    labels: np.ndarray,
    cluster_col: str = params.CLUSTER_COLUMN,
) -> pd.DataFrame:
    """
    One row per cluster: respondent count, share of respondents (%) and the
    mean of every numeric column (suffixed ``_mean``).

    Args:
        df: Observation table (not modified).
        labels: Cluster label per row, aligned with df.
        cluster_col: Name of the cluster id column in the result.

    Returns:
        DataFrame sorted by cluster id.
    """
    if len(labels) != len(df):
        raise ValueError(f"Got {len(labels)} labels for {len(df)} rows")
    numeric_cols = [c for c in df.select_dtypes(include=[np.number]).columns if c != cluster_col]
    work = df[numeric_cols].copy()
    work[cluster_col] = np.asarray(labels, dtype=int)

    grouped = work.groupby(cluster_col, sort=True)
    means = grouped[numeric_cols].mean().add_suffix("_mean")
    sizes = grouped.size()
    total = len(work)

    profiles = means.copy()
    profiles.insert(0, "n_respondents", sizes.astype(int))
    profiles.insert(1, "size_pct", sizes / total * 100 if total else sizes.astype(float))
    profiles = profiles.reset_index()
    print(f"📊 Profiled {len(profiles)} segments over {len(numeric_cols)} numeric columns")
    return profiles


def rank_segments(profiles: pd.DataFrame, keys: Optional[list] = None) -> pd.DataFrame:
    """Order segments by the desirability keys (all descending); adds a 1-based 'rank'."""
    keys = list(keys) if keys is not None else list(params.RANKING_KEYS)
    expect_columns(profiles, keys)
    ranked = profiles.sort_values(keys, ascending=False, kind="mergesort", na_position="last")
    ranked = ranked.reset_index(drop=True)
    ranked.insert(0, "rank", np.arange(1, len(ranked) + 1))
    return ranked


def most_lucrative_segment(profiles: pd.DataFrame) -> Optional[pd.Series]:
    """Top-ranked segment, or None when there are no segments."""
    if profiles is None or profiles.empty:
        return None
    return rank_segments(profiles).iloc[0]


def name_for_cluster(cluster_id, names: Optional[Dict[int, str]] = None) -> Optional[str]:
    names = params.SEGMENT_NAMES if names is None else names
    return names.get(int(cluster_id))


def assign_segment_names(
    profiles: pd.DataFrame,
    cluster_col: str = params.CLUSTER_COLUMN,
    names: Optional[Dict[int, str]] = None,
) -> pd.DataFrame:
    out = profiles.copy()
    out["segment_name"] = out[cluster_col].map(lambda cid: name_for_cluster(cid, names))
    unnamed = out.loc[out["segment_name"].isna(), cluster_col].tolist()
    if unnamed:
        _LOG.warning("No segment name configured for clusters %s", unnamed)
    return out
