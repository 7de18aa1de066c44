"""Export utilities (segment profile workbook)."""
from __future__ import annotations

import logging
import os
from typing import List

import pandas as pd

from . import segmentation_params as params
from .formatting_utils import write_excel_with_number_format

_LOG = logging.getLogger(__name__)

__all__ = [
    "export_segment_profiles",
    "profile_export_columns",
]


def profile_export_columns(profiles: pd.DataFrame, cluster_col: str = params.CLUSTER_COLUMN) -> List[str]:
    """Cluster id followed by the per-feature *_mean columns."""
    return [cluster_col] + [c for c in profiles.columns if c.endswith("_mean")]


def export_segment_profiles(
    profiles: pd.DataFrame,
    output_dir: str = ".",
    filename: str = params.EXPORT_FILENAME,
    cluster_col: str = params.CLUSTER_COLUMN,
) -> str:
    """
    Save the segment profile table (cluster id + *_mean columns) to an .xlsx file.

    Returns the written path. I/O failures (missing directory permissions,
    file locked by another program) propagate as OSError.
    """
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, filename)
    cols = profile_export_columns(profiles, cluster_col)
    table = profiles[cols]
    print(f"💾 Saving segment profiles to {path}...")
    write_excel_with_number_format(
        table,
        path,
        sheet_name="segments_hierarchical",
        format_cols=[c for c in cols if c != cluster_col],
    )
    _LOG.info("Exported %d segment profiles (%d columns) to %s", len(table), len(cols), path)
    return path
