"""Survey loading and first-look diagnostics (summary, outliers)."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from . import segmentation_params as params
from ..utils.validate import expect_non_empty

_LOG = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def load_survey(path: str | Path, sheet_name: int | str = 0) -> pd.DataFrame:
    """Read the survey table from an Excel workbook or CSV file.

    Raises FileNotFoundError when the path does not exist and ValueError for an
    unsupported extension or an empty table.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Survey file not found: {path}")
    suffix = path.suffix.lower()
    print(f"📥 Loading survey data from {path.name}...")
    if suffix in EXCEL_SUFFIXES:
        df = pd.read_excel(path, sheet_name=sheet_name)
    elif suffix == ".csv":
        df = pd.read_csv(path)
    else:
        raise ValueError(f"Unsupported survey file type '{suffix}'. Use .xlsx, .xlsm or .csv")
    expect_non_empty(df)
    print(f"✅ Loaded {len(df)} respondents x {df.shape[1]} columns")
    return df


def summarize_survey(df: pd.DataFrame) -> pd.DataFrame:
    return df.describe(include="all").T


def tukey_hinges(values: np.ndarray) -> tuple[float, float]:
    """Lower and upper hinges as in Tukey's five-number summary."""
    x = np.sort(np.asarray(values, dtype=float))
    n = len(x)
    n4 = np.floor((n + 3) / 2) / 2
    pos = np.array([n4, n + 1 - n4]) - 1
    lower = 0.5 * (x[int(np.floor(pos[0]))] + x[int(np.ceil(pos[0]))])
    upper = 0.5 * (x[int(np.floor(pos[1]))] + x[int(np.ceil(pos[1]))])
    return float(lower), float(upper)


def boxplot_outliers(series: pd.Series, coef: float = params.OUTLIER_COEF) -> List[float]:
    """Values beyond coef * hinge spread from the hinges (boxplot whiskers)."""
    values = pd.to_numeric(series, errors="coerce").dropna().to_numpy()
    if len(values) == 0:
        return []
    lower, upper = tukey_hinges(values)
    spread = coef * (upper - lower)
    mask = (values < lower - spread) | (values > upper + spread)
    return values[mask].tolist()


def detect_outliers(
    df: pd.DataFrame,
    columns: Optional[Iterable[str]] = None,
    coef: float = params.OUTLIER_COEF,
) -> Dict[str, List[float]]:
    """Outlier listing per analysis column, in row order."""
    columns = list(columns) if columns is not None else list(params.ANALYSIS_COLUMNS)
    out: Dict[str, List[float]] = {}
    for col in columns:
        if col not in df.columns:
            _LOG.warning("Outlier scan skipped missing column %s", col)
            continue
        out[col] = boxplot_outliers(df[col], coef=coef)
    return out


def print_outliers(outliers: Dict[str, List[float]]) -> None:
    for col, vals in outliers.items():
        shown = " ".join(f"{v:g}" for v in vals)
        print(f"Outliers in {col} : {shown}")
