"""Partner recommendation for the most lucrative segment.

An ordered decision table (``PARTNER_RULES``): the first rule whose profile
mean is strictly above its threshold wins, otherwise ``DEFAULT_PARTNER``.
A mean that is missing never satisfies a rule.
"""
from __future__ import annotations

from typing import Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from . import segmentation_params as params
from .profiling_utils import most_lucrative_segment

Rule = Tuple[str, float, str]


def _value(segment: Mapping, column: str) -> Optional[float]:
    value = segment.get(column) if hasattr(segment, "get") else None
    if value is None or pd.isna(value):
        return None
    return float(value)


def recommend_partner(
    segment: Optional[Mapping],
    rules: Optional[Sequence[Rule]] = None,
    default: str = params.DEFAULT_PARTNER,
) -> str:
    """Apply the rule table to one segment profile (a Series or dict of *_mean values)."""
    if segment is None or len(segment) == 0:
        return params.NO_SEGMENT_SENTINEL
    rules = params.PARTNER_RULES if rules is None else rules
    for column, threshold, partner in rules:
        value = _value(segment, column)
        if value is not None and value > threshold:
            return partner
    return default


def recommend_for_profiles(profiles: Optional[Union[pd.DataFrame, pd.Series]]) -> str:
    """Recommendation for the top-ranked segment of a profile table."""
    if profiles is None:
        return params.NO_SEGMENT_SENTINEL
    if isinstance(profiles, pd.Series):
        return recommend_partner(profiles)
    return recommend_partner(most_lucrative_segment(profiles))
