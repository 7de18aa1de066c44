from __future__ import annotations
from .validate import expect_columns, expect_non_empty, expect_numeric, expect_finite

__all__ = [
    "expect_columns", "expect_non_empty", "expect_numeric", "expect_finite",
]
