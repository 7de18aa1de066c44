"""Exceptions raised by the segmentation stages.

Data problems are fatal for a run: every stage raises and only the CLI
catches. The data errors also subclass ``ValueError`` so callers that already
guard with ``except ValueError`` keep working.
"""


class SegmentationError(Exception):
    """Base class for all segmentation failures."""


class DataValidationError(SegmentationError, ValueError):
    """The input table cannot be analysed as-is."""


class MissingColumnsError(DataValidationError):
    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing required columns: {self.missing}")


class ZeroVarianceError(DataValidationError):
    def __init__(self, columns):
        self.columns = list(columns)
        super().__init__(
            f"Cannot standardize zero-variance columns (z-score undefined): {self.columns}"
        )


class ImputationError(DataValidationError):
    def __init__(self, column, reason):
        self.column = column
        self.reason = reason
        super().__init__(f"Cannot impute column '{column}': {reason}")
