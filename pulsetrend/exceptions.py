"""
Pipeline error types.

All errors are terminal: nothing in the pipeline retries them.
"""

from typing import List, Optional


class PipelineError(Exception):
    """Base class for every error raised by a pipeline stage."""


class ValidationError(PipelineError, ValueError):
    """
    Raw input is malformed or incomplete.

    Raised by the loader before any imputation happens.
    """

    def __init__(self, message: str, rows: Optional[List[int]] = None):
        super().__init__(message)
        self.rows = rows or []


class CapacityError(PipelineError):
    """A calendar day holds more records than the grid has slots for."""

    def __init__(self, date, size: int, capacity: int):
        super().__init__(
            f"{size} records on {date} exceed the {capacity} grid slots available in a day"
        )
        self.date = date
        self.size = size
        self.capacity = capacity


class InsufficientDataError(PipelineError):
    """A stage received fewer points than it needs."""

    def __init__(self, stage: str, required: int, actual: int):
        super().__init__(
            f"{stage} needs at least {required} points, got {actual}"
        )
        self.stage = stage
        self.required = required
        self.actual = actual
