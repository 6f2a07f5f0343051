"""
Change notification models for pathsearch.

Observers of a PathList receive ListChangeEvent objects describing the
inclusive index interval that was added or removed.
"""

from enum import Enum
from pydantic import BaseModel, Field, model_validator


class ChangeType(Enum):
    """Kinds of structural change a path list can report."""
    INTERVAL_ADDED = "interval_added"
    INTERVAL_REMOVED = "interval_removed"


class ListChangeEvent(BaseModel):
    """
    Describes a contiguous change to a path list.

    Attributes:
        type: Whether entries were added or removed
        index0: First index of the affected interval
        index1: Last index of the affected interval (inclusive)
    """

    type: ChangeType = Field(..., description="Kind of change")
    index0: int = Field(..., ge=0, description="First affected index")
    index1: int = Field(..., ge=0, description="Last affected index (inclusive)")

    @model_validator(mode='after')
    def validate_interval(self):
        """Ensure the interval is not reversed."""
        if self.index1 < self.index0:
            raise ValueError("index1 must be >= index0")
        return self

    def __str__(self) -> str:
        return f"{self.type.value}[{self.index0}, {self.index1}]"
