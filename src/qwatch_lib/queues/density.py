# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from enum import Enum
from typing import Self

from qwatch_lib.core.config import CFG
from qwatch_lib.core.error import QWError


class QueueField(Enum):
    """Fields of a queue shown in the queue list."""

    NAME = "Name"
    CREATED = "Created"
    AVAILABLE = "Available"
    RUNNING = "Running"
    STATUS = "Status"
    CONTROLS = "Controls"


# order of the columns in the queue list
FIELD_ORDER = (
    QueueField.NAME,
    QueueField.CREATED,
    QueueField.AVAILABLE,
    QueueField.RUNNING,
    QueueField.STATUS,
    QueueField.CONTROLS,
)

# fields that may be folded into the name cell
FOLDABLE_FIELDS = (QueueField.CREATED, QueueField.AVAILABLE, QueueField.RUNNING)


class Density(Enum):
    """
    Display density of the queue list.

    Determines which fields are shown as separate columns and which are
    folded into a compact multi-line cell below the queue name.
    Folding only relocates information, it never hides it.
    """

    COMPACT = "compact"
    MEDIUM = "medium"
    FULL = "full"

    @classmethod
    def fromWidth(cls, width: int) -> Self:
        """
        Select the density for the given console width (in columns).
        """
        if width >= CFG.density.full_min_width:
            return cls.FULL
        if width >= CFG.density.medium_min_width:
            return cls.MEDIUM
        return cls.COMPACT

    @classmethod
    def fromStr(cls, string: str) -> Self:
        """
        Convert a string to the corresponding density level.

        Raises:
            QWError: If the string does not name a density level.
        """
        try:
            return cls(string.strip().lower())
        except ValueError as e:
            raise QWError(f"Unknown display density '{string}'.") from e

    def foldedFields(self) -> tuple[QueueField, ...]:
        """Return the fields folded into the name cell, in display order."""
        return _FOLDED[self]

    def columns(self) -> tuple[QueueField, ...]:
        """Return the fields shown as separate columns, in display order."""
        folded = self.foldedFields()
        return tuple(f for f in FIELD_ORDER if f not in folded)

    def isColumn(self, queue_field: QueueField) -> bool:
        return queue_field in self.columns()


_FOLDED: dict[Density, tuple[QueueField, ...]] = {
    Density.COMPACT: FOLDABLE_FIELDS,
    Density.MEDIUM: (QueueField.CREATED,),
    Density.FULL: (),
}
