# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Self

import yaml

from qwatch_lib.core.common import load_yaml_dumper, parse_timestamp
from qwatch_lib.core.error import QWError


@dataclass(frozen=True)
class Queue:
    """
    Snapshot of a single work queue.

    Instances are never modified by qwatch. Changes of a queue are represented
    by a new snapshot supplied by the queue store.
    """

    # Unique name of the queue.
    name: str
    # Time at which the queue was created.
    created_at: datetime
    # Time at which the queue was paused. None if the queue is active.
    paused_at: datetime | None = None
    # Number of jobs ready to run.
    count_available: int = 0
    # Number of jobs currently running.
    count_running: int = 0
    # Time of the last modification of the queue.
    updated_at: datetime | None = None

    def isPaused(self) -> bool:
        """Return True if the queue is paused."""
        return self.paused_at is not None

    @classmethod
    def fromDict(cls, data: dict[str, Any]) -> Self:
        """
        Construct a queue from a mapping loaded from a queue file.

        Args:
            data (dict[str, Any]): Mapping with the queue fields.

        Returns:
            Queue: The constructed queue.

        Raises:
            QWError: If a required field is missing or a field has an invalid value.
        """
        if not isinstance(data, dict):
            raise QWError(f"Invalid queue definition '{data}'.")

        if not (name := data.get("name")):
            raise QWError(f"Queue definition '{data}' has no name.")

        if data.get("created_at") is None:
            raise QWError(f"Queue '{name}' has no creation time.")

        try:
            count_available = int(data.get("count_available") or 0)
            count_running = int(data.get("count_running") or 0)
        except (TypeError, ValueError) as e:
            raise QWError(f"Invalid job counts of queue '{name}'.") from e

        return cls(
            name=str(name),
            created_at=parse_timestamp(data["created_at"]),  # ty: ignore[invalid-argument-type]
            paused_at=parse_timestamp(data.get("paused_at")),
            count_available=count_available,
            count_running=count_running,
            updated_at=parse_timestamp(data.get("updated_at")),
        )

    def toDict(self) -> dict[str, Any]:
        """Return a mapping representation of the queue with ISO-8601 timestamps."""
        return {
            "name": self.name,
            "created_at": self.created_at.isoformat(),
            "paused_at": self.paused_at.isoformat() if self.paused_at else None,
            "count_available": self.count_available,
            "count_running": self.count_running,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def toYaml(self) -> str:
        """Return the YAML representation of the queue."""
        return yaml.dump(
            self.toDict(),
            default_flow_style=False,
            sort_keys=False,
            Dumper=load_yaml_dumper(),
        )
