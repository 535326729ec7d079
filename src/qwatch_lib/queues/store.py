# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
File-backed source of queue collections.

`YamlQueueStore` supplies the queue collection presented by qwatch and acts
as the queue-control collaborator executing pause and resume requests.
The queue file contains either a list of queue definitions or a mapping
with a `queues` key holding such a list.
"""

import os
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from qwatch_lib.core.common import load_yaml_dumper, load_yaml_loader
from qwatch_lib.core.config import CFG
from qwatch_lib.core.error import QWError, QWQueueNotFoundError
from qwatch_lib.core.logger import get_logger

from .queue import Queue

logger = get_logger(__name__)


class YamlQueueStore:
    """
    Loads queues from a YAML file and records pause/resume requests in it.
    """

    def __init__(
        self,
        path: Path,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        """
        Args:
            path (Path): Path to the queue file.
            clock (Callable[[], datetime]): Function returning the current time,
                used to timestamp pause requests.
        """
        self._path = path
        self._clock = clock

    @classmethod
    def fromOption(cls, path: str | None) -> "YamlQueueStore":
        """
        Create a store for the explicitly provided file, the file specified by
        the environment, or the default file (in this order).
        """
        path = (
            path
            or os.environ.get(CFG.env_vars.queues_file)
            or CFG.store.default_file
        )
        return cls(Path(path))

    def getPath(self) -> Path:
        return self._path

    def load(self) -> list[Queue]:
        """
        Load the queues from the file, preserving their order.

        Raises:
            QWError: If the file cannot be read or contains invalid queues.
        """
        queues = [Queue.fromDict(data) for data in self._readDefinitions()]
        logger.debug(f"Loaded {len(queues)} queues from '{self._path}'.")
        return queues

    def pauseQueue(self, name: str) -> None:
        """
        Mark the queue with the given name as paused. Pausing a paused queue has no effect.

        Raises:
            QWQueueNotFoundError: If there is no such queue.
        """
        now = self._clock()
        self._modify(
            name,
            lambda q: q
            if q.isPaused()
            else replace(q, paused_at=max(now, q.created_at), updated_at=now),
        )
        logger.info(f"Paused queue '{name}'.")

    def resumeQueue(self, name: str) -> None:
        """
        Mark the queue with the given name as active. Resuming an active queue has no effect.

        Raises:
            QWQueueNotFoundError: If there is no such queue.
        """
        now = self._clock()
        self._modify(
            name,
            lambda q: replace(q, paused_at=None, updated_at=now)
            if q.isPaused()
            else q,
        )
        logger.info(f"Resumed queue '{name}'.")

    def _modify(self, name: str, change: Callable[[Queue], Queue]) -> None:
        """Apply `change` to the named queue and write all queues back to the file."""
        queues = self.load()

        if not any(q.name == name for q in queues):
            raise QWQueueNotFoundError(f"Queue '{name}' does not exist.")

        queues = [change(q) if q.name == name else q for q in queues]
        self._write(queues)

    def _readDefinitions(self) -> list[dict[str, Any]]:
        """Read the raw queue definitions from the file."""
        try:
            with self._path.open() as f:
                data = yaml.load(f, Loader=load_yaml_loader())
        except FileNotFoundError as e:
            raise QWError(f"Queue file '{self._path}' does not exist.") from e
        except (OSError, yaml.YAMLError) as e:
            raise QWError(f"Could not read queue file '{self._path}': {e}.") from e

        if data is None:
            return []

        if isinstance(data, dict):
            data = data.get("queues") or []

        if not isinstance(data, list):
            raise QWError(
                f"Queue file '{self._path}' does not contain a list of queues."
            )

        return data

    def _write(self, queues: list[Queue]) -> None:
        try:
            with self._path.open("w") as f:
                yaml.dump(
                    {"queues": [q.toDict() for q in queues]},
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    Dumper=load_yaml_dumper(),
                )
        except OSError as e:
            raise QWError(f"Could not write queue file '{self._path}': {e}.") from e
