# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from qwatch_lib.core.config import CFG
from qwatch_lib.core.logger import get_logger
from qwatch_lib.core.relative_time import RelativeTimeLabel, RelativeTimeOptions

from .links import LinkResolver, TemplateLinkResolver
from .queue import Queue

logger = get_logger(__name__)

QueueControl = Callable[[str], None]

# options used for the creation time of a queue
CREATED_OPTIONS = RelativeTimeOptions(add_suffix=True, include_seconds=True)


class QueueStatus(Enum):
    """State of a queue as shown in the queue list."""

    ACTIVE = "Active"
    PAUSED = "Paused"


class ActionKind(Enum):
    """Kind of action available for a queue."""

    PAUSE = "Pause"
    RESUME = "Resume"


@dataclass(frozen=True)
class QueueAction:
    """
    The single control of a queue row.

    Label and icon describe the action that will be performed,
    not the current state of the queue.
    """

    kind: ActionKind
    queue_name: str
    handler: QueueControl

    @property
    def label(self) -> str:
        return self.kind.value

    @property
    def icon(self) -> str:
        if self.kind == ActionKind.PAUSE:
            return CFG.queues_presenter.pause_icon
        return CFG.queues_presenter.resume_icon

    @property
    def screen_reader_text(self) -> str:
        return f"{self.label}, {self.queue_name}"

    def invoke(self) -> None:
        """
        Hand the request over to the queue-control collaborator.

        The result of the request is not awaited. Any change of the queue
        becomes visible only once an updated queue collection is supplied.
        """
        logger.debug(f"Requesting '{self.label}' for queue '{self.queue_name}'.")
        self.handler(self.queue_name)


class QueueRow:
    """
    Renderable fields and the available action of a single queue.
    """

    def __init__(
        self,
        queue: Queue,
        pause_queue: QueueControl,
        resume_queue: QueueControl,
        link_resolver: LinkResolver | None = None,
    ):
        """
        Initialize the row.

        Args:
            queue (Queue): The queue described by the row.
            pause_queue (QueueControl): Requests pausing of a queue with the given name.
            resume_queue (QueueControl): Requests resuming of a queue with the given name.
            link_resolver (LinkResolver | None): Produces a reference to the detail view
                of a queue. Defaults to `TemplateLinkResolver`.
        """
        self._queue = queue
        self._pause_queue = pause_queue
        self._resume_queue = resume_queue
        self._link_resolver = link_resolver or TemplateLinkResolver()

        self._created_label = RelativeTimeLabel(queue.created_at, CREATED_OPTIONS)

    def getQueue(self) -> Queue:
        return self._queue

    def getName(self) -> str:
        return self._queue.name

    def setQueue(self, queue: Queue) -> None:
        """
        Replace the described queue with a newer snapshot.

        The memoized creation time label is kept.
        """
        self._queue = queue
        self._created_label.setTarget(queue.created_at)

    def getStatus(self) -> QueueStatus:
        if self._queue.isPaused():
            return QueueStatus.PAUSED
        return QueueStatus.ACTIVE

    def getAction(self) -> QueueAction:
        """
        Return the single action of the row: resume a paused queue, pause an active one.
        """
        if self._queue.isPaused():
            return QueueAction(ActionKind.RESUME, self._queue.name, self._resume_queue)
        return QueueAction(ActionKind.PAUSE, self._queue.name, self._pause_queue)

    def getLink(self) -> str:
        """Return the reference to the queue's detail view, regardless of the queue state."""
        return self._link_resolver(self._queue.name)

    def getCreatedLabel(self, now: datetime) -> str:
        return self._created_label.render(now)

    def getCreatedLabelRecomputations(self) -> int:
        return self._created_label.recomputations

    def getAvailable(self) -> str:
        return str(self._queue.count_available)

    def getRunning(self) -> str:
        return str(self._queue.count_running)

    def getAvailableSummary(self) -> str:
        return f"{self._queue.count_available} available"

    def getRunningSummary(self) -> str:
        return f"{self._queue.count_running} running"
