# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Presentation and control of work queues.

This module defines the `Queue` snapshot, the `QueueRow` model deriving the
rendered fields and the single pause/resume action of a queue, and
`QueueListPresenter`, which turns a queue collection into a Rich panel whose
columns adapt to the available display width. Queue collections are supplied
by `YamlQueueStore`, which also executes pause and resume requests.
"""

from .cli import queues
from .density import Density, QueueField
from .presenter import QueueListPresenter
from .queue import Queue
from .row import ActionKind, QueueAction, QueueRow, QueueStatus
from .store import YamlQueueStore

__all__ = [
    "ActionKind",
    "Density",
    "Queue",
    "QueueAction",
    "QueueField",
    "QueueListPresenter",
    "QueueRow",
    "QueueStatus",
    "YamlQueueStore",
    "queues",
]
