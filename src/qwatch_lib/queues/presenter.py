# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Sequence
from datetime import datetime

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from qwatch_lib.core.clock import get_tick_source
from qwatch_lib.core.common import get_panel_width, tick_to_datetime
from qwatch_lib.core.config import CFG
from qwatch_lib.core.logger import get_logger

from .density import Density, QueueField
from .links import LinkResolver
from .queue import Queue
from .row import QueueControl, QueueRow, QueueStatus

logger = get_logger(__name__)

_JUSTIFY = {
    QueueField.NAME: "left",
    QueueField.CREATED: "right",
    QueueField.AVAILABLE: "right",
    QueueField.RUNNING: "right",
    QueueField.STATUS: "left",
    QueueField.CONTROLS: "right",
}


class QueueListPresenter:
    """
    Presents the list of queues and their pause/resume controls.

    The presenter is a projection of the supplied queue collection: it never
    modifies the queues. Pause/resume requests are handed over to the provided
    callbacks and their effect becomes visible once an updated collection
    is passed to `update`.
    """

    def __init__(
        self,
        loading: bool,
        queues: Sequence[Queue],
        pause_queue: QueueControl,
        resume_queue: QueueControl,
        link_resolver: LinkResolver | None = None,
        density: Density | None = None,
    ):
        """
        Initialize the presenter.

        Args:
            loading (bool): Whether the queues are still being loaded.
            queues (Sequence[Queue]): Queues to present, in display order.
            pause_queue (QueueControl): Requests pausing of a named queue.
            resume_queue (QueueControl): Requests resuming of a named queue.
            link_resolver (LinkResolver | None): Produces references to queue detail views.
            density (Density | None): Fixed display density. If None, the density
                is selected from the width of the console.
        """
        self._pause_queue = pause_queue
        self._resume_queue = resume_queue
        self._link_resolver = link_resolver
        self._density = density

        self._loading = loading
        self._rows: list[QueueRow] = []
        self.update(loading, queues)

    def update(self, loading: bool, queues: Sequence[Queue]) -> None:
        """
        Supply a new state of the queue collection.

        Rows of queues that are still present are reused, so their
        memoized labels survive the update.
        """
        self._loading = loading

        previous = {row.getName(): row for row in self._rows}
        rows = []
        for queue in queues:
            if row := previous.get(queue.name):
                row.setQueue(queue)
            else:
                row = QueueRow(
                    queue, self._pause_queue, self._resume_queue, self._link_resolver
                )
            rows.append(row)

        self._rows = rows
        logger.debug(f"Presenting {len(self._rows)} queues (loading: {loading}).")

    def isLoading(self) -> bool:
        return self._loading

    def getRows(self) -> list[QueueRow]:
        return list(self._rows)

    def getRow(self, name: str) -> QueueRow | None:
        """Return the row of the queue with the given name or None if there is no such queue."""
        return next((row for row in self._rows if row.getName() == name), None)

    def getDensity(self, console: Console) -> Density:
        """Return the fixed display density or the one fitting the console."""
        return self._density or Density.fromWidth(console.size.width)

    def dumpYaml(self) -> None:
        """
        Print the YAML representation of all queues to stdout.
        """
        for row in self._rows:
            print(row.getQueue().toYaml())

    def createQueuesPanel(
        self, console: Console | None = None, now: datetime | None = None
    ) -> Group:
        """
        Create a Rich panel displaying the queues or a loading placeholder.

        Args:
            console (Console | None): Optional Rich Console instance.
                If None, a new Console will be created.
            now (datetime | None): Time relative to which the creation times are shown.
                If None, the current value of the shared clock is used.

        Returns:
            Group: Rich Group containing the queues panel or the placeholder.
        """
        if self._loading:
            return Group(Text(""), self._createLoadingPlaceholder(), Text(""))

        console = console or Console()
        now = now or tick_to_datetime(get_tick_source().now())
        queues_table = self._createQueuesTable(self.getDensity(console), now)

        panel = Panel(
            queues_table,
            title=Text(
                CFG.queues_presenter.title,
                style=CFG.queues_presenter.title_style,
                justify="center",
            ),
            border_style=CFG.queues_presenter.border_style,
            padding=(1, 1),
            width=get_panel_width(
                console,
                1,
                CFG.queues_presenter.min_width,
                CFG.queues_presenter.max_width,
            ),
            expand=False,
        )

        return Group(Text(""), panel, Text(""))

    def _createLoadingPlaceholder(self) -> Text:
        return Text(
            CFG.queues_presenter.loading_text, style=CFG.queues_presenter.loading_style
        )

    def _createQueuesTable(self, density: Density, now: datetime) -> Table:
        """
        Construct a Rich Table with one row per queue.

        Args:
            density (Density): Display density determining the columns.
            now (datetime): Time relative to which the creation times are shown.

        Returns:
            Table: A Rich Table object populated with formatted queue data.
        """
        table = Table(
            show_header=True,
            box=None,
            padding=(0, 1),
        )

        for queue_field in density.columns():
            # the controls column has no visible header
            header = "" if queue_field == QueueField.CONTROLS else queue_field.value
            table.add_column(
                header=Text(
                    header,
                    justify="center",
                    style=CFG.queues_presenter.headers_style,
                ),
                justify=_JUSTIFY[queue_field],
            )

        for row in self._rows:
            self._addQueueRow(row, table, density, now)

        return table

    def _addQueueRow(
        self, row: QueueRow, table: Table, density: Density, now: datetime
    ) -> None:
        """
        Add a formatted row representing a single queue to the given table.
        """
        secondary = CFG.queues_presenter.secondary_text_style
        cells = {
            QueueField.NAME: lambda: self._createNameCell(row, density, now),
            QueueField.CREATED: lambda: Text(row.getCreatedLabel(now), style=secondary),
            QueueField.AVAILABLE: lambda: Text(row.getAvailable(), style=secondary),
            QueueField.RUNNING: lambda: Text(row.getRunning(), style=secondary),
            QueueField.STATUS: lambda: QueueListPresenter._formatStatus(row),
            QueueField.CONTROLS: lambda: QueueListPresenter._formatControl(row),
        }

        table.add_row(*[cells[queue_field]() for queue_field in density.columns()])

    @staticmethod
    def _createNameCell(row: QueueRow, density: Density, now: datetime) -> Text:
        """
        Create the name cell, including the fields folded into it.
        """
        cell = Text(
            row.getName(),
            style=f"{CFG.queues_presenter.main_text_style} link {row.getLink()}",
        )

        folded = {
            QueueField.CREATED: lambda: row.getCreatedLabel(now),
            QueueField.AVAILABLE: row.getAvailableSummary,
            QueueField.RUNNING: row.getRunningSummary,
        }
        for queue_field in density.foldedFields():
            cell.append(
                f"\n{folded[queue_field]()}",
                style=CFG.queues_presenter.secondary_text_style,
            )

        return cell

    @staticmethod
    def _formatStatus(row: QueueRow) -> Text:
        status = row.getStatus()
        style = (
            CFG.queues_presenter.paused_style
            if status == QueueStatus.PAUSED
            else CFG.queues_presenter.active_style
        )
        return Text(status.value, style=style)

    @staticmethod
    def _formatControl(row: QueueRow) -> Text:
        action = row.getAction()
        return Text(
            f"{action.icon} {action.label}", style=CFG.queues_presenter.control_style
        )
