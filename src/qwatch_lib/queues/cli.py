# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
import threading
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from rich.console import Console
from rich.live import Live

from qwatch_lib.core.clock import get_tick_source
from qwatch_lib.core.common import tick_to_datetime
from qwatch_lib.core.config import CFG
from qwatch_lib.core.error import QWError
from qwatch_lib.core.logger import get_logger

from .density import Density
from .links import TemplateLinkResolver
from .presenter import QueueListPresenter
from .store import YamlQueueStore

logger = get_logger(__name__)


@click.command(
    short_help="Display the queues and their state.",
    help=f"""Display the queues, their job counts, and whether they are active or paused.

Queues are read from the file specified by `--file`, the `{CFG.env_vars.queues_file}`
environment variable, or `{CFG.store.default_file}` in the current directory.

If the `--watch` flag is specified, the list stays open and is refreshed every second.""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.option(
    "-f",
    "--file",
    type=str,
    default=None,
    help="Path to the file with queue definitions.",
)
@click.option(
    "-w",
    "--watch",
    is_flag=True,
    help="Keep the list open and refresh it every second.",
)
@click.option(
    "-d",
    "--density",
    type=click.Choice([d.value for d in Density], case_sensitive=False),
    default=None,
    help="Display density of the list. Selected from the terminal width if not specified.",
)
@click.option("--yaml", is_flag=True, help="Output queue metadata in YAML format.")
def queues(file: str | None, watch: bool, density: str | None, yaml: bool) -> NoReturn:
    try:
        store = YamlQueueStore.fromOption(file)
        fixed_density = Density.fromStr(density) if density else None

        if watch:
            _watch(store, fixed_density)
            sys.exit(0)

        presenter = QueueListPresenter(
            False,
            store.load(),
            store.pauseQueue,
            store.resumeQueue,
            TemplateLinkResolver(),
            fixed_density,
        )
        if yaml:
            presenter.dumpYaml()
        else:
            console = Console(record=False, markup=False)
            panel = presenter.createQueuesPanel(console)
            console.print(panel)
        sys.exit(0)
    except QWError as e:
        logger.error(e)
        print()
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        print()
        sys.exit(CFG.exit_codes.unexpected_error)


def _watch(store: YamlQueueStore, density: Density | None) -> None:
    """
    Show a live queue list refreshed on every tick of the shared clock
    until interrupted by the user.
    """
    console = Console(record=False, markup=False)
    presenter = QueueListPresenter(
        True, [], store.pauseQueue, store.resumeQueue, TemplateLinkResolver(), density
    )
    source = get_tick_source()

    with Live(
        presenter.createQueuesPanel(console), console=console, auto_refresh=False
    ) as live:

        def on_tick(tick: int) -> None:
            try:
                presenter.update(False, store.load())
            except QWError as e:
                # keep showing the last known collection
                logger.error(e)

            live.update(
                presenter.createQueuesPanel(console, tick_to_datetime(tick)),
                refresh=True,
            )

        # first render happens before the timer thread can call `on_tick`
        on_tick(source.now())
        with source.subscribe(on_tick):
            try:
                _wait_for_interrupt()
            except KeyboardInterrupt:
                logger.debug("Watching interrupted by the user.")


def _wait_for_interrupt() -> None:
    """Block the calling thread until the user interrupts the program."""
    threading.Event().wait()
