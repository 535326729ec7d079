# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from rich.console import Console

from qwatch_lib.core.common import yes_or_no_prompt
from qwatch_lib.core.config import CFG
from qwatch_lib.core.error import QWError, QWQueueNotFoundError
from qwatch_lib.core.logger import get_logger
from qwatch_lib.queues.links import TemplateLinkResolver
from qwatch_lib.queues.presenter import QueueListPresenter
from qwatch_lib.queues.store import YamlQueueStore

logger = get_logger(__name__)
console = Console()


@click.command(
    short_help="Pause an active queue or resume a paused one.",
    help=f"""Perform the action available for the specified queue:
pause the queue if it is active, resume it if it is paused.

{click.style("QUEUE", fg="green")}   The name of the queue.

By default, `{CFG.binary_name} toggle` prompts for confirmation before performing the action.""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument("name", type=str, metavar=click.style("QUEUE", fg="green"))
@click.option(
    "-f",
    "--file",
    type=str,
    default=None,
    help="Path to the file with queue definitions.",
)
@click.option(
    "-y", "--yes", is_flag=True, help="Perform the action without confirmation."
)
def toggle(name: str, file: str | None, yes: bool = False) -> NoReturn:
    try:
        store = YamlQueueStore.fromOption(file)
        presenter = QueueListPresenter(
            False,
            [q for q in store.load() if q.name == name],
            store.pauseQueue,
            store.resumeQueue,
            TemplateLinkResolver(),
        )

        if not (row := presenter.getRow(name)):
            raise QWQueueNotFoundError(f"Queue '{name}' does not exist.")

        console.print(presenter.createQueuesPanel(console))

        action = row.getAction()
        if yes or yes_or_no_prompt(
            f"Do you want to {action.label.lower()} the queue '{name}'?"
        ):
            action.invoke()
        else:
            logger.info("Operation aborted.")

        print()
        sys.exit(0)
    except QWError as e:
        logger.error(e)
        print()
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        print()
        sys.exit(CFG.exit_codes.unexpected_error)
