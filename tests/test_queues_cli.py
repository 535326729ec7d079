# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from datetime import datetime, timezone
from io import StringIO
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner
from rich.console import Console

from qwatch_lib.core.clock import TickSource
from qwatch_lib.core.config import CFG
from qwatch_lib.core.error import QWError
from qwatch_lib.queues import Density, Queue, queues
from qwatch_lib.queues.cli import _watch

T = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

QUEUES_YAML = """
queues:
  - name: emails
    created_at: "2024-01-01T12:00:00Z"
    count_available: 3
    count_running: 1
  - name: reports
    created_at: "2024-01-01T10:00:00Z"
    paused_at: "2024-01-01T11:00:00Z"
"""


@pytest.fixture
def queue_file(tmp_path):
    path = tmp_path / "queues.yaml"
    path.write_text(QUEUES_YAML)
    return path


def test_queues_command_prints_queues(queue_file):
    runner = CliRunner()

    result = runner.invoke(queues, ["-f", str(queue_file), "--density", "full"])

    assert result.exit_code == 0
    assert "emails" in result.output
    assert "reports" in result.output
    assert "Active" in result.output
    assert "Paused" in result.output


def test_queues_command_passes_density_to_presenter(queue_file):
    runner = CliRunner()

    with (
        patch("qwatch_lib.queues.cli.QueueListPresenter") as mock_presenter_cls,
        patch("qwatch_lib.queues.cli.Console"),
    ):
        result = runner.invoke(queues, ["-f", str(queue_file), "-d", "COMPACT"])

    assert result.exit_code == 0
    args = mock_presenter_cls.call_args.args
    assert args[0] is False
    assert [q.name for q in args[1]] == ["emails", "reports"]
    assert args[5] == Density.COMPACT
    mock_presenter_cls.return_value.createQueuesPanel.assert_called_once()


def test_queues_command_outputs_yaml_when_flag_set(queue_file):
    runner = CliRunner()

    result = runner.invoke(queues, ["-f", str(queue_file), "--yaml"])

    assert result.exit_code == 0
    assert "name: emails" in result.output
    assert "name: reports" in result.output
    assert "count_available: 3" in result.output


def test_queues_command_uses_environment_file(queue_file, monkeypatch):
    monkeypatch.setenv(CFG.env_vars.queues_file, str(queue_file))
    runner = CliRunner()

    result = runner.invoke(queues, ["--yaml"])

    assert result.exit_code == 0
    assert "name: emails" in result.output


def test_queues_command_missing_file_exits_with_default_code(tmp_path):
    runner = CliRunner()

    result = runner.invoke(queues, ["-f", str(tmp_path / "missing.yaml")])

    assert result.exit_code == CFG.exit_codes.default


def test_queues_command_unexpected_error(queue_file):
    runner = CliRunner()

    with patch(
        "qwatch_lib.queues.cli.YamlQueueStore.fromOption",
        side_effect=RuntimeError("boom"),
    ):
        result = runner.invoke(queues, ["-f", str(queue_file)])

    assert result.exit_code == CFG.exit_codes.unexpected_error


def test_queues_command_watch_delegates(queue_file):
    runner = CliRunner()

    with patch("qwatch_lib.queues.cli._watch") as mock_watch:
        result = runner.invoke(queues, ["-f", str(queue_file), "--watch", "-d", "full"])

    assert result.exit_code == 0
    store, density = mock_watch.call_args.args
    assert store.getPath() == queue_file
    assert density == Density.FULL


def test_queues_command_watch_error_exits_with_default_code(queue_file):
    runner = CliRunner()

    with patch("qwatch_lib.queues.cli._watch", side_effect=QWError("failed")):
        result = runner.invoke(queues, ["-f", str(queue_file), "--watch"])

    assert result.exit_code == CFG.exit_codes.default


def _watch_with(store):
    """Run `_watch` against a private tick source and a buffered console."""
    buffer = StringIO()
    source = TickSource(interval=3600, clock=lambda: T.timestamp() + 65)

    with (
        patch("qwatch_lib.queues.cli.get_tick_source", return_value=source),
        patch(
            "qwatch_lib.queues.cli.Console",
            return_value=Console(file=buffer, width=120),
        ),
        patch(
            "qwatch_lib.queues.cli._wait_for_interrupt",
            side_effect=KeyboardInterrupt,
        ),
    ):
        _watch(store, Density.FULL)

    return buffer.getvalue(), source


def test_watch_renders_loaded_queues_and_unsubscribes():
    store = MagicMock()
    store.load.return_value = [Queue("emails", T, count_available=3, count_running=1)]

    output, source = _watch_with(store)

    store.load.assert_called_once()
    assert "emails" in output
    assert "1 minute ago" in output
    assert source.subscriberCount() == 0
    assert not source.isRunning()


def test_watch_keeps_loading_state_if_store_fails():
    store = MagicMock()
    store.load.side_effect = QWError("cannot read")

    output, source = _watch_with(store)

    assert CFG.queues_presenter.loading_text in output
    assert not source.isRunning()


def test_watch_refreshes_on_tick():
    store = MagicMock()
    store.load.return_value = [Queue("emails", T)]
    ticks = []

    source = TickSource(interval=3600, clock=lambda: T.timestamp() + 65)

    def wait():
        ticks.append(source.tick())
        raise KeyboardInterrupt

    with (
        patch("qwatch_lib.queues.cli.get_tick_source", return_value=source),
        patch(
            "qwatch_lib.queues.cli.Console",
            return_value=Console(file=StringIO(), width=120),
        ),
        patch("qwatch_lib.queues.cli._wait_for_interrupt", side_effect=wait),
    ):
        _watch(store, None)

    assert ticks == [int(T.timestamp()) + 65]
    # initial render and one tick
    assert store.load.call_count == 2


def test_watch_renders_first_before_the_clock_starts():
    running_on_load = []
    source = TickSource(interval=3600, clock=lambda: T.timestamp() + 65)

    def load():
        running_on_load.append(source.isRunning())
        return [Queue("emails", T)]

    store = MagicMock()
    store.load.side_effect = load

    with (
        patch("qwatch_lib.queues.cli.get_tick_source", return_value=source),
        patch(
            "qwatch_lib.queues.cli.Console",
            return_value=Console(file=StringIO(), width=120),
        ),
        patch(
            "qwatch_lib.queues.cli._wait_for_interrupt",
            side_effect=KeyboardInterrupt,
        ),
    ):
        _watch(store, None)

    assert running_on_load == [False]
    assert not source.isRunning()
