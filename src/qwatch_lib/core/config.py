# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for qwatch.

This module defines dataclasses representing all configurable aspects of qwatch,
including environment variables, the shared clock, display density breakpoints,
link resolution, the queue store, presentation settings, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by qwatch."""

    # Enables qwatch debug mode.
    debug_mode: str = "QWATCH_DEBUG"
    # Path to the qwatch config file.
    config: str = "QWATCH_CONFIG"
    # Path to the file with queue definitions.
    queues_file: str = "QWATCH_QUEUES_FILE"


@dataclass
class ClockSettings:
    """Settings for the shared clock tick source."""

    # Interval (in seconds) between two successive ticks.
    tick_interval: float = 1.0


@dataclass
class DensitySettings:
    """Console widths (in columns) at which the queue list gains columns."""

    # Minimal console width for showing counts as separate columns.
    medium_min_width: int = 60
    # Minimal console width for showing all fields as separate columns.
    full_min_width: int = 90


@dataclass
class LinkSettings:
    """Settings for resolving links to queue detail views."""

    # Base URL prepended to the detail path. Empty for relative links.
    base_url: str = ""
    # Path of the queue detail view. `{name}` is replaced by the queue name.
    queue_detail_template: str = "/queues/{name}"


@dataclass
class StoreSettings:
    """Settings for the file-backed queue store."""

    # File with queue definitions used if no other file is specified.
    default_file: str = "queues.yaml"


@dataclass
class QueuesPresenterSettings:
    """Settings for QueueListPresenter."""

    # Maximal width of the queues panel.
    max_width: int | None = None
    # Minimal width of the queues panel.
    min_width: int | None = None
    # Title of the queues panel.
    title: str = "QUEUES"
    # Text shown while the queues are being loaded.
    loading_text: str = "Loading..."
    # Style used for border lines.
    border_style: str = "white"
    # Style used for the title.
    title_style: str = "white bold"
    # Style used for table headers.
    headers_style: str = "default"
    # Style used for the loading placeholder.
    loading_style: str = "grey50 italic"

    # Style used for queue names.
    main_text_style: str = "white"
    # Style used for counts, creation times and folded information.
    secondary_text_style: str = "grey70"
    # Style used for the status of active queues.
    active_style: str = "bright_green"
    # Style used for the status of paused queues.
    paused_style: str = "bright_yellow"
    # Style used for the pause/resume control.
    control_style: str = "bright_blue bold"

    # Icon of the control pausing an active queue.
    pause_icon: str = "⏸"
    # Icon of the control resuming a paused queue.
    resume_icon: str = "▶"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by qwatch.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of qwatch commands.
    default: int = 91
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for qwatch."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    clock: ClockSettings = field(default_factory=ClockSettings)
    density: DensitySettings = field(default_factory=DensitySettings)
    links: LinkSettings = field(default_factory=LinkSettings)
    store: StoreSettings = field(default_factory=StoreSettings)
    queues_presenter: QueuesPresenterSettings = field(
        default_factory=QueuesPresenterSettings
    )
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the qwatch binary.
    binary_name: str = "qwatch"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read qwatch config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path) if (env_path := os.getenv("QWATCH_CONFIG")) else None,
            # 2. Current working directory (for development/override)
            Path.cwd() / "qwatch_config.toml",
            # 3. XDG config home (standard user config location)
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "qwatch"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Unknown keys are ignored and nested dataclasses are handled properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for qwatch.
CFG = Config.load()
