"""Configuration Pydantic models: PomocatConfig, TimerConfig, DisplayConfig, SystemConfig."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

_log = logging.getLogger(__name__)

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})

DEFAULT_ASCII_ART = r"""

      |\      _,,,---,,_
ZZZzz /,`.-'`'    -.  ;-;;,_
     |,4-  ) )-,_. ,\ (  `'-'
    '---''(_/--'  `-'\_)

        Time for a break!

"""


def trim_blank_lines(text: str) -> str:
    """Drop leading and trailing blank lines, keeping inner indentation."""
    lines = text.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def parse_flag(value: Any) -> bool | None:
    """Interpret *value* as a boolean, or return ``None`` if it is not one.

    Accepts real booleans, ``0`` / ``1`` and the words true/false, yes/no,
    on/off (any case).
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return None


def _flag_or_default(model: type[BaseModel], value: Any, info: ValidationInfo) -> bool:
    flag = parse_flag(value)
    if flag is None:
        default = model.model_fields[info.field_name].default
        _log.warning("%s=%r is not a boolean — using default %s", info.field_name, value, default)
        return default
    return flag


def _positive_int_or_default(model: type[BaseModel], value: Any, info: ValidationInfo) -> int:
    # Imported here: pomocat.config imports this module.
    from pomocat.config.resolver import resolve_positive_integer

    return resolve_positive_integer(value, info.field_name, model.model_fields[info.field_name].default)


class TimerConfig(BaseModel):
    """Phase durations and cycle settings.

    Numeric values are kept as given and resolved by
    :mod:`pomocat.config.resolver` every time a phase is scheduled, so a bad
    value degrades to its default with a warning instead of failing the load.
    """

    model_config = ConfigDict(extra="forbid")

    work_duration_seconds: Any = Field(default=1500, description="Length of a work session")
    break_duration_seconds: Any = Field(default=300, description="Length of a short break")
    long_break_duration_seconds: Any = Field(default=1200, description="Length of a long break")
    delay_break_seconds: Any = Field(default=60, description="Default delay for 'delay break'")
    cycles_before_long_break: Any = Field(
        default=4, description="Every Nth completed work session earns a long break"
    )
    auto_break: bool = Field(
        default=True,
        description="Enter a break when the work timer expires (False restarts work instead)",
    )

    @field_validator("auto_break", mode="before")
    @classmethod
    def _lenient_flag(cls, value: Any, info: ValidationInfo) -> bool:
        return _flag_or_default(cls, value, info)


class DisplayConfig(BaseModel):
    """Break notification content and surface selection."""

    model_config = ConfigDict(extra="forbid")

    cat_image_path: str | None = Field(
        default=None, description="Image shown during breaks; text mode when unset"
    )
    use_dedicated_surface: bool = Field(
        default=False, description="Show breaks in the dedicated window only"
    )
    get_focus_on_break: bool = Field(
        default=False, description="Ask the surface to grab focus when a break starts"
    )
    ascii_art: str = Field(default=DEFAULT_ASCII_ART, description="Text shown in text mode")
    char_width: int = Field(default=8, gt=0, description="Character cell width in px")
    char_height: int = Field(default=16, gt=0, description="Character cell height in px")
    viewport_width: int = Field(default=1920, gt=0, description="Overlay viewing area width in px")
    viewport_height: int = Field(default=1080, gt=0, description="Overlay viewing area height in px")
    terminal_fallback: bool = Field(
        default=True, description="Fall back to a terminal overlay when the GUI cannot show"
    )

    @field_validator("ascii_art")
    @classmethod
    def _trim_ascii_art(cls, value: str) -> str:
        return trim_blank_lines(value)

    @field_validator("use_dedicated_surface", "get_focus_on_break", "terminal_fallback", mode="before")
    @classmethod
    def _lenient_flag(cls, value: Any, info: ValidationInfo) -> bool:
        return _flag_or_default(cls, value, info)

    @field_validator("char_width", "char_height", "viewport_width", "viewport_height", mode="before")
    @classmethod
    def _lenient_size(cls, value: Any, info: ValidationInfo) -> int:
        return _positive_int_or_default(cls, value, info)


class SystemConfig(BaseModel):
    """Non-timer runtime settings."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")
    event_bus_queue_size: int = Field(default=1000, description="Max queued events")
    webui_port: int = Field(default=8080, description="NiceGUI listen port")

    @field_validator("event_bus_queue_size", "webui_port", mode="before")
    @classmethod
    def _lenient_count(cls, value: Any, info: ValidationInfo) -> int:
        return _positive_int_or_default(cls, value, info)


class PomocatConfig(BaseModel):
    """Top-level configuration loaded from ``pomocat_config.json``."""

    model_config = ConfigDict(extra="forbid")

    timer: TimerConfig = Field(default_factory=TimerConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)
