"""Config manager — load JSON → apply env overrides → validate → PomocatConfig."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pomocat.core.errors import ConfigurationError
from pomocat.core.models.config import PomocatConfig, parse_flag

_log = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "pomocat_config.json"

# Environment variable → config field mapping.
# Keys are env-var names; values are ``(section, field, type)`` tuples.
_ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "POMOCAT_LOG_LEVEL": ("system", "log_level", str),
    "POMOCAT_WEBUI_PORT": ("system", "webui_port", int),
    "POMOCAT_WORK_DURATION": ("timer", "work_duration_seconds", int),
    "POMOCAT_CAT_IMAGE": ("display", "cat_image_path", str),
    "POMOCAT_DEDICATED_SURFACE": ("display", "use_dedicated_surface", bool),
}


def _coerce(value: str, target_type: type) -> object:
    """Coerce a string env-var value to the expected Python type."""
    if target_type is bool:
        flag = parse_flag(value)
        if flag is None:
            raise ConfigurationError(f"Cannot interpret {value!r} as bool")
        return flag
    try:
        return target_type(value)
    except ValueError as exc:
        raise ConfigurationError(f"Cannot interpret {value!r} as {target_type.__name__}") from exc


def load_config(config_path: Path | str | None = None) -> PomocatConfig:
    """Load, override, and validate the pomocat configuration.

    Args:
        config_path: Path to ``pomocat_config.json``.  When *None*, falls back
            to the ``POMOCAT_CONFIG_FILE`` env-var and then the default file
            next to this module.

    Returns:
        A fully-validated :class:`PomocatConfig` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigurationError: If the file is not a JSON object.  Env overrides
            that cannot be coerced are logged and skipped.
    """
    path = _resolve_config_path(config_path)
    _log.info("Loading config from %s", path)

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")

    for env_key, (section, field, typ) in _ENV_OVERRIDES.items():
        env_val = os.environ.get(env_key)
        if env_val is None:
            continue
        try:
            value = _coerce(env_val, typ)
        except ConfigurationError as exc:
            _log.warning("Ignoring %s: %s", env_key, exc)
            continue
        raw.setdefault(section, {})[field] = value
        _log.debug("Env override: %s → %s.%s = %r", env_key, section, field, env_val)

    return PomocatConfig(**raw)


def _resolve_config_path(config_path: Path | str | None) -> Path:
    if config_path is not None:
        p = Path(config_path)
    else:
        env = os.environ.get("POMOCAT_CONFIG_FILE")
        p = Path(env) if env else _DEFAULT_CONFIG_PATH
    if not p.is_file():
        raise FileNotFoundError(
            f"Config file not found: {p}\n"
            "Create pomocat_config.json or set POMOCAT_CONFIG_FILE to a valid path."
        )
    return p
