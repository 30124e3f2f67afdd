"""Configuration: JSON loader and value resolvers."""

from pomocat.config.config_manager import load_config
from pomocat.config.resolver import resolve_delay, resolve_positive_integer

__all__ = [
	"load_config",
	"resolve_delay",
	"resolve_positive_integer",
]
