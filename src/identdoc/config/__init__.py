"""Config module exports."""

from identdoc.config.loader import load_config
from identdoc.config.models import (
    IdentDocConfig,
    LoaderConfig,
    LoggingConfig,
    LogOutputConfig,
    RenderConfig,
)

__all__ = [
    "load_config",
    "IdentDocConfig",
    "LoaderConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "RenderConfig",
]
