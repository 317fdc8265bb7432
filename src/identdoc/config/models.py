"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (IDENTDOC__SECTION__KEY)
3. Repo YAML (.identdoc/config.yaml)
4. Global YAML (~/.config/identdoc/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    IDENTDOC__<SECTION>__<KEY>=<VALUE>

Examples:
    IDENTDOC__LOGGING__LEVEL=DEBUG
    IDENTDOC__LOADER__INCLUDE_TESTS=true
    IDENTDOC__LOADER__GOROOT=/usr/local/go
    IDENTDOC__RENDER__TAB_INDENT=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        IDENTDOC__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every resolution and render step.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class LoaderConfig(BaseModel):
    """Go source loading configuration.

    Env vars:
        IDENTDOC__LOADER__INCLUDE_TESTS: Load *_test.go files
        IDENTDOC__LOADER__MAX_FILE_SIZE_MB: Skip files larger than this
        IDENTDOC__LOADER__GOROOT: Go installation used for standard library packages
    """

    include_tests: bool = Field(
        default=False,
        description="Load *_test.go files alongside package sources.",
    )
    exclude_dirs: list[str] = Field(
        default_factory=lambda: ["vendor", "testdata", "node_modules"],
        description="Directory names never descended into.",
    )
    max_file_size_mb: int = Field(
        default=10,
        description="Skip files larger than this (MB). Generated sources can be huge.",
    )
    goroot: str | None = Field(
        default=None,
        description="GOROOT used to find package docs for imports outside the program.",
    )

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_max_file_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"max_file_size_mb must be positive, got {v}")
        return v


class RenderConfig(BaseModel):
    """Declaration rendering configuration.

    Env vars:
        IDENTDOC__RENDER__TAB_INDENT: Indent with tabs (default true)
        IDENTDOC__RENDER__TAB_WIDTH: Spaces per tab when tab_indent is false
    """

    tab_indent: bool = Field(
        default=True,
        description="Keep leading tabs. When false, tabs expand to tab_width spaces.",
    )
    tab_width: int = Field(default=8)

    @field_validator("tab_width")
    @classmethod
    def validate_tab_width(cls, v: int) -> int:
        if not (1 <= v <= 16):
            raise ValueError(f"tab_width must be 1-16, got {v}")
        return v


class IdentDocConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
