from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CONFIG_FILENAME = "modgraph.toml"

DEFAULT_EXCLUDE_PATTERNS = ("node_modules", "dist", "coverage", "build")
DEFAULT_PACKAGE_MARKERS = ("package.json", "tsconfig.json")

ColorScheme = Literal["default", "complexity", "dependencies"]
NodeSizeMode = Literal["fixed", "proportional"]


class AggregationLevel(str, Enum):
    """Policies for grouping files into modules."""

    DIRECTORY = "directory"
    TOP_LEVEL = "top-level"
    PACKAGE = "package"
    CUSTOM = "custom"


class ConfigError(Exception):
    """Raised when configuration is missing, malformed or unsupported."""


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class GroupingRule(_StrictModel):
    """A named module made of every file matching one of its globs."""

    name: str = Field(description="Module name (directory under the root path)")
    globs: list[str] = Field(
        description="Glob patterns matched against root-relative file paths"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v or v in {".", ".."}:
            msg = f"Grouping rule name must be a single path segment, got {v!r}"
            raise ValueError(msg)
        return v


class AggregationConfig(_StrictModel):
    """How files are selected and grouped into modules."""

    level: AggregationLevel = Field(
        default=AggregationLevel.DIRECTORY,
        description="Grouping policy",
    )
    include_tests: bool = Field(
        default=False,
        description="Keep file nodes labelled as tests",
    )
    exclude_patterns: list[str] = Field(
        default_factory=list,
        description="Substrings; files whose path contains any are dropped",
    )
    package_markers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PACKAGE_MARKERS),
        description="File names marking a package boundary (package level)",
    )
    custom_rules: list[GroupingRule] = Field(
        default_factory=list,
        description="Grouping rules for the custom level (first match wins)",
    )

    @model_validator(mode="after")
    def validate_custom_rules(self) -> AggregationConfig:
        if self.level is AggregationLevel.CUSTOM and not self.custom_rules:
            msg = "The custom aggregation level requires at least one custom_rules entry"
            raise ValueError(msg)
        return self


class GraphViewConfig(_StrictModel):
    """Presentation hints for the flattened graph view."""

    include_metrics: bool = Field(
        default=True,
        description="Attach module metrics to each view node",
    )
    color_scheme: ColorScheme = Field(
        default="default",
        description="Node colouring policy",
    )
    node_size: NodeSizeMode = Field(
        default="fixed",
        description="Node sizing policy",
    )
    show_labels: bool = Field(
        default=True,
        description="Use module names as node labels",
    )


def _default_aggregation() -> AggregationConfig:
    return AggregationConfig(
        include_tests=True,
        exclude_patterns=list(DEFAULT_EXCLUDE_PATTERNS),
    )


class ModGraphConfig(_StrictModel):
    """Configuration for building module projections."""

    aggregation: AggregationConfig = Field(
        default_factory=_default_aggregation,
        description="File selection and grouping",
    )
    view: GraphViewConfig = Field(
        default_factory=GraphViewConfig,
        description="Graph view presentation",
    )


def load_config(root: Path) -> ModGraphConfig:
    """Load configuration from modgraph.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ModGraphConfig()

    try:
        with config_path.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ModGraphConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_EXCLUDE_PATTERNS",
    "DEFAULT_PACKAGE_MARKERS",
    "AggregationConfig",
    "AggregationLevel",
    "ConfigError",
    "GraphViewConfig",
    "GroupingRule",
    "ModGraphConfig",
    "load_config",
]
