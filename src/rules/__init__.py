"""Configuration and grouping rules for modgraph-core."""

from rules.config import (
    AggregationConfig,
    AggregationLevel,
    ConfigError,
    GraphViewConfig,
    GroupingRule,
    ModGraphConfig,
    load_config,
)
from rules.grouping import is_excluded, match_grouping_rule

__all__ = [
    "AggregationConfig",
    "AggregationLevel",
    "ConfigError",
    "GraphViewConfig",
    "GroupingRule",
    "ModGraphConfig",
    "is_excluded",
    "load_config",
    "match_grouping_rule",
]
