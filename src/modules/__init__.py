"""Module aggregation and dependency calculation."""

from modules.aggregator import ModuleAggregator
from modules.calculator import DependencyStats, ModuleDependencyCalculator
from modules.models import Module, ModuleMetrics
from modules.resolver import PathResolver

__all__ = [
    "DependencyStats",
    "Module",
    "ModuleAggregator",
    "ModuleDependencyCalculator",
    "ModuleMetrics",
    "PathResolver",
]
