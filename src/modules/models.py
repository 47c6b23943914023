"""Module entity models.

A module is a named group of source files sharing a derived path. Modules are
built by the aggregator with empty relations, filled in once by the dependency
calculator, and read-only afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import KeysView


@dataclass
class ModuleMetrics:
    """Size and coupling figures for one module."""

    file_count: int = 0
    total_lines: int = 0
    dependency_count: int = 0
    dependent_count: int = 0


@dataclass(eq=False)
class Module:
    """A logical grouping of source files.

    ``dependencies`` and ``dependents`` are insertion-ordered, read-only set
    views. Relations can only be added before :meth:`seal` is called.
    """

    id: str
    name: str
    path: str
    files: list[str] = field(default_factory=list)
    metrics: ModuleMetrics = field(default_factory=ModuleMetrics)
    _dependencies: dict[str, None] = field(default_factory=dict, repr=False)
    _dependents: dict[str, None] = field(default_factory=dict, repr=False)
    _sealed: bool = field(default=False, repr=False)

    @property
    def dependencies(self) -> KeysView[str]:
        """Ids of modules this module imports from."""
        return self._dependencies.keys()

    @property
    def dependents(self) -> KeysView[str]:
        """Ids of modules that import from this module."""
        return self._dependents.keys()

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _check_writable(self) -> None:
        if self._sealed:
            msg = f"Module {self.id!r} is sealed; its relations are read-only"
            raise RuntimeError(msg)

    def add_dependency(self, module_id: str) -> None:
        self._check_writable()
        if module_id == self.id:
            msg = f"Module {self.id!r} cannot depend on itself"
            raise ValueError(msg)
        self._dependencies[module_id] = None

    def add_dependent(self, module_id: str) -> None:
        self._check_writable()
        if module_id == self.id:
            msg = f"Module {self.id!r} cannot be its own dependent"
            raise ValueError(msg)
        self._dependents[module_id] = None

    def seal(self) -> None:
        """Freeze relations and sync the dependency counts into metrics."""
        self.metrics.dependency_count = len(self._dependencies)
        self.metrics.dependent_count = len(self._dependents)
        self._sealed = True

    def has_dependency(self, module_id: str) -> bool:
        return module_id in self._dependencies

    def has_dependent(self, module_id: str) -> bool:
        return module_id in self._dependents

    def is_root(self) -> bool:
        """True when no other module imports this one."""
        return not self._dependents

    def is_leaf(self) -> bool:
        """True when this module imports no other module."""
        return not self._dependencies


__all__ = ["Module", "ModuleMetrics"]
