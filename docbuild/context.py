"""Shared state for a single documentation run."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import FrozenSet, Iterator, Optional, Set, Tuple

from .config import DocBuildConfig
from .layout import LayoutProvider
from .utils import normalise_identifier


class ContextClosedError(RuntimeError):
    """Raised when a build context is used after its run has finished."""


class BuildContext:
    """Run-wide bookkeeping handed by reference to every builder.

    The containing-packages-seen set is the only mutable state. It is guarded by a
    lock so independent pages may be built on worker threads.
    """

    def __init__(
        self,
        config: DocBuildConfig,
        layout: LayoutProvider,
        containing_packages_seen: Optional[Set[str]] = None,
    ) -> None:
        self._config = config
        self._layout = layout
        self._packages_seen: Set[str] = containing_packages_seen if containing_packages_seen is not None else set()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def config(self) -> DocBuildConfig:
        return self._config

    @property
    def layout(self) -> LayoutProvider:
        return self._layout

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def packages_seen(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._packages_seen)

    def steps_for(self, kind: str) -> Tuple[str, ...]:
        """Return the layout steps for ``kind``."""
        self.ensure_open()
        return tuple(normalise_identifier(step) for step in self._layout.steps_for(kind))

    def has_seen_package(self, package: str) -> bool:
        with self._lock:
            return package in self._packages_seen

    def mark_package_seen(self, package: str) -> bool:
        """Insert ``package``; return True only for the first caller."""
        self.ensure_open()
        with self._lock:
            if package in self._packages_seen:
                return False
            self._packages_seen.add(package)
            return True

    @contextmanager
    def documenting_package(self, package: str) -> Iterator[bool]:
        """Claim ``package`` for the duration of the block.

        Yields True when the caller is the first to document the package. If the
        block raises, the claim is withdrawn so the package is not recorded as seen.
        """
        first = self.mark_package_seen(package)
        try:
            yield first
        except BaseException:
            if first:
                with self._lock:
                    self._packages_seen.discard(package)
            raise

    def ensure_open(self) -> None:
        if self._closed:
            raise ContextClosedError("Build context already closed; create a new context for each run")

    def close(self) -> None:
        self._closed = True


__all__ = ["BuildContext", "ContextClosedError"]
