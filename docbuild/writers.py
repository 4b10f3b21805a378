"""Writer capability contracts consumed by builders.

docbuild never renders markup itself. A :class:`WriterProvider` hands out one
writer per page or section, already bound to the entity it documents. Builders
translate each leaf layout step ``s`` into a call to ``writer.add_<s>(...)``, so a
writer advertises the steps it supports simply by implementing those methods.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence, runtime_checkable

from .models import Entity

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .builders.base import BuilderKind


class Unsupported:
    """Marker returned by providers that cannot produce a writer for a request."""

    _instance: Optional["Unsupported"] = None

    def __new__(cls) -> "Unsupported":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSUPPORTED"


UNSUPPORTED = Unsupported()


def is_unsupported(writer: object) -> bool:
    """Return True for UNSUPPORTED; providers returning None are treated the same."""
    return writer is UNSUPPORTED or writer is None


@runtime_checkable
class WriterProvider(Protocol):
    """Hands out entity-bound writers; never shared between concurrent pages."""

    def writer_for(
        self,
        kind: "BuilderKind",
        entity: Optional[Entity],
        *,
        previous: Optional[Entity] = None,
        following: Optional[Entity] = None,
        parent: Any = None,
    ) -> Any:
        """Return a writer bound to ``entity`` or :data:`UNSUPPORTED`."""


class PageWriter(Protocol):
    """Operations every top-level page writer provides besides its step methods."""

    def add_header(self, entity: Optional[Entity]) -> None: ...

    def add_footer(self, entity: Optional[Entity]) -> None: ...

    def print_document(self, entity: Optional[Entity]) -> None: ...


class TypeWriter(PageWriter, Protocol):
    """Class and annotation type page writers."""

    def copy_doc_files(self, package: str) -> None: ...


class MemberDetailsWriter(Protocol):
    """Writers for the per-member detail sections of a type page."""

    def add_details_header(self, owner: Entity) -> None: ...

    def begin_member(self, member: Entity) -> None: ...

    def end_member(self, member: Entity) -> None: ...

    def add_details_footer(self, owner: Entity) -> None: ...


class MemberSummaryWriter(Protocol):
    """Receives one ``add_<category>_summary(owner, members)`` call per non-empty table."""

    def add_methods_summary(self, owner: Entity, members: Sequence[Entity]) -> None: ...


__all__ = [
    "MemberDetailsWriter",
    "MemberSummaryWriter",
    "PageWriter",
    "TypeWriter",
    "UNSUPPORTED",
    "Unsupported",
    "WriterProvider",
    "is_unsupported",
]
