"""Core data models describing the entities a documentation run covers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterable, List, Optional


class EntityKind(str, Enum):
    """Kinds of documented language constructs."""

    MODULE = "module"
    PACKAGE = "package"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    EXCEPTION = "exception"
    ERROR = "error"
    ANNOTATION_TYPE = "annotation_type"
    METHOD = "method"
    FIELD = "field"
    CONSTRUCTOR = "constructor"
    PROPERTY = "property"
    ENUM_CONSTANT = "enum_constant"
    ANNOTATION_ELEMENT = "annotation_element"


TYPE_KINDS: FrozenSet[EntityKind] = frozenset(
    {
        EntityKind.CLASS,
        EntityKind.INTERFACE,
        EntityKind.ENUM,
        EntityKind.EXCEPTION,
        EntityKind.ERROR,
        EntityKind.ANNOTATION_TYPE,
    }
)


@dataclass(eq=False)
class Entity:
    """A documented construct together with the members it owns."""

    name: str
    kind: EntityKind
    package: Optional[str] = None
    members: List["Entity"] = field(default_factory=list)
    modifiers: FrozenSet[str] = frozenset()
    deprecated: bool = False
    default_value: Optional[Any] = None
    constant_value: Optional[Any] = None
    serializable: bool = False
    serial_version_uid: Optional[int] = None

    @property
    def qualified_name(self) -> str:
        if self.kind in (EntityKind.MODULE, EntityKind.PACKAGE) or not self.package:
            return self.name
        return f"{self.package}.{self.name}"

    @property
    def containing_package(self) -> Optional[str]:
        if self.kind is EntityKind.PACKAGE:
            return self.name
        return self.package

    @property
    def is_type(self) -> bool:
        return self.kind in TYPE_KINDS

    @property
    def is_annotation_type(self) -> bool:
        return self.kind is EntityKind.ANNOTATION_TYPE

    def members_of(self, *kinds: EntityKind) -> List["Entity"]:
        """Return direct members of the given kinds, preserving declaration order."""
        wanted = set(kinds)
        return [member for member in self.members if member.kind in wanted]

    def __repr__(self) -> str:
        return f"Entity({self.kind.value}:{self.qualified_name})"


@dataclass
class Corpus:
    """Ordered set of modules and packages documented by a single run."""

    modules: List[Entity] = field(default_factory=list)
    packages: List[Entity] = field(default_factory=list)

    def types(self) -> List[Entity]:
        """Return every type in traversal order (package order, then declaration order)."""
        return [member for package in self.packages for member in package.members if member.is_type]

    def find(self, qualified_name: str) -> Optional[Entity]:
        for entity in _walk(list(self.modules) + list(self.packages)):
            if entity.qualified_name == qualified_name:
                return entity
        return None


def _walk(entities: Iterable[Entity]) -> Iterable[Entity]:
    for entity in entities:
        yield entity
        yield from _walk(entity.members)


__all__ = ["Corpus", "Entity", "EntityKind", "TYPE_KINDS"]
