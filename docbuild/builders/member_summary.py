"""Member summary tables for ordinary types and for annotation types."""

from __future__ import annotations

from typing import Callable, ClassVar, Dict, FrozenSet, List, Optional

from ..models import TYPE_KINDS, Entity, EntityKind
from .base import Builder, BuilderKind

MemberSelector = Callable[[Entity], List[Entity]]


def _of_kind(*kinds: EntityKind) -> MemberSelector:
    def select(owner: Entity) -> List[Entity]:
        return owner.members_of(*kinds)

    return select


def _annotation_elements(*, with_default: bool) -> MemberSelector:
    def select(owner: Entity) -> List[Entity]:
        return [
            member
            for member in owner.members_of(EntityKind.ANNOTATION_ELEMENT)
            if (member.default_value is not None) == with_default
        ]

    return select


class _SummaryBuilder(Builder):
    """Emits ``add_<step>(owner, members)`` for each non-empty category, sorted by name."""

    selectors: ClassVar[Dict[str, MemberSelector]] = {}

    def perform(self, step: str, subject: Optional[Entity]) -> None:
        if subject is None:
            return
        members = sorted(self.included(self.selectors[step](subject)), key=lambda member: member.name)
        if not members:
            return
        self.call_writer(step, f"add_{step}", subject, members)


class MemberSummaryBuilder(_SummaryBuilder):
    kind = BuilderKind.MEMBER_SUMMARY
    selectors: ClassVar[Dict[str, MemberSelector]] = {
        "properties_summary": _of_kind(EntityKind.PROPERTY),
        "nested_classes_summary": _of_kind(*TYPE_KINDS),
        "enum_constants_summary": _of_kind(EntityKind.ENUM_CONSTANT),
        "fields_summary": _of_kind(EntityKind.FIELD),
        "constructors_summary": _of_kind(EntityKind.CONSTRUCTOR),
        "methods_summary": _of_kind(EntityKind.METHOD),
    }
    leaf_steps: ClassVar[FrozenSet[str]] = frozenset(selectors)


class AnnotationTypeMemberSummaryBuilder(_SummaryBuilder):
    """Annotation types have elements instead of methods and never constructors."""

    kind = BuilderKind.ANNOTATION_TYPE_MEMBER_SUMMARY
    selectors: ClassVar[Dict[str, MemberSelector]] = {
        "annotation_type_fields_summary": _of_kind(EntityKind.FIELD),
        "annotation_type_required_member_summary": _annotation_elements(with_default=False),
        "annotation_type_optional_member_summary": _annotation_elements(with_default=True),
    }
    leaf_steps: ClassVar[FrozenSet[str]] = frozenset(selectors)


__all__ = ["AnnotationTypeMemberSummaryBuilder", "MemberSummaryBuilder"]
