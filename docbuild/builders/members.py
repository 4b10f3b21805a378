"""Member detail builders: one section per member category of a type page."""

from __future__ import annotations

from typing import ClassVar, FrozenSet, List, Optional, Tuple

from ..models import Entity, EntityKind
from .base import Builder, BuilderKind

_COMMON_STEPS: FrozenSet[str] = frozenset({"signature", "deprecation_info", "tag_info"})


class MemberDetailsBuilder(Builder):
    """Runs the per-member layout for every included member of ``member_kinds``.

    Nothing reaches the writer when the owning type has no such members, so empty
    detail sections never get a header.
    """

    member_kinds: ClassVar[Tuple[EntityKind, ...]] = ()

    def members(self) -> List[Entity]:
        if self.entity is None:
            return []
        return self.included(self.entity.members_of(*self.member_kinds))

    def build(self) -> None:
        members = self.members()
        if not members:
            return
        self.call_writer("details_header", "add_details_header", self.entity)
        for member in members:
            self.call_writer("begin_member", "begin_member", member)
            self.run_steps(member)
            self.call_writer("end_member", "end_member", member)
        self.call_writer("details_footer", "add_details_footer", self.entity)


class MethodBuilder(MemberDetailsBuilder):
    kind = BuilderKind.METHOD
    member_kinds = (EntityKind.METHOD,)
    leaf_steps = _COMMON_STEPS | {"method_comments"}


class FieldBuilder(MemberDetailsBuilder):
    kind = BuilderKind.FIELD
    member_kinds = (EntityKind.FIELD,)
    leaf_steps = _COMMON_STEPS | {"field_comments"}


class ConstructorBuilder(MemberDetailsBuilder):
    kind = BuilderKind.CONSTRUCTOR
    member_kinds = (EntityKind.CONSTRUCTOR,)
    leaf_steps = _COMMON_STEPS | {"constructor_comments"}


class PropertyBuilder(MemberDetailsBuilder):
    kind = BuilderKind.PROPERTY
    member_kinds = (EntityKind.PROPERTY,)
    leaf_steps = _COMMON_STEPS | {"property_comments"}


class EnumConstantBuilder(MemberDetailsBuilder):
    kind = BuilderKind.ENUM_CONSTANTS
    member_kinds = (EntityKind.ENUM_CONSTANT,)
    leaf_steps = _COMMON_STEPS | {"enum_constant_comments"}


class AnnotationTypeFieldBuilder(MemberDetailsBuilder):
    kind = BuilderKind.ANNOTATION_TYPE_FIELDS
    member_kinds = (EntityKind.FIELD,)
    leaf_steps = _COMMON_STEPS | {"member_comments"}


class AnnotationTypeRequiredMemberBuilder(MemberDetailsBuilder):
    """Annotation elements without a default value."""

    kind = BuilderKind.ANNOTATION_TYPE_REQUIRED_MEMBER
    member_kinds = (EntityKind.ANNOTATION_ELEMENT,)
    leaf_steps = _COMMON_STEPS | {"member_comments"}

    def members(self) -> List[Entity]:
        return [member for member in super().members() if member.default_value is None]


class AnnotationTypeOptionalMemberBuilder(MemberDetailsBuilder):
    """Annotation elements that declare a default value."""

    kind = BuilderKind.ANNOTATION_TYPE_OPTIONAL_MEMBER
    member_kinds = (EntityKind.ANNOTATION_ELEMENT,)
    leaf_steps = _COMMON_STEPS | {"member_comments", "default_value_info"}

    def members(self) -> List[Entity]:
        return [member for member in super().members() if member.default_value is not None]

    def perform(self, step: str, subject: Optional[Entity]) -> None:
        if step == "default_value_info":
            if subject is not None and subject.default_value is not None:
                self.call_writer(step, "add_default_value_info", subject, subject.default_value)
            return
        super().perform(step, subject)


__all__ = [
    "AnnotationTypeFieldBuilder",
    "AnnotationTypeOptionalMemberBuilder",
    "AnnotationTypeRequiredMemberBuilder",
    "ConstructorBuilder",
    "EnumConstantBuilder",
    "FieldBuilder",
    "MemberDetailsBuilder",
    "MethodBuilder",
    "PropertyBuilder",
]
