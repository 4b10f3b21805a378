"""Run-wide serialized form page."""

from __future__ import annotations

from typing import Any, ClassVar, FrozenSet, List, Optional, Sequence

from ..models import Entity, EntityKind
from .base import BuilderKind, PageBuilder

SERIALIZATION_METHODS: FrozenSet[str] = frozenset(
    {"readObject", "readObjectNoData", "writeObject", "readResolve", "writeReplace"}
)
_NON_SERIAL_MODIFIERS: FrozenSet[str] = frozenset({"static", "transient"})


class SerializedFormBuilder(PageBuilder):
    """Lists the serialized form of every serializable class, grouped by package."""

    kind = BuilderKind.SERIALIZED_FORM
    leaf_steps: ClassVar[FrozenSet[str]] = frozenset(
        {
            "header",
            "serialized_form_summaries",
            "serial_uid_info",
            "serializable_methods",
            "serializable_fields",
            "footer",
        }
    )

    def __init__(self, *args: Any, packages: Sequence[Entity] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.packages = list(packages)

    def serializable_classes(self, package: Entity) -> List[Entity]:
        return [
            member
            for member in self.included(package.members)
            if member.is_type and member.serializable and not member.is_annotation_type
        ]

    @staticmethod
    def serializable_fields(owner: Entity) -> List[Entity]:
        return [
            field
            for field in owner.members_of(EntityKind.FIELD)
            if not (field.modifiers & _NON_SERIAL_MODIFIERS)
        ]

    @staticmethod
    def serialization_methods(owner: Entity) -> List[Entity]:
        return [method for method in owner.members_of(EntityKind.METHOD) if method.name in SERIALIZATION_METHODS]

    def perform(self, step: str, subject: Optional[Entity]) -> None:
        if step == "serialized_form_summaries":
            self._build_summaries()
            return
        if step in ("serial_uid_info", "serializable_methods", "serializable_fields"):
            if subject is not None:
                self._build_class_part(step, subject)
            return
        super().perform(step, subject)

    def _build_summaries(self) -> None:
        for package in self.included(self.packages):
            classes = self.serializable_classes(package)
            if not classes:
                continue
            self.call_writer("serialized_form_summaries", "add_package_header", package)
            for owner in classes:
                self.call_writer("serialized_form_summaries", "add_class_header", owner)
                self.run_steps(owner, "class_serialized_form")

    def _build_class_part(self, step: str, owner: Entity) -> None:
        if step == "serial_uid_info":
            if owner.serial_version_uid is not None:
                self.call_writer(step, "add_serial_uid_info", owner, owner.serial_version_uid)
            return
        members = self.serialization_methods(owner) if step == "serializable_methods" else self.serializable_fields(owner)
        if members:
            self.call_writer(step, f"add_{step}", owner, members)


__all__ = ["SERIALIZATION_METHODS", "SerializedFormBuilder"]
