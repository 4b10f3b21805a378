"""Module, package and constant-value summary page builders."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Sequence, Set

from ..models import Entity, EntityKind
from .base import BuilderKind, PageBuilder


class ModuleSummaryBuilder(PageBuilder):
    kind = BuilderKind.MODULE_SUMMARY
    leaf_steps: ClassVar[FrozenSet[str]] = frozenset(
        {
            "header",
            "module_description",
            "module_tags",
            "modules_summary",
            "module_packages_summary",
            "module_services_summary",
            "footer",
        }
    )

    def perform(self, step: str, subject: Optional[Entity]) -> None:
        if step == "module_packages_summary":
            packages = self.included(subject.members_of(EntityKind.PACKAGE)) if subject is not None else []
            if packages:
                self.call_writer(step, "add_module_packages_summary", subject, packages)
            return
        super().perform(step, subject)


class PackageSummaryBuilder(PageBuilder):
    """Package page: one table per kind of type the package declares."""

    kind = BuilderKind.PACKAGE_SUMMARY
    type_summaries: ClassVar[Dict[str, EntityKind]] = {
        "interface_summary": EntityKind.INTERFACE,
        "class_summary": EntityKind.CLASS,
        "enum_summary": EntityKind.ENUM,
        "exception_summary": EntityKind.EXCEPTION,
        "error_summary": EntityKind.ERROR,
        "annotation_type_summary": EntityKind.ANNOTATION_TYPE,
    }
    leaf_steps: ClassVar[FrozenSet[str]] = frozenset(type_summaries) | {
        "header",
        "package_description",
        "package_tags",
        "footer",
    }

    def perform(self, step: str, subject: Optional[Entity]) -> None:
        kind = self.type_summaries.get(step)
        if kind is None:
            super().perform(step, subject)
            return
        if subject is None:
            return
        types = sorted(self.included(subject.members_of(kind)), key=lambda entity: entity.name)
        if types:
            self.call_writer(step, f"add_{step}", subject, types)

    def finish_page(self) -> None:
        self.print_with_package_resources(self.entity.name if self.entity is not None else None)


class ConstantsSummaryBuilder(PageBuilder):
    """Run-wide page listing every constant field, grouped by package and class."""

    kind = BuilderKind.CONSTANTS_SUMMARY
    leaf_steps: ClassVar[FrozenSet[str]] = frozenset(
        {
            "header",
            "contents",
            "constant_summaries",
            "class_constant_header",
            "constant_members",
            "footer",
        }
    )

    def __init__(self, *args: Any, packages: Sequence[Entity] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.packages = list(packages)
        self._printed_package_headers: Set[str] = set()

    def constant_fields(self, owner: Entity) -> List[Entity]:
        return [
            member
            for member in self.included(owner.members_of(EntityKind.FIELD))
            if member.constant_value is not None
        ]

    def classes_with_constants(self, package: Entity) -> List[Entity]:
        return [
            owner
            for owner in self.included(member for member in package.members if member.is_type)
            if self.constant_fields(owner)
        ]

    def packages_with_constants(self) -> List[Entity]:
        return [package for package in self.included(self.packages) if self.classes_with_constants(package)]

    def perform(self, step: str, subject: Optional[Entity]) -> None:
        if step == "contents":
            self.call_writer(step, "add_contents", self.packages_with_constants())
        elif step == "constant_summaries":
            self._build_constant_summaries()
        elif step == "constant_members":
            if subject is not None:
                self.call_writer(step, "add_constant_members", subject, self.constant_fields(subject))
        else:
            super().perform(step, subject)

    def _build_constant_summaries(self) -> None:
        for package in self.packages_with_constants():
            if package.name not in self._printed_package_headers:
                self.call_writer("constant_summaries", "add_package_header", package)
                self._printed_package_headers.add(package.name)
            for owner in self.classes_with_constants(package):
                self.run_steps(owner, "class_constant_summary")


__all__ = ["ConstantsSummaryBuilder", "ModuleSummaryBuilder", "PackageSummaryBuilder"]
