"""Class and annotation type page builders."""

from __future__ import annotations

from typing import ClassVar, FrozenSet, Mapping

from .base import BuilderKind, PageBuilder


class _TypePageBuilder(PageBuilder):
    """Shared ending for type pages: containing package resources, then print."""

    def finish_page(self) -> None:
        package = self.entity.containing_package if self.entity is not None else None
        if package is None or self.config.is_package_documented(package):
            # Documented packages copy their own doc files from the package summary page.
            self._print_document()
            return
        self.print_with_package_resources(package)


class ClassBuilder(_TypePageBuilder):
    """Builds the page for a class, interface, enum, exception or error."""

    kind = BuilderKind.CLASS
    leaf_steps: ClassVar[FrozenSet[str]] = frozenset(
        {
            "header",
            "class_tree",
            "type_param_info",
            "super_interfaces_info",
            "implemented_interfaces_info",
            "sub_class_info",
            "sub_interfaces_info",
            "interface_usage_info",
            "nested_class_info",
            "functional_interface_info",
            "deprecation_info",
            "class_signature",
            "class_description",
            "class_tag_info",
            "footer",
        }
    )
    nested_steps: ClassVar[Mapping[str, BuilderKind]] = {
        "member_summary": BuilderKind.MEMBER_SUMMARY,
        "property_details": BuilderKind.PROPERTY,
        "enum_constants_details": BuilderKind.ENUM_CONSTANTS,
        "field_details": BuilderKind.FIELD,
        "constructor_details": BuilderKind.CONSTRUCTOR,
        "method_details": BuilderKind.METHOD,
    }


class AnnotationTypeBuilder(_TypePageBuilder):
    """Builds the page for an annotation type and its elements."""

    kind = BuilderKind.ANNOTATION_TYPE
    leaf_steps: ClassVar[FrozenSet[str]] = frozenset(
        {
            "header",
            "deprecation_info",
            "annotation_type_signature",
            "annotation_type_description",
            "annotation_type_tag_info",
            "footer",
        }
    )
    nested_steps: ClassVar[Mapping[str, BuilderKind]] = {
        "member_summary": BuilderKind.ANNOTATION_TYPE_MEMBER_SUMMARY,
        "annotation_type_field_details": BuilderKind.ANNOTATION_TYPE_FIELDS,
        "annotation_type_required_member_details": BuilderKind.ANNOTATION_TYPE_REQUIRED_MEMBER,
        "annotation_type_optional_member_details": BuilderKind.ANNOTATION_TYPE_OPTIONAL_MEMBER,
    }


__all__ = ["AnnotationTypeBuilder", "ClassBuilder"]
