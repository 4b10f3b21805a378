"""Layout providers mapping page and section kinds to ordered step lists."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

import yaml

from .config import ConfigError
from .utils import normalise_identifier


class LayoutError(ConfigError):
    """Raised when a layout definition is malformed or lacks a requested kind."""


@runtime_checkable
class LayoutProvider(Protocol):
    """Source of the ordered step identifiers for each page or section kind."""

    def steps_for(self, kind: str) -> Sequence[str]:
        """Return the step identifiers for ``kind`` in execution order."""


DEFAULT_LAYOUT: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "module_summary": (
            "header",
            "module_description",
            "module_tags",
            "modules_summary",
            "module_packages_summary",
            "module_services_summary",
            "footer",
        ),
        "package_summary": (
            "header",
            "interface_summary",
            "class_summary",
            "enum_summary",
            "exception_summary",
            "error_summary",
            "annotation_type_summary",
            "package_description",
            "package_tags",
            "footer",
        ),
        "class": (
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
            "member_summary",
            "property_details",
            "enum_constants_details",
            "field_details",
            "constructor_details",
            "method_details",
            "footer",
        ),
        "annotation_type": (
            "header",
            "deprecation_info",
            "annotation_type_signature",
            "annotation_type_description",
            "annotation_type_tag_info",
            "member_summary",
            "annotation_type_field_details",
            "annotation_type_required_member_details",
            "annotation_type_optional_member_details",
            "footer",
        ),
        "member_summary": (
            "properties_summary",
            "nested_classes_summary",
            "enum_constants_summary",
            "fields_summary",
            "constructors_summary",
            "methods_summary",
        ),
        "annotation_type_member_summary": (
            "annotation_type_fields_summary",
            "annotation_type_required_member_summary",
            "annotation_type_optional_member_summary",
        ),
        "property_details": ("signature", "property_comments", "tag_info"),
        "enum_constants_details": ("signature", "deprecation_info", "enum_constant_comments", "tag_info"),
        "field_details": ("signature", "deprecation_info", "field_comments", "tag_info"),
        "constructor_details": ("signature", "deprecation_info", "constructor_comments", "tag_info"),
        "method_details": ("signature", "deprecation_info", "method_comments", "tag_info"),
        "annotation_type_field_details": ("signature", "deprecation_info", "member_comments", "tag_info"),
        "annotation_type_required_member_details": (
            "signature",
            "deprecation_info",
            "member_comments",
            "tag_info",
        ),
        "annotation_type_optional_member_details": (
            "signature",
            "deprecation_info",
            "member_comments",
            "tag_info",
            "default_value_info",
        ),
        "constants_summary": ("header", "contents", "constant_summaries", "footer"),
        "class_constant_summary": ("class_constant_header", "constant_members"),
        "serialized_form": ("header", "serialized_form_summaries", "footer"),
        "class_serialized_form": ("serial_uid_info", "serializable_methods", "serializable_fields"),
    }
)


class Layout:
    """Immutable layout: normalised page kind to a tuple of normalised step ids."""

    def __init__(self, entries: Mapping[str, Sequence[str]]) -> None:
        normalised: Dict[str, Tuple[str, ...]] = {}
        for kind, steps in entries.items():
            normalised[normalise_identifier(kind)] = tuple(normalise_identifier(step) for step in steps)
        self._entries: Mapping[str, Tuple[str, ...]] = MappingProxyType(normalised)

    def steps_for(self, kind: str) -> Tuple[str, ...]:
        key = normalise_identifier(kind)
        try:
            return self._entries[key]
        except KeyError:
            raise LayoutError(f"No layout entry defined for '{key}'") from None

    def kinds(self) -> Iterator[str]:
        return iter(self._entries)

    def overlay(self, entries: Mapping[str, Sequence[str]]) -> "Layout":
        """Return a new layout with ``entries`` replacing same-named kinds."""
        merged: Dict[str, Sequence[str]] = dict(self._entries)
        merged.update({normalise_identifier(kind): steps for kind, steps in entries.items()})
        return Layout(merged)

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, str) and normalise_identifier(kind) in self._entries

    def __repr__(self) -> str:
        return f"Layout(kinds={sorted(self._entries)})"


def default_layout() -> Layout:
    """Return the standard page structure."""
    return Layout(DEFAULT_LAYOUT)


def layout_from_mapping(data: Any, *, base: Optional[Layout] = None) -> Layout:
    """Validate a raw mapping of kind -> step list and overlay it on ``base``."""
    if not isinstance(data, dict):
        raise LayoutError("Layout must be a mapping of page kinds to step lists")
    entries: Dict[str, Tuple[str, ...]] = {}
    for kind, steps in data.items():
        if not isinstance(kind, str) or not kind.strip():
            raise LayoutError(f"Layout kind must be a non-empty string, got {kind!r}")
        if isinstance(steps, str) or not isinstance(steps, (list, tuple)):
            raise LayoutError(f"Layout entry '{kind}' must be a list of step names")
        for step in steps:
            if not isinstance(step, str) or not step.strip():
                raise LayoutError(f"Layout entry '{kind}' contains an invalid step {step!r}")
        entries[kind] = tuple(steps)
    return (base or default_layout()).overlay(entries)


def load_layout(path: Union[str, Path], *, base: Optional[Layout] = None) -> Layout:
    """Read a YAML layout file; a top-level ``layout`` key is optional."""
    layout_path = Path(path)
    try:
        text = layout_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LayoutError(f"Unable to read layout file {layout_path}: {exc}") from exc
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise LayoutError(f"Failed to parse {layout_path.name}: {exc}") from exc
    if isinstance(data, dict) and isinstance(data.get("layout"), dict):
        data = data["layout"]
    return layout_from_mapping(data, base=base)


__all__ = [
    "DEFAULT_LAYOUT",
    "Layout",
    "LayoutError",
    "LayoutProvider",
    "default_layout",
    "layout_from_mapping",
    "load_layout",
]
