"""The single entry point drivers use to obtain wired builders."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence, Type

from ..config import DocBuildConfig
from ..context import BuildContext
from ..layout import Layout, LayoutProvider, default_layout, layout_from_mapping, load_layout
from ..logging import get_logger
from ..models import Entity
from ..writers import WriterProvider, is_unsupported
from .base import Builder, BuilderKind, MissingWriterError, NoOpBuilder, PageBuilder, UnavailableBuilder
from .member_summary import AnnotationTypeMemberSummaryBuilder, MemberSummaryBuilder
from .members import (
    AnnotationTypeFieldBuilder,
    AnnotationTypeOptionalMemberBuilder,
    AnnotationTypeRequiredMemberBuilder,
    ConstructorBuilder,
    EnumConstantBuilder,
    FieldBuilder,
    MethodBuilder,
    PropertyBuilder,
)
from .serialized_form import SerializedFormBuilder
from .summaries import ConstantsSummaryBuilder, ModuleSummaryBuilder, PackageSummaryBuilder
from .types import AnnotationTypeBuilder, ClassBuilder


def resolve_layout(config: DocBuildConfig, base: Optional[Layout] = None) -> Layout:
    """Combine the default layout with the configured layout file and inline entries."""
    layout = base or default_layout()
    if config.layout_file is not None:
        layout = load_layout(config.layout_file, base=layout)
    if config.layout:
        layout = layout_from_mapping(config.layout, base=layout)
    return layout


class BuilderFactory:
    """Requests writers from the provider and binds them to builders sharing one context.

    Writers are never constructed here. A disabled kind or an ``UNSUPPORTED``
    writer yields an inert builder so one missing capability skips a page instead
    of aborting the run.
    """

    def __init__(self, context: BuildContext, writers: WriterProvider) -> None:
        self.context = context
        self.writers = writers
        self.logger = get_logger("factory")
        self._nested: Dict[BuilderKind, Callable[[Any, Optional[Entity]], Builder]] = {
            BuilderKind.METHOD: self.method_builder,
            BuilderKind.FIELD: self.field_builder,
            BuilderKind.CONSTRUCTOR: self.constructor_builder,
            BuilderKind.PROPERTY: self.property_builder,
            BuilderKind.ENUM_CONSTANTS: self.enum_constants_builder,
            BuilderKind.ANNOTATION_TYPE_FIELDS: self.annotation_type_fields_builder,
            BuilderKind.ANNOTATION_TYPE_REQUIRED_MEMBER: self.annotation_type_required_member_builder,
            BuilderKind.ANNOTATION_TYPE_OPTIONAL_MEMBER: self.annotation_type_optional_member_builder,
            BuilderKind.ANNOTATION_TYPE_MEMBER_SUMMARY: self.annotation_type_member_summary_builder,
        }

    @classmethod
    def for_run(
        cls,
        config: DocBuildConfig,
        writers: WriterProvider,
        layout: Optional[LayoutProvider] = None,
    ) -> "BuilderFactory":
        """Create a factory around a fresh context for one documentation run."""
        context = BuildContext(config, layout if layout is not None else resolve_layout(config), set())
        return cls(context, writers)

    # ------------------------------------------------------------------
    # Run-wide pages

    def constants_summary_builder(self, packages: Sequence[Entity] = ()) -> Builder:
        return self._wire(ConstantsSummaryBuilder, None, packages=packages)

    def serialized_form_builder(self, packages: Sequence[Entity] = ()) -> Builder:
        return self._wire(SerializedFormBuilder, None, packages=packages)

    # ------------------------------------------------------------------
    # Entity pages

    def package_summary_builder(
        self, package: Entity, previous: Optional[Entity] = None, following: Optional[Entity] = None
    ) -> Builder:
        return self._wire(PackageSummaryBuilder, package, previous=previous, following=following)

    def module_summary_builder(
        self, module: Entity, previous: Optional[Entity] = None, following: Optional[Entity] = None
    ) -> Builder:
        return self._wire(ModuleSummaryBuilder, module, previous=previous, following=following)

    def class_builder(
        self, type_entity: Entity, previous: Optional[Entity] = None, following: Optional[Entity] = None
    ) -> Builder:
        return self._wire(ClassBuilder, type_entity, previous=previous, following=following)

    def annotation_type_builder(
        self, annotation_type: Entity, previous: Optional[Entity] = None, following: Optional[Entity] = None
    ) -> Builder:
        return self._wire(AnnotationTypeBuilder, annotation_type, previous=previous, following=following)

    def type_builder(
        self, type_entity: Entity, previous: Optional[Entity] = None, following: Optional[Entity] = None
    ) -> Builder:
        """Select the class or annotation type page builder from the entity kind."""
        if type_entity.is_annotation_type:
            return self.annotation_type_builder(type_entity, previous, following)
        return self.class_builder(type_entity, previous, following)

    # ------------------------------------------------------------------
    # Sections nested inside type pages

    def method_builder(self, class_writer: Any, type_entity: Optional[Entity]) -> Builder:
        return self._wire(MethodBuilder, type_entity, parent=class_writer)

    def field_builder(self, class_writer: Any, type_entity: Optional[Entity]) -> Builder:
        return self._wire(FieldBuilder, type_entity, parent=class_writer)

    def constructor_builder(self, class_writer: Any, type_entity: Optional[Entity]) -> Builder:
        return self._wire(ConstructorBuilder, type_entity, parent=class_writer)

    def property_builder(self, class_writer: Any, type_entity: Optional[Entity]) -> Builder:
        return self._wire(PropertyBuilder, type_entity, parent=class_writer)

    def enum_constants_builder(self, class_writer: Any, type_entity: Optional[Entity]) -> Builder:
        return self._wire(EnumConstantBuilder, type_entity, parent=class_writer)

    def annotation_type_fields_builder(self, annotation_writer: Any, annotation_type: Optional[Entity]) -> Builder:
        return self._wire(AnnotationTypeFieldBuilder, annotation_type, parent=annotation_writer)

    def annotation_type_required_member_builder(
        self, annotation_writer: Any, annotation_type: Optional[Entity]
    ) -> Builder:
        return self._wire(AnnotationTypeRequiredMemberBuilder, annotation_type, parent=annotation_writer)

    def annotation_type_optional_member_builder(
        self, annotation_writer: Any, annotation_type: Optional[Entity]
    ) -> Builder:
        return self._wire(AnnotationTypeOptionalMemberBuilder, annotation_type, parent=annotation_writer)

    def member_summary_builder(self, class_writer: Any, type_entity: Optional[Entity]) -> Builder:
        """Member summary bound to an ordinary type writer."""
        return self._wire(MemberSummaryBuilder, type_entity, parent=class_writer)

    def annotation_type_member_summary_builder(
        self, annotation_writer: Any, annotation_type: Optional[Entity]
    ) -> Builder:
        """Member summary bound to an annotation type writer."""
        return self._wire(AnnotationTypeMemberSummaryBuilder, annotation_type, parent=annotation_writer)

    def nested_builder(self, kind: BuilderKind, parent: Builder) -> Builder:
        """Construct the section builder a layout step of ``parent`` names."""
        if kind is BuilderKind.MEMBER_SUMMARY:
            if parent.entity is not None and parent.entity.is_annotation_type:
                return self.annotation_type_member_summary_builder(parent.writer, parent.entity)
            return self.member_summary_builder(parent.writer, parent.entity)
        try:
            construct = self._nested[kind]
        except KeyError:
            raise ValueError(f"{kind.value} cannot be nested inside {parent.kind.value}") from None
        return construct(parent.writer, parent.entity)

    # ------------------------------------------------------------------
    # Internal helpers

    def _wire(
        self,
        builder_cls: Type[Builder],
        entity: Optional[Entity],
        *,
        previous: Optional[Entity] = None,
        following: Optional[Entity] = None,
        parent: Any = None,
        **extra: Any,
    ) -> Builder:
        self.context.ensure_open()
        kind = builder_cls.kind
        label = entity.qualified_name if entity is not None else "<run>"
        # Sections follow their page; only page kinds are gated by output.enabled.
        if issubclass(builder_cls, PageBuilder) and not self.context.config.is_kind_enabled(kind):
            self.logger.debug("Output for %s disabled; skipping %s", kind.value, label)
            return NoOpBuilder(self.context, entity, kind, self)

        try:
            writer = self.writers.writer_for(kind, entity, previous=previous, following=following, parent=parent)
        except Exception as exc:
            raise MissingWriterError(
                f"Writer provider failed for {kind.value}: {exc}", kind=kind, entity=entity
            ) from exc
        if is_unsupported(writer):
            if self.context.config.strict_writers:
                self.logger.debug("No %s writer for %s in strict mode", kind.value, label)
                return UnavailableBuilder(self.context, entity, kind, self)
            self.logger.debug("No %s writer for %s; page skipped", kind.value, label)
            return NoOpBuilder(self.context, entity, kind, self)
        return builder_cls(self.context, entity, writer, self, **extra)


__all__ = ["BuilderFactory", "resolve_layout"]
