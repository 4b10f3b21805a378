"""Builder family: one builder per documentation section kind."""

from .base import (
    Builder,
    BuilderKind,
    BuilderState,
    BuilderStateError,
    MissingWriterError,
    NoOpBuilder,
    PageBuildError,
    PageBuilder,
    UnavailableBuilder,
    UnknownStepError,
)
from .factory import BuilderFactory, resolve_layout
from .member_summary import AnnotationTypeMemberSummaryBuilder, MemberSummaryBuilder
from .members import (
    AnnotationTypeFieldBuilder,
    AnnotationTypeOptionalMemberBuilder,
    AnnotationTypeRequiredMemberBuilder,
    ConstructorBuilder,
    EnumConstantBuilder,
    FieldBuilder,
    MemberDetailsBuilder,
    MethodBuilder,
    PropertyBuilder,
)
from .serialized_form import SerializedFormBuilder
from .summaries import ConstantsSummaryBuilder, ModuleSummaryBuilder, PackageSummaryBuilder
from .types import AnnotationTypeBuilder, ClassBuilder

__all__ = [
    "AnnotationTypeBuilder",
    "AnnotationTypeFieldBuilder",
    "AnnotationTypeMemberSummaryBuilder",
    "AnnotationTypeOptionalMemberBuilder",
    "AnnotationTypeRequiredMemberBuilder",
    "Builder",
    "BuilderFactory",
    "BuilderKind",
    "BuilderState",
    "BuilderStateError",
    "ClassBuilder",
    "ConstantsSummaryBuilder",
    "ConstructorBuilder",
    "EnumConstantBuilder",
    "FieldBuilder",
    "MemberDetailsBuilder",
    "MemberSummaryBuilder",
    "MethodBuilder",
    "MissingWriterError",
    "ModuleSummaryBuilder",
    "NoOpBuilder",
    "PackageSummaryBuilder",
    "PageBuildError",
    "PageBuilder",
    "PropertyBuilder",
    "SerializedFormBuilder",
    "UnavailableBuilder",
    "UnknownStepError",
    "resolve_layout",
]
