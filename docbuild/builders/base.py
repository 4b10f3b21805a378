"""Builder contract and the layout-driven step dispatch shared by every builder."""

from __future__ import annotations

from abc import ABC
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, FrozenSet, Iterable, List, Mapping, Optional

from ..config import DocBuildConfig
from ..context import BuildContext, ContextClosedError
from ..layout import LayoutError
from ..logging import get_logger
from ..models import Entity

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .factory import BuilderFactory


class BuilderKind(str, Enum):
    """Tag selecting the concrete builder variant; values double as layout keys."""

    CONSTANTS_SUMMARY = "constants_summary"
    PACKAGE_SUMMARY = "package_summary"
    MODULE_SUMMARY = "module_summary"
    CLASS = "class"
    ANNOTATION_TYPE = "annotation_type"
    MEMBER_SUMMARY = "member_summary"
    ANNOTATION_TYPE_MEMBER_SUMMARY = "annotation_type_member_summary"
    METHOD = "method_details"
    FIELD = "field_details"
    CONSTRUCTOR = "constructor_details"
    PROPERTY = "property_details"
    ENUM_CONSTANTS = "enum_constants_details"
    ANNOTATION_TYPE_FIELDS = "annotation_type_field_details"
    ANNOTATION_TYPE_REQUIRED_MEMBER = "annotation_type_required_member_details"
    ANNOTATION_TYPE_OPTIONAL_MEMBER = "annotation_type_optional_member_details"
    SERIALIZED_FORM = "serialized_form"


class BuilderState(str, Enum):
    CONSTRUCTED = "constructed"
    RUNNING = "running"
    DONE = "done"


class PageBuildError(RuntimeError):
    """Raised when a single page cannot be built; the rest of the run continues."""

    def __init__(
        self,
        message: str,
        *,
        kind: Optional[BuilderKind] = None,
        entity: Optional[Entity] = None,
        step: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.entity = entity
        self.step = step
        self.page_kind: Optional[BuilderKind] = None
        self.page: Optional[Entity] = None

    def describe(self) -> str:
        parts = [str(self)]
        if self.page_kind is not None:
            page_name = self.page.qualified_name if self.page is not None else "<run>"
            parts.append(f"page={self.page_kind.value}:{page_name}")
        if self.step:
            parts.append(f"step={self.step}")
        return " ".join(parts)


class UnknownStepError(PageBuildError):
    """Layout references a step the builder does not know."""


class MissingWriterError(PageBuildError):
    """The bound writer lacks the operation a step needs, or no writer exists."""


class BuilderStateError(RuntimeError):
    """A builder was run more than once."""


class Builder(ABC):
    """Renders one section for one entity through a bound writer.

    Subclasses declare ``leaf_steps`` (handled by :meth:`perform`, by default a
    call to ``writer.add_<step>(subject)``) and ``nested_steps`` (step id to the
    builder kind constructed through the factory and run to completion).
    """

    kind: ClassVar[BuilderKind]
    leaf_steps: ClassVar[FrozenSet[str]] = frozenset()
    nested_steps: ClassVar[Mapping[str, BuilderKind]] = {}

    def __init__(
        self,
        context: BuildContext,
        entity: Optional[Entity],
        writer: Any,
        factory: "BuilderFactory",
    ) -> None:
        self.context = context
        self.entity = entity
        self.writer = writer
        self.factory = factory
        self._state = BuilderState.CONSTRUCTED
        self.logger = get_logger(f"builders.{self.kind.value}")

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def config(self) -> DocBuildConfig:
        return self.context.config

    def run(self) -> None:
        """Execute the builder exactly once."""
        if self._state is not BuilderState.CONSTRUCTED:
            raise BuilderStateError(
                f"{type(self).__name__} for {self._entity_label()} already {self._state.value}; builders run once"
            )
        self.context.ensure_open()
        self._state = BuilderState.RUNNING
        try:
            self.build()
        except PageBuildError as exc:
            exc.page_kind = self.kind
            exc.page = self.entity
            raise
        finally:
            self._state = BuilderState.DONE

    def build(self) -> None:
        self.run_steps(self.entity)

    def run_steps(self, subject: Optional[Entity], layout_key: Optional[str] = None) -> None:
        """Run every step listed for ``layout_key`` (default: this builder's kind) in order."""
        key = layout_key or self.kind.value
        try:
            steps = self.context.steps_for(key)
        except LayoutError as exc:
            raise PageBuildError(str(exc), kind=self.kind, entity=self.entity) from exc
        except ContextClosedError:
            raise
        except Exception as exc:
            raise PageBuildError(
                f"Layout provider failed for {key}: {exc!r}", kind=self.kind, entity=self.entity
            ) from exc
        for step in steps:
            self.run_step(step, subject)

    def run_step(self, step: str, subject: Optional[Entity]) -> None:
        nested = self.nested_steps.get(step)
        if nested is not None:
            self.logger.debug("%s: nested %s", self._entity_label(), nested.value)
            self.factory.nested_builder(nested, self).run()
            return
        if step not in self.leaf_steps:
            raise UnknownStepError(
                f"Unknown layout step '{step}' for {self.kind.value} of {self._entity_label()}",
                kind=self.kind,
                entity=self.entity,
                step=step,
            )
        self.logger.debug("%s: step %s", self._entity_label(), step)
        self.perform(step, subject)

    def perform(self, step: str, subject: Optional[Entity]) -> None:
        self.call_writer(step, f"add_{step}", subject)

    def call_writer(self, step: str, operation: str, *args: Any) -> None:
        """Invoke ``writer.<operation>(*args)``; writer failures fail the page."""
        method = getattr(self.writer, operation, None)
        if not callable(method):
            raise MissingWriterError(
                f"{type(self.writer).__name__} does not implement '{operation}'",
                kind=self.kind,
                entity=self.entity,
                step=step,
            )
        try:
            method(*args)
        except PageBuildError:
            raise
        except Exception as exc:
            raise PageBuildError(
                f"Writer operation '{operation}' failed: {exc}",
                kind=self.kind,
                entity=self.entity,
                step=step,
            ) from exc

    def included(self, entities: Iterable[Entity]) -> List[Entity]:
        return [entity for entity in entities if self.config.is_included(entity)]

    def _entity_label(self) -> str:
        return self.entity.qualified_name if self.entity is not None else "<run>"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._entity_label()}, state={self._state.value})"


class PageBuilder(Builder):
    """Top-level page: runs its layout, then prints the accumulated document."""

    def build(self) -> None:
        self.run_steps(self.entity)
        self.finish_page()

    def finish_page(self) -> None:
        self._print_document()

    def _print_document(self) -> None:
        self.call_writer("print_document", "print_document", self.entity)

    def print_with_package_resources(self, package: Optional[str]) -> None:
        """Copy ``package`` doc files once per run, then print.

        A failure while copying or printing withdraws the package claim.
        """
        if package is None:
            self._print_document()
            return
        with self.context.documenting_package(package) as first:
            if first:
                self.call_writer("copy_doc_files", "copy_doc_files", package)
            else:
                self.logger.debug("Doc files for %s already copied", package)
            self._print_document()


class NoOpBuilder(Builder):
    """Inert builder used when no writer is available for a page or section."""

    kind = BuilderKind.CLASS

    def __init__(
        self,
        context: BuildContext,
        entity: Optional[Entity],
        kind: BuilderKind,
        factory: "BuilderFactory",
    ) -> None:
        self.kind = kind  # type: ignore[misc]
        super().__init__(context, entity, None, factory)

    def run(self) -> None:
        if self._state is not BuilderState.CONSTRUCTED:
            raise BuilderStateError(f"NoOpBuilder for {self._entity_label()} already {self._state.value}")
        self._state = BuilderState.DONE

    def build(self) -> None:  # pragma: no cover - run() never dispatches
        return None


class UnavailableBuilder(NoOpBuilder):
    """Strict-mode stand-in whose run fails the page for a missing writer."""

    def run(self) -> None:
        super().run()
        error = MissingWriterError(
            f"No writer available for enabled kind '{self.kind.value}'",
            kind=self.kind,
            entity=self.entity,
        )
        error.page_kind = self.kind
        error.page = self.entity
        raise error


__all__ = [
    "Builder",
    "BuilderKind",
    "BuilderState",
    "BuilderStateError",
    "MissingWriterError",
    "NoOpBuilder",
    "PageBuildError",
    "PageBuilder",
    "UnavailableBuilder",
    "UnknownStepError",
]
