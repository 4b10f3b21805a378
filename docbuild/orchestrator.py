"""Run orchestration: plan pages for a corpus, build each one, report outcomes."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence

from .builders import Builder, BuilderFactory, BuilderKind, NoOpBuilder, PageBuildError, UnavailableBuilder
from .config import DocBuildConfig
from .layout import LayoutProvider
from .logging import configure_logging, get_logger
from .models import Corpus, Entity
from .writers import WriterProvider

_STATUS_BUILT = "built"
_STATUS_SKIPPED = "skipped"
_STATUS_FAILED = "failed"


@dataclass(frozen=True)
class PageRequest:
    """One page the driver asks the factory for, with its traversal neighbours."""

    kind: BuilderKind
    entity: Optional[Entity] = None
    previous: Optional[Entity] = None
    following: Optional[Entity] = None

    @property
    def label(self) -> str:
        name = self.entity.qualified_name if self.entity is not None else "<run>"
        return f"{self.kind.value}:{name}"


@dataclass
class PageOutcome:
    """Result of building a single page."""

    kind: BuilderKind
    entity: Optional[str]
    status: str
    error: Optional[str] = None
    step: Optional[str] = None


@dataclass
class RunReport:
    """Outcomes for every planned page plus the final package bookkeeping."""

    outcomes: List[PageOutcome] = field(default_factory=list)
    packages_seen: FrozenSet[str] = frozenset()

    def _with_status(self, status: str) -> List[PageOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status == status]

    @property
    def built(self) -> List[PageOutcome]:
        return self._with_status(_STATUS_BUILT)

    @property
    def skipped(self) -> List[PageOutcome]:
        return self._with_status(_STATUS_SKIPPED)

    @property
    def failed(self) -> List[PageOutcome]:
        return self._with_status(_STATUS_FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed


class DocumentationRun:
    """Drives one documentation run end to end.

    A fresh context and factory are created per call to :meth:`run`. Page-level
    failures are recorded and the run moves on; builder state violations and
    closed-context errors propagate because they mean the driver broke the
    construction contract.
    """

    def __init__(
        self,
        config: DocBuildConfig,
        writers: WriterProvider,
        layout: Optional[LayoutProvider] = None,
    ) -> None:
        self.config = config
        self.writers = writers
        self.layout = layout
        self.logger = get_logger("orchestrator")

    def plan(self, corpus: Corpus) -> List[PageRequest]:
        """Return the pages for ``corpus`` in build order."""
        requests: List[PageRequest] = []
        requests.extend(_with_neighbours(BuilderKind.MODULE_SUMMARY, self._included(corpus.modules)))
        packages = self._included(corpus.packages)
        requests.extend(_with_neighbours(BuilderKind.PACKAGE_SUMMARY, packages))
        for request in _with_neighbours(BuilderKind.CLASS, self._included(corpus.types())):
            if request.entity is not None and request.entity.is_annotation_type:
                request = PageRequest(BuilderKind.ANNOTATION_TYPE, request.entity, request.previous, request.following)
            requests.append(request)
        requests.append(PageRequest(BuilderKind.CONSTANTS_SUMMARY))
        requests.append(PageRequest(BuilderKind.SERIALIZED_FORM))
        return requests

    def run(self, corpus: Corpus) -> RunReport:
        """Build every planned page and return the run report."""
        if self.config.verbose or self.config.log_file is not None:
            configure_logging(verbose=self.config.verbose, log_file=self.config.log_file)
        factory = BuilderFactory.for_run(self.config, self.writers, self.layout)
        requests = self.plan(corpus)
        self.logger.info("Starting documentation run with %d pages", len(requests))
        try:
            if self.config.max_workers > 1:
                outcomes = self._run_parallel(factory, corpus, requests)
            else:
                outcomes = [self._build_page(factory, corpus, request) for request in requests]
        finally:
            factory.context.close()

        report = RunReport(outcomes=outcomes, packages_seen=factory.context.packages_seen)
        self.logger.info(
            "Documentation run finished: %d built, %d skipped, %d failed",
            len(report.built),
            len(report.skipped),
            len(report.failed),
        )
        return report

    def _run_parallel(
        self, factory: BuilderFactory, corpus: Corpus, requests: Sequence[PageRequest]
    ) -> List[PageOutcome]:
        pool = ThreadPoolExecutor(max_workers=self.config.max_workers, thread_name_prefix="docbuild-page")
        futures: List[Future] = [
            pool.submit(self._build_page, factory, corpus, request) for request in requests
        ]
        try:
            outcomes = [future.result() for future in futures]
        except BaseException:
            # Fatal errors stop the run; queued pages are dropped.
            pool.shutdown(wait=True, cancel_futures=True)
            raise
        pool.shutdown(wait=True)
        return outcomes

    def _build_page(self, factory: BuilderFactory, corpus: Corpus, request: PageRequest) -> PageOutcome:
        entity_name = request.entity.qualified_name if request.entity is not None else None
        try:
            builder = self._builder_for(factory, corpus, request)
            skipped = isinstance(builder, NoOpBuilder) and not isinstance(builder, UnavailableBuilder)
            builder.run()
        except PageBuildError as exc:
            self.logger.warning("Page %s failed: %s", request.label, exc.describe())
            return PageOutcome(request.kind, entity_name, _STATUS_FAILED, error=str(exc), step=exc.step)
        if skipped:
            self.logger.debug("Page %s skipped", request.label)
            return PageOutcome(request.kind, entity_name, _STATUS_SKIPPED)
        self.logger.debug("Page %s built", request.label)
        return PageOutcome(request.kind, entity_name, _STATUS_BUILT)

    def _builder_for(self, factory: BuilderFactory, corpus: Corpus, request: PageRequest) -> Builder:
        kind = request.kind
        if kind is BuilderKind.CONSTANTS_SUMMARY:
            return factory.constants_summary_builder(corpus.packages)
        if kind is BuilderKind.SERIALIZED_FORM:
            return factory.serialized_form_builder(corpus.packages)
        if request.entity is None:
            raise ValueError(f"{kind.value} pages need an entity")
        if kind is BuilderKind.MODULE_SUMMARY:
            return factory.module_summary_builder(request.entity, request.previous, request.following)
        if kind is BuilderKind.PACKAGE_SUMMARY:
            return factory.package_summary_builder(request.entity, request.previous, request.following)
        if kind in (BuilderKind.CLASS, BuilderKind.ANNOTATION_TYPE):
            return factory.type_builder(request.entity, request.previous, request.following)
        raise ValueError(f"{kind.value} is a section, not a page")

    def _included(self, entities: Sequence[Entity]) -> List[Entity]:
        return [entity for entity in entities if self.config.is_included(entity)]


def _with_neighbours(kind: BuilderKind, entities: Sequence[Entity]) -> List[PageRequest]:
    requests: List[PageRequest] = []
    for index, entity in enumerate(entities):
        previous = entities[index - 1] if index > 0 else None
        following = entities[index + 1] if index + 1 < len(entities) else None
        requests.append(PageRequest(kind, entity, previous, following))
    return requests


__all__ = ["DocumentationRun", "PageOutcome", "PageRequest", "RunReport"]
