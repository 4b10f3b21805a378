"""docbuild: layout-driven documentation build orchestration."""

from .builders import Builder, BuilderFactory, BuilderKind, PageBuildError
from .config import ConfigError, DocBuildConfig, load_config
from .context import BuildContext, ContextClosedError
from .layout import DEFAULT_LAYOUT, Layout, LayoutError, LayoutProvider, load_layout
from .models import Corpus, Entity, EntityKind
from .orchestrator import DocumentationRun, PageOutcome, RunReport
from .writers import UNSUPPORTED, WriterProvider

__all__ = [
    "Builder",
    "BuilderFactory",
    "BuilderKind",
    "BuildContext",
    "ConfigError",
    "ContextClosedError",
    "Corpus",
    "DEFAULT_LAYOUT",
    "DocBuildConfig",
    "DocumentationRun",
    "Entity",
    "EntityKind",
    "Layout",
    "LayoutError",
    "LayoutProvider",
    "PageBuildError",
    "PageOutcome",
    "RunReport",
    "UNSUPPORTED",
    "WriterProvider",
    "load_config",
    "load_layout",
]
