from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence

import pytest

from docbuild.builders import BuilderFactory
from docbuild.config import DocBuildConfig
from docbuild.layout import default_layout
from tests._fixtures.corpus import make_corpus
from tests._fixtures.writers import RecordingProvider

FactoryMaker = Callable[..., BuilderFactory]


@pytest.fixture
def config(tmp_path: Path) -> DocBuildConfig:
    return DocBuildConfig(root=tmp_path)


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def corpus():
    return make_corpus()


@pytest.fixture
def make_factory(tmp_path: Path, provider: RecordingProvider) -> FactoryMaker:
    """Return a helper building a factory with optional layout overrides and config fields."""

    def _make(
        layout: Optional[Mapping[str, Sequence[str]]] = None,
        writers: Optional[Any] = None,
        **config_fields: Any,
    ) -> BuilderFactory:
        config = DocBuildConfig(root=tmp_path, **config_fields)
        base = default_layout()
        effective = base.overlay(layout) if layout else base
        return BuilderFactory.for_run(config, writers or provider, effective)

    return _make
