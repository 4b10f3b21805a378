"""Tests for docbuild.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docbuild.config import ConfigError, DocBuildConfig, load_config
from docbuild.models import Entity, EntityKind


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DocBuildConfig)
    assert config.root == tmp_path.resolve()
    assert config.locale is None
    assert config.enabled_kinds == []
    assert config.include == []
    assert config.exclude == []
    assert config.documented_packages == []
    assert config.writer_options == {}
    assert config.strict_writers is False
    assert config.layout_file is None
    assert config.layout == {}
    assert config.max_workers == 1


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".docbuild.yml"
    config_file.write_text(
        """
locale: en_GB
packages:
  - com.acme
output:
  enabled: [class, PackageSummary, annotation-type]
  strict_writers: "yes"
  options:
    charset: utf-8
    nodeprecated: true
filters:
  include: ["com.acme*"]
  exclude:
    - "*.internal*"
layout: layouts/site.yml
workers: 4
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.locale == "en_GB"
    assert config.documented_packages == ["com.acme"]
    assert config.enabled_kinds == ["class", "package_summary", "annotation_type"]
    assert config.strict_writers is True
    assert config.writer_options == {"charset": "utf-8", "nodeprecated": True}
    assert config.include == ["com.acme*"]
    assert config.exclude == ["*.internal*"]
    assert config.layout_file == tmp_path.resolve() / "layouts" / "site.yml"
    assert config.max_workers == 4


def test_load_config_accepts_inline_layout(tmp_path: Path) -> None:
    (tmp_path / ".docbuild.yml").write_text(
        """
layout:
  class: [header, member_summary, footer]
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.layout_file is None
    assert config.layout == {"class": ["header", "member_summary", "footer"]}


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".docbuild.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_yaml_syntax_errors(tmp_path: Path) -> None:
    (tmp_path / ".docbuild.yml").write_text("output: [class\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_load_config_rejects_non_positive_workers(tmp_path: Path) -> None:
    (tmp_path / ".docbuild.yml").write_text("workers: 0\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_kind_enablement_defaults_to_everything(tmp_path: Path) -> None:
    assert DocBuildConfig(root=tmp_path).is_kind_enabled("serialized_form")

    restricted = DocBuildConfig(root=tmp_path, enabled_kinds=["class"])
    assert restricted.is_kind_enabled("Class")
    assert not restricted.is_kind_enabled("serialized_form")


def test_include_and_exclude_filters(tmp_path: Path) -> None:
    config = DocBuildConfig(root=tmp_path, include=["com.acme*"], exclude=["*.internal.*"])
    widget = Entity(name="Widget", kind=EntityKind.CLASS, package="com.acme")
    helper = Entity(name="Helper", kind=EntityKind.CLASS, package="com.acme.internal")
    other = Entity(name="Thing", kind=EntityKind.CLASS, package="org.other")

    assert config.is_included(widget)
    assert not config.is_included(helper)
    assert not config.is_included(other)


def test_load_config_reads_logging_section(tmp_path: Path) -> None:
    (tmp_path / ".docbuild.yml").write_text(
        "logging:\n  verbose: yes\n  file: build/docbuild.log\n", encoding="utf-8"
    )

    config = load_config(tmp_path)

    assert config.verbose is True
    assert config.log_file == tmp_path.resolve() / "build" / "docbuild.log"
