"""Tests for layout-driven dispatch on type pages."""

from __future__ import annotations

import pytest

from docbuild.builders import (
    BuilderKind,
    BuilderState,
    BuilderStateError,
    MissingWriterError,
    PageBuildError,
    UnknownStepError,
)
from docbuild.builders.base import Builder
from tests._fixtures.corpus import make_marker, make_widget
from tests._fixtures.writers import RecordingProvider


def test_class_page_runs_steps_in_layout_order(make_factory, provider: RecordingProvider) -> None:
    factory = make_factory(layout={"class": ["header", "memberSummary", "footer"]})

    factory.class_builder(make_widget()).run()

    assert provider.journal == [
        ("class", "add_header", ("com.acme.Widget",)),
        ("member_summary", "add_properties_summary", ("com.acme.Widget", ("label",))),
        ("member_summary", "add_fields_summary", ("com.acme.Widget", ("SIZE", "cache", "name"))),
        ("member_summary", "add_constructors_summary", ("com.acme.Widget", ("Widget",))),
        ("member_summary", "add_methods_summary", ("com.acme.Widget", ("readObject", "render"))),
        ("class", "add_footer", ("com.acme.Widget",)),
        ("class", "copy_doc_files", ("com.acme",)),
        ("class", "print_document", ("com.acme.Widget",)),
    ]


def test_reordering_the_layout_reorders_execution(make_factory, provider: RecordingProvider) -> None:
    factory = make_factory(layout={"class": ["footer", "class_signature", "header"]})

    factory.class_builder(make_widget()).run()

    assert provider.operations(BuilderKind.CLASS)[:3] == ["add_footer", "add_class_signature", "add_header"]


def test_annotation_entity_on_class_page_uses_annotation_summary(make_factory, provider: RecordingProvider) -> None:
    factory = make_factory(layout={"class": ["header", "member_summary", "footer"]})

    factory.class_builder(make_marker()).run()

    requested = [kind for kind, *_ in provider.requests]
    assert BuilderKind.ANNOTATION_TYPE_MEMBER_SUMMARY in requested
    assert BuilderKind.MEMBER_SUMMARY not in requested
    assert provider.operations()[:5] == [
        "add_header",
        "add_annotation_type_fields_summary",
        "add_annotation_type_required_member_summary",
        "add_annotation_type_optional_member_summary",
        "add_footer",
    ]


def test_nested_sections_finish_before_the_next_step(make_factory, provider: RecordingProvider) -> None:
    factory = make_factory(layout={"class": ["method_details", "field_details", "footer"]})

    factory.class_builder(make_widget()).run()

    ops = provider.operations()
    method_calls = [index for index, (kind, _, _) in enumerate(provider.journal) if kind == "method_details"]
    field_calls = [index for index, (kind, _, _) in enumerate(provider.journal) if kind == "field_details"]
    footer_index = ops.index("add_footer")
    assert max(method_calls) < min(field_calls)
    assert max(field_calls) < footer_index


def test_unknown_step_fails_the_page_with_identifying_context(make_factory, provider: RecordingProvider) -> None:
    factory = make_factory(layout={"class": ["header", "class_horoscope", "footer"]})
    builder = factory.class_builder(make_widget())

    with pytest.raises(UnknownStepError) as excinfo:
        builder.run()

    error = excinfo.value
    assert error.step == "class_horoscope"
    assert error.entity is builder.entity
    assert "class_horoscope" in error.describe()
    assert provider.operations() == ["add_header"]
    assert "print_document" not in provider.operations()
    assert builder.state is BuilderState.DONE


def test_unknown_step_in_nested_section_reports_the_page(make_factory) -> None:
    factory = make_factory(layout={"class": ["method_details"], "method_details": ["signature", "bogus"]})
    builder = factory.class_builder(make_widget())

    with pytest.raises(UnknownStepError) as excinfo:
        builder.run()

    assert excinfo.value.kind is BuilderKind.METHOD
    assert excinfo.value.page_kind is BuilderKind.CLASS
    assert excinfo.value.page is builder.entity


def test_writer_without_operation_raises_missing_writer(tmp_path) -> None:
    from docbuild.builders import BuilderFactory
    from docbuild.config import DocBuildConfig

    provider = RecordingProvider(missing={"add_class_tree"})
    factory = BuilderFactory.for_run(DocBuildConfig(root=tmp_path), provider)

    with pytest.raises(MissingWriterError) as excinfo:
        factory.class_builder(make_widget()).run()

    assert excinfo.value.step == "class_tree"


def test_writer_exception_becomes_page_error(tmp_path) -> None:
    from docbuild.builders import BuilderFactory
    from docbuild.config import DocBuildConfig

    provider = RecordingProvider(failing={"add_class_description"})
    factory = BuilderFactory.for_run(DocBuildConfig(root=tmp_path), provider)

    with pytest.raises(PageBuildError) as excinfo:
        factory.class_builder(make_widget()).run()

    assert excinfo.value.step == "class_description"
    assert isinstance(excinfo.value.__cause__, OSError)


def test_builder_cannot_run_twice(make_factory) -> None:
    builder: Builder = make_factory(layout={"class": ["header"]}).class_builder(make_widget())
    builder.run()

    with pytest.raises(BuilderStateError):
        builder.run()


def test_second_page_sees_first_page_package_claim(make_factory, provider: RecordingProvider, corpus) -> None:
    factory = make_factory(layout={"class": ["header"]})
    widget, renderer = corpus.packages[0].members[:2]

    factory.class_builder(widget).run()
    factory.class_builder(renderer).run()

    assert provider.calls("copy_doc_files") == [("com.acme",)]
    assert factory.context.packages_seen == frozenset({"com.acme"})


def test_documented_packages_copy_their_own_doc_files(make_factory, provider: RecordingProvider) -> None:
    factory = make_factory(layout={"class": ["header"]}, documented_packages=["com.acme"])

    factory.class_builder(make_widget()).run()

    assert provider.calls("copy_doc_files") == []
    assert factory.context.packages_seen == frozenset()


def test_failed_doc_file_copy_is_not_recorded(tmp_path) -> None:
    from docbuild.builders import BuilderFactory
    from docbuild.config import DocBuildConfig

    provider = RecordingProvider(failing={"print_document"})
    factory = BuilderFactory.for_run(DocBuildConfig(root=tmp_path), provider)

    with pytest.raises(PageBuildError):
        factory.class_builder(make_widget()).run()

    assert factory.context.packages_seen == frozenset()


def test_annotation_type_page_runs_element_sections(make_factory, provider: RecordingProvider) -> None:
    factory = make_factory()

    factory.annotation_type_builder(make_marker()).run()

    assert provider.calls("add_default_value_info") == [("priority", 0)]
    required = [args for kind, op, args in provider.journal if kind == "annotation_type_required_member_details" and op == "begin_member"]
    optional = [args for kind, op, args in provider.journal if kind == "annotation_type_optional_member_details" and op == "begin_member"]
    assert required == [("value",)]
    assert optional == [("priority",)]
    assert provider.operations()[-2:] == ["copy_doc_files", "print_document"]


def test_type_page_prints_once_after_claiming_its_package(make_factory, provider: RecordingProvider) -> None:
    factory = make_factory(layout={"class": ["header"], "annotation_type": ["header"]})

    factory.class_builder(make_widget()).run()
    factory.annotation_type_builder(make_marker()).run()

    assert provider.operations() == [
        "add_header",
        "copy_doc_files",
        "print_document",
        "add_header",
        "print_document",
    ]
