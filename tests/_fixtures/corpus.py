"""Sample corpus shared by builder and orchestrator tests."""

from __future__ import annotations

from docbuild.models import Corpus, Entity, EntityKind


def _member(name: str, kind: EntityKind, **kwargs) -> Entity:
    return Entity(name=name, kind=kind, **kwargs)


def make_widget() -> Entity:
    return Entity(
        name="Widget",
        kind=EntityKind.CLASS,
        package="com.acme",
        serializable=True,
        serial_version_uid=42,
        members=[
            _member("SIZE", EntityKind.FIELD, modifiers=frozenset({"static", "final"}), constant_value=3),
            _member("name", EntityKind.FIELD),
            _member("cache", EntityKind.FIELD, modifiers=frozenset({"transient"})),
            _member("Widget", EntityKind.CONSTRUCTOR),
            _member("render", EntityKind.METHOD),
            _member("readObject", EntityKind.METHOD, modifiers=frozenset({"private"})),
            _member("label", EntityKind.PROPERTY),
        ],
    )


def make_marker() -> Entity:
    return Entity(
        name="Marker",
        kind=EntityKind.ANNOTATION_TYPE,
        package="com.acme",
        members=[
            _member("value", EntityKind.ANNOTATION_ELEMENT),
            _member("priority", EntityKind.ANNOTATION_ELEMENT, default_value=0),
            _member("DEFAULT_PRIORITY", EntityKind.FIELD, constant_value=0),
        ],
    )


def make_corpus() -> Corpus:
    widget = make_widget()
    renderer = Entity(
        name="Renderer",
        kind=EntityKind.INTERFACE,
        package="com.acme",
        members=[_member("render", EntityKind.METHOD)],
    )
    color = Entity(
        name="Color",
        kind=EntityKind.ENUM,
        package="com.acme",
        members=[_member("RED", EntityKind.ENUM_CONSTANT), _member("GREEN", EntityKind.ENUM_CONSTANT)],
    )
    helper = Entity(
        name="Helper",
        kind=EntityKind.CLASS,
        package="com.acme.internal",
        members=[_member("assist", EntityKind.METHOD)],
    )
    acme = Entity(name="com.acme", kind=EntityKind.PACKAGE, members=[widget, renderer, color, make_marker()])
    internal = Entity(name="com.acme.internal", kind=EntityKind.PACKAGE, members=[helper])
    module = Entity(name="acme.core", kind=EntityKind.MODULE, members=[acme, internal])
    return Corpus(modules=[module], packages=[acme, internal])


__all__ = ["make_corpus", "make_marker", "make_widget"]
