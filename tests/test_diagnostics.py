from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

import pytest

from texforge import DocumentBuilder, EnvironmentKind
from texforge.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    format_event_message,
)
from texforge.core.exceptions import (
    LatexBuildError,
    StateError,
    StructureError,
    exception_messages,
)


class RecordingEmitter:
    debug_enabled = True

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


def test_null_emitter_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    emitter = NullEmitter()
    with caplog.at_level(logging.WARNING):
        emitter.warning("nothing to see")
        emitter.error("still quiet")
    assert not caplog.records
    emitter.event("ignored", {"value": 1})
    assert emitter.debug_enabled is False


def test_logging_emitter_logs_messages(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(debug_enabled=True)
    with caplog.at_level(logging.ERROR):
        emitter.error("boom")
    assert any(record.message == "boom" for record in caplog.records)
    assert emitter.debug_enabled is True


def test_emitters_satisfy_protocol() -> None:
    assert isinstance(NullEmitter(), DiagnosticEmitter)
    assert isinstance(LoggingEmitter(), DiagnosticEmitter)
    assert isinstance(RecordingEmitter(), DiagnosticEmitter)


def test_logging_emitter_summarises_known_events(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(debug_enabled=True)
    with caplog.at_level(logging.INFO, logger="texforge.core.diagnostics"):
        emitter.event("environment_open", {"name": "center", "depth": 1})
    assert "Opened environment 'center' at depth 1" in caplog.text


def test_format_event_message_ignores_unknown_events() -> None:
    assert format_event_message("custom", {"flag": True}) is None
    assert format_event_message("document_end", {"nodes": 4}) == (
        "Closed document with 4 top-level nodes"
    )


def test_builder_reports_lifecycle_events() -> None:
    emitter = RecordingEmitter()
    builder = DocumentBuilder(emitter=emitter)
    builder.set_document_class("article").use_package("amsmath")
    builder.begin_document()
    with builder.environment(EnvironmentKind.CENTER):
        builder.add_literal("Centered")
    builder.end_document()

    names = [name for name, _ in emitter.events]
    assert names == ["document_begin", "environment_open", "environment_close", "document_end"]
    assert emitter.events[0][1] == {"document_class": "article", "packages": 1}
    assert emitter.events[1][1] == {"name": "center", "depth": 1}


def test_duplicate_package_is_reported_as_warning(caplog: pytest.LogCaptureFixture) -> None:
    builder = DocumentBuilder()
    with caplog.at_level(logging.WARNING):
        builder.use_package("hyperref").use_package("hyperref", ["hidelinks"])
    assert "Package 'hyperref' is declared more than once." in caplog.text


def test_structure_errors_are_reported_before_raising() -> None:
    emitter = RecordingEmitter()
    builder = DocumentBuilder(emitter=emitter)
    builder.begin_document()
    builder.begin_env(EnvironmentKind.ITEMIZE)

    with pytest.raises(StructureError) as mismatch:
        builder.end_env(EnvironmentKind.CENTER)
    with pytest.raises(StructureError) as unclosed:
        builder.end_document()

    assert emitter.errors == [str(mismatch.value), str(unclosed.value)]
    assert emitter.errors[1] == (
        "Cannot end the document with an unclosed environment (itemize)"
    )


def test_structure_errors_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    builder = DocumentBuilder()
    builder.begin_document()

    with caplog.at_level(logging.ERROR), pytest.raises(StructureError):
        builder.end_env()

    assert "Cannot close an environment: none is open" in caplog.text


def test_error_hierarchy_and_message_chain() -> None:
    builder = DocumentBuilder()
    try:
        try:
            builder.end_document()
        except StateError as exc:
            raise LatexBuildError("assembly failed") from exc
    except LatexBuildError as exc:
        messages = exception_messages(exc)

    assert messages == [
        "assembly failed",
        "'end_document' is not allowed in the preamble state",
    ]
    assert issubclass(StructureError, LatexBuildError)
    assert issubclass(LatexBuildError, RuntimeError)
