"""Tests for eventmeta.emitter."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from eventmeta.config import ConfigError
from eventmeta.emitter import render_metadata, write_metadata
from eventmeta.models import EventMetadata, TriggerRecord


def _metadata() -> EventMetadata:
    return EventMetadata(
        triggers=[
            TriggerRecord(
                source_file="com/acme/app/OrderService.java",
                line=7,
                target="OrderService",
                topic="orders.v1",
                event_type="OrderCreated",
                producer="sample-app",
            )
        ]
    )


def test_render_is_pretty_printed_with_trailing_newline() -> None:
    document = render_metadata(_metadata())

    assert document.endswith("}\n")
    assert document.startswith('{\n  "schemaVersion": "1",\n  "triggers": [\n    {\n      "sourceFile"')
    assert json.loads(document)["triggers"][0]["producer"] == "sample-app"


def test_render_keeps_non_ascii_text() -> None:
    metadata = EventMetadata(
        triggers=[
            TriggerRecord(source_file="A.java", line=1, target="A", topic="café", event_type="E")
        ]
    )

    assert '"topic": "café"' in render_metadata(metadata)


def test_render_empty_document() -> None:
    assert render_metadata(EventMetadata()) == '{\n  "schemaVersion": "1",\n  "triggers": []\n}\n'


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "target" / "nested" / "event-metadata.json"

    write_metadata(_metadata(), target)

    assert target.read_text(encoding="utf-8") == render_metadata(_metadata())


def test_write_rejects_directory_target(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        write_metadata(_metadata(), tmp_path)


def test_write_fails_when_parent_is_a_file(tmp_path: Path) -> None:
    blocker = tmp_path / "target"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(ConfigError):
        write_metadata(_metadata(), blocker / "event-metadata.json")
