"""Tests for eventmeta.orchestrator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from eventmeta.config import ConfigError, ScanConfig
from eventmeta.orchestrator import GenerateOutcome, Orchestrator
from eventmeta.scanner import EventScanner
from eventmeta.validators import UnresolvedArgumentError

VALID = '@EventTrigger(topic = "orders.v1", eventType = "OrderCreated") class A {}\n'
INVALID = '@EventTrigger(eventType = "OrderCreated") class B {}\n'


def test_run_generate_writes_default_output(repo_builder) -> None:
    repo_builder.write({"A.java": VALID})

    outcome = Orchestrator().run_generate(str(repo_builder.path()))

    assert isinstance(outcome, GenerateOutcome)
    expected = repo_builder.path().resolve() / "target" / "event-metadata.json"
    assert outcome.output_file == expected
    assert expected.read_text(encoding="utf-8") == outcome.document
    payload = json.loads(outcome.document)
    assert payload["schemaVersion"] == "1"
    assert [t["target"] for t in payload["triggers"]] == ["A"]


def test_run_generate_dry_run_does_not_write(repo_builder) -> None:
    repo_builder.write({"A.java": VALID})

    outcome = Orchestrator().run_generate(str(repo_builder.path()), dry_run=True)

    assert outcome is not None
    assert outcome.dry_run is True
    assert not outcome.output_file.exists()
    assert '"eventType": "OrderCreated"' in outcome.document


def test_run_generate_missing_source_dir_returns_none(repo_builder) -> None:
    outcome = Orchestrator().run_generate(str(repo_builder.path()))

    assert outcome is None
    assert not (repo_builder.path() / "target").exists()


def test_run_generate_uses_config_file(repo_builder) -> None:
    repo_builder.write_project_file(
        ".eventmeta.yml",
        """
        source_dir: java
        output_file: build/events.json
        annotation:
          name: Emits
          fqn: org.example.Emits
        """,
    )
    repo_builder.write_project_file(
        "java/Svc.java",
        """
        @Emits({@Emit(topic = "x", eventType = "Ignored")})
        @Emits(topic = "t", eventType = "E")
        class Svc {}
        """,
    )

    outcome = Orchestrator().run_generate(str(repo_builder.path()))

    assert outcome is not None
    assert outcome.output_file == repo_builder.path().resolve() / "build" / "events.json"
    assert [(t.target, t.line) for t in outcome.metadata.triggers] == [("Svc", 2)]


def test_cli_overrides_take_precedence_over_config(repo_builder) -> None:
    repo_builder.write_project_file(".eventmeta.yml", "fail_on_missing: true\n")
    repo_builder.write({"A.java": VALID, "B.java": INVALID})

    outcome = Orchestrator().run_generate(
        str(repo_builder.path()), fail_on_missing=False, dry_run=True
    )

    assert outcome is not None
    assert [t.target for t in outcome.metadata.triggers] == ["A"]
    assert len(outcome.warnings) == 1
    assert "target=B line=1" in outcome.warnings[0]


def test_strict_failure_writes_nothing(repo_builder) -> None:
    repo_builder.write({"A.java": VALID, "B.java": INVALID})

    with pytest.raises(UnresolvedArgumentError):
        Orchestrator().run_generate(str(repo_builder.path()), fail_on_missing=True)

    assert not (repo_builder.path() / "target" / "event-metadata.json").exists()


def test_explicit_config_path_anchors_at_project(repo_builder, tmp_path: Path) -> None:
    config_file = tmp_path / "elsewhere" / "settings.yml"
    config_file.parent.mkdir()
    config_file.write_text("output_file: out/meta.json\n", encoding="utf-8")
    repo_builder.write({"A.java": VALID})

    outcome = Orchestrator().run_generate(
        str(repo_builder.path()), config_path=str(config_file)
    )

    assert outcome is not None
    assert outcome.output_file == repo_builder.path().resolve() / "out" / "meta.json"


def test_explicit_config_path_must_exist(repo_builder, tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        Orchestrator().run_generate(
            str(repo_builder.path()), config_path=str(tmp_path / "missing.yml")
        )


def test_scanner_factory_receives_merged_config(repo_builder) -> None:
    repo_builder.write({"A.java": VALID})
    seen: list[ScanConfig] = []

    def _factory(config: ScanConfig) -> EventScanner:
        seen.append(config)
        return EventScanner(config)

    Orchestrator(scanner_factory=_factory).run_generate(
        str(repo_builder.path()), includes=["**/A.java"], workers=2, dry_run=True
    )

    assert len(seen) == 1
    assert seen[0].includes == ("**/A.java",)
    assert seen[0].workers == 2
    assert seen[0].container_simple_name == "EventTriggers"
