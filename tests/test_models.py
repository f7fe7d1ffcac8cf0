"""Tests for shipwright data models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from shipwright.models import (
    BuildArtifact,
    DeploymentSlot,
    Outcome,
    ReconcileResult,
    ReleaseAction,
    ReleaseRecord,
    StageResult,
    VersionState,
)


def test_version_state_is_frozen():
    state = VersionState(major=1, minor=2, patch=3)
    with pytest.raises(ValidationError):
        state.major = 2


def test_version_state_rejects_negative():
    with pytest.raises(ValidationError):
        VersionState(major=-1, minor=0, patch=0)


def test_artifact_filename():
    artifact = BuildArtifact(
        name="WeatherVoting", version="1.3.0", path=Path("/tmp/target/WeatherVoting-1.3.0.jar")
    )
    assert artifact.filename == "WeatherVoting-1.3.0.jar"


def test_slot_missing_directory_has_no_files(tmp_path: Path):
    slot = DeploymentSlot(directory=tmp_path / "missing", pattern="WeatherVoting-*.jar")
    assert slot.matching_files() == []


def test_slot_ignores_directories(tmp_path: Path):
    (tmp_path / "WeatherVoting-data.jar").mkdir()
    (tmp_path / "WeatherVoting-1.0.0.jar").write_bytes(b"x")
    slot = DeploymentSlot(directory=tmp_path, pattern="WeatherVoting-*.jar")
    assert [p.name for p in slot.matching_files()] == ["WeatherVoting-1.0.0.jar"]


def test_stage_result_ok():
    assert StageResult(stage="push", outcome=Outcome.RECOVERABLE).ok
    assert not StageResult(stage="build", outcome=Outcome.FATAL).ok


def test_reconcile_result_serializes():
    result = ReconcileResult(
        action=ReleaseAction.SKIPPED,
        record=ReleaseRecord(tag="v1.3.0", url="https://github.com/o/n/releases/tag/v1.3.0"),
    )
    data = result.model_dump(mode="json")
    assert data["action"] == "skipped"
    assert data["record"]["tag"] == "v1.3.0"
