"""Tests for release reconciliation."""

from pathlib import Path

import pytest
from conftest import FakeReleaseService, git

from shipwright.core import ReleaseReconciler
from shipwright.errors import ArtifactNotFoundError, ReleaseAuthError, ReleaseFailure
from shipwright.models import ReleaseAction
from shipwright.services import GitClient

WEB_URL = "https://github.com/Staticpast/WeatherVoting"


@pytest.fixture
def asset(tmp_path: Path) -> Path:
    path = tmp_path / "WeatherVoting-1.3.0.jar"
    path.write_bytes(b"jar")
    return path


@pytest.fixture
def reconciler(
    git_plugin_project: Path, release_service: FakeReleaseService
) -> ReleaseReconciler:
    return ReleaseReconciler(
        git=GitClient(cwd=git_plugin_project),
        service=release_service,
        project_name="WeatherVoting",
        web_url=WEB_URL,
        requirements=["Java 21+"],
    )


class TestReconcile:
    """Tests for ReleaseReconciler.reconcile."""

    def test_creates_missing_release(
        self,
        reconciler: ReleaseReconciler,
        release_service: FakeReleaseService,
        asset: Path,
    ) -> None:
        result = reconciler.reconcile("v1.3.0", asset)

        assert result.action == ReleaseAction.CREATED
        assert result.record.title == "WeatherVoting v1.3.0"
        assert result.record.asset == asset
        assert "- Java 21+" in result.record.notes
        assert release_service.created == ["v1.3.0"]

    def test_idempotent_without_force(
        self,
        reconciler: ReleaseReconciler,
        release_service: FakeReleaseService,
        asset: Path,
    ) -> None:
        """A second reconcile leaves the existing release alone."""
        reconciler.reconcile("v1.3.0", asset)
        result = reconciler.reconcile("v1.3.0", asset)

        assert result.action == ReleaseAction.SKIPPED
        assert result.record.url == release_service.url_for("v1.3.0")
        assert release_service.created == ["v1.3.0"]
        assert release_service.deleted == []

    def test_force_recreates(
        self,
        reconciler: ReleaseReconciler,
        release_service: FakeReleaseService,
        asset: Path,
    ) -> None:
        reconciler.reconcile("v1.3.0", asset)
        result = reconciler.reconcile("v1.3.0", asset, force=True)

        assert result.action == ReleaseAction.RECREATED
        assert release_service.deleted == ["v1.3.0"]
        assert release_service.created == ["v1.3.0", "v1.3.0"]
        assert "v1.3.0" in release_service.releases

    def test_force_on_missing_release_just_creates(
        self,
        reconciler: ReleaseReconciler,
        release_service: FakeReleaseService,
        asset: Path,
    ) -> None:
        result = reconciler.reconcile("v1.3.0", asset, force=True)
        assert result.action == ReleaseAction.CREATED
        assert release_service.deleted == []

    def test_unauthenticated_fails_before_mutation(
        self,
        reconciler: ReleaseReconciler,
        release_service: FakeReleaseService,
        asset: Path,
    ) -> None:
        release_service.authenticated = False
        with pytest.raises(ReleaseAuthError, match="gh auth login"):
            reconciler.reconcile("v1.3.0", asset)
        assert release_service.created == []

    def test_create_rejected(
        self,
        reconciler: ReleaseReconciler,
        release_service: FakeReleaseService,
        asset: Path,
    ) -> None:
        release_service.fail_create = True
        with pytest.raises(ReleaseFailure):
            reconciler.reconcile("v1.3.0", asset)

    def test_failed_delete_is_fatal(
        self,
        reconciler: ReleaseReconciler,
        release_service: FakeReleaseService,
        asset: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        reconciler.reconcile("v1.3.0", asset)
        monkeypatch.setattr(release_service, "delete", lambda tag: False)
        with pytest.raises(ReleaseFailure, match="delete"):
            reconciler.reconcile("v1.3.0", asset, force=True)

    def test_missing_asset(self, reconciler: ReleaseReconciler, tmp_path: Path) -> None:
        with pytest.raises(ArtifactNotFoundError):
            reconciler.reconcile("v1.3.0", tmp_path / "missing.jar")


class TestTargetCommitAndNotes:
    """Tests for commit targeting and the changelog link."""

    def test_targets_existing_tag(
        self, reconciler: ReleaseReconciler, git_plugin_project: Path
    ) -> None:
        """An existing tag pins the release to the tagged commit, not HEAD."""
        git(git_plugin_project, "tag", "-a", "v1.3.0", "-m", "x")
        tagged = git(git_plugin_project, "rev-parse", "HEAD")
        (git_plugin_project / "README.md").write_text("# Later\n")
        git(git_plugin_project, "commit", "-am", "later")

        assert reconciler.target_commit("v1.3.0") == tagged
        assert reconciler.target_commit("v9.9.9") == git(git_plugin_project, "rev-parse", "HEAD")

    def test_notes_link_previous_tag(
        self, reconciler: ReleaseReconciler, git_plugin_project: Path
    ) -> None:
        git(git_plugin_project, "tag", "-a", "v1.2.3", "-m", "x")
        (git_plugin_project / "README.md").write_text("# Later\n")
        git(git_plugin_project, "commit", "-am", "later")

        notes = reconciler.build_notes("v1.3.0")

        assert f"{WEB_URL}/compare/v1.2.3...v1.3.0" in notes
