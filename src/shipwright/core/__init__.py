"""Core pipeline logic for shipwright.

Stages, leaf-first:
- version_manager: Parse, increment, override and write back versions
- change_detector: Content-addressed snapshots of tracked files
- build_invoker: Clean build through the external build tool
- deployer: Replace this project's artifact in the deployment directory
- git_tagger: Version-bump commit, annotated tag, push
- release_reconciler: Create / skip / recreate the remote release
- pipeline: Orchestration of all stages
"""

from .build_invoker import BuildInvoker
from .change_detector import has_changed, snapshot
from .dependencies import check_dependencies
from .deployer import clear_stale, deploy, install
from .git_tagger import GitTagger, TagReport
from .pipeline import (
    Pipeline,
    PipelineOptions,
    PipelineResult,
    PipelineStatus,
    resolve_repository,
    should_build,
)
from .release_notes import (
    EditorReviewer,
    NotesReviewer,
    PassthroughReviewer,
    generate_release_notes,
)
from .release_reconciler import ReleaseReconciler
from .state_store import StateStore
from .tag_cleanup import clean_tag

__all__ = [
    "BuildInvoker",
    "EditorReviewer",
    "GitTagger",
    "NotesReviewer",
    "PassthroughReviewer",
    "Pipeline",
    "PipelineOptions",
    "PipelineResult",
    "PipelineStatus",
    "ReleaseReconciler",
    "StateStore",
    "TagReport",
    "check_dependencies",
    "clean_tag",
    "clear_stale",
    "deploy",
    "generate_release_notes",
    "has_changed",
    "install",
    "resolve_repository",
    "should_build",
    "snapshot",
]
