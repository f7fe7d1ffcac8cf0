"""Content-addressed change detection.

A snapshot hashes the contents of every tracked file, concatenated in
lexicographic path order, with SHA256. Only contents participate in the
digest; paths only fix the order. Nothing is persisted here: the
pipeline records the digest once a build has succeeded.
"""

import hashlib
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from ..models import ProjectSnapshot

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".java", ".yml", ".xml")


def _iter_tracked(root: Path, extensions: tuple[str, ...]) -> Iterator[Path]:
    if root.is_file():
        if root.suffix in extensions:
            yield root
        return
    if not root.is_dir():
        return
    for path in root.rglob("*"):
        if path.is_file() and path.suffix in extensions:
            yield path


def snapshot(
    project_dir: Path,
    tracked_roots: Iterable[str],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> ProjectSnapshot:
    """Compute the content snapshot of tracked files.

    Args:
        project_dir: Base directory; roots are resolved against it
        tracked_roots: Files or directories to scan (missing ones are skipped)
        extensions: File suffixes to include

    Returns:
        ProjectSnapshot with sorted relative paths and the aggregate digest
    """
    exts = tuple(extensions)
    found: set[str] = set()
    for root in tracked_roots:
        for path in _iter_tracked(project_dir / root, exts):
            found.add(path.relative_to(project_dir).as_posix())

    paths = sorted(found)
    sha = hashlib.sha256()
    for rel in paths:
        with open(project_dir / rel, "rb") as f:
            for chunk in iter(lambda: f.read(8192), b""):
                sha.update(chunk)

    logger.debug("Snapshot covers %d tracked file(s)", len(paths))
    return ProjectSnapshot(paths=paths, digest=sha.hexdigest())


def has_changed(current: ProjectSnapshot, persisted_digest: str | None) -> bool:
    """True iff the current digest differs from the persisted one.

    A missing persisted digest means there is no baseline, which counts
    as a change.
    """
    return current.digest != persisted_digest
