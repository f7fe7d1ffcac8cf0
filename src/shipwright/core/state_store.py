"""File-backed persistence for PersistedState.

Two plain text files hold the last built version and the content digest
recorded with it. They are read once when the pipeline starts and written
together at the post-build checkpoint.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..config import ShipwrightConfig, get_shipwright_dir
from ..models import PersistedState

logger = logging.getLogger(__name__)


def _read_optional(path: Path) -> str | None:
    if not path.exists():
        return None
    value = path.read_text().strip()
    return value or None


@dataclass
class StateStore:
    """Reads and writes the two cache files."""

    version_path: Path
    digest_path: Path

    @classmethod
    def for_project(cls, project_dir: Path, config: ShipwrightConfig) -> "StateStore":
        state_dir = get_shipwright_dir(project_dir)
        return cls(
            version_path=state_dir / config.state.version_file,
            digest_path=state_dir / config.state.digest_file,
        )

    def load(self) -> PersistedState:
        return PersistedState(
            last_version=_read_optional(self.version_path),
            last_digest=_read_optional(self.digest_path),
        )

    def save(self, state: PersistedState) -> None:
        """Write every populated slot of state."""
        if state.last_version is not None:
            self.version_path.parent.mkdir(parents=True, exist_ok=True)
            self.version_path.write_text(f"{state.last_version}\n")
            logger.info("Saved version %s to cache", state.last_version)
        if state.last_digest is not None:
            self.digest_path.parent.mkdir(parents=True, exist_ok=True)
            self.digest_path.write_text(f"{state.last_digest}\n")
