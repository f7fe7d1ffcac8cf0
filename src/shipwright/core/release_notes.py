"""Release notes generation and the operator review hook."""

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_WHATS_NEW = "*Add your release notes here*"


def changelog_url(web_url: str, previous_tag: str, tag: str) -> str:
    """Compare link between two tags; previous_tag may be empty."""
    return f"{web_url}/compare/{previous_tag}...{tag}"


def generate_release_notes(
    tag: str,
    previous_tag: str,
    web_url: str,
    requirements: list[str] | None = None,
    whats_new: str = DEFAULT_WHATS_NEW,
) -> str:
    """Render the release notes template.

    Args:
        tag: Tag being released
        previous_tag: Prior tag for the changelog link ("" if none)
        web_url: Repository web URL (e.g. https://github.com/owner/name)
        requirements: Platform/runtime requirement lines
        whats_new: Body of the "What's New" section

    Returns:
        Markdown release notes
    """
    lines = ["## What's New", whats_new, ""]
    if requirements:
        lines.append("## Requirements")
        lines.extend(f"- {req}" for req in requirements)
        lines.append("")
    lines.append("## Full Changelog")
    lines.append(changelog_url(web_url, previous_tag, tag))
    return "\n".join(lines) + "\n"


class NotesReviewer(Protocol):
    """Hook that lets an operator adjust notes before publishing."""

    def review(self, notes: str) -> str: ...


class PassthroughReviewer:
    """Publishes the generated notes unedited."""

    def review(self, notes: str) -> str:
        return notes


def find_editor() -> str | None:
    """Resolve the editor: $EDITOR, then $VISUAL, then nano if installed."""
    editor = os.environ.get("EDITOR") or os.environ.get("VISUAL")
    if editor:
        return editor
    return "nano" if shutil.which("nano") else None


class EditorReviewer:
    """Opens the notes in an external editor and blocks until it exits.

    Falls back to the generated notes when no editor is available, the
    editor fails, or the result is empty.
    """

    def __init__(self, editor: str | None = None):
        self.editor = editor if editor is not None else find_editor()

    def review(self, notes: str) -> str:
        if not self.editor:
            logger.warning("No editor found. Using generated release notes as-is.")
            return notes

        with tempfile.NamedTemporaryFile(mode="w", suffix=".md", delete=False) as f:
            f.write(notes)
            edit_file = Path(f.name)
        try:
            logger.info("Opening release notes in %s for editing...", self.editor)
            result = subprocess.run([*self.editor.split(), str(edit_file)])
            if result.returncode != 0:
                logger.warning(
                    "Editor exited with code %d; using generated notes", result.returncode
                )
                return notes
            edited = edit_file.read_text()
        except FileNotFoundError:
            logger.warning("Editor not found: %s; using generated notes", self.editor)
            return notes
        finally:
            edit_file.unlink(missing_ok=True)

        if not edited.strip():
            logger.warning("Release notes are empty after editing; using generated notes")
            return notes
        return edited
