"""External tool integrations for shipwright.

This package provides interfaces to the collaborators the pipeline drives:
- command: Command/CommandResult abstraction and the subprocess runner
- git: Git operations (commit, tag, push)
- github: GitHub releases through the gh CLI
- maven: Build tool invocation and descriptor version reading
"""

from .command import Command, CommandResult, CommandRunner, SubprocessRunner
from .git import GitClient, parse_repository_slug
from .github import GitHubReleaseService, ReleaseService
from .maven import MavenBuildTool, read_descriptor_version

__all__ = [
    "Command",
    "CommandResult",
    "CommandRunner",
    "GitClient",
    "GitHubReleaseService",
    "MavenBuildTool",
    "ReleaseService",
    "SubprocessRunner",
    "parse_repository_slug",
    "read_descriptor_version",
]
