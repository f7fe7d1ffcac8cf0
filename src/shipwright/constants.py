"""Constants for shipwright CLI."""

SHIPWRIGHT_DIR = ".shipwright"
CONFIG_FILE = "config.toml"

# Persisted caches (relative to the .shipwright directory)
VERSION_CACHE_FILE = "last_build_version"
DIGEST_CACHE_FILE = "last_build_hash"

TAG_PREFIX = "v"
COMMIT_MESSAGE_TEMPLATE = "chore(release): bump version to {version}"

VERSION_LEVELS = ("major", "minor", "patch")
