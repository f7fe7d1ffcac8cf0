"""External tool presence checks."""

import logging
import shutil

from ..errors import MissingDependency

logger = logging.getLogger(__name__)


def check_dependencies(tools: dict[str, str]) -> None:
    """Verify that every required executable is on PATH.

    Args:
        tools: Mapping of display name to executable (e.g. {"maven": "mvn"})

    Raises:
        MissingDependency: Listing every tool that is missing
    """
    logger.info("Checking dependencies...")
    missing = [name for name, exe in tools.items() if shutil.which(exe) is None]
    if missing:
        raise MissingDependency(
            f"Missing dependencies: {', '.join(missing)}. "
            "Please install the missing dependencies and try again."
        )
    logger.debug("Dependencies check passed: %s", ", ".join(tools))
