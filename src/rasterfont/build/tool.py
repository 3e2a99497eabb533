"""FontForge executable discovery."""

import shutil
from collections.abc import Iterable
from pathlib import Path

import structlog

from rasterfont.config.settings import DEFAULT_TOOL_CANDIDATES
from rasterfont.exceptions import ToolNotFoundError

logger = structlog.get_logger("rasterfont.tool")

TOOL_NAME = "fontforge"


def find_fontforge(
    candidates: Iterable[str] = DEFAULT_TOOL_CANDIDATES,
    explicit: Path | None = None,
) -> Path:
    """Locate the FontForge executable.

    Probes an explicit path first, then each known install location in order,
    then the system PATH.

    Args:
        candidates: Install locations to probe
        explicit: User-supplied executable, tried before anything else

    Returns:
        Path to the executable

    Raises:
        ToolNotFoundError: If nothing resolves
    """
    searched: list[str] = []

    if explicit is not None:
        searched.append(str(explicit))
        if explicit.is_file():
            return explicit
        logger.warning("Configured FontForge path does not exist", path=str(explicit))

    for candidate in candidates:
        searched.append(candidate)
        path = Path(candidate)
        if path.is_file():
            logger.debug("FontForge found at known location", path=candidate)
            return path

    on_path = shutil.which(TOOL_NAME)
    searched.append(f"PATH:{TOOL_NAME}")
    if on_path:
        logger.debug("FontForge found on PATH", path=on_path)
        return Path(on_path)

    raise ToolNotFoundError(searched)
