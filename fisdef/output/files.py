"""Output file naming and creation."""

import logging
from pathlib import Path
from typing import IO, Union

from ..errors import FileCreateFailure

logger = logging.getLogger(__name__)


def output_path(prefix: Union[str, Path], index: int) -> Path:
    """
    Output path for an interval, without an extension.

    The directory of the prefix is kept and the interval index appended to
    its stem, e.g. "out/run.txt" -> "out/run_3".
    """
    path = Path(prefix)
    name = path.stem or "step"
    logger.debug(f"Output prefix: {name}_{index}")
    return path.with_name(f"{name}_{index}")


def create_file_with_fallback(path: Path, extension: str, default: str) -> IO[str]:
    """
    Open <path>.<extension> for writing, creating parent directories.

    If the directories cannot be created the file goes into the working
    directory instead. If the file itself cannot be created, the default
    name is tried.

    Raises:
        FileCreateFailure: If the fallback cannot be created either
    """
    target = Path(path)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"{e}. Falling back to working directory.")
        target = Path(target.name)

    target = target.with_name(f"{target.name}.{extension}")
    try:
        return open(target, "w", encoding="utf-8")
    except OSError as e:
        logger.warning(f"{e}. Falling back to \"{default}\".")

    try:
        return open(default, "w", encoding="utf-8")
    except OSError as e:
        raise FileCreateFailure(f"Unable to create fallback file \"{default}\": {e}")
