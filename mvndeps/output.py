"""Output sinks: files and the console log."""

import logging
from pathlib import Path
from typing import Optional, Union

from .exceptions import SerializationIOError

logger = logging.getLogger(__name__)


def write_output(
    content: str,
    output_file: Union[str, Path],
    append: bool = False,
    encoding: Optional[str] = None,
) -> None:
    """
    Write ``content`` to ``output_file``, creating parent directories.

    Raises:
        SerializationIOError: If the file cannot be written
    """
    path = Path(output_file)
    mode = 'a' if append else 'w'
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, mode, encoding=encoding or 'UTF-8') as f:
            f.write(content)
    except OSError as e:
        raise SerializationIOError(path, e) from e
    logger.debug(f"Wrote {len(content)} characters to {path}")


def log_output(content: str, log: Optional[logging.Logger] = None) -> None:
    """Log ``content`` line by line at info level."""
    log = log or logger
    for line in content.splitlines():
        log.info(line)
