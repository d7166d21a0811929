"""
Logging setup for the ``entity-admin`` command.

Log records go to stderr so that the tables and JSON the CLI prints on
stdout can be piped without noise; ``LOG_FILE`` adds a UTF-8 file copy
(``~`` is expanded).  The level is applied on every call, which lets
``--log-level`` override ``LOG_LEVEL`` even after an earlier setup in
the same process, while handlers are attached only once.  The
``requests``/``urllib3`` loggers inherit the root level, so ``DEBUG``
also shows the HTTP connection traffic of the API client.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive.  Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, no file
        handler is added.
    """
    logger = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)
    if logger.handlers:
        # Already configured (tests, repeated CLI invocations in one process).
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).expanduser().resolve()
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
