import logging
import os
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LEVEL_ENV_VARS = ("JSONSCAN_LOG_LEVEL", "LOG_LEVEL")


def resolve_level(level: Union[str, int, None]) -> int:
    """Turn a level name, number or ``None`` into a ``logging`` level.

    ``None`` checks ``$JSONSCAN_LOG_LEVEL`` and then ``$LOG_LEVEL``. Unknown
    names fall back to ``INFO``.
    """
    if level is None:
        level = next((os.environ[v] for v in LEVEL_ENV_VARS if os.getenv(v)), "INFO")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: Union[str, int, None] = None) -> None:
    """Send log records to stderr so stdout stays free for JSONL output."""
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT, stream=sys.stderr)
