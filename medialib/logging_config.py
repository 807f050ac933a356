import sys
from typing import Optional, TextIO

from loguru import logger

_console_sink_id: Optional[int] = None


def setup_logging(level: str = "INFO", sink: Optional[TextIO] = None) -> int:
    """Send loguru output to stdout (or `sink`) at `level`; calling again replaces the sink."""
    global _console_sink_id
    if _console_sink_id is None:
        logger.remove()  # drop loguru's default stderr handler
    else:
        logger.remove(_console_sink_id)
    _console_sink_id = logger.add(sink or sys.stdout, level=level.upper(), colorize=sink is None)
    return _console_sink_id
