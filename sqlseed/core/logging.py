"""
Logging for the seeder.

Every seeding step is one structlog event with key/value context:

    12:04:31 [info     ] seed.setup_done  failures=0 models=['comment', 'user'] operations=4

Nothing is logged until setup_logging() runs (the pytest plugin calls it
when pytest starts); before that structlog's defaults apply.
"""

import logging
from typing import Optional

import structlog

from sqlseed.core.config import settings


# =============================================================================
# PROCESSORS
# =============================================================================
# Applied in order to every event before it is rendered.
# Tests read the output in a terminal, so lines are plain text, not JSON.

PROCESSORS = [
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%H:%M:%S"),
    structlog.dev.ConsoleRenderer(colors=False),
]


def level_number(name: str) -> int:
    """Map "debug", "INFO", ... to a logging level; unknown names mean INFO."""
    level = getattr(logging, name.upper(), None)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: Optional[str] = None) -> None:
    """Route seeder events to stdout, dropping those below `level` (default: settings.log_level)."""
    structlog.configure(
        processors=PROCESSORS,
        wrapper_class=structlog.make_filtering_bound_logger(
            level_number(level or settings.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None):
    """Module-level logger; resolves the configuration lazily on first use."""
    return structlog.get_logger(name)
