"""
Error types raised while seeding fixtures.

Every error remembers which model (and which script file, when there is
one) it came from, so a failing test can point at the exact fixture.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from sqlseed.seed import OperationResult


# =============================================================================
# MESSAGE FORMATS
# =============================================================================
# Both formats take (sql, driver error) in that order.

CREATE_TABLE_ERROR = "This table (%s) could not be created:\t%s"
QUERY_ERROR = "Could not perform query:\n%s\nError:\t%s"


class SeedError(RuntimeError):
    """Base error for seeding failures."""

    def __init__(
        self,
        message: str,
        *,
        model: Optional[str] = None,
        path: Optional[Path] = None,
    ):
        super().__init__(message)
        self.model = model
        self.path = path


class QueryExecutionError(SeedError):
    """A fixture script could not be executed."""


class TableCreationError(QueryExecutionError):
    """A table-definition script could not be executed."""


class FixtureReadError(SeedError):
    """A script file exists but could not be read as text."""


class SeedFailedError(SeedError):
    """
    Raised by SeedReport.raise_for_errors() when any operation failed.

    Attributes:
        failures: every failed OperationResult, in scheduling order
        model: set when every failure belongs to the same model
        path: set when there is exactly one failure
    """

    def __init__(self, failures: Sequence["OperationResult"]):
        self.failures = list(failures)
        models = {result.model for result in self.failures}
        lines = [f"{len(self.failures)} seeding operation(s) failed:"]
        for result in self.failures:
            lines.append(f"  [{result.model}/{result.kind}] {result.error}")
        super().__init__(
            "\n".join(lines),
            model=models.pop() if len(models) == 1 else None,
            path=self.failures[0].path if len(self.failures) == 1 else None,
        )


def format_error(template: str, sql: str, error: BaseException) -> str:
    """Render one of the message formats above."""
    return template % (sql, error)
