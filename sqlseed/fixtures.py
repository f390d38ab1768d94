"""
Fixture file discovery and classification.

Fixture scripts follow a naming convention:

    <model>_setup.sql      rows inserted before a test
    <model>_teardown.sql   rows removed after a test

Each file is classified into a FileRole exactly once, when the directory is
scanned. Files whose role cannot be determined are reported and skipped.
"""

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from sqlseed.core.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


# =============================================================================
# FILENAME PATTERNS
# =============================================================================

SQL_EXTENSION = ".sql"

# One trailing "_word" suffix, e.g. "_setup" or "_teardown"
BASE_FILENAME_REGEX = re.compile(r"_+[a-zA-Z]+$")

SETUP_FILE_REGEX = re.compile(r"_setup")

ROLE_SUFFIX_REGEX = re.compile(r"_(setup|teardown)\.sql$", re.IGNORECASE)


class FileRole(str, Enum):
    """Whether a fixture runs before or after a test."""

    SETUP = "setup"
    TEARDOWN = "teardown"

    @classmethod
    def from_filename(cls, filename: Optional[PathLike]) -> Optional["FileRole"]:
        """
        Derive the role from the filename suffix.

        Returns None when the name ends in neither _setup.sql nor _teardown.sql.
        """
        match = ROLE_SUFFIX_REGEX.search(os.path.basename(filename or ""))
        if match is None:
            return None
        return cls(match.group(1).lower())


@dataclass(frozen=True)
class FixtureFile:
    """A classified fixture script on disk."""

    path: Path
    model: str
    role: FileRole


# =============================================================================
# NAME HELPERS
# =============================================================================


def get_base_name(filename: Optional[PathLike]) -> str:
    """
    Get the model a fixture file belongs to.

    Examples:
        get_base_name("user_setup.sql")           -> "user"
        get_base_name("order_items_teardown.sql") -> "order_items"
    """
    name = os.path.basename(filename or "")
    if name.lower().endswith(SQL_EXTENSION):
        name = name[: -len(SQL_EXTENSION)]
    return BASE_FILENAME_REGEX.sub("", name).lower()


def is_setup(filename: Optional[PathLike]) -> bool:
    """Whether the filename marks a setup script."""
    return SETUP_FILE_REGEX.search(str(filename or "").lower()) is not None


# =============================================================================
# DISCOVERY
# =============================================================================


def scan_fixtures(directory: PathLike) -> List[FixtureFile]:
    """
    Classify every SQL script in a fixture directory.

    The directory is listed once per call and nothing is cached, so edits
    to fixture files are picked up by the next test.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("fixtures.directory_missing", directory=str(directory))
        return []

    fixtures = []
    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.suffix.lower() != SQL_EXTENSION:
            continue

        role = FileRole.from_filename(path.name)
        if role is None:
            logger.warning("fixtures.unclassified", path=str(path))
            continue

        fixtures.append(FixtureFile(path=path, model=get_base_name(path.name), role=role))

    return fixtures


def fixtures_for(directory: PathLike, model: str, role: FileRole) -> List[FixtureFile]:
    """Fixture files for one model and role, in filename order."""
    model = model.lower()
    return [
        fixture
        for fixture in scan_fixtures(directory)
        if fixture.model == model and fixture.role is role
    ]


def read_sql(path: PathLike, encoding: str = "utf-8") -> Optional[str]:
    """
    Read a script as text.

    Returns None when the path is not a regular file (nothing to run).
    """
    path = Path(path)
    if not path.is_file():
        return None
    return path.read_text(encoding=encoding)
