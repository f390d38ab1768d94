"""
sqlseed - SQL fixture seeding for functional tests.

Import the public API from here:
    from sqlseed import Seed, authenticate
"""

from sqlseed.authenticate import DEFAULT_TESTING_USER, authenticate, deauthenticate
from sqlseed.errors import (
    FixtureReadError,
    QueryExecutionError,
    SeedError,
    SeedFailedError,
    TableCreationError,
)
from sqlseed.fixtures import FileRole, FixtureFile, get_base_name, is_setup, scan_fixtures
from sqlseed.seed import OperationResult, Seed, SeedReport
from sqlseed.testing import TestHelpers, attach_test_helpers

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TESTING_USER",
    "FileRole",
    "FixtureFile",
    "FixtureReadError",
    "OperationResult",
    "QueryExecutionError",
    "Seed",
    "SeedError",
    "SeedFailedError",
    "SeedReport",
    "TableCreationError",
    "TestHelpers",
    "attach_test_helpers",
    "authenticate",
    "deauthenticate",
    "get_base_name",
    "is_setup",
    "scan_fixtures",
]
