"""
The Seed class populates fixtures for functional testing.

For a model and the models it depends on, Seed:
1. Creates each table from <tables_dir>/<model>.sql (when that file exists)
2. Runs each <model>_setup.sql fixture before a test
3. Runs each <model>_teardown.sql fixture after a test

Usage:
    seed = Seed(engine, "comment", ["post", "user"])
    await seed.setup()
    ...  # run the test
    await seed.teardown()
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from sqlseed.core.config import settings
from sqlseed.core.logging import get_logger
from sqlseed.errors import (
    CREATE_TABLE_ERROR,
    QUERY_ERROR,
    FixtureReadError,
    QueryExecutionError,
    SeedError,
    SeedFailedError,
    TableCreationError,
    format_error,
)
from sqlseed.fixtures import FileRole, fixtures_for, read_sql

logger = get_logger(__name__)

CREATE_TABLE = "create_table"


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of one scheduled operation.

    Attributes:
        model: model the operation ran for
        kind: "create_table", "setup" or "teardown"
        path: script file involved, if any
        error: the failure, None on success
        skipped: True when there was nothing to run (e.g. no table file)
    """

    model: str
    kind: str
    path: Optional[Path] = None
    error: Optional[SeedError] = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SeedReport:
    """Every operation a setup() or teardown() call scheduled, in order."""

    results: List[OperationResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)

    @property
    def failures(self) -> List[OperationResult]:
        return [result for result in self.results if not result.ok]

    def raise_for_errors(self) -> None:
        """Raise SeedFailedError listing every failure, if there were any."""
        failures = self.failures
        if failures:
            raise SeedFailedError(failures)

    def __len__(self) -> int:
        return len(self.results)


# =============================================================================
# SEED
# =============================================================================


class Seed:
    """
    Sets up and tears down the fixtures for a model and its dependencies.

    Args:
        engine: async engine whose pool provides a connection per script
        model: the model on which to operate
        dependencies: models required for this model to be tested.
            Duplicates are kept and simply run again.
        fixtures_dir: directory of <model>_{setup,teardown}.sql scripts
        tables_dir: directory of <model>.sql table definitions
        encoding: text encoding of the scripts
        strict: raise SeedFailedError when anything failed
    """

    def __init__(
        self,
        engine: AsyncEngine,
        model: str,
        dependencies: Optional[Sequence[str]] = None,
        *,
        fixtures_dir: Optional[Path] = None,
        tables_dir: Optional[Path] = None,
        encoding: Optional[str] = None,
        strict: Optional[bool] = None,
    ):
        self.engine = engine
        self.model = model
        self.dependencies = list(dependencies or [])
        self.fixtures_dir = Path(fixtures_dir) if fixtures_dir else settings.fixtures_dir
        self.tables_dir = Path(tables_dir) if tables_dir else settings.tables_dir
        self.encoding = encoding or settings.file_encoding
        self.strict = settings.strict if strict is None else strict

    @property
    def models(self) -> List[str]:
        return [self.model, *self.dependencies]

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def setup(self, on_done: Optional[Callable[[], None]] = None) -> SeedReport:
        """
        Create the tables and seed the fixture rows for every required model.

        Models are prepared concurrently. Within one model the table is
        always created before its fixtures run.

        on_done fires exactly once, after every operation has settled,
        whether or not some of them failed.
        """
        report = await self._run_all(self._setup_model)
        self._finish("setup", report, on_done)
        return report

    async def teardown(self, on_done: Optional[Callable[[], None]] = None) -> SeedReport:
        """Run the teardown fixtures for every required model."""
        report = await self._run_all(self._teardown_model)
        self._finish("teardown", report, on_done)
        return report

    def setup_sync(self, on_done: Optional[Callable[[], None]] = None) -> SeedReport:
        """
        Blocking setup() for synchronous test suites.

        Each call runs its own event loop, so the engine should not keep
        pooled connections between calls (create it with poolclass=NullPool).
        """
        return asyncio.run(self.setup(on_done))

    def teardown_sync(self, on_done: Optional[Callable[[], None]] = None) -> SeedReport:
        """Blocking teardown(); see setup_sync()."""
        return asyncio.run(self.teardown(on_done))

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def create_table(self, model: str) -> OperationResult:
        """
        Create the model's table from its definition script.

        A missing definition file means there is nothing to create.
        """
        path = self.tables_dir / f"{model}.sql"
        return await self._run_script(
            model, CREATE_TABLE, path, CREATE_TABLE_ERROR, TableCreationError
        )

    async def seed_or_tear_down(self, model: str, role: FileRole) -> List[OperationResult]:
        """Run every fixture of the given role for the model, one after another."""
        try:
            fixtures = fixtures_for(self.fixtures_dir, model, role)
        except OSError as exc:
            error = FixtureReadError(
                f"Could not list {self.fixtures_dir}: {exc}", model=model, path=self.fixtures_dir
            )
            logger.error("seed.scan_failed", model=model, path=str(self.fixtures_dir), reason=str(exc))
            return [OperationResult(model, role.value, self.fixtures_dir, error=error)]

        results = []
        for fixture in fixtures:
            results.append(
                await self._run_script(
                    model, role.value, fixture.path, QUERY_ERROR, QueryExecutionError
                )
            )
        return results

    async def execute_sql(
        self,
        sql: str,
        message: str = QUERY_ERROR,
        *,
        error_class: type = QueryExecutionError,
        model: Optional[str] = None,
        path: Optional[Path] = None,
    ) -> None:
        """
        Run a raw SQL script on a freshly acquired connection.

        The connection goes back to the pool as soon as the script finishes,
        whether it succeeded or failed.

        Raises:
            QueryExecutionError (or error_class): wrapping the driver error
        """
        try:
            async with self.engine.connect() as connection:
                await connection.exec_driver_sql(
                    sql, execution_options={"no_parameters": True}
                )
                await connection.commit()
        except SQLAlchemyError as exc:
            raise error_class(
                format_error(message, sql, exc), model=model, path=path
            ) from exc

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _setup_model(self, model: str) -> List[OperationResult]:
        created = await self.create_table(model)
        if not created.ok:
            # Seeding into a table that failed to be created only adds noise
            return [created]
        return [created, *await self.seed_or_tear_down(model, FileRole.SETUP)]

    async def _teardown_model(self, model: str) -> List[OperationResult]:
        return await self.seed_or_tear_down(model, FileRole.TEARDOWN)

    async def _run_all(self, prepare) -> SeedReport:
        # Let every model settle before anything unexpected is re-raised
        batches = await asyncio.gather(
            *(prepare(model) for model in self.models), return_exceptions=True
        )
        for batch in batches:
            if isinstance(batch, BaseException):
                raise batch
        return SeedReport([result for batch in batches for result in batch])

    async def _run_script(
        self,
        model: str,
        kind: str,
        path: Path,
        message: str,
        error_class: type,
    ) -> OperationResult:
        try:
            sql = read_sql(path, self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            error = FixtureReadError(f"Could not read {path}: {exc}", model=model, path=path)
            logger.error("seed.read_failed", model=model, path=str(path), reason=str(exc))
            return OperationResult(model, kind, path, error=error)

        if sql is None:
            logger.debug("seed.script_missing", model=model, kind=kind, path=str(path))
            return OperationResult(model, kind, path, skipped=True)

        try:
            await self.execute_sql(
                sql, message, error_class=error_class, model=model, path=path
            )
        except SeedError as exc:
            logger.error("seed.query_failed", model=model, kind=kind, path=str(path), reason=str(exc))
            return OperationResult(model, kind, path, error=exc)

        logger.debug("seed.script_ran", model=model, kind=kind, path=str(path))
        return OperationResult(model, kind, path)

    def _finish(
        self,
        action: str,
        report: SeedReport,
        on_done: Optional[Callable[[], None]],
    ) -> None:
        logger.info(
            f"seed.{action}_done",
            models=self.models,
            operations=len(report),
            failures=len(report.failures),
        )
        if on_done is not None:
            on_done()
        if self.strict:
            report.raise_for_errors()
