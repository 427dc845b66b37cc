"""MySQL persistence (PyMySQL).

Responsibility:
- Open one connection per save, run one parameterized INSERT, commit.
- Close the connection on every path.
- Log driver failures and report them as a `StepOutcome`; never raise them.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

import pymysql

from core.domain.models import TABLE_NAME, DatabaseConfig, DatabaseRow, StepOutcome
from core.errors import DriverError


logger = logging.getLogger(__name__)

STEP_NAME = "persist"

# Values only ever travel as driver parameters.
INSERT_QUERY = f"INSERT INTO {TABLE_NAME} (column1, column2) VALUES (%s, %s)"

ConnectionFactory = Callable[..., Any]


class PersistenceWriter:
    """Writes a single `DatabaseRow` per call."""

    def __init__(
        self,
        config: DatabaseConfig,
        *,
        connect: ConnectionFactory = pymysql.connect,
    ) -> None:
        self._config = config
        self._connect = connect

    def _insert(self, row: DatabaseRow) -> None:
        connection = self._connect(
            host=self._config.host,
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
        try:
            with connection.cursor() as cursor:
                cursor.execute(INSERT_QUERY, row.as_params())
            connection.commit()
        finally:
            connection.close()

    async def save(self, value: str) -> StepOutcome:
        row = DatabaseRow(column1=value)
        try:
            await asyncio.to_thread(self._insert, row)
        except pymysql.MySQLError as exc:
            error = DriverError(f"Error executing query: {exc}")
            logger.error("%s", error)
            return StepOutcome.failure(STEP_NAME, error)

        logger.info("Data saved")
        return StepOutcome.success(STEP_NAME, detail=f"1 row into {TABLE_NAME}")
