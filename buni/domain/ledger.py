from __future__ import annotations

import logging
import sqlite3
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from buni.config import Settings
from buni.errors import LedgerError
from buni.models import DepositRecord

logger = logging.getLogger(__name__)


class DepositLedger(ABC):
    """Append-only store of deposits.

    Implementations must make ``append`` atomic per call: two concurrent
    appends for the same goal both land in the ledger.
    """

    @abstractmethod
    def read_all(self) -> List[DepositRecord]:
        """Return every stored deposit, oldest first."""

    @abstractmethod
    def append(self, record: DepositRecord) -> None:
        """Persist one deposit."""


class InMemoryDepositLedger(DepositLedger):
    def __init__(self, records: List[DepositRecord] | None = None):
        self._records: List[DepositRecord] = list(records or [])
        self._lock = threading.Lock()

    def read_all(self) -> List[DepositRecord]:
        with self._lock:
            return list(self._records)

    def append(self, record: DepositRecord) -> None:
        with self._lock:
            self._records.append(record)


class SqliteDepositLedger(DepositLedger):
    def __init__(self, db_path: Union[str, Path]):
        self.db_path = str(db_path)
        self.init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        try:
            conn = self._connect()
        except sqlite3.Error as exc:
            raise LedgerError(f"cannot open deposit ledger at {self.db_path}") from exc
        try:
            conn.execute(
                """
                create table if not exists deposits (
                    id integer primary key autoincrement,
                    amount real not null,
                    date text not null,
                    goal_id text not null
                )
                """
            )
            conn.commit()
        except sqlite3.Error as exc:
            raise LedgerError("cannot create deposits table") from exc
        finally:
            conn.close()

    def read_all(self) -> List[DepositRecord]:
        try:
            conn = self._connect()
            try:
                rows = conn.execute(
                    """
                    select amount, date, goal_id
                    from deposits
                    order by id
                    """
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.error("failed to read deposit ledger %s", self.db_path, exc_info=True)
            raise LedgerError("failed to read deposit ledger") from exc

        records: List[DepositRecord] = []
        for row in rows:
            try:
                records.append(
                    DepositRecord(amount=row["amount"], date=row["date"], goalId=row["goal_id"])
                )
            except ValidationError:
                logger.debug("skipping malformed deposit row %r", dict(row))
        return records

    def append(self, record: DepositRecord) -> None:
        try:
            conn = self._connect()
            try:
                # the connection context manager commits or rolls back the insert
                with conn:
                    conn.execute(
                        """
                        insert into deposits (amount, date, goal_id)
                        values (?, ?, ?)
                        """,
                        (record.amount, record.date.isoformat(), record.goalId),
                    )
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.error("failed to append deposit to %s", self.db_path, exc_info=True)
            raise LedgerError("failed to write deposit ledger") from exc


def build_ledger(settings: Settings) -> DepositLedger:
    backend = settings.LEDGER_BACKEND
    if backend == "sqlite":
        return SqliteDepositLedger(settings.LEDGER_DB_PATH)
    return InMemoryDepositLedger()
