"""Shared test doubles and the fixed clock value used across the suite."""

from datetime import datetime, timezone

from buni.domain.ledger import DepositLedger
from buni.errors import LedgerError

NOW = datetime(2023, 1, 10, tzinfo=timezone.utc)


class BrokenLedger(DepositLedger):
    def read_all(self):
        raise LedgerError("storage offline")

    def append(self, record):
        raise LedgerError("storage offline")
