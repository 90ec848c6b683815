"""Health-check helpers used by the API."""

import logging

from buni.core.savings import SavingsProjectionEngine
from buni.errors import LedgerError
from buni.schemas.health import HealthResponse

logger = logging.getLogger(__name__)


def get_ping_message() -> str:
    """Return a static ping message."""
    return "pong"


def check_health(engine: SavingsProjectionEngine) -> HealthResponse:
    """Report whether the deposit ledger can be read."""
    try:
        deposits = len(engine.get_deposit_history())
    except LedgerError:
        logger.warning("health check could not read the deposit ledger")
        return HealthResponse(status="degraded", ledgerAvailable=False, deposits=None)
    return HealthResponse(status="ok", ledgerAvailable=True, deposits=deposits)
