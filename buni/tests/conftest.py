from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from buni.app import create_app
from buni.config import Settings
from buni.core.savings import SavingsProjectionEngine
from buni.domain.ledger import InMemoryDepositLedger
from buni.tests.support import NOW


@pytest.fixture()
def ledger() -> InMemoryDepositLedger:
    return InMemoryDepositLedger()


@pytest.fixture()
def engine(ledger: InMemoryDepositLedger) -> SavingsProjectionEngine:
    return SavingsProjectionEngine(ledger, clock=lambda: NOW)


@pytest.fixture()
def client(engine: SavingsProjectionEngine) -> FlaskClient:
    app = create_app(settings=Settings(LOG_LEVEL="WARNING"), engine=engine)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
