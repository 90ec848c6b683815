"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask

from buni.app.api.routes import api_bp
from buni.config import Settings, get_settings
from buni.core.logging_setup import setup_logging
from buni.core.savings import SavingsProjectionEngine
from buni.domain.ledger import DepositLedger, build_ledger


def create_app(
    settings: Optional[Settings] = None,
    ledger: Optional[DepositLedger] = None,
    engine: Optional[SavingsProjectionEngine] = None,
) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = Flask(__name__)
    app.config["DEBUG"] = settings.DEBUG
    app.config["APP_NAME"] = settings.APP_NAME

    if engine is None:
        engine = SavingsProjectionEngine(ledger or build_ledger(settings))
    app.extensions["savings_engine"] = engine

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
