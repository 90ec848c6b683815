"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from buni.core.health import check_health, get_ping_message
from buni.core.progress import calculate_goal_progress
from buni.core.savings import SavingsProjectionEngine
from buni.errors import InvalidSavingsInput, LedgerError
from buni.models import SavingsGoalSnapshot
from buni.schemas.health import PingResponse
from buni.schemas.savings import (
    DepositHistoryResponse,
    DepositRequest,
    DepositResponse,
    TimelineRequest,
    TimelineResponse,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _engine() -> SavingsProjectionEngine:
    return current_app.extensions["savings_engine"]


def _json_body() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvalidSavingsInput)
def _handle_invalid_input(exc: InvalidSavingsInput):
    return jsonify({"detail": str(exc)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(LedgerError)
def _handle_ledger_error(exc: LedgerError):
    logger.error("deposit ledger unavailable: %s", exc)
    return jsonify({"detail": "Deposit ledger unavailable"}), HTTPStatus.SERVICE_UNAVAILABLE


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message())
    return jsonify(response.model_dump())


@api_bp.get("/health")
def health() -> Any:
    """Deposit ledger availability."""
    report = check_health(_engine())
    status = HTTPStatus.OK if report.ledgerAvailable else HTTPStatus.SERVICE_UNAVAILABLE
    return jsonify(report.model_dump()), status


@api_bp.get("/savings/deposits")
def list_deposits() -> Any:
    """Full, unfiltered deposit history."""
    response = DepositHistoryResponse(deposits=_engine().get_deposit_history())
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/savings/deposits")
def add_deposit() -> Any:
    payload = DepositRequest.model_validate(_json_body())
    record = _engine().record_deposit(payload.amount, str(payload.goalId))
    response = DepositResponse(deposit=record)
    return jsonify(response.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.post("/savings/timeline")
def savings_timeline() -> Any:
    """Project a goal's completion from the deposits recorded so far."""
    payload = TimelineRequest.model_validate(_json_body())
    engine = _engine()
    timeline = engine.timeline_for_goal(payload.targetAmount, payload.currentAmount, str(payload.goalId))
    response = TimelineResponse.from_timeline(timeline, engine.format_timeline(timeline))
    return jsonify(response.model_dump())


@api_bp.post("/savings/progress")
def savings_progress() -> Any:
    goal = SavingsGoalSnapshot.model_validate(_json_body())
    progress = calculate_goal_progress(goal, now=_engine().clock())
    return jsonify(progress.model_dump())
