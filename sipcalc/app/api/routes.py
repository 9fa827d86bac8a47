"""HTTP routes for the calculation API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, ValidationError
from werkzeug.exceptions import BadRequest

from sipcalc import __version__
from sipcalc.core.projection import (
    compare_scenarios,
    compute_lumpsum,
    compute_projection,
    compute_required_sip,
    compute_sip,
)
from sipcalc.core.withdrawal import compute_swp, convert_withdrawal
from sipcalc.models import (
    ProjectionMode,
    ProjectionParameters,
    RequiredSIPParameters,
    SWPParameters,
    WithdrawalConversionRequest,
)
from sipcalc.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    return jsonify({"detail": [{"msg": exc.description}]}), HTTPStatus.BAD_REQUEST


def _payload() -> Dict[str, Any]:
    raw_payload = request.get_json(force=True, silent=True)
    if not isinstance(raw_payload, dict):
        raise BadRequest("request body must be a JSON object")
    return raw_payload


def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(by_alias=True, mode="json")


def _with_mode(payload: Dict[str, Any], mode: ProjectionMode) -> Dict[str, Any]:
    return {**payload, "mode": mode.value}


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(
        status="ok",
        service=current_app.config["SERVICE_NAME"],
        version=__version__,
    )
    return jsonify(response.model_dump())


@api_bp.post("/calc/lumpsum")
def lumpsum() -> Any:
    params = ProjectionParameters.model_validate(_with_mode(_payload(), ProjectionMode.LUMPSUM))
    logger.debug("lumpsum projection: %s", params)
    return jsonify(_dump(compute_lumpsum(params)))


@api_bp.post("/calc/sip")
def sip() -> Any:
    params = ProjectionParameters.model_validate(_with_mode(_payload(), ProjectionMode.SIP))
    logger.debug("sip projection: %s", params)
    return jsonify(_dump(compute_sip(params)))


@api_bp.post("/calc/required-sip")
def required_sip() -> Any:
    params = RequiredSIPParameters.model_validate(_payload())
    logger.debug("required sip solve: %s", params)
    return jsonify(_dump(compute_required_sip(params)))


@api_bp.post("/calc/swp")
def swp() -> Any:
    params = SWPParameters.model_validate(_payload())
    logger.debug("swp projection: %s", params)
    return jsonify(_dump(compute_swp(params)))


@api_bp.post("/calc/swp/convert")
def swp_convert() -> Any:
    """Recompute withdrawal amount from rate (or the reverse) for the current corpus."""
    conversion = WithdrawalConversionRequest.model_validate(_payload())
    return jsonify(_dump(convert_withdrawal(conversion)))


@api_bp.post("/calc/projection")
def projection() -> Any:
    """Any mode, chosen by the `mode` tag in the body."""
    params = ProjectionParameters.model_validate(_payload())
    logger.debug("%s projection: %s", params.mode.value, params)
    return jsonify(_dump(compute_projection(params)))


@api_bp.post("/calc/scenarios")
def scenarios() -> Any:
    params = ProjectionParameters.model_validate(_payload())
    return jsonify([_dump(entry) for entry in compare_scenarios(params)])
