"""Lead scoring routes."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import ValidationError

from ...core.config import ScoringConfigManager
from ...core.models import LeadRecord
from ...core.nb_score import get_nb_score_band
from ...core.scorer import LeadScorer
from ...core.summary import determine_next_action, generate_recommendations, generate_summary
from ..config import settings
from ..middleware.auth import verify_signature
from ..schemas.score import (
    BatchItemError,
    BatchScoreRequest,
    BatchScoreResponse,
    ErrorResponse,
    NBScoreResponse,
    ScoreRequest,
    ScoreResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["score"])

_ERRORS = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@lru_cache(maxsize=1)
def get_scorer() -> LeadScorer:
    """Scorer built from the configured scoring config file."""
    path = settings.scoring_config_path
    manager = ScoringConfigManager(Path(path) if path else None)
    logger.info(f"Loaded scoring config from {manager.config_path}")
    return LeadScorer(manager.config)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"success": False, "error": "validation_error", "detail": detail},
    )


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise _bad_request("Invalid JSON body")


def _score_payload(scorer: LeadScorer, data: Dict[str, Any], as_of) -> Dict[str, Any]:
    lead = LeadRecord.from_dict(data)
    result = scorer.score_lead(lead, as_of)
    payload = {"success": True, **result.to_dict()}
    payload["summary"] = generate_summary(lead, result, scorer.config.risk)
    payload["next_action"] = determine_next_action(lead, result)
    payload["recommendations"] = generate_recommendations(lead, result, scorer.config.risk)
    return payload


@router.post("/score", response_model=ScoreResponse, responses=_ERRORS)
async def score(request: Request, _auth=Depends(verify_signature), scorer: LeadScorer = Depends(get_scorer)):
    """Score a single lead.

    Body: {"lead": {...}, "as_of": "2026-01-31T00:00:00Z"}. ``as_of`` is
    optional and only feeds the lead-age risk flag.
    """
    body = await _read_json(request)
    try:
        payload = ScoreRequest.model_validate(body)
    except ValidationError as e:
        raise _bad_request(str(e))

    try:
        return _score_payload(scorer, payload.lead, payload.as_of)
    except Exception:
        logger.exception("Lead scoring error")
        raise HTTPException(
            status_code=500,
            detail={"success": False, "error": "server_error", "detail": "Internal processing error"},
        )


@router.post("/score/batch", response_model=BatchScoreResponse, responses=_ERRORS)
async def score_batch(request: Request, _auth=Depends(verify_signature), scorer: LeadScorer = Depends(get_scorer)):
    """Score up to ``NB_API_MAX_BATCH`` leads (default 50) in one call."""
    body = await _read_json(request)
    try:
        payload = BatchScoreRequest.model_validate(body)
    except ValidationError as e:
        raise _bad_request(str(e))

    limit = settings.max_batch_size
    if not payload.leads:
        raise _bad_request("leads must be a non-empty list")
    if len(payload.leads) > limit:
        raise _bad_request(f"Batch of {len(payload.leads)} leads exceeds the maximum of {limit}")

    logger.info(f"Scoring batch of {len(payload.leads)} leads")
    results = []
    scored = 0
    for index, item in enumerate(payload.leads):
        if not isinstance(item, dict):
            results.append(BatchItemError(
                index=index,
                error="validation_error",
                detail=f"Expected a lead object, got {type(item).__name__}",
            ).model_dump())
            continue
        try:
            results.append(_score_payload(scorer, item, payload.as_of))
            scored += 1
        except Exception:
            logger.exception(f"Batch scoring error at index {index}")
            results.append(BatchItemError(
                index=index, error="server_error", detail="Internal processing error"
            ).model_dump())

    return BatchScoreResponse(total=len(payload.leads), scored=scored, results=results)


@router.get("/nb-score", response_model=NBScoreResponse, responses=_ERRORS)
async def nb_score(
    quality: float = Query(default=0, ge=0, le=100),
    intent: float = Query(default=0, ge=0, le=100),
    confidence: float = Query(default=0, ge=0, le=10),
    _auth=Depends(verify_signature),
    scorer: LeadScorer = Depends(get_scorer),
):
    """Composite NB Score for a given score triple."""
    value = scorer.calculate_nb_score(quality, intent, confidence)
    band = get_nb_score_band(value, scorer.config.nb_score)
    return NBScoreResponse(nb_score=value, color=scorer.get_nb_score_color(value), band=band.value)
