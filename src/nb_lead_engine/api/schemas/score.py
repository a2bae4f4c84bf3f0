"""Pydantic models for scoring requests and responses."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class ScoreRequest(BaseModel):
    lead: Dict[str, Any] = Field(
        default_factory=dict,
        description="Flat lead attributes, or nested buyer/requirements/financial/context objects",
    )
    as_of: Optional[datetime] = Field(
        default=None,
        description="Reference time for lead-age checks; omitted means no age check",
    )


class BatchScoreRequest(BaseModel):
    leads: List[Any] = Field(default_factory=list)
    as_of: Optional[datetime] = None


class FactorOut(BaseModel):
    factor: str
    points: Union[int, float]
    reason: str = ""


class QualityOut(BaseModel):
    total: int
    breakdown: List[FactorOut]
    is_disqualified: bool
    disqualification_reason: Optional[str] = None


class IntentOut(BaseModel):
    total: int
    breakdown: List[FactorOut]
    is_28_day_buyer: bool
    budget_floor_applied: bool


class ConfidenceOut(BaseModel):
    total: float
    breakdown: List[FactorOut]


class PriorityOut(BaseModel):
    priority: str
    response_time: str
    description: str


class CallPriorityOut(BaseModel):
    level: int
    description: str
    response_time: str


class ScoreResponse(BaseModel):
    success: bool = True
    lead_id: Optional[str] = None
    nb_score: int
    nb_score_color: str
    quality_score: QualityOut
    intent_score: IntentOut
    confidence_score: ConfidenceOut
    classification: str
    priority: PriorityOut
    call_priority: CallPriorityOut
    is_fake_lead: bool
    fake_lead_flags: List[str]
    risk_flags: List[str]
    is_28_day_buyer: bool
    low_urgency_flag: bool
    summary: str
    next_action: str
    recommendations: List[str]


class BatchItemError(BaseModel):
    success: bool = False
    index: int
    error: str
    detail: str


class BatchScoreResponse(BaseModel):
    success: bool = True
    total: int
    scored: int
    results: List[Dict[str, Any]]


class NBScoreResponse(BaseModel):
    nb_score: int
    color: str
    band: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    detail: str
