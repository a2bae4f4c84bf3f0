"""HTTP client for the NB Lead Engine scoring API."""

import hashlib
import hmac
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

import requests

from ..core.models import LeadRecord

logger = logging.getLogger(__name__)

LeadInput = Union[LeadRecord, Dict[str, Any]]


class ScoringApiError(Exception):
    """Non-2xx response from the scoring API."""

    def __init__(self, status_code: int, detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Scoring API error {status_code}: {detail}")


class ScoringApiClient:
    """Score leads against a remote scoring service.

    Requests are signed with an X-NB-Signature HMAC of the body.
    """

    def __init__(
        self,
        base_url: str,
        api_secret: str,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_secret = api_secret
        self.timeout = timeout
        self.session = session or requests.Session()

    def _sign(self, body: bytes) -> str:
        return hmac.new(self.api_secret.encode(), body, hashlib.sha256).hexdigest()

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None, **kwargs) -> Dict[str, Any]:
        """Make a signed request and return the decoded JSON body."""
        body = json.dumps(payload).encode() if payload is not None else b""
        headers = {"X-NB-Signature": self._sign(body)}
        if payload is not None:
            headers["Content-Type"] = "application/json"

        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, data=body or None, headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.error(f"Scoring API request to {url} failed: {e}")
            raise

        if not response.ok:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.error(f"Scoring API error: {response.status_code} - {detail}")
            raise ScoringApiError(response.status_code, detail)

        return response.json()

    @staticmethod
    def _lead_payload(lead: LeadInput) -> Dict[str, Any]:
        return lead.to_dict() if isinstance(lead, LeadRecord) else dict(lead)

    def score_lead(self, lead: LeadInput, as_of: Optional[datetime] = None) -> Dict[str, Any]:
        """Score one lead. Returns the API's result body."""
        payload: Dict[str, Any] = {"lead": self._lead_payload(lead)}
        if as_of is not None:
            payload["as_of"] = as_of.isoformat()
        return self._request("POST", "/v1/score", payload)

    def score_batch(self, leads: List[LeadInput], as_of: Optional[datetime] = None) -> Dict[str, Any]:
        """Score up to 50 leads in one call."""
        payload: Dict[str, Any] = {"leads": [self._lead_payload(lead) for lead in leads]}
        if as_of is not None:
            payload["as_of"] = as_of.isoformat()
        return self._request("POST", "/v1/score/batch", payload)

    def nb_score(self, quality: float, intent: float, confidence: float) -> Dict[str, Any]:
        params = {"quality": quality, "intent": intent, "confidence": confidence}
        return self._request("GET", "/v1/nb-score", params=params)

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")
