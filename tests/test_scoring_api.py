"""Tests for the scoring API client."""

import hashlib
import hmac
import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest
import requests

from nb_lead_engine.core.models import LeadRecord
from nb_lead_engine.integrations.scoring_api import ScoringApiClient, ScoringApiError


def make_response(status_code=200, body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text or json.dumps(body)
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


class TestScoringApiClient:
    """Tests for ScoringApiClient."""

    def setup_method(self):
        self.session = MagicMock()
        self.client = ScoringApiClient("https://scoring.example.test/", "s3cret", session=self.session)

    def test_score_lead_signs_body(self):
        self.session.request.return_value = make_response(body={"success": True, "nb_score": 86})

        result = self.client.score_lead({"full_name": "Sarah"}, as_of=datetime(2026, 1, 31))

        assert result["nb_score"] == 86
        method, url = self.session.request.call_args.args
        kwargs = self.session.request.call_args.kwargs
        assert method == "POST"
        assert url == "https://scoring.example.test/v1/score"
        assert json.loads(kwargs["data"]) == {"lead": {"full_name": "Sarah"}, "as_of": "2026-01-31T00:00:00"}
        expected = hmac.new(b"s3cret", kwargs["data"], hashlib.sha256).hexdigest()
        assert kwargs["headers"]["X-NB-Signature"] == expected
        assert kwargs["timeout"] == 10

    def test_lead_record_is_serialised(self):
        self.session.request.return_value = make_response(body={"success": True})
        self.client.score_lead(LeadRecord(full_name="Ana", budget="£500k"))
        sent = json.loads(self.session.request.call_args.kwargs["data"])
        assert sent == {"lead": {"full_name": "Ana", "budget": "£500k"}}

    def test_score_batch(self):
        self.session.request.return_value = make_response(body={"success": True, "total": 2})
        self.client.score_batch([{"id": "a"}, LeadRecord(id="b")])
        sent = json.loads(self.session.request.call_args.kwargs["data"])
        assert sent == {"leads": [{"id": "a"}, {"id": "b"}]}

    def test_nb_score_uses_query_params(self):
        self.session.request.return_value = make_response(body={"nb_score": 67})
        assert self.client.nb_score(55, 70, 9)["nb_score"] == 67
        kwargs = self.session.request.call_args.kwargs
        assert kwargs["params"] == {"quality": 55, "intent": 70, "confidence": 9}
        assert kwargs["data"] is None
        assert kwargs["headers"]["X-NB-Signature"] == hmac.new(b"s3cret", b"", hashlib.sha256).hexdigest()

    def test_error_detail(self):
        detail = {"success": False, "error": "auth_error", "detail": "Invalid or missing authentication"}
        self.session.request.return_value = make_response(401, body={"detail": detail})
        with pytest.raises(ScoringApiError) as exc:
            self.client.health()
        assert exc.value.status_code == 401
        assert exc.value.detail == detail

    def test_error_without_json(self):
        self.session.request.return_value = make_response(502, text="Bad Gateway")
        with pytest.raises(ScoringApiError) as exc:
            self.client.health()
        assert exc.value.detail == "Bad Gateway"

    def test_connection_error_propagates(self):
        self.session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(requests.ConnectionError):
            self.client.health()
