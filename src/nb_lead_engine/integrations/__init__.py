"""Clients for talking to a running scoring service."""

from .scoring_api import ScoringApiClient, ScoringApiError

__all__ = ["ScoringApiClient", "ScoringApiError"]
