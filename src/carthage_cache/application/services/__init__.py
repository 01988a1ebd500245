"""Application services."""

from .retrieval_service import RetrievalRequest, RetrievalService, UnitResult

__all__ = ["RetrievalRequest", "RetrievalService", "UnitResult"]
