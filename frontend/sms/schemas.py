"""Pydantic schemas for SMS prediction requests."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SmsPredictionRequest(BaseModel):
    """Text submitted from the SMS page for classification."""

    sms: str = Field(..., max_length=10_000)


class SmsPrediction(BaseModel):
    """Classifier verdict echoed back alongside the original text."""

    sms: str
    result: str | None = None
