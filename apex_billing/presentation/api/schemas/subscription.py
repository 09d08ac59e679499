"""Pydantic schemas for subscription API endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SubscriptionDetailResponse(BaseModel):
    """Live Stripe subscription detail."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    current_period_end: Optional[datetime] = Field(None, alias="currentPeriodEnd")
    cancel_at_period_end: bool = Field(False, alias="cancelAtPeriodEnd")
    trial_end: Optional[datetime] = Field(None, alias="trialEnd")


class SubscriptionStatusResponse(BaseModel):
    """Stored billing status of the caller's client record."""

    model_config = ConfigDict(populate_by_name=True)

    client_id: str = Field(..., alias="clientId")
    tier: Optional[str]
    status: str
    subscription: Optional[SubscriptionDetailResponse] = None


class CancelSubscriptionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    cancel_at: Optional[datetime] = Field(None, alias="cancelAt")
