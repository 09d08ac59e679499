"""Pydantic schemas for checkout API endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateCheckoutSessionRequest(BaseModel):
    """Request schema for creating a checkout session."""

    model_config = ConfigDict(populate_by_name=True)

    tier: Optional[str] = Field(None, description="Service tier key")
    success_url: Optional[str] = Field(None, alias="successUrl", description="Redirect after payment")
    cancel_url: Optional[str] = Field(None, alias="cancelUrl", description="Redirect if checkout is abandoned")


class CreateCheckoutSessionResponse(BaseModel):
    """Response schema for creating a checkout session."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    url: Optional[str] = None
