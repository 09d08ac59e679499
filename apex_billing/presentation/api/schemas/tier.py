from pydantic import BaseModel


class TierResponse(BaseModel):
    """Response schema for a service tier."""

    key: str
    name: str
    description: str
    price: int
    currency: str
    interval: str
