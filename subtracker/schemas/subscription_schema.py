"""Pydantic schemas for subscription request shapes.

These only pin down field names and JSON types; ``price`` is strict, so
booleans, floats and numeric strings are rejected rather than coerced.
Field rules (lengths, UUIDs, date formats, date ordering) are checked by
``SubscriptionMapper`` so that every problem is reported in one pass.
"""

from pydantic import BaseModel, Field, StrictInt


class SubscriptionCreateSchema(BaseModel):
    """Body of a create request."""

    service_name: str = Field(..., description="Name of the subscribed service")
    price: StrictInt = Field(..., description="Monthly price in whole currency units")
    user_id: str = Field(..., description="Owning user UUID")
    start_date: str = Field(..., description="Start month, MM-YYYY")
    end_date: str | None = Field(None, description="Optional end month, MM-YYYY")


class SubscriptionUpdateSchema(BaseModel):
    """Body of a partial update request.

    Only keys present in the payload end up in ``model_fields_set``; that
    is what separates "leave unchanged" from an explicit ``null``.
    """

    id: str
    service_name: str | None = None
    price: StrictInt | None = None
    user_id: str | None = None
    start_date: str | None = None
    end_date: str | None = None


class SubscriptionTotalSchema(BaseModel):
    """Query parameters of the total price request."""

    start: str = ""
    end: str = ""
    user_id: str = ""
    service_name: str = ""
