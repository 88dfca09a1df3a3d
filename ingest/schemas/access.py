"""Access evaluation schemas."""

from pydantic import BaseModel, Field

from ingest.models.policy import Action


class EvaluateRequest(BaseModel):
    """Schema for asking whether the current user may act on a resource."""

    resource_type: str = Field(..., description="Resource type tag, e.g. Destination")
    action: Action = Field(..., description="Action to check")
    resource_id: int | None = Field(None, description="Existing resource id, omitted for create")


class EvaluateResponse(BaseModel):
    """Access decision. Carries no policy reasoning."""

    allowed: bool
