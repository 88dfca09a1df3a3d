"""Destination and project schemas."""

from typing import Any

from pydantic import BaseModel, Field

from ingest.models.base import Visibility
from ingest.models.destination import DestinationType

from .common import BaseResponse, TimestampMixin


class DestinationCreate(BaseModel):
    """Schema for creating destination."""

    name: str = Field(..., min_length=1, max_length=255, description="Destination name")
    type: DestinationType = Field(DestinationType.TEMPORARY, description="Storage backend")
    visibility: Visibility = Field(Visibility.PRIVATE, description="Visibility")
    attributes: dict[str, Any] = Field(default_factory=dict, description="Attributes for policy matching")


class DestinationUpdate(BaseModel):
    """Schema for updating destination."""

    name: str | None = Field(None, min_length=1, max_length=255)
    type: DestinationType | None = None
    visibility: Visibility | None = None
    attributes: dict[str, Any] | None = None


class DestinationResponse(TimestampMixin):
    """Schema for destination response."""

    id: int
    name: str
    type: str
    visibility: str
    attributes: dict[str, Any]
    inserted_by: int | None

    class Config:
        from_attributes = True


class ProjectCreate(BaseModel):
    """Schema for creating project."""

    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    description: str | None = Field(None, max_length=5000, description="Project description")
    visibility: Visibility = Field(Visibility.PRIVATE, description="Visibility")
    attributes: dict[str, Any] = Field(default_factory=dict, description="Attributes for policy matching")


class ProjectUpdate(BaseModel):
    """Schema for updating project."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    visibility: Visibility | None = None
    attributes: dict[str, Any] | None = None


class ProjectResponse(TimestampMixin):
    """Schema for project response."""

    id: int
    name: str
    description: str | None
    visibility: str
    attributes: dict[str, Any]
    inserted_by: int | None

    class Config:
        from_attributes = True


class DestinationDetailResponse(BaseResponse):
    destination: DestinationResponse


class DestinationListResponse(BaseResponse):
    destinations: list[DestinationResponse]
    total: int


class ProjectDetailResponse(BaseResponse):
    project: ProjectResponse


class ProjectListResponse(BaseResponse):
    projects: list[ProjectResponse]
    total: int
