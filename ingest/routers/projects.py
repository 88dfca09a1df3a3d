"""Project routes."""

from fastapi import APIRouter, Depends, status

from ingest.access.base import Actor
from ingest.access.guards import AuthorizationGate
from ingest.dependencies.auth import get_current_actor, get_current_user
from ingest.dependencies.services import get_authorization_gate, get_project_service
from ingest.models.membership import ProjectMember
from ingest.models.policy import Action
from ingest.models.user import User
from ingest.schemas.common import BaseResponse
from ingest.schemas.resource import (
    ProjectCreate,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from ingest.services.project_service import ProjectService

from .base import add_member_routes

router = APIRouter()

RESOURCE_TYPE = "Project"


@router.post("/", response_model=ProjectDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_create: ProjectCreate,
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service),
):
    """Create project owned by the current user."""

    project = await project_service.create(current_user, **project_create.model_dump())

    return ProjectDetailResponse(
        message="Project created successfully",
        project=ProjectResponse.model_validate(project),
    )


@router.get("/", response_model=ProjectListResponse)
async def list_projects(
    current_user: User = Depends(get_current_user),
    project_service: ProjectService = Depends(get_project_service),
):
    """List projects visible to the current user."""

    projects = await project_service.list_visible(current_user)

    return ProjectListResponse(
        message="Projects retrieved successfully",
        projects=[ProjectResponse.model_validate(p) for p in projects],
        total=len(projects),
    )


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: int,
    actor: Actor = Depends(get_current_actor),
    project_service: ProjectService = Depends(get_project_service),
    gate: AuthorizationGate = Depends(get_authorization_gate),
):
    """Get project by ID."""

    project = await project_service.get(project_id)
    await gate.authorize(actor, RESOURCE_TYPE, Action.READ, project)

    return ProjectDetailResponse(
        message="Project retrieved successfully",
        project=ProjectResponse.model_validate(project),
    )


@router.put("/{project_id}", response_model=ProjectDetailResponse)
async def update_project(
    project_id: int,
    project_update: ProjectUpdate,
    actor: Actor = Depends(get_current_actor),
    project_service: ProjectService = Depends(get_project_service),
    gate: AuthorizationGate = Depends(get_authorization_gate),
):
    """Update project."""

    project = await project_service.get(project_id)
    await gate.authorize(actor, RESOURCE_TYPE, Action.UPDATE, project)

    project = await project_service.update(project, **project_update.model_dump(exclude_unset=True))

    return ProjectDetailResponse(
        message="Project updated successfully",
        project=ProjectResponse.model_validate(project),
    )


@router.delete("/{project_id}", response_model=BaseResponse)
async def delete_project(
    project_id: int,
    actor: Actor = Depends(get_current_actor),
    project_service: ProjectService = Depends(get_project_service),
    gate: AuthorizationGate = Depends(get_authorization_gate),
):
    """Delete project."""

    project = await project_service.get(project_id)
    await gate.authorize(actor, RESOURCE_TYPE, Action.DELETE, project)

    await project_service.delete(project)

    return BaseResponse(message="Project deleted successfully")


add_member_routes(router, RESOURCE_TYPE, ProjectMember, get_project_service)
