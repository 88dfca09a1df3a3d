"""Project management service."""

from ingest.models.membership import ProjectMember
from ingest.models.project import Project

from .resource_service import OwnedResourceService


class ProjectService(OwnedResourceService):
    """Service for project management operations."""

    model = Project
    member_model = ProjectMember
    resource_label = "Project"
    editable_fields = ("name", "description", "visibility", "attributes")
