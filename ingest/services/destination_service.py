"""Destination management service."""

from ingest.models.destination import Destination
from ingest.models.membership import DestinationMember

from .resource_service import OwnedResourceService


class DestinationService(OwnedResourceService):
    """Service for destination management operations."""

    model = Destination
    member_model = DestinationMember
    resource_label = "Destination"
    editable_fields = ("name", "type", "visibility", "attributes")
