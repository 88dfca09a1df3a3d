"""Registry mapping resource type tags to their accessors."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from ingest.models.base import Visibility
from ingest.models.destination import Destination
from ingest.models.membership import DestinationMember, MembershipMixin, ProjectMember
from ingest.models.policy import Policy
from ingest.models.project import Project
from ingest.models.request import Request
from ingest.models.template import Template
from ingest.utils.exceptions import InvalidRequestError

from .base import ResourceRef, enum_value


@dataclass(frozen=True)
class ResourceKind:
    """A resource type the access engine knows how to read."""

    tag: str
    model: type
    accessor: Callable[[Any], ResourceRef]
    membership_model: Optional[type[MembershipMixin]] = None


def _owned_resource_ref(tag: str, extra: Callable[[Any], dict] | None = None):
    """Build an accessor for models using OwnedResourceMixin."""

    def accessor(resource: Any) -> ResourceRef:
        attributes = dict(extra(resource)) if extra else {}
        attributes.update(resource.attributes or {})
        return ResourceRef(
            type_tag=tag,
            id=resource.id,
            owner_id=resource.inserted_by,
            visibility=Visibility(enum_value(resource.visibility) or Visibility.PRIVATE),
            attributes=attributes,
        )

    return accessor


def _policy_ref(policy: Policy) -> ResourceRef:
    return ResourceRef(type_tag="Policy", id=policy.id)


RESOURCE_KINDS: dict[str, ResourceKind] = {
    "Destination": ResourceKind(
        tag="Destination",
        model=Destination,
        accessor=_owned_resource_ref("Destination", lambda d: {"type": enum_value(d.type)}),
        membership_model=DestinationMember,
    ),
    "Project": ResourceKind(
        tag="Project",
        model=Project,
        accessor=_owned_resource_ref("Project"),
        membership_model=ProjectMember,
    ),
    "Request": ResourceKind(
        tag="Request",
        model=Request,
        accessor=_owned_resource_ref("Request", lambda r: {"status": enum_value(r.status)}),
    ),
    "Template": ResourceKind(
        tag="Template",
        model=Template,
        accessor=_owned_resource_ref("Template"),
    ),
    "Policy": ResourceKind(tag="Policy", model=Policy, accessor=_policy_ref),
}


def get_resource_kind(resource_type: str) -> ResourceKind:
    """Look up a registered resource kind by tag."""
    kind = RESOURCE_KINDS.get(resource_type)
    if kind is None:
        raise InvalidRequestError(
            f"Unknown resource type: {resource_type}",
            details={"resource_type": resource_type},
        )
    return kind


def resolve_resource(resource_type: str, resource: Any) -> ResourceRef:
    """
    Turn whatever the caller passed into a ResourceRef.

    Accepts a model instance of the registered kind, a ResourceRef with the
    same tag, or None when the resource does not exist yet (creation).
    """
    kind = get_resource_kind(resource_type)

    if resource is None:
        return ResourceRef(type_tag=kind.tag)

    if isinstance(resource, ResourceRef):
        if resource.type_tag != kind.tag:
            raise InvalidRequestError(
                f"Resource of type {resource.type_tag} passed as {kind.tag}",
                details={"resource_type": resource_type},
            )
        return resource

    if isinstance(resource, kind.model):
        return kind.accessor(resource)

    raise InvalidRequestError(
        f"Cannot read {type(resource).__name__} as {kind.tag}",
        details={"resource_type": resource_type},
    )


def register_resource_kind(kind: ResourceKind) -> None:
    """
    Register an additional resource kind.

    Usage:
        register_resource_kind(ResourceKind("Upload", Upload, upload_ref))
    """
    RESOURCE_KINDS[kind.tag] = kind
