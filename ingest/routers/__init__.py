"""API routers."""

from . import access, accounts, destinations, policies, projects

__all__ = ["access", "accounts", "destinations", "policies", "projects"]
