"""Configuration module."""

from .database import get_async_session_local, init_models
from .settings import settings

__all__ = ["settings", "get_async_session_local", "init_models"]
