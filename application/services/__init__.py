"""Application services shared by several use cases."""

from application.services.profile_service import ProfileService

__all__ = ["ProfileService"]
