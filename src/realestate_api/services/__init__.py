"""Application services sitting between the web layer and storage."""

from realestate_api.services.owner_service import OwnerService
from realestate_api.services.property_service import PropertyService

__all__ = ["OwnerService", "PropertyService"]
