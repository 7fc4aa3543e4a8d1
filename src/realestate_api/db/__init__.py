"""Database storage for listings and their related records."""

from realestate_api.db.aggregator import PropertyAggregator
from realestate_api.db.storage import RealEstateStorage

__all__ = ["PropertyAggregator", "RealEstateStorage"]
