"""Query-string parsing for the property listing endpoint."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Query
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from realestate_api.errors import RequestValidationFailed
from realestate_api.models import PropertyFilter
from realestate_api.pagination import PageRequest
from realestate_api.web.errors import format_validation_errors


class PropertyQuery(BaseModel):
    """Validated filter and page for ``GET /api/properties``."""

    model_config = ConfigDict(frozen=True)

    filters: PropertyFilter
    page: PageRequest


def _present(values: dict[str, str | None]) -> dict[str, str]:
    """Drop parameters that were omitted or sent empty."""
    return {k: v for k, v in values.items() if v is not None and v.strip()}


def _camel_errors(exc: ValidationError) -> list[dict[str, Any]]:
    errors = exc.errors()
    for error in errors:
        error["loc"] = tuple(to_camel(str(p)) for p in error["loc"])
    return errors


def parse_property_query(
    name: str | None = None,
    address: str | None = None,
    price_min: Annotated[str | None, Query(alias="priceMin")] = None,
    price_max: Annotated[str | None, Query(alias="priceMax")] = None,
    owner_id: Annotated[str | None, Query(alias="ownerId")] = None,
    year: str | None = None,
    enabled: str | None = None,
    page: str | None = None,
    page_size: Annotated[str | None, Query(alias="pageSize")] = None,
) -> PropertyQuery:
    """FastAPI dependency that parses query params into a PropertyQuery.

    Every parameter is taken as a raw string and validated here so that all
    problems are reported together in one envelope.

    Raises:
        RequestValidationFailed: Any parameter fails validation.
    """
    errors: list[str] = []
    filters: PropertyFilter | None = None
    page_request: PageRequest | None = None

    try:
        filters = PropertyFilter.model_validate(
            _present(
                {
                    "name": name,
                    "address": address,
                    "price_min": price_min,
                    "price_max": price_max,
                    "owner_id": owner_id,
                    "year": year,
                    "enabled": enabled,
                }
            )
        )
    except ValidationError as e:
        errors.extend(format_validation_errors(_camel_errors(e)))

    try:
        page_request = PageRequest.model_validate(
            _present({"page": page, "page_size": page_size})
        )
    except ValidationError as e:
        errors.extend(format_validation_errors(_camel_errors(e)))

    if filters is None or page_request is None:
        raise RequestValidationFailed("Invalid request parameters", errors)
    return PropertyQuery(filters=filters, page=page_request)


PropertyQueryDep = Annotated[PropertyQuery, Depends(parse_property_query)]
