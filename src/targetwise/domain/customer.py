"""Customer records as returned by the customer directory."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _lenient_number(value: Any, cast: type) -> Any:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return cast(number)


class Customer(BaseModel):
    """Read-only view of a customer used for targeting.

    Parsing is lenient: malformed numbers and blank strings become ``None``
    so that incomplete records fail the matching filter instead of raising.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., description="Customer identifier")
    gender: str | None = Field(default=None, description="'M' or 'F'")
    birth_year: int | None = Field(default=None, alias="birthYear")
    sido: str | None = Field(default=None, description="Province / metropolitan city")
    sigungu: str | None = Field(default=None, description="District / county")
    lat: float | None = Field(default=None, description="Latitude in degrees")
    lng: float | None = Field(default=None, description="Longitude in degrees")

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("gender", "sido", "sigungu", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return None
        value = value.strip()
        return value or None

    @field_validator("gender")
    @classmethod
    def _upper(cls, value: str | None) -> str | None:
        return value.upper() if value else value

    @field_validator("birth_year", mode="before")
    @classmethod
    def _parse_year(cls, value: Any) -> Any:
        return _lenient_number(value, int)

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _parse_coordinate(cls, value: Any) -> Any:
        return _lenient_number(value, float)

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None
