"""Typed filter model for campaign targeting.

A FilterSet always holds exactly four dimensions (gender, ageRange, region,
radius). Each dimension carries an ``enabled`` flag and a value whose shape
depends on the dimension; a disabled dimension matches every customer and
does not count towards pricing.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

SEOUL_CITY_HALL = (37.5665, 126.9780)


class Dimension(str, Enum):
    """Targeting axes, in FilterSet order."""

    gender = "gender"
    age_range = "ageRange"
    region = "region"
    radius = "radius"


class Gender(str, Enum):
    """Gender filter value."""

    male = "M"
    female = "F"
    any = "ANY"

    @classmethod
    def _missing_(cls, value: object) -> Gender | None:
        if isinstance(value, str):
            normalized = value.strip().upper()
            if normalized in ("", "ALL"):
                return cls.any
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class AgeRange(_Frozen):
    """Inclusive age bounds. ``min <= max`` is not enforced."""

    min: int = Field(default=20, description="Youngest age included")
    max: int = Field(default=60, description="Oldest age included")

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)) and len(data) == 2:
            return {"min": data[0], "max": data[1]}
        return data


class Region(_Frozen):
    """Administrative region; either tier may be unset."""

    sido: str | None = Field(default=None, description="Province / metropolitan city")
    sigungu: str | None = Field(default=None, description="District / county")

    @field_validator("sido", "sigungu", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class RadiusArea(_Frozen):
    """Circular geofence around a centre point."""

    center_lat: float = Field(default=SEOUL_CITY_HALL[0], alias="centerLat", ge=-90, le=90)
    center_lng: float = Field(default=SEOUL_CITY_HALL[1], alias="centerLng", ge=-180, le=180)
    meters: float = Field(default=1000.0, ge=0, description="Radius in metres")


class _DimensionBase(_Frozen):
    enabled: bool = Field(default=False, description="Whether the dimension filters and prices")


class GenderFilter(_DimensionBase):
    dimension: Literal["gender"] = "gender"
    value: Gender = Gender.any

    @field_validator("value", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, Gender):
            return Gender(value)
        return value


class AgeRangeFilter(_DimensionBase):
    dimension: Literal["ageRange"] = "ageRange"
    value: AgeRange = Field(default_factory=AgeRange)


class RegionFilter(_DimensionBase):
    dimension: Literal["region"] = "region"
    value: Region = Field(default_factory=Region)


class RadiusFilter(_DimensionBase):
    dimension: Literal["radius"] = "radius"
    value: RadiusArea = Field(default_factory=RadiusArea)


FilterDimension = Annotated[
    Union[GenderFilter, AgeRangeFilter, RegionFilter, RadiusFilter],
    Field(discriminator="dimension"),
]

_DIMENSION_ADAPTER: TypeAdapter = TypeAdapter(FilterDimension)

_FIELD_BY_DIMENSION = {
    Dimension.gender: "gender",
    Dimension.age_range: "age_range",
    Dimension.region: "region",
    Dimension.radius: "radius",
}


def _as_dimension(dimension: Dimension | str) -> Dimension:
    if isinstance(dimension, Dimension):
        return dimension
    for member in Dimension:
        if dimension in (member.value, member.name):
            return member
    raise ValueError(f"Unknown filter dimension {dimension!r}; expected one of {[d.value for d in Dimension]}")


class FilterSet(_Frozen):
    """The four targeting dimensions. Immutable: mutators return a new FilterSet."""

    gender: GenderFilter = Field(default_factory=GenderFilter)
    age_range: AgeRangeFilter = Field(default_factory=AgeRangeFilter, alias="ageRange")
    region: RegionFilter = Field(default_factory=RegionFilter)
    radius: RadiusFilter = Field(default_factory=RadiusFilter)

    def dimension(self, dimension: Dimension | str) -> FilterDimension:
        return getattr(self, _FIELD_BY_DIMENSION[_as_dimension(dimension)])

    def dimensions(self) -> tuple[FilterDimension, ...]:
        return (self.gender, self.age_range, self.region, self.radius)

    def active_dimensions(self) -> list[Dimension]:
        return [Dimension(d.dimension) for d in self.dimensions() if d.enabled]

    def active_count(self) -> int:
        """Number of enabled dimensions; the only input to pricing."""
        return sum(1 for d in self.dimensions() if d.enabled)

    def toggle(self, dimension: Dimension | str) -> FilterSet:
        """Flip ``enabled`` for one dimension, keeping its value."""
        current = self.dimension(dimension)
        return self.enable(dimension, not current.enabled)

    def enable(self, dimension: Dimension | str, enabled: bool = True) -> FilterSet:
        dim = _as_dimension(dimension)
        current = self.dimension(dim)
        return self.model_copy(update={_FIELD_BY_DIMENSION[dim]: current.model_copy(update={"enabled": enabled})})

    def set_value(self, dimension: Dimension | str, value: Any) -> FilterSet:
        """Replace one dimension's value, keeping its ``enabled`` flag.

        The value is validated for shape only (pydantic ValidationError on
        mismatch). Accepts model instances, dicts, enum values, or an
        ``(min, max)`` pair for the age range.
        """
        dim = _as_dimension(dimension)
        current = self.dimension(dim)
        if isinstance(value, BaseModel):
            value = value.model_dump()
        replaced = _DIMENSION_ADAPTER.validate_python(
            {"dimension": dim.value, "enabled": current.enabled, "value": value}
        )
        return self.model_copy(update={_FIELD_BY_DIMENSION[dim]: replaced})

    @classmethod
    def from_dimensions(cls, dimensions: list[dict | FilterDimension]) -> FilterSet:
        """Build a FilterSet from tagged dimension entries; missing ones stay default."""
        update: dict[str, Any] = {}
        for entry in dimensions:
            parsed = entry if isinstance(entry, BaseModel) else _DIMENSION_ADAPTER.validate_python(entry)
            update[_FIELD_BY_DIMENSION[Dimension(parsed.dimension)]] = parsed
        return cls(**update)

    @classmethod
    def from_legacy(cls, payload: dict) -> FilterSet:
        """Parse the console's flag-less filter payload.

        ``{gender: "", ageRange: [20, 60], region: {sido, sigungu},
        radius: {lat, lng, meters}}``. A dimension is enabled when the
        console counted it active: non-empty gender, a two-element age
        range, a non-empty sido or sigungu, a positive radius.
        """
        payload = payload or {}
        filters = cls()

        gender = payload.get("gender") or ""
        if isinstance(gender, str) and gender.strip():
            filters = filters.set_value(Dimension.gender, gender).enable(Dimension.gender)

        age_range = payload.get("ageRange")
        if isinstance(age_range, (list, tuple)) and len(age_range) == 2:
            filters = filters.set_value(Dimension.age_range, age_range).enable(Dimension.age_range)

        region = payload.get("region") or {}
        if isinstance(region, dict):
            filters = filters.set_value(
                Dimension.region, {"sido": region.get("sido"), "sigungu": region.get("sigungu")}
            )
            if filters.region.value.sido or filters.region.value.sigungu:
                filters = filters.enable(Dimension.region)

        radius = payload.get("radius") or {}
        if isinstance(radius, dict):
            try:
                meters = float(radius.get("meters") or 0)
            except (TypeError, ValueError):
                meters = 0.0
            if meters > 0:
                filters = filters.set_value(
                    Dimension.radius,
                    {
                        "centerLat": radius.get("lat", SEOUL_CITY_HALL[0]),
                        "centerLng": radius.get("lng", SEOUL_CITY_HALL[1]),
                        "meters": meters,
                    },
                ).enable(Dimension.radius)

        return filters

    def to_legacy(self) -> dict:
        """Inverse of :meth:`from_legacy`; disabled dimensions are blanked."""
        payload: dict[str, Any] = {
            "gender": self.gender.value.value if self.gender.enabled else "",
            "region": {"sido": "", "sigungu": ""},
            "radius": {
                "lat": self.radius.value.center_lat,
                "lng": self.radius.value.center_lng,
                "meters": 0,
            },
        }
        if self.age_range.enabled:
            payload["ageRange"] = [self.age_range.value.min, self.age_range.value.max]
        if self.region.enabled:
            payload["region"] = {
                "sido": self.region.value.sido or "",
                "sigungu": self.region.value.sigungu or "",
            }
        if self.radius.enabled:
            payload["radius"]["meters"] = self.radius.value.meters
        return payload
