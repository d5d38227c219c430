"""Ingest schema for uploaded flight-plan records"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class RawFlight(BaseModel):
    """Flight-plan record as uploaded (JSON field names kept as aliases)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    acid: str = Field(..., alias="ACID", min_length=1, description="Callsign")
    plane_type: str = Field(..., alias="Plane type", min_length=1)
    route: str = Field(..., min_length=3, description="Whitespace-separated lat/lon tokens")
    altitude: int = Field(..., strict=True, description="Cruise altitude in feet")
    departure_airport: str = Field(..., alias="departure airport", min_length=3)
    arrival_airport: str = Field(..., alias="arrival airport", min_length=3)
    departure_time: int = Field(..., alias="departure time", strict=True,
                                description="Epoch seconds")
    aircraft_speed: float = Field(..., alias="aircraft speed", strict=True,
                                  allow_inf_nan=False, description="Cruise speed in knots")
    passengers: int = Field(..., strict=True, ge=0)
    is_cargo: bool = Field(..., strict=True)

    @field_validator("altitude", "departure_time", "passengers", mode="before")
    @classmethod
    def integral_float_to_int(cls, v: Any) -> Any:
        """Accept whole-number floats such as 35000.0; anything else is left to strict checks"""
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the uploaded field names"""
        return self.model_dump(by_alias=True)


RAW_FLIGHTS_ADAPTER = TypeAdapter(List[RawFlight])
