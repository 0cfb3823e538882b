"""Search input record, validated before it reaches the engine."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class SearchQuery(BaseModel):
    """One flight search as entered by the traveller."""

    origin: str = Field(description="Origin airport IATA code")
    destination: str = Field(description="Destination airport IATA code")
    departure_date: date = Field(description="Outbound date, today or later")
    return_date: Optional[date] = Field(
        None, description="Return date, required for round trips only"
    )
    trip_type: Literal["oneWay", "roundTrip"] = Field(default="oneWay")
    adults: int = Field(default=1, ge=1)
    children: int = Field(default=0, ge=0)
    infants: int = Field(default=0, ge=0)

    @field_validator("origin", "destination")
    @classmethod
    def normalize_code(cls, value):
        value = value.strip().upper()
        if not value:
            raise ValueError("airport is required")
        return value

    @field_validator("departure_date")
    @classmethod
    def not_in_past(cls, value):
        if value < date.today():
            raise ValueError("departure date cannot be in the past")
        return value

    @model_validator(mode="after")
    def check_trip(self):
        if self.origin == self.destination:
            raise ValueError("Departure and destination airports cannot be the same.")
        if self.trip_type == "roundTrip":
            if self.return_date is None:
                raise ValueError("Please select a return date for your round trip.")
            if self.return_date < self.departure_date:
                raise ValueError("Return date cannot be before the departure date.")
        elif self.return_date is not None:
            raise ValueError("A one-way trip cannot have a return date.")
        if self.infants > self.adults:
            raise ValueError("Each infant must travel with an adult.")
        return self

    @property
    def is_round_trip(self):
        return self.trip_type == "roundTrip"

    @property
    def passengers(self):
        return self.adults + self.children + self.infants
