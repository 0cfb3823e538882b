"""Exceptions raised by the flight search engine."""


class FlightSearchError(Exception):
    """Base class for errors surfaced to the caller."""


class UnresolvedAirport(FlightSearchError):
    """An origin or destination code is not in the airport directory."""

    LABELS = {"origin": "Departure", "destination": "Destination"}

    def __init__(self, code, field):
        self.code = code
        self.field = field
        label = self.LABELS.get(field, field.capitalize())
        super().__init__(
            f'{label} airport "{code}" not found. Please select from suggestions.'
        )


class MalformedExternalResponse(FlightSearchError):
    """An external feed returned data that cannot be used."""
