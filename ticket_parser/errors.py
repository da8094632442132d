
class ParsingError(Exception):
    """No itinerary could be recovered from the document."""

    def __init__(self, airline_code: str, reason: str):
        super().__init__(f"{airline_code}: {reason}")
        self.airline_code = airline_code
        self.reason = reason

class UnknownAirlineError(ValueError):
    pass
