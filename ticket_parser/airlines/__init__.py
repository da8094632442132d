"""Airline adapters and the code -> adapter dispatch table."""
from typing import Dict, List, Protocol

from ..errors import UnknownAirlineError
from ..models import Airline, FlightSegment, JourneyType, Metadata, Passenger
from .busan import AirBusanAdapter
from .cebu import CebuPacificAdapter
from .jeju import JejuAirAdapter
from .jin import JinAirAdapter

class AirlineAdapter(Protocol):
    airline: Airline
    supports_namelist: bool

    def classify(self, text: str) -> JourneyType: ...
    def extract_metadata(self, text: str) -> Metadata: ...
    def extract_journeys(self, text: str) -> List[FlightSegment]: ...
    def extract_passengers(self, text: str, is_group: bool) -> List[Passenger]: ...

ADAPTERS: Dict[Airline, AirlineAdapter] = {
    Airline.JEJU: JejuAirAdapter(),
    Airline.CEBU: CebuPacificAdapter(),
    Airline.JIN: JinAirAdapter(),
    Airline.BUSAN: AirBusanAdapter(),
}

ALIASES: Dict[str, Airline] = {
    "7C": Airline.JEJU, "JEJU": Airline.JEJU, "JEJUAIR": Airline.JEJU,
    "5J": Airline.CEBU, "CEBU": Airline.CEBU, "CEBUPACIFIC": Airline.CEBU,
    "LJ": Airline.JIN, "JIN": Airline.JIN, "JINAIR": Airline.JIN,
    "BX": Airline.BUSAN, "BUSAN": Airline.BUSAN, "AIRBUSAN": Airline.BUSAN,
}

def resolve_airline(code: str) -> Airline:
    key = "".join((code or "").split()).replace("_", "").replace("-", "").upper()
    try:
        return ALIASES[key]
    except KeyError:
        raise UnknownAirlineError(f"unsupported airline code: {code!r}") from None

def get_adapter(code: str) -> AirlineAdapter:
    return ADAPTERS[resolve_airline(code)]
