"""
Top-level entry point: ticket text in, ``BookingDraft`` out.
"""
import logging
from typing import Optional

from .airlines import get_adapter
from .models import BookingDraft
from .reconcile import merge
from .utils import normalize_text

_module_logger = logging.getLogger(__name__)

def parse(airline_code: str, text: str, secondary_text: Optional[str] = None, *,
          logger: Optional[logging.Logger] = None) -> BookingDraft:
    """
    Parse one e-ticket.

    ``secondary_text`` is an optional namelist document for the same booking;
    it only enriches the passengers of group bookings on airlines that issue
    one (Jeju Air) and is ignored with a warning otherwise.
    Raises ``UnknownAirlineError`` for an unsupported code and ``ParsingError``
    when no itinerary can be recovered.
    """
    adapter = get_adapter(airline_code)
    code = adapter.airline.value
    log = logging.LoggerAdapter(logger or _module_logger, {"airline": code})

    text = normalize_text(text)
    journey_type = adapter.classify(text)
    meta = adapter.extract_metadata(text)
    seats_stated = meta.total_seats > 0

    passengers = adapter.extract_passengers(text, meta.is_group)
    if secondary_text:
        if not adapter.supports_namelist:
            log.warning("%s does not issue namelists, secondary document ignored", code)
        elif not meta.is_group:
            log.warning("namelist given for an individual booking, secondary document ignored")
        else:
            extra = adapter.extract_namelist(normalize_text(secondary_text))
            passengers = merge(passengers, extra)

    for p in passengers:
        if not p.passenger_type:
            p.passenger_type = "Adult"

    if not seats_stated:
        meta = meta.with_seats(len(passengers))

    journeys = adapter.extract_journeys(text)
    if not journeys:
        log.warning("no flight segment could be completed")

    draft = BookingDraft(
        airline_code=code,
        journey_type=journey_type,
        is_group_booking=meta.is_group,
        total_seats=meta.total_seats,
        reservation_number=meta.reservation_number,
        booking_date=meta.booking_date,
        journeys=journeys,
        passengers=passengers,
        needs_passenger_input=not passengers or len(passengers) != meta.total_seats,
        group_name=meta.group_name,
    )
    log.info(
        "parsed %s %s: %d journeys, %d/%d passengers%s",
        draft.reservation_number or "<no PNR>", draft.journey_type.value,
        len(draft.journeys), len(draft.passengers), draft.total_seats,
        " (group)" if draft.is_group_booking else "",
    )
    return draft
