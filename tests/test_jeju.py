import pytest

from ticket_parser import parse, ParsingError
from ticket_parser.airlines.jeju import JejuAirAdapter
from ticket_parser.utils import normalize_text

GROUP_TICKET = """JEJU AIR e-Ticket Itinerary
Booking reference ABC123
Booking date 2025. 10. 27
예 약 석 15 석

Originating Flight | Flight 7C 2151 | Economy
Incheon (ICN) 2025.11.13(목) 10:30
Cebu (CEB) 2025.11.13(목) 14:20
Baggage 15kg

Return Flight | Flight 7C 2152 | Economy
Cebu (CEB) 2025.11.18(화) 15:20
Incheon (ICN) 2025.11.18(화) 21:40

성인 1 KIM MINSU
성인 2 LEE JIHO
"""

INDIVIDUAL_TICKET = """Booking reference XYZ789
Booking date 2025.09.01
가 는 편 | 편명 7C 1301 | 터미널 1 Economy
Incheon (ICN) 2025.09.20(토) 08:00
Jeju (CJU) 2025.09.20(토) 09:10
성인 1 HONG/GILDONG
"""

NAMELIST = """NO ROUTE PNR DPT RTN NAME
1 ICN CEB ABC123 11/13 11/18 KIM MINSU MR 35 ADT
2 ICN CEB ABC123 11/13 11/18 LEE JIHO MS 8 CHD
3 ICN CEB ABC123 11/13 11/18 PARK SOYEON MS 30 ADT
"""

def test_group_metadata():
    meta = JejuAirAdapter().extract_metadata(normalize_text(GROUP_TICKET))
    assert meta.reservation_number == "ABC123"
    assert meta.booking_date == "27 OCT 2025"
    assert meta.total_seats == 15
    assert meta.is_group

def test_group_round_trip():
    draft = parse("7C", GROUP_TICKET)
    assert draft.journey_type.value == "round-trip"
    assert draft.is_group_booking
    assert draft.total_seats == 15
    assert [j.flight_number for j in draft.journeys] == ["7C2151", "7C2152"]
    out, back = draft.journeys
    assert (out.departure_airport_code, out.arrival_airport_code) == ("ICN", "CEB")
    assert (out.departure_date, out.departure_time) == ("13 NOV 2025", "10:30")
    assert (out.arrival_date, out.arrival_time) == ("13 NOV 2025", "14:20")
    assert (out.departure_terminal, out.arrival_terminal) == ("1", "2")
    assert out.booking_class == "Economy"
    assert out.baggage_allowance == "15kg"
    assert out.not_valid_before == out.not_valid_after == "13 NOV 2025"
    assert (back.departure_airport_code, back.arrival_airport_code) == ("CEB", "ICN")
    assert back.departure_date == "18 NOV 2025"

def test_group_passengers_without_gender():
    draft = parse("7C", GROUP_TICKET)
    assert [(p.last_name, p.first_name) for p in draft.passengers] == [("KIM", "MINSU"), ("LEE", "JIHO")]
    assert all(p.gender == "" for p in draft.passengers)
    assert draft.needs_passenger_input

def test_individual_one_way():
    draft = parse("JEJU", INDIVIDUAL_TICKET)
    assert draft.journey_type.value == "one-way"
    assert len(draft.journeys) == 1
    seg = draft.journeys[0]
    assert seg.flight_number == "7C1301"
    assert seg.booking_class == "Economy"
    assert (seg.departure_terminal, seg.arrival_terminal) == ("", "")
    assert not draft.is_group_booking
    assert draft.total_seats == 1
    p = draft.passengers[0]
    assert (p.last_name, p.first_name, p.passenger_type) == ("HONG", "GILDONG", "Adult")
    assert not draft.needs_passenger_input

def test_booking_class_never_a_terminal_label():
    text = normalize_text("가는편 | 편명 7C 1301 | 터미널 1\n클래스 Economy\n(ICN) 2025.09.20 08:00\n")
    seg = JejuAirAdapter().extract_journeys(text)[0]
    assert seg.booking_class == "Economy"

def test_missing_section_raises():
    with pytest.raises(ParsingError) as exc:
        parse("7C", "Booking reference ABC123\n성인 1 KIM MINSU\n")
    assert exc.value.airline_code == "7C"

def test_namelist_enriches_group_passengers():
    draft = parse("7C", GROUP_TICKET, secondary_text=NAMELIST)
    got = [(p.last_name, p.first_name, p.gender, p.passenger_type) for p in draft.passengers]
    assert got == [
        ("KIM", "MINSU", "Mr", "Adult"),
        ("LEE", "JIHO", "Ms", "Adult"),
        ("PARK", "SOYEON", "Ms", "Adult"),
    ]
    assert draft.total_seats == 15

def test_namelist_ignored_for_individual_booking(caplog):
    with caplog.at_level("WARNING"):
        draft = parse("7C", INDIVIDUAL_TICKET, secondary_text=NAMELIST)
    assert [(p.last_name, p.first_name) for p in draft.passengers] == [("HONG", "GILDONG")]
    assert draft.total_seats == 1
    assert "individual booking" in caplog.text

def test_group_passenger_printed_twice_is_kept_once():
    draft = parse("7C", GROUP_TICKET + "성인 3 KIM MINSU\n")
    assert [(p.last_name, p.first_name) for p in draft.passengers] == [("KIM", "MINSU"), ("LEE", "JIHO")]

def test_individual_passenger_printed_twice_is_kept_once():
    draft = parse("7C", INDIVIDUAL_TICKET + "성인 2 HONG/GILDONG\n")
    assert [(p.last_name, p.first_name) for p in draft.passengers] == [("HONG", "GILDONG")]
    assert draft.total_seats == 1
