import pytest

from ticket_parser import parse, ParsingError

NAMELIST = """AIR BUSAN GROUP NAME LIST
Print date 2026.02.10
BX 712 / BX 711
NO ROUTE PNR DPT RTN NAME TITLE AGE
1 CEB PUS E8TX89 2/26 3/1 GUBAT VAN VIDAL JR MR 35 ADT
2 CEB PUS E8TX89 2/26 3/1 SANTOS MARIA MS 7 CHD
"""

def test_namelist_passengers():
    draft = parse("BX", NAMELIST)
    first = draft.passengers[0]
    assert first.last_name == "GUBAT"
    assert first.first_name == "VAN VIDAL JR"
    assert first.gender == "Mr"
    assert first.passenger_type == "Adult"
    assert draft.passengers[1].passenger_type == "Child"
    assert draft.reservation_number == "E8TX89"
    assert draft.booking_date == ""
    assert draft.total_seats == 2

def test_round_trip_from_route_and_dates():
    draft = parse("AIRBUSAN", NAMELIST)
    assert draft.journey_type.value == "round-trip"
    out, back = draft.journeys
    assert (out.flight_number, out.departure_airport_code, out.arrival_airport_code) == ("BX712", "CEB", "PUS")
    assert out.departure_date == "26 FEB 2026"
    assert (out.departure_terminal, out.arrival_terminal) == ("2", "1")
    assert (back.flight_number, back.departure_airport_code, back.arrival_airport_code) == ("BX711", "PUS", "CEB")
    assert back.departure_date == "01 MAR 2026"
    assert out.departure_time == ""

def test_year_unknown_leaves_dates_empty():
    text = NAMELIST.replace("Print date 2026.02.10\n", "")
    draft = parse("BX", text)
    assert all(j.departure_date == "" for j in draft.journeys)

def test_return_crossing_new_year():
    text = NAMELIST.replace("2/26 3/1", "12/28 1/4").replace("2026.02.10", "2025.12.01")
    draft = parse("BX", text)
    assert draft.journeys[0].departure_date == "28 DEC 2025"
    assert draft.journeys[1].departure_date == "04 JAN 2026"

def test_no_rows_raises():
    with pytest.raises(ParsingError):
        parse("BX", "AIR BUSAN GROUP NAME LIST\nNO ROUTE PNR\n")

def test_connection_through_transfer_airport():
    text = NAMELIST.replace("BX 712 / BX 711", "BX 712 / BX 8131").replace(
        "CEB PUS E8TX89", "CEB PUS PUS CJU E8TX89")
    draft = parse("BX", text)
    assert draft.journey_type.value == "multi-city"
    got = [(j.flight_number, j.departure_airport_code, j.arrival_airport_code) for j in draft.journeys]
    assert got == [("BX712", "CEB", "PUS"), ("BX8131", "PUS", "CJU")]
    assert [j.departure_date for j in draft.journeys] == ["26 FEB 2026", "26 FEB 2026"]

def test_repeated_row_is_kept_once():
    text = NAMELIST + "3 CEB PUS E8TX89 2/26 3/1 GUBAT VAN VIDAL JR MR 35 ADT\n"
    draft = parse("BX", text)
    assert [p.last_name for p in draft.passengers] == ["GUBAT", "SANTOS"]
    assert draft.total_seats == 2
