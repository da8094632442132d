import pytest

from ticket_parser import parse, ParsingError

TICKET = """<html><head><title>JIN AIR e-Ticket Itinerary</title></head><body>
<table><tr><td>Reservation Number:</td><td><strong>ABCD12</strong></td></tr>
<tr><td>Group Name:</td><td>CEBU TOUR GROUP</td></tr></table>
<p>Invoice Date: 27-Oct-2025</p>
<table>
<tr><td><strong>ICN TO CEB</strong> </td><td><strong>ECONOMY</strong></td></tr>
<tr><td>Flight No <strong>LJ 027</strong></td></tr>
<tr><td><strong>DEPARTING</strong><br><font size="2">Incheon International Airport, Seoul<br>(Terminal 1)<br>2135hr, Sat, 03 Jan 2026</font></td>
<td><strong>ARRIVING</strong><br><font size="2">Mactan Cebu International Airport, Cebu<br>0125hr, Sun, 04 Jan 2026</font></td></tr>
<tr><td>Baggage allowance 15 Kg</td><td>Flight time: 04hr 50mins</td></tr>
<tr><td>Not valid before: 03 Jan 2026</td><td>Not valid after: 03 Jan 2026</td></tr>
</table>
<p>1. BANDOY, ROEL JR&nbsp;MR&nbsp;Adult [Ticket Number:&nbsp;7182382992079]</p>
<p>2. CRUZ, MARIA&nbsp;MS&nbsp;Adult [Ticket Number:&nbsp;7182382992080]</p>
</body></html>
"""

def test_metadata():
    draft = parse("LJ", TICKET)
    assert draft.reservation_number == "ABCD12"
    assert draft.booking_date == "27 OCT 2025"
    assert draft.group_name == "CEBU TOUR GROUP"
    # a printed group name makes it a group booking regardless of size
    assert draft.is_group_booking
    assert draft.total_seats == 2

def test_leg_details():
    draft = parse("JIN", TICKET)
    assert draft.journey_type.value == "one-way"
    seg = draft.journeys[0]
    assert seg.flight_number == "LJ027"
    assert (seg.departure_airport_code, seg.arrival_airport_code) == ("ICN", "CEB")
    assert (seg.departure_airport_name, seg.arrival_airport_name) == ("Incheon", "Cebu")
    assert (seg.departure_date, seg.departure_time) == ("03 JAN 2026", "21:35")
    assert (seg.arrival_date, seg.arrival_time) == ("04 JAN 2026", "01:25")
    assert seg.departure_terminal == "1"
    # not printed for the arrival side, taken from the route table
    assert seg.arrival_terminal == "2"
    assert seg.booking_class == "ECONOMY"
    assert seg.baggage_allowance == "15kg"
    assert seg.flight_time == "04hr 50mins"
    assert seg.not_valid_before == seg.not_valid_after == "03 JAN 2026"

def test_ticket_numbers():
    draft = parse("LJ", TICKET)
    first = draft.passengers[0]
    assert (first.last_name, first.first_name) == ("BANDOY", "ROEL JR")
    assert first.ticket_number == "7182382992079"
    assert first.gender == "Mr"
    assert first.passenger_type == "Adult"
    assert draft.passengers[1].ticket_number == "7182382992080"
    assert draft.passengers[1].gender == "Ms"

def test_no_leg_header_raises():
    with pytest.raises(ParsingError):
        parse("LJ", "<p>Reservation Number: ABCD12</p>")

def test_round_trip_dedupes_repeated_legs():
    back = TICKET.replace("ICN TO CEB", "CEB TO ICN").replace("LJ 027", "LJ 028")
    back = back.replace("03 Jan 2026", "10 Jan 2026").replace("04 Jan 2026", "10 Jan 2026")
    body = TICKET.split("<table>")[2].split("</table>")[0]
    doc = TICKET + back.split("<table>")[2].split("</table>")[0] + body
    draft = parse("LJ", doc)
    assert draft.journey_type.value == "round-trip"
    assert [j.flight_number for j in draft.journeys] == ["LJ027", "LJ028"]

def test_repeated_passenger_keeps_first_ticket():
    extra = "<p>3. BANDOY, ROEL JR&nbsp;MR&nbsp;Adult [Ticket Number:&nbsp;7182382992081]</p>\n</body>"
    draft = parse("LJ", TICKET.replace("</body>", extra))
    assert [p.last_name for p in draft.passengers] == ["BANDOY", "CRUZ"]
    assert draft.passengers[0].ticket_number == "7182382992079"
    assert draft.total_seats == 2
