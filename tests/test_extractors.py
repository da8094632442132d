from ticket_parser.extractors import (
    extract_baggage, first_match, journey_type_for, make_passenger, namelist_passengers,
    namelist_rows, rule, split_name, type_from_age,
)
from ticket_parser.models import JourneyType

def test_first_match_takes_first_passing_rule():
    rules = [
        rule(r"Class:\s*(\w+)", validate=lambda s: s != "Terminal"),
        rule(r"클래스\s*(\w+)"),
    ]
    assert first_match(rules, "Class: Terminal\n클래스 Economy") == "Economy"
    assert first_match(rules, "Class: Business") == "Business"
    assert first_match(rules, "nothing here", default="-") == "-"

def test_extract_baggage():
    assert extract_baggage("Baggage 15 KG") == "15kg"
    assert extract_baggage("checked: 1 PC") == "1PC"
    assert extract_baggage("no allowance") == ""

def test_journey_type_for():
    assert journey_type_for([]) is None
    assert journey_type_for([("ICN", "CEB")]) == JourneyType.ONE_WAY
    assert journey_type_for([("ICN", "CEB"), ("ICN", "CEB")]) == JourneyType.ONE_WAY
    assert journey_type_for([("ICN", "CEB"), ("CEB", "ICN")]) == JourneyType.ROUND_TRIP
    assert journey_type_for([("ICN", "CEB"), ("CEB", "MNL")]) == JourneyType.MULTI_CITY

def test_split_name_orders():
    assert split_name("DONG HYEON YOO", last_first=False) == ("YOO", "DONG HYEON")
    assert split_name("KIM MIN SU", last_first=True) == ("KIM", "MIN SU")
    assert split_name("MADONNA", last_first=True) is None

def test_make_passenger_titles():
    p = make_passenger("CRUZ", "JUAN", title="MSTR")
    assert p.gender == "Mr" and p.passenger_type == "Child"
    p = make_passenger("CRUZ", "ANA", title="Ms.", passenger_type="Adult")
    assert p.gender == "Ms" and p.passenger_type == "Adult"
    assert make_passenger("CRUZ", "J4N") is None
    assert make_passenger("", "JUAN") is None

def test_type_from_age():
    assert type_from_age(1) == "Infant"
    assert type_from_age(2) == "Child"
    assert type_from_age(11) == "Child"
    assert type_from_age(12) == "Adult"

NAMELIST = """AIR BUSAN GROUP NAME LIST
NO ROUTE PNR DPT RTN NAME TITLE AGE
1 CEB PUS E8TX89 2/26 3/1 GUBAT VAN VIDAL JR MR 35 ADT
2 CEB PUS E8TX89 2/26 3/1 SANTOS MARIA MS 7 CHD
3 CEB PUS E8TX89 2/26 3/1 CEB MANILA MR 40 ADT
4 CEB PUS E8TX89 2/26 3/1 REYES ANGEL MISS 1 INF
"""

def test_namelist_rows():
    rows = namelist_rows(NAMELIST)
    assert [r.seq for r in rows] == [1, 2, 4]
    first = rows[0]
    assert first.route == ("CEB", "PUS")
    assert first.pnr == "E8TX89"
    assert (first.depart, first.ret) == ("2/26", "3/1")
    assert first.surname == "GUBAT"
    assert first.given == "VAN VIDAL JR"
    assert first.title == "MR"
    assert [r.passenger_type for r in rows] == ["Adult", "Child", "Infant"]

def test_namelist_passengers():
    ps = namelist_passengers(NAMELIST)
    assert [(p.last_name, p.first_name, p.gender) for p in ps] == [
        ("GUBAT", "VAN VIDAL JR", "Mr"),
        ("SANTOS", "MARIA", "Ms"),
        ("REYES", "ANGEL", "Miss"),
    ]
