import os, json, click, csv, logging
from typing import Dict, Any, List, Optional
from .rules import load_rules
from .loader import load_document_text, SUPPORTED_EXTENSIONS
from .classifier import detect_airline
from .errors import ParsingError, UnknownAirlineError
from .parser import parse

def collect_files(path: str, recursive: bool) -> List[str]:
    files: List[str] = []
    if os.path.isdir(path):
        for root, _, names in os.walk(path):
            for n in sorted(names):
                if n.lower().endswith(SUPPORTED_EXTENSIONS):
                    files.append(os.path.join(root, n))
            if not recursive:
                break
    else:
        files = [path]
    return files

def parse_file(path: str, airline: str, namelist: Optional[str], rules_path: Optional[str], min_conf: float) -> Dict[str, Any]:
    text, err = load_document_text(path)
    confidence = None
    draft = None

    if airline.lower() == "auto":
        _, airline, conf = detect_airline(text, load_rules(rules_path))
        confidence = round(float(conf), 4)
        if conf < min_conf:
            err = (err + " | " if err else "") + f"low_confidence: {airline} at {confidence}"
            airline = None

    secondary = None
    if namelist:
        secondary, nerr = load_document_text(namelist)
        if nerr:
            err = (err + " | " if err else "") + f"namelist: {nerr}"

    if airline and text.strip():
        try:
            draft = parse(airline, text, secondary).to_dict()
        except ParsingError as e:
            err = (err + " | " if err else "") + f"parsing_error: {e}"
        except UnknownAirlineError as e:
            err = (err + " | " if err else "") + f"unknown_airline: {e}"

    return {
        "path_in": path,
        "airline": airline,
        "confidence": confidence,
        "draft": draft,
        "errors": err,
    }

@click.group()
@click.option("-v", "--verbose", count=True, help="-v for info, -vv for debug logging")
def main(verbose):
    """Airline e-ticket parser"""
    level = logging.WARNING if not verbose else (logging.INFO if verbose == 1 else logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

@main.command("parse")
@click.argument("path", type=click.Path(exists=True))
@click.option("--airline", default="auto", show_default=True, help="Airline code or name (7C, 5J, LJ, BX) or 'auto'")
@click.option("--namelist", default=None, type=click.Path(exists=True), help="Namelist document for the same booking")
@click.option("--rules", "rules_path", default=None, type=click.Path(exists=True), help="Path to detection rules")
@click.option("--recursive", is_flag=True, help="Recurse into directories")
@click.option("--min-confidence", "min_conf", default=0.6, show_default=True, type=float, help="Threshold for airline detection")
@click.option("--report", default=None, type=click.Path(), help="Optional CSV report path, one row per passenger")
def parse_cmd(path, airline, namelist, rules_path, recursive, min_conf, report):
    """Parse an e-ticket file or directory into booking drafts."""
    results = []
    for f in collect_files(path, recursive):
        res = parse_file(f, airline, namelist, rules_path, min_conf)
        click.echo(json.dumps(res, ensure_ascii=False))
        results.append(res)

    if report and results:
        os.makedirs(os.path.dirname(report) or ".", exist_ok=True)
        with open(report, "w", newline="", encoding="utf-8") as csvfile:
            fieldnames = ["path_in","airline","reservation_number","journey_type","total_seats","last_name","first_name","gender","passenger_type","ticket_number","errors"]
            writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
            writer.writeheader()
            for r in results:
                d = r.get("draft") or {}
                base = {
                    "path_in": r["path_in"],
                    "airline": r["airline"],
                    "reservation_number": d.get("reservationNumber"),
                    "journey_type": d.get("journeyType"),
                    "total_seats": d.get("totalSeats"),
                    "errors": r["errors"],
                }
                passengers = d.get("passengers") or [{}]
                for p in passengers:
                    writer.writerow(dict(base,
                        last_name=p.get("lastName"),
                        first_name=p.get("firstName"),
                        gender=p.get("gender"),
                        passenger_type=p.get("passengerType"),
                        ticket_number=p.get("ticketNumber"),
                    ))

@main.command("detect")
@click.argument("path", type=click.Path(exists=True))
@click.option("--rules", "rules_path", default=None, type=click.Path(exists=True), help="Path to detection rules")
@click.option("--recursive", is_flag=True, help="Recurse into directories")
def detect_cmd(path, rules_path, recursive):
    """Print airline probabilities for each document."""
    rules = load_rules(rules_path)
    for f in collect_files(path, recursive):
        text, err = load_document_text(f)
        probs, top, conf = detect_airline(text, rules)
        click.echo(json.dumps({
            "path_in": f,
            "airline": top,
            "confidence": round(float(conf), 4),
            "probabilities": {k: round(float(v), 4) for k, v in probs.items()},
            "errors": err,
        }, ensure_ascii=False))

if __name__ == "__main__":
    main()
