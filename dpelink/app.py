import argparse
import json
import uuid
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import Settings, load_env
from .database import get_session_factory, init_database
from .exceptions import DpeLinkError
from .logger import get_logger
from .matching import AddressMatchOrchestrator
from .models import AddressQuery, DiagnosticCandidate, EnergyClass, OpportunityType
from .repositories import SqlDiagnosticRepository, build_link_stores
from .schema import ENERGY_CLASSES, validate_diagnostic


def _settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    if getattr(args, "db", None):
        settings = replace(settings, db_path=Path(args.db))
    return settings


def build_orchestrator(settings: Settings) -> AddressMatchOrchestrator:
    init_database(settings.db_path)
    session_factory = get_session_factory(settings.db_path)
    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)
    return AddressMatchOrchestrator(
        SqlDiagnosticRepository(session_factory),
        build_link_stores(session_factory),
        settings=settings,
        logger=logger,
    )


def _query_from_args(args: argparse.Namespace) -> AddressQuery:
    return AddressQuery.from_dict({
        "zip_code": args.zip_code,
        "energy_class": args.energy_class,
        "square_footage": args.square_footage,
        "address": args.address,
        "city": args.city,
    })


def parse_diagnostics(records: List[dict]) -> List[DiagnosticCandidate]:
    candidates = []
    for i, record in enumerate(records, 1):
        errors = validate_diagnostic(record)
        if errors:
            raise SystemExit(f"Record {i}: {'; '.join(errors)}")
        candidates.append(DiagnosticCandidate(
            id=record.get("id") or str(uuid.uuid4()),
            address=record.get("address"),
            zip_code=record["zip_code"],
            energy_class=EnergyClass(record["energy_class"].upper()),
            square_footage=record.get("square_footage"),
            external_id=record["external_id"],
        ))
    return candidates


def cmd_init_db(args: argparse.Namespace) -> None:
    settings = _settings(args)
    init_database(settings.db_path)
    print(f"Database ready: {settings.db_path}")


def cmd_load(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise SystemExit("Input must be a JSON array of diagnostics")

    settings = _settings(args)
    init_database(settings.db_path)
    repository = SqlDiagnosticRepository(get_session_factory(settings.db_path))
    inserted = repository.add_many(parse_diagnostics(records))
    print(f"Loaded {inserted} new diagnostics ({len(records)} in file)")


def cmd_search(args: argparse.Namespace) -> None:
    orchestrator = build_orchestrator(_settings(args))
    results = orchestrator.search(_query_from_args(args))
    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
        return
    if not results:
        print("No matching diagnostics.")
        return
    for result in results:
        c = result.candidate
        print(f"{result.match_score:6.2f}  {result.energy_diagnostic_id}  {c.address or '-'}  ({c.square_footage} m2)")


def _print_links(links) -> None:
    if not links:
        print("No links.")
        return
    for link in links:
        address = link.diagnostic.address if link.diagnostic else None
        print(f"{link.match_score:3d}  {link.energy_diagnostic_id}  {address or '-'}")


def cmd_link(args: argparse.Namespace) -> None:
    orchestrator = build_orchestrator(_settings(args))
    links = orchestrator.search_and_link(
        _query_from_args(args), args.opportunity_id, OpportunityType.parse(args.type)
    )
    _print_links(links)


def cmd_links(args: argparse.Namespace) -> None:
    orchestrator = build_orchestrator(_settings(args))
    _print_links(orchestrator.get_links(args.opportunity_id, OpportunityType.parse(args.type)))


def _add_query_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--zip", dest="zip_code", required=True, help="5-digit postal code")
    parser.add_argument("--energy-class", required=True, choices=ENERGY_CLASSES, type=str.upper, help="Energy class A-G")
    parser.add_argument("--square-footage", required=True, type=float, help="Approximate floor area in m2")
    parser.add_argument("--address", help="Free-text address, e.g. \"9 Rue de la Paix 75001 Paris\"")
    parser.add_argument("--city", help="City name (informational; the city is read from --address)")


def main(argv: Optional[List[str]] = None):
    # Load .env if present (DPELINK_DB_PATH, DPELINK_MAX_LINKS, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="dpelink", description="Match opportunities to energy diagnostics")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    ini = subparsers.add_parser("init-db", help="Create the database tables")
    ini.add_argument("--db", help="SQLite database path (default: DPELINK_DB_PATH or data/dpelink.db)")
    ini.set_defaults(func=cmd_init_db)

    lod = subparsers.add_parser("load", help="Import energy diagnostics from a JSON array")
    lod.add_argument("--input", required=True, help="Path to diagnostics JSON")
    lod.add_argument("--db", help="SQLite database path")
    lod.set_defaults(func=cmd_load)

    sea = subparsers.add_parser("search", help="Rank diagnostics that plausibly match an address")
    _add_query_arguments(sea)
    sea.add_argument("--json", action="store_true", help="Print results as JSON")
    sea.add_argument("--db", help="SQLite database path")
    sea.set_defaults(func=cmd_search)

    lnk = subparsers.add_parser("link", help="Search and store the best matches for an opportunity")
    _add_query_arguments(lnk)
    lnk.add_argument("--opportunity-id", required=True, help="Auction or listing id")
    lnk.add_argument("--type", required=True, choices=[t.value for t in OpportunityType], help="Opportunity type")
    lnk.add_argument("--db", help="SQLite database path")
    lnk.set_defaults(func=cmd_link)

    lks = subparsers.add_parser("links", help="Show stored links for an opportunity")
    lks.add_argument("--opportunity-id", required=True, help="Auction or listing id")
    lks.add_argument("--type", required=True, choices=[t.value for t in OpportunityType], help="Opportunity type")
    lks.add_argument("--db", help="SQLite database path")
    lks.set_defaults(func=cmd_links)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        try:
            args.func(args)
        except DpeLinkError as e:
            raise SystemExit(f"Error: {e}")
        return

    parser.print_help()


if __name__ == "__main__":
    main()
