#!/usr/bin/env python3
"""
Malta Auctions Command Line Interface

Usage:
    malta-auctions classify --asset <file>
    malta-auctions redact --asset <file>
    malta-auctions eligibility --asset <file> --bidder <file>
    malta-auctions ingest-customs --csv <file> [--store]
    malta-auctions scrape-warrants [--url <url>] [--store]
"""

import argparse
import json
import sys


def load_json(path: str) -> dict:
    """Load JSON from file."""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def _load_asset(path: str):
    from .models import AuctionAsset
    return AuctionAsset.model_validate(load_json(path))


def _emit(assets, store: bool) -> None:
    from .db import close_connection, init_db, insert_asset
    from .integration import process_assets_for_storage
    from .logging_config import audit_log

    if store:
        init_db()
        try:
            for asset in process_assets_for_storage(assets):
                asset_id = insert_asset(asset)
                audit_log.asset_stored(asset_id, asset.type.value, asset.legal_status.un_sanctions_compliance)
        finally:
            close_connection()
        print(f"Stored {len(assets)} assets", file=sys.stderr)
    print(json.dumps([a.to_json_dict() for a in assets], indent=2, ensure_ascii=False))


def cmd_classify(args):
    """Screen an asset and print its disposition and disclaimer."""
    from .compliance import classify, disclaimer

    asset = _load_asset(args.asset)
    status = classify(asset)
    print(json.dumps({
        "sanctionStatus": status.value,
        "complianceDisclaimer": disclaimer(asset),
    }, indent=2))
    return 0


def cmd_redact(args):
    from .integration import prepare_for_display

    asset = _load_asset(args.asset)
    print(json.dumps(prepare_for_display(asset).to_json_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_eligibility(args):
    """Check a bidder against an asset. Exit code 1 when ineligible."""
    from .compliance import check_eligibility
    from .models import BidderInfo

    asset = _load_asset(args.asset)
    bidder = BidderInfo.model_validate(load_json(args.bidder))
    result = check_eligibility(asset, bidder)
    print(json.dumps(result.to_dict(), indent=2))

    if result.eligible:
        print("\n✓ Bidder eligible", file=sys.stderr)
        return 0
    print(f"\n✗ Bidder ineligible: {result.reason}", file=sys.stderr)
    return 1


def cmd_ingest_customs(args):
    from .connectors.customs import parse_seizure_report

    with open(args.csv, 'r', encoding='utf-8') as f:
        assets = parse_seizure_report(f.read())
    _emit(assets, args.store)
    return 0


def cmd_scrape_warrants(args):
    from .connectors.transport_malta import scrape_arrest_warrants

    assets = scrape_arrest_warrants(args.url)
    _emit(assets, args.store)
    return 0


def main(argv=None):
    from .config import LOG_JSON, LOG_LEVEL
    from .logging_config import configure_logging

    parser = argparse.ArgumentParser(
        description="Malta seized-asset auctions CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  malta-auctions classify -a asset.json
  malta-auctions eligibility -a asset.json -b bidder.json
  malta-auctions ingest-customs -c seizures.csv --store
  malta-auctions scrape-warrants --store
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    classify_parser = subparsers.add_parser("classify", help="Screen an asset")
    classify_parser.add_argument("-a", "--asset", required=True, help="Asset JSON file")

    redact_parser = subparsers.add_parser("redact", help="Show the display copy of an asset")
    redact_parser.add_argument("-a", "--asset", required=True, help="Asset JSON file")

    elig_parser = subparsers.add_parser("eligibility", help="Check bidder eligibility")
    elig_parser.add_argument("-a", "--asset", required=True, help="Asset JSON file")
    elig_parser.add_argument("-b", "--bidder", required=True, help="Bidder JSON file")

    customs_parser = subparsers.add_parser("ingest-customs", help="Parse a Customs seizure report")
    customs_parser.add_argument("-c", "--csv", required=True, help="Seizure report CSV file")
    customs_parser.add_argument("--store", action="store_true", help="Persist parsed assets")

    scrape_parser = subparsers.add_parser("scrape-warrants", help="Scrape Transport Malta arrest warrants")
    scrape_parser.add_argument("-u", "--url", help="Notices page URL")
    scrape_parser.add_argument("--store", action="store_true", help="Persist parsed assets")

    args = parser.parse_args(argv)
    configure_logging(LOG_LEVEL, json_format=LOG_JSON, stream=sys.stderr)

    commands = {
        "classify": cmd_classify,
        "redact": cmd_redact,
        "eligibility": cmd_eligibility,
        "ingest-customs": cmd_ingest_customs,
        "scrape-warrants": cmd_scrape_warrants,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 2
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
