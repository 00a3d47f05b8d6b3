#!/usr/bin/env python3
"""
Main entry point for the Bagster Carrier Selection service.
"""

import argparse
import json
import sys

from bagster.logging_config import configure_logging, get_logger


def run_api():
    """Start the FastAPI server."""
    import uvicorn
    from bagster.config import settings

    uvicorn.run(
        "bagster.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


def run_select(argv):
    """Run a carrier selection against the catalogue and print it as JSON."""
    from bagster.config import settings
    from bagster.modules.carrier_selection import (
        CarrierSelectionError,
        SelectionCriteriaSchema,
        ShipmentRequestSchema,
        get_catalogue,
        get_orchestrator,
    )

    parser = argparse.ArgumentParser(prog="main.py select")
    parser.add_argument("--origin", required=True)
    parser.add_argument("--destination", required=True)
    parser.add_argument("--weight", type=float, required=True, help="Weight in kg")
    parser.add_argument("--strategy", default=None, help="Defaults to the configured strategy")
    parser.add_argument("--destination-country", default=None)
    parser.add_argument("--min-rating", type=float, default=None)
    parser.add_argument("--max-price", type=float, default=None)
    parser.add_argument("--service", action="append", default=[], help="Required service (repeatable)")
    parser.add_argument("--top-n", type=int, default=None)
    args = parser.parse_args(argv)

    log = get_logger("bagster.cli")

    try:
        shipment = ShipmentRequestSchema(
            origin=args.origin,
            destination=args.destination,
            weight_kg=args.weight,
        )
        criteria = SelectionCriteriaSchema(
            strategy=args.strategy or settings.default_strategy,
            destination_country=args.destination_country,
            min_rating=args.min_rating,
            max_price=args.max_price,
            required_services=args.service,
        )
        result = get_orchestrator().select_carrier(
            carriers=get_catalogue().approved_carriers(),
            shipment=shipment,
            criteria=criteria,
            top_n=args.top_n,
        )
    except CarrierSelectionError as e:
        log.warning("selection_rejected", error_code=e.error_code, error_message=e.message)
        print(json.dumps({"status": "error", **e.to_dict()}, indent=2))
        return 1

    log.info(
        "selection_complete",
        selected=result.selected_carrier.carrier_id if result.selected_carrier else None,
        total_evaluated=result.total_evaluated,
    )
    print(result.model_dump_json(indent=2))
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Bagster Carrier Selection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  api       Start the FastAPI server
  select    Select a carrier from the catalogue and print the result

Examples:
  python main.py api
  python main.py select --origin Lagos --destination Accra --weight 12 --strategy cheapest
  python main.py select --origin Lagos --destination Nairobi --weight 5 \\
      --strategy destination_focused --destination-country Kenya
        """,
    )

    parser.add_argument(
        "command",
        choices=["api", "select"],
        help="Command to run",
    )

    args, remaining = parser.parse_known_args()

    # Configure logging
    configure_logging()

    # Run command
    if args.command == "api":
        run_api()
    elif args.command == "select":
        sys.exit(run_select(remaining))


if __name__ == "__main__":
    main()
