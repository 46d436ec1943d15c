#!/usr/bin/env python3
"""
Hotellook - Command-line access to the hotel search API
=======================================================

Usage:
    python main.py lookup "Saint-Petersburg"        # Find a city or hotel
    python main.py price MOW 2026-12-10 2026-12-17   # Cached prices
    python main.py results -1 --sort-by price        # Demo search results
    python main.py countries                         # Closed: needs a token

Credentials come from HOTELLOOK_MARKER / HOTELLOOK_TOKEN, the 'credentials'
section of hotellook.yaml, or --marker / --token.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional

from rich.console import Console
from rich.table import Table

from api import (
    HotellookClient, create_client,
    LookupRequest, PriceRequest, SearchRequest, SearchResultsRequest,
)
from core.errors import ErrorHandler
from infra.config import ConfigManager, load_credentials
from infra.logging import configure_logging


console = Console()


def print_lookup(response) -> None:
    if not response.results.locations and not response.results.hotels:
        console.print("[yellow]Nothing found[/yellow]")
        return

    table = Table(title="Locations")
    table.add_column("ID", style="cyan")
    table.add_column("City")
    table.add_column("Country")
    table.add_column("IATA")
    table.add_column("Hotels", justify="right")
    for loc in response.results.locations:
        table.add_row(loc.id, loc.city_name, loc.country_name, ",".join(loc.iata), loc.hotels_count)
    console.print(table)

    if response.results.hotels:
        table = Table(title="Hotels")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Location")
        for hotel in response.results.hotels:
            table.add_row(str(hotel.id), hotel.full_name, hotel.location_name)
        console.print(table)


def print_prices(results) -> None:
    table = Table(title="Cached prices")
    table.add_column("Hotel ID", style="cyan")
    table.add_column("Name")
    table.add_column("Stars", justify="right")
    table.add_column("From", justify="right")
    table.add_column("Average", justify="right")
    for item in results:
        table.add_row(
            str(item.hotel_id), item.hotel_name, str(item.stars),
            f"{item.price_from:.2f}", f"{item.price_avg:.2f}",
        )
    console.print(table)


def print_search_results(results) -> None:
    console.print(f"[dim]Status: {results.status or 'unknown'}[/dim]")
    table = Table(title="Search results")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Stars", justify="right")
    table.add_column("Guest score", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Offers", justify="right")
    for hotel in results.results:
        table.add_row(
            str(hotel.id), hotel.name, str(hotel.stars), str(hotel.guest_score),
            f"{hotel.price:.0f}", str(len(hotel.rooms)),
        )
    console.print(table)


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, ensure_ascii=False))


async def run_command(client: HotellookClient, args: argparse.Namespace) -> None:
    """Dispatch one sub-command against the client."""
    if args.command == "lookup":
        print_lookup(await client.lookup(LookupRequest(
            query=args.query, lang=args.lang, look_for=args.look_for, limit=args.limit,
        )))
    elif args.command == "price":
        print_prices(await client.price(PriceRequest(
            location=args.location, check_in=args.check_in, check_out=args.check_out,
            currency=args.currency, adults=args.adults, limit=args.limit,
        )))
    elif args.command == "search":
        search_id = await client.search(SearchRequest(
            city_id=args.city_id, hotel_id=args.hotel_id, iata=args.iata,
            check_in=args.check_in, check_out=args.check_out,
            adults_count=args.adults, children_count=len(args.child_age),
            child_ages=args.child_age, customer_ip=args.customer_ip,
            currency=args.currency, lang=args.lang,
        ))
        console.print(f"[bold green]Search started:[/bold green] {search_id}")
    elif args.command == "results":
        print_search_results(await client.fetch_search_results(SearchResultsRequest(
            search_id=args.search_id, limit=args.limit, sort_by=args.sort_by,
            sort_asc=-1 if args.descending else 0,
        )))
    elif args.command == "countries":
        print_json([c.model_dump(by_alias=True) for c in await client.countries()])
    elif args.command == "cities":
        print_json([c.model_dump(by_alias=True) for c in await client.cities()])
    elif args.command == "amenities":
        print_json([a.model_dump(by_alias=True) for a in await client.amenities()])
    elif args.command == "hotels":
        print_json((await client.fetch_hotel_list(args.location_id)).model_dump(by_alias=True))
    elif args.command == "room-types":
        print_json(await client.room_types())
    elif args.command == "photo-link":
        console.print(client.photo_link(args.hotel_id, args.photo_id, args.size))
    elif args.command == "sign":
        params = dict(pair.split("=", 1) for pair in args.param)
        console.print(client.with_signature(params))

    rate = client.rate_limits.state()
    if rate.limit:
        console.print(f"[dim]Rate limit: {rate.remaining}/{rate.limit} requests left[/dim]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hotellook hotel search API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", "-c", default="hotellook.yaml", help="Path to configuration file")
    parser.add_argument("--marker", type=int, default=None, help="Partner marker (overrides config)")
    parser.add_argument("--token", default=None, help="API token (overrides config)")
    parser.add_argument(
        "--log-level", "-l",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    parser.add_argument("--log-file", metavar="DIR", default=None,
                        help="Also write JSON logs to DIR/hotellook.log")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("lookup", help="Find locations and hotels by name")
    p.add_argument("query")
    p.add_argument("--lang", default="en")
    p.add_argument("--look-for", default="both", choices=["city", "hotel", "both"])
    p.add_argument("--limit", type=int, default=0)

    p = sub.add_parser("price", help="Cached prices for a location")
    p.add_argument("location")
    p.add_argument("check_in", help="YYYY-MM-DD")
    p.add_argument("check_out", help="YYYY-MM-DD")
    p.add_argument("--currency", default="")
    p.add_argument("--adults", type=int, default=0)
    p.add_argument("--limit", type=int, default=10)

    p = sub.add_parser("search", help="Start a search session")
    p.add_argument("check_in", help="YYYY-MM-DD")
    p.add_argument("check_out", help="YYYY-MM-DD")
    p.add_argument("--city-id", type=int, default=0)
    p.add_argument("--hotel-id", type=int, default=0)
    p.add_argument("--iata", default="")
    p.add_argument("--adults", type=int, default=2)
    p.add_argument("--child-age", type=int, action="append", default=[],
                   help="Age of one child, repeat for up to three children")
    p.add_argument("--customer-ip", default="127.0.0.1")
    p.add_argument("--currency", default="usd")
    p.add_argument("--lang", default="en")

    p = sub.add_parser("results", help="Fetch search results (-1 for demo data)")
    p.add_argument("search_id", type=int)
    p.add_argument("--limit", type=int, default=0)
    p.add_argument("--sort-by", default="", choices=["", "popularity", "price", "name", "guestScore", "stars"])
    p.add_argument("--descending", action="store_true")

    sub.add_parser("countries", help="List countries (closed)")
    sub.add_parser("cities", help="List cities (closed, slow)")
    sub.add_parser("amenities", help="List amenities (closed)")
    sub.add_parser("room-types", help="List room types (closed)")

    p = sub.add_parser("hotels", help="List hotels of a location (closed)")
    p.add_argument("location_id")

    p = sub.add_parser("photo-link", help="Build a hotel photo URL")
    p.add_argument("hotel_id", type=int)
    p.add_argument("photo_id", type=int)
    p.add_argument("--size", default="800x520")

    p = sub.add_parser("sign", help="Print a signed query string")
    p.add_argument("param", nargs="*", help="key=value pairs")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        level=getattr(logging, args.log_level),
        log_dir=args.log_file,
        file=args.log_file is not None,
    )
    logger = logging.getLogger("hotellook.main")
    handler = ErrorHandler()

    config = ConfigManager(args.config)
    marker, token = load_credentials(config)
    if args.marker is not None:
        marker = args.marker
    if args.token is not None:
        token = args.token

    client = create_client(marker, token=token, config=config.client_config())
    if client is None:
        console.print("[bold red]Error:[/bold red] a partner marker is required "
                      "(set HOTELLOOK_MARKER or pass --marker)")
        return 1

    try:
        asyncio.run(run_command(client, args))
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {handler.handle(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
