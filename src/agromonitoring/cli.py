"""Command-line access to the Agro Monitoring API.

The API key is read from --api-key or the AGRO_API_KEY setting.
"""

import argparse
import asyncio
import logging
import sys
from datetime import UTC, date, datetime, timedelta
from pathlib import Path

from agromonitoring.core import settings, to_utc
from agromonitoring.provider import AgroProvider
from agromonitoring.satellite import ImageryOptions
from agromonitoring.weather.models import Current


def _day_start(value: str) -> int:
    """Parse an ISO date (YYYY-MM-DD) into unix seconds at midnight UTC."""
    try:
        d = date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from e
    return to_utc(datetime(d.year, d.month, d.day, tzinfo=UTC))


def _default_range() -> tuple[int, int]:
    """Last 30 days up to now."""
    end = datetime.now(UTC)
    return to_utc(end - timedelta(days=30)), to_utc(end)


def _print_weather(w: Current) -> None:
    temp = f"{w.main.temp - 273.15:.1f}°C" if w.main and w.main.temp is not None else "N/A"
    humidity = f"{w.main.humidity}%" if w.main else "N/A"
    wind = f"{w.wind.speed:.1f} m/s" if w.wind else "N/A"
    desc = w.weather[0].description if w.weather else ""
    print(f"{w.date:%Y-%m-%d %H:%M}  {temp:>8} {humidity:>6} {wind:>10}  {desc}")


async def cmd_polygons(provider: AgroProvider, args: argparse.Namespace) -> int:
    """List all polygons."""
    polygons = await provider.get_poly_list()
    if polygons is None:
        return 1
    if not polygons:
        print("No polygons found.")
        return 0

    print(f"{'ID':<26} {'Name':<25} {'Area (ha)':>10}")
    print("-" * 63)
    for poly in sorted(polygons, key=lambda p: p.name):
        print(f"{poly.id:<26} {poly.name:<25} {poly.area:>10.2f}")
    return 0


async def cmd_polygon(provider: AgroProvider, args: argparse.Namespace) -> int:
    """Show one polygon."""
    poly = await provider.get_poly(args.id)
    if poly is None:
        return 1
    print(f"{poly.name}")
    print(f"  ID: {poly.id}")
    print(f"  Area: {poly.area:.2f} ha")
    print(f"  Center: {poly.center}")
    print(f"  Rings: {len(poly.geo_json.geometry.coordinates)}")
    if poly.created is not None:
        print(f"  Created: {poly.created:%Y-%m-%d %H:%M} UTC")
    return 0


async def cmd_delete(provider: AgroProvider, args: argparse.Namespace) -> int:
    """Delete a polygon."""
    if not await provider.delete_poly(args.id):
        return 1
    print(f"Deleted polygon {args.id}")
    return 0


async def cmd_weather(provider: AgroProvider, args: argparse.Namespace) -> int:
    """Show current weather or forecast for a polygon."""
    if args.forecast:
        forecast = await provider.get_forecast_weather(args.id)
        if forecast is None:
            return 1
        for w in forecast:
            _print_weather(w)
        return 0

    current = await provider.get_current_weather(args.id)
    if current is None:
        return 1
    _print_weather(current)
    return 0


async def cmd_imagery(provider: AgroProvider, args: argparse.Namespace) -> int:
    """Search satellite imagery for a polygon."""
    start, end = _default_range()
    options = ImageryOptions(
        polygon_id=args.id,
        start=args.start if args.start is not None else start,
        end=args.end if args.end is not None else end,
        clouds_max=args.clouds_max,
    )
    images = await provider.get_imagery(options)
    if images is None:
        return 1
    if not images:
        print("No imagery found.")
        return 0

    print(f"{'Date':<12} {'Source':<12} {'Cover%':>7} {'Cloud%':>7}")
    print("-" * 41)
    for img in sorted(images, key=lambda i: i.dt or 0):
        day = f"{img.date:%Y-%m-%d}" if img.date else "N/A"
        cover = f"{img.dc}" if img.dc is not None else "N/A"
        cloud = f"{img.cl:.1f}" if img.cl is not None else "N/A"
        print(f"{day:<12} {img.type or 'unknown':<12} {cover:>7} {cloud:>7}")
    return 0


async def cmd_ndvi(provider: AgroProvider, args: argparse.Namespace) -> int:
    """Show NDVI history for a polygon."""
    start, end = _default_range()
    options = ImageryOptions(
        polygon_id=args.id,
        start=args.start if args.start is not None else start,
        end=args.end if args.end is not None else end,
    )
    history = await provider.get_ndvi_history(options)
    if history is None:
        return 1

    print(f"{'Date':<12} {'Source':<12} {'Mean':>7} {'Median':>7}")
    print("-" * 41)
    for entry in sorted(history, key=lambda h: h.dt or 0):
        day = f"{entry.date:%Y-%m-%d}" if entry.date else "N/A"
        mean = f"{entry.data.mean:.3f}" if entry.data and entry.data.mean is not None else "N/A"
        median = f"{entry.data.median:.3f}" if entry.data and entry.data.median is not None else "N/A"
        print(f"{day:<12} {entry.source or 'unknown':<12} {mean:>7} {median:>7}")
    return 0


async def cmd_tile(provider: AgroProvider, args: argparse.Namespace) -> int:
    """Download a map tile to a file."""
    data = await provider.get_tile(args.url, args.z, args.x, args.y)
    if data is None:
        return 1
    args.output.write_bytes(data)
    print(f"Saved {len(data)} bytes to {args.output}")
    return 0


COMMANDS = {
    "polygons": cmd_polygons,
    "polygon": cmd_polygon,
    "delete": cmd_delete,
    "weather": cmd_weather,
    "imagery": cmd_imagery,
    "ndvi": cmd_ndvi,
    "tile": cmd_tile,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agromonitoring",
        description="Agro Monitoring API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  agromonitoring polygons                          List polygons
  agromonitoring weather 5aaa8052cbbbb5000b73ff66  Current weather
  agromonitoring weather ID --forecast             5-day forecast
  agromonitoring imagery ID --start 2024-05-01     Satellite scenes since May
  agromonitoring tile URL 12 650 1420 -o tile.png  Download a tile
""",
    )
    parser.add_argument("--api-key", help="API key (default: AGRO_API_KEY)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("polygons", help="List polygons")

    polygon_parser = subparsers.add_parser("polygon", help="Show a polygon")
    polygon_parser.add_argument("id", help="Polygon id")

    delete_parser = subparsers.add_parser("delete", help="Delete a polygon")
    delete_parser.add_argument("id", help="Polygon id")

    weather_parser = subparsers.add_parser("weather", help="Show weather for a polygon")
    weather_parser.add_argument("id", help="Polygon id")
    weather_parser.add_argument("--forecast", action="store_true", help="Show the forecast instead")

    for name, help_text in (("imagery", "Search satellite imagery"), ("ndvi", "Show NDVI history")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("id", help="Polygon id")
        sub.add_argument("--start", type=_day_start, help="Start date YYYY-MM-DD (default: 30 days ago)")
        sub.add_argument("--end", type=_day_start, help="End date YYYY-MM-DD (default: now)")
        if name == "imagery":
            sub.add_argument("--clouds-max", type=float, help="Maximum cloud coverage %%")

    tile_parser = subparsers.add_parser("tile", help="Download a map tile")
    tile_parser.add_argument("url", help="Tile URL template containing {z}/{x}/{y}")
    tile_parser.add_argument("z", type=int)
    tile_parser.add_argument("x", type=int)
    tile_parser.add_argument("y", type=int)
    tile_parser.add_argument("-o", "--output", type=Path, required=True, help="Output file")

    return parser


async def cli_main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command not in COMMANDS:
        parser.print_help()
        return 2

    try:
        provider = AgroProvider(args.api_key)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    async with provider:
        return await COMMANDS[args.command](provider, args)


def cli() -> None:
    """CLI entry point."""
    sys.exit(asyncio.run(cli_main()))


if __name__ == "__main__":
    cli()
