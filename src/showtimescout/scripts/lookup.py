"""Look up today's showtimes near a location from the command line."""

import argparse
import asyncio
import json
import logging
import sys

from showtimescout.config import settings
from showtimescout.scrapers.exceptions import NetworkError
from showtimescout.scrapers.models import ShowtimesResult
from showtimescout.scrapers.showtimes import ShowtimesScraper


def format_result(result: ShowtimesResult) -> str:
    """Render a search result as a plain-text listing."""
    lines = [f"Showtimes for {result.location or 'unknown location'}", ""]
    if not result.rows:
        lines.append("No showtimes found.")

    for row in result.rows:
        film = row.film.name if row.film else "Unknown film"
        if row.film and row.film.imdb_id:
            film += f" (imdb tt{row.film.imdb_id})"
        lines.append(film)

        if row.cinema:
            cinema = f"  {row.cinema.name}, {row.cinema.address}"
            if row.cinema.phone:
                cinema += f" - {row.cinema.phone}"
            lines.append(cinema)

        for showtime in row.showtimes:
            entry = f"    {showtime.time:%H:%M}"
            if showtime.ticket_url:
                entry += f"  {showtime.ticket_url}"
            lines.append(entry)
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


async def lookup(location: str, movie: str | None, partial: bool) -> ShowtimesResult:
    scraper = ShowtimesScraper(allow_partial_results=partial or None)
    return await scraper.fetch(location, movie)


def main() -> None:
    parser = argparse.ArgumentParser(description="Find today's movie showtimes near a location.")
    parser.add_argument("location", help="Zipcode, address, city or neighbourhood")
    parser.add_argument("--movie", metavar="TITLE", help="Only show times for this film")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument(
        "--partial",
        action="store_true",
        help="Keep results from earlier pages if a later page fails",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = asyncio.run(lookup(args.location, args.movie, args.partial))
    except NetworkError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_result(result), end="")


if __name__ == "__main__":
    main()
