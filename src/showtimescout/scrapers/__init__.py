"""Showtimes search scraper and its result models."""

from showtimescout.scrapers.exceptions import NetworkError
from showtimescout.scrapers.models import (
    Cinema,
    Film,
    PageParseResult,
    Query,
    ResultRow,
    Showtime,
    ShowtimesResult,
)
from showtimescout.scrapers.showtimes import ShowtimesScraper

__all__ = [
    "Cinema",
    "Film",
    "NetworkError",
    "PageParseResult",
    "Query",
    "ResultRow",
    "Showtime",
    "ShowtimesResult",
    "ShowtimesScraper",
]
