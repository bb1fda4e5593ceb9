"""Data models for showtime search results."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Query:
    """A showtime search: a free-text location and, optionally, a film title."""

    location: str
    movie: str | None = None


@dataclass(frozen=True)
class Cinema:
    name: str
    address: str
    phone: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "address": self.address, "phone": self.phone}


@dataclass(frozen=True)
class Film:
    name: str
    imdb_id: str | None = None  # Opaque token; the service can return "-1949659688"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "imdb_id": self.imdb_id}


@dataclass(frozen=True)
class Showtime:
    """
    A single showing time.

    ``time`` falls on the day of the search, in UTC, with zero seconds.
    """

    time: datetime
    ticket_url: str | None = None  # Ticketing site, redirect wrapper removed

    def __post_init__(self) -> None:
        """Validate that time is timezone-aware."""
        if self.time.tzinfo is None:
            raise ValueError("time must be timezone-aware")

    def to_dict(self) -> dict[str, Any]:
        return {"time": self.time.isoformat(), "ticket_url": self.ticket_url}


@dataclass(frozen=True)
class ResultRow:
    """
    All showtimes of one film at one cinema from a single times listing.

    The film and cinema are whichever ones preceded the listing on the page,
    so either can be None on a malformed page.
    """

    film: Film | None
    cinema: Cinema | None
    showtimes: list[Showtime] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "film": self.film.to_dict() if self.film else None,
            "cinema": self.cinema.to_dict() if self.cinema else None,
            "showtimes": [s.to_dict() for s in self.showtimes],
        }


@dataclass(frozen=True)
class PageParseResult:
    """Everything parsed from one results page."""

    rows: list[ResultRow]
    location: str | None = None  # Disambiguated location, e.g. "Cambridge, MA 02139"
    next_page_url: str | None = None  # Path of the "Next" page, if any


@dataclass(frozen=True)
class ShowtimesResult:
    """Aggregated result of a search across all pages; unpacks as (location, rows)."""

    location: str | None
    rows: list[ResultRow]

    def __iter__(self) -> Iterator[Any]:
        yield self.location
        yield self.rows

    def to_dict(self) -> dict[str, Any]:
        return {"location": self.location, "rows": [r.to_dict() for r in self.rows]}
