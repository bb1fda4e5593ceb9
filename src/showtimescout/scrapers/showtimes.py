"""Movie showtimes search scraper using BeautifulSoup HTML parsing."""

import logging
import re
from datetime import date

import httpx
from bs4 import BeautifulSoup, Tag

from showtimescout.config import settings
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
from showtimescout.utils.text import get_text, split_address_phone
from showtimescout.utils.times import TIME_PATTERN, normalise_times
from showtimescout.utils.urls import build_search_path, unwrap_redirect

logger = logging.getLogger(__name__)

FRAGMENT_KINDS = ("movie", "theater", "times")

_IMDB_RE = re.compile(r"imdb\.com/title/tt(-?\d*)/")
_LOCATION_RE = re.compile(r"^Showtimes for (.*)$", re.MULTILINE)


def _clean_time_text(text: str) -> str:
    """Drop everything but digits, colons and the letters of am/pm."""
    return re.sub(r"[^\d:amp]", "", text)


class ShowtimesScraper:
    """
    Scraper for a movie showtimes search (google.com/movies style).

    A search for a location, and optionally a film, returns a paginated list
    of results pages. Each page is a flat sequence of "movie", "theater" and
    "times" divs: a times listing belongs to whichever movie and theater
    came before it in the document, so the page is walked in order keeping
    the current film and cinema. Ticket links on the times are wrapped in
    tracking redirects that are removed.
    """

    def __init__(
        self,
        base_url: str | None = None,
        search_path: str | None = None,
        timeout: float | None = None,
        allow_partial_results: bool | None = None,
    ) -> None:
        """
        Initialize the scraper.

        Args:
            base_url: Host of the search service (uses settings if not provided)
            search_path: Path of the search page (uses settings if not provided)
            timeout: HTTP timeout in seconds (uses settings if not provided)
            allow_partial_results: Return the rows fetched so far when a later
                page fails, instead of raising (uses settings if not provided)
        """
        self.base_url = base_url or settings.showtimes_base_url
        self.search_path = search_path or settings.showtimes_search_path
        self.timeout = timeout if timeout is not None else settings.scrape_timeout
        if allow_partial_results is None:
            allow_partial_results = settings.showtimes_allow_partial_results
        self.allow_partial_results = allow_partial_results

    async def fetch(self, location: str, movie: str | None = None) -> ShowtimesResult:
        """
        Search for showtimes near a location.

        Args:
            location: Free-text location; zipcodes, addresses, cities or
                neighbourhoods all work
            movie: Film title to restrict the search to (all films if None)

        Returns:
            The disambiguated location and the result rows from every page

        Raises:
            NetworkError: If any results page cannot be fetched. With
                allow_partial_results, only a failure on the first page raises.
        """
        url: str | None = build_search_path(self.search_path, location, movie)
        rows: list[ResultRow] = []
        found_location: str | None = None
        pages = 0

        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": settings.scrape_user_agent, "Accept": "text/html"},
        ) as client:
            while url:
                try:
                    html = await self._fetch_page(client, url)
                except NetworkError as e:
                    if self.allow_partial_results and pages:
                        logger.warning(
                            f"Showtimes: stopping after {pages} page(s), keeping "
                            f"{len(rows)} rows: {e}"
                        )
                        break
                    raise

                page = self.parse_results(html)
                pages += 1
                rows.extend(page.rows)
                if found_location is None:
                    found_location = page.location
                logger.info(f"Showtimes: page {pages} for {location!r} had {len(page.rows)} rows")
                url = page.next_page_url

        logger.info(f"Showtimes: found {len(rows)} rows near {found_location!r}")
        return ShowtimesResult(location=found_location, rows=rows)

    async def search(self, query: Query) -> ShowtimesResult:
        """Run a search described by a Query."""
        return await self.fetch(query.location, query.movie)

    async def _fetch_page(self, client: httpx.AsyncClient, url: str) -> str:
        try:
            response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Showtimes: request for {url} failed: {e}")
            raise NetworkError(f"Request for {url} failed: {e}", url) from e

        if not response.is_success:
            logger.error(f"Showtimes: {url} returned HTTP {response.status_code}")
            raise NetworkError(
                f"{url} returned HTTP {response.status_code}", url, response.status_code
            )
        return response.text

    # ------------------------------------------------------------------
    # Page parsing
    # ------------------------------------------------------------------

    def parse_results(self, html: str) -> PageParseResult:
        """
        Parse one results page.

        Args:
            html: Results page HTML

        Returns:
            The page's result rows, its disambiguated location, and the path
            of the next results page (None on the last page)
        """
        soup = BeautifulSoup(html, "html.parser")

        rows: list[ResultRow] = []
        film: Film | None = None
        cinema: Cinema | None = None
        for div in soup.find_all(self._is_fragment):
            kind = " ".join(div["class"])
            if kind == "movie":
                film = self._parse_movie(div) or film
            elif kind == "theater":
                cinema = self._parse_theater(div) or cinema
            else:
                showtimes = self._parse_times(div)
                if showtimes:
                    rows.append(ResultRow(film=film, cinema=cinema, showtimes=showtimes))

        return PageParseResult(
            rows=rows,
            location=self._parse_location(soup),
            next_page_url=self._parse_next_link(soup),
        )

    @staticmethod
    def _is_fragment(tag: Tag) -> bool:
        return tag.name == "div" and " ".join(tag.get("class") or []) in FRAGMENT_KINDS

    def _parse_theater(self, div: Tag) -> Cinema | None:
        """Parse a theater div into a Cinema, or None if name or address is missing."""
        name_tag = div.select_one(".name")
        address_tag = div.select_one(".address") or div.select_one(".info")
        if not name_tag or not address_tag:
            logger.debug("Showtimes: skipping theater without name or address")
            return None

        address, phone = split_address_phone(get_text(address_tag))
        return Cinema(name=get_text(name_tag), address=address, phone=phone or None)

    def _parse_movie(self, div: Tag) -> Film | None:
        """Parse a movie div into a Film, or None if it has no name."""
        # Movie-first pages nest theater divs (with their own .name) in the movie div
        name_tag = div.select_one("div.desc h2") or div.select_one(".name")
        if not name_tag:
            logger.debug("Showtimes: skipping movie without name")
            return None

        imdb_id = None
        for a in div.find_all("a", href=True):
            match = _IMDB_RE.search(a["href"])
            if match:
                imdb_id = match.group(1)
                break

        return Film(name=get_text(name_tag), imdb_id=imdb_id)

    def _parse_times(self, div: Tag, day: date | None = None) -> list[Showtime]:
        """
        Parse a times div into Showtimes.

        Times that are links carry a ticket URL. Plain-text times come first,
        then linked times, and a time that is linked is not repeated as plain
        text.
        """
        seen: set[str] = set()

        linked: list[tuple[str, str | None]] = []
        for a in div.find_all("a"):
            text = a.get_text(strip=True)
            # Parsed from the cleaned text; plain-text tokens are matched against both
            cleaned = _clean_time_text(text.lower())
            if not TIME_PATTERN.search(text) or text in seen or cleaned in seen:
                continue
            seen.update((text, cleaned))
            href = a.get("href")
            linked.append((cleaned, unwrap_redirect(href) if href else None))

        plain: list[tuple[str, str | None]] = []
        for token in div.get_text(separator=" ").split():
            token = _clean_time_text(token)
            if not TIME_PATTERN.search(token) or token in seen:
                continue
            seen.add(token)
            plain.append((token, None))

        entries = plain + linked
        times = normalise_times([text for text, _ in entries], day)
        return [
            Showtime(time=time, ticket_url=ticket_url)
            for (_, ticket_url), time in zip(entries, times)
            if time is not None
        ]

    def _parse_location(self, soup: BeautifulSoup) -> str | None:
        """Extract the disambiguated location from the "Showtimes for ..." heading."""
        for h1 in soup.find_all("h1"):
            match = _LOCATION_RE.search(h1.get_text())
            if match:
                return match.group(1)
        return None

    def _parse_next_link(self, soup: BeautifulSoup) -> str | None:
        """Return the href of the last link reading exactly "Next", if any."""
        url = None
        for a in soup.find_all("a"):
            # ASCII whitespace only; "Next&nbsp;" is not the next link
            if a.get_text().strip(" \t\n\r\f\v") == "Next":
                url = a.get("href")
        return url
