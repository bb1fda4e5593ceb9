"""Exceptions raised by the showtimes scraper."""


class NetworkError(Exception):
    """A results page could not be fetched."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
