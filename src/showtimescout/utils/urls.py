"""URL helpers for the showtimes search service."""

import re
from urllib.parse import quote, unquote

# Anything after a one-character prefix that starts with http://, minus any
# trailing "&..." tracking parameters.
_REDIRECT_RE = re.compile(r".(http://.*?)(&.*)?$")


def unwrap_redirect(url: str) -> str:
    """
    Extract the destination URL wrapped by a tracking redirect.

    Args:
        url: Redirect URL such as "/url?q=http://example.com/&sa=X"

    Returns:
        The unescaped destination URL, or the input unchanged if it does not
        wrap one.
    """
    match = _REDIRECT_RE.search(url)
    if not match:
        return url
    return unquote(match.group(1))


def build_search_path(search_path: str, location: str, movie: str | None = None) -> str:
    """Build the path and query string for the first results page."""
    near = quote(location, safe="")
    if movie:
        return f"{search_path}?q={quote(movie, safe='')}&near={near}"
    return f"{search_path}?near={near}"
