"""Text utilities for cleaning scraped listing markup."""

import re
import string

from bs4 import Tag

_PHONE_CHARS = r"\d\s" + re.escape(string.punctuation)

# Biggest trailing run of digits, punctuation and whitespace. One "x" is
# allowed for extensions: "(800) 326-3264 x771".
_PHONE_SUFFIX_RE = re.compile(rf"[{_PHONE_CHARS}]+(?:x[{_PHONE_CHARS}]+)?$")


def get_text(tag: Tag) -> str:
    """Get clean text from a tag, collapsing runs of whitespace."""
    return re.sub(r"\s+", " ", tag.get_text(separator=" ")).strip()


def split_address_phone(text: str) -> tuple[str, str]:
    """
    Separate the phone number from a combined address+phone string.

    The phone number is the longest trailing run of digits, punctuation and
    whitespace, with a leading " - " separator removed. The split is only
    accepted when at least half of the phone number's characters are digits.

    Args:
        text: Listing string containing an address and possibly a phone number

    Returns:
        Tuple of (address, phone). The phone is an empty string, and the
        address is the whole input, when no phone number could be split off.

    Example:
        >>> split_address_phone("234 West 42nd St., New York - (212) 398-3939")
        ('234 West 42nd St., New York', '(212) 398-3939')
    """
    match = _PHONE_SUFFIX_RE.search(text)
    if not match:
        return text, ""

    address = text[: match.start()]
    phone = re.sub(r"^\s*-\s*", "", match.group(0))

    # Leading whitespace counts against the digit ratio
    digit_count = len(re.findall(r"\d", phone))
    if digit_count * 2 < len(phone):
        return text, ""
    return address, phone.strip()
