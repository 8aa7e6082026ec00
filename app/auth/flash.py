"""
Flash messages: a short-lived, unsigned list of notices kept in a cookie.

Flash data is display-only and never used for authorization. The cookie value
is the percent-encoded JSON array, so client script can read it with
JSON.parse(decodeURIComponent(value)).
"""

import json
from typing import List, Mapping, Optional
from urllib.parse import quote, unquote

from .cookies import FLASH_COOKIE_NAME, CookieOptions, MutableCookieJar


FLASH_MAX_ENTRIES = 10


def encode_flash(messages: List[str]) -> str:
    """Serialize messages to a cookie-safe value."""
    return quote(json.dumps(messages, separators=(",", ":")), safe="")


def parse_flash(raw: Optional[str]) -> List[str]:
    """
    Parse a flash cookie value.

    Accepts a percent-encoded or plain JSON array (non-string items dropped),
    a JSON string, or a legacy bare value that is not JSON at all.
    """
    if not raw:
        return []

    text = unquote(raw)
    try:
        parsed = json.loads(text)
    except ValueError:
        return [text]

    if isinstance(parsed, list):
        return [item for item in parsed if isinstance(item, str)]
    if isinstance(parsed, str):
        return [parsed]
    return []


class FlashChannel:
    """Reads and appends flash messages."""

    def __init__(self, cookie_options: CookieOptions, max_entries: int = FLASH_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._cookie_options = cookie_options
        self._max_entries = max_entries

    def read(self, cookies: Mapping[str, str]) -> List[str]:
        """Current messages, oldest first. Never modifies the cookie."""
        return parse_flash(cookies.get(FLASH_COOKIE_NAME))

    def append(
        self,
        cookies: Mapping[str, str],
        jar: MutableCookieJar,
        message: str,
    ) -> List[str]:
        """
        Append a message and write the list back.

        Args:
            cookies: Cookies of the incoming request
            jar: Write access to the outgoing response's cookies
            message: Message to add

        Returns:
            The list as written, capped to the newest entries
        """
        messages = self.read(cookies)
        messages.append(message)
        messages = messages[-self._max_entries:]

        jar.set(
            FLASH_COOKIE_NAME,
            encode_flash(messages),
            self._cookie_options,
        )
        return messages
