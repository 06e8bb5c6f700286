"""Catalog reference parsing."""

from __future__ import annotations

import re
from typing import Final

from .errors import InvalidReferenceError

REFERENCE_PATTERN: Final = re.compile(r"/title/(?P<ref>\w+)", re.IGNORECASE)
CANONICAL_TITLE_URL: Final[str] = "https://www.imdb.com/title/{ref}"


def extract_external_ref(link: str | None) -> str:
    """Return the catalog id embedded in a ``.../title/<ref>`` link."""

    if not link:
        raise InvalidReferenceError(link)
    match = REFERENCE_PATTERN.search(link)
    if match is None:
        raise InvalidReferenceError(link)
    return match.group("ref")


def canonical_url(external_ref: str) -> str:
    return CANONICAL_TITLE_URL.format(ref=external_ref)
