"""Event description assembly."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from .references import canonical_url

if TYPE_CHECKING:
    from .model import EnrichedMetadata

ADULT_WARNING: Final[str] = "🔞 **This is an adult movie**\n"
GENRE_SEPARATOR: Final[str] = "  "
ELLIPSIS: Final[str] = "…"
DISCORD_DESCRIPTION_LIMIT: Final[int] = 1000


def render_description(
    metadata: EnrichedMetadata,
    external_ref: str,
    *,
    limit: int | None = DISCORD_DESCRIPTION_LIMIT,
) -> str:
    """Compose the event description.

    Layout is an optional maturity warning line, the backtick-quoted genres, the
    overview, a blank line, then the canonical title URL. When ``limit`` is set the
    overview is shortened first, then trailing genres are dropped, so the URL
    survives whenever it fits at all.
    """

    warning = ADULT_WARNING if metadata.adult else ""
    genres = list(metadata.genres)
    tail = f"\n\n{canonical_url(external_ref)}"
    overview = metadata.overview.strip()

    if limit is None:
        return f"{_head(warning, genres)}{overview}{tail}"

    while genres and len(_head(warning, genres)) + len(tail) > limit:
        genres.pop()
    head = _head(warning, genres)
    room = limit - len(head) - len(tail)
    if len(overview) > room:
        overview = _shorten(overview, room)
    return f"{head}{overview}{tail}"[-limit:]


def _head(warning: str, genres: list[str]) -> str:
    joined = GENRE_SEPARATOR.join(f"`{genre}`" for genre in genres)
    return f"{warning}{joined}\n"


def _shorten(text: str, room: int) -> str:
    if room <= len(ELLIPSIS):
        return ""
    cut = text[: room - len(ELLIPSIS)].rstrip()
    return f"{cut}{ELLIPSIS}"
