from __future__ import annotations

from cinesync.domain.description import ADULT_WARNING, render_description
from tests.helpers.reconciliation import make_metadata


def test_description_layout() -> None:
    metadata = make_metadata(genres=("Drama", "Crime"), overview="Hope.")

    assert render_description(metadata, "tt0111161") == (
        "`Drama`  `Crime`\nHope.\n\nhttps://www.imdb.com/title/tt0111161"
    )


def test_adult_titles_carry_warning_line() -> None:
    metadata = make_metadata(adult=True, genres=("Drama",), overview="Hope.")

    description = render_description(metadata, "tt0111161")

    assert description.startswith(ADULT_WARNING)
    assert description.startswith("🔞 **This is an adult movie**\n`Drama`\n")


def test_long_overview_is_shortened_to_limit() -> None:
    metadata = make_metadata(overview="word " * 400)

    description = render_description(metadata, "tt0111161")

    assert len(description) <= 1000
    assert description.endswith("…\n\nhttps://www.imdb.com/title/tt0111161")
    assert description.startswith("`Drama`  `Crime`\nword word")


def test_limit_can_be_disabled() -> None:
    metadata = make_metadata(overview="x" * 2000)

    assert len(render_description(metadata, "tt1", limit=None)) > 2000


def test_genres_are_dropped_when_they_alone_exceed_limit() -> None:
    genres = tuple(f"Genre number {index}" for index in range(80))
    metadata = make_metadata(adult=True, genres=genres, overview="Hope.")

    description = render_description(metadata, "tt0111161")

    assert len(description) <= 1000
    assert description.startswith(ADULT_WARNING + "`Genre number 0`  `Genre number 1`")
    assert description.endswith("\n\nhttps://www.imdb.com/title/tt0111161")
    assert "`Genre number 79`" not in description
