from __future__ import annotations

from datetime import timedelta

from cinesync.domain.model import EventEntityType, ImageAsset, PrivacyLevel
from cinesync.domain.publishing import build_publish_request
from tests.helpers.reconciliation import make_metadata, make_record


def test_request_spans_runtime() -> None:
    record = make_record()

    request = build_publish_request(
        record, make_metadata(), external_ref="tt0111161", channel_id="c-1"
    )

    assert request.name == "The Shawshank Redemption (1994)"
    assert request.start == record.scheduled_at
    assert request.end == record.scheduled_at + timedelta(minutes=142)
    assert request.privacy_level is PrivacyLevel.GUILD_ONLY
    assert request.entity_type is EventEntityType.VOICE
    assert request.image is None


def test_request_without_year_uses_bare_title() -> None:
    request = build_publish_request(
        make_record(),
        make_metadata(release_year=None, runtime_minutes=None),
        external_ref="tt0111161",
        channel_id="c-1",
    )

    assert request.name == "The Shawshank Redemption"
    assert request.end is None


def test_request_embeds_image() -> None:
    image = ImageAsset(data_uri="data:image/png;base64,AA==", content_type="image/png", size=1)

    request = build_publish_request(
        make_record(), make_metadata(), external_ref="tt1", channel_id="c-1", image=image
    )

    assert request.image == "data:image/png;base64,AA=="
