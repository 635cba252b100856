"""Tests for the tiered profile field extraction."""
from unittest import mock

import pytest

from profile_acquisition import extractors
from profile_acquisition.extractors import (
    extract_from_markup,
    extract_from_meta,
    extract_profile_fields,
    parse_document,
    parse_follower_count,
)

from conftest import EMPTY_HTML, MARKUP_HTML, META_HTML


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12,345 Followers, 210 Following", 12345),
        ("1 follower? no: 7 followers", 7),
        ("Followed by many. 1,000,000 FOLLOWERS", 1000000),
        ("987followers", 987),
        ("1.4M Followers", None),
        ("1.4 followers", None),
        ("See photos and videos", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_follower_count(text, expected):
    assert parse_follower_count(text) == expected


def test_meta_tier_reads_open_graph_tags():
    fields = extract_from_meta(parse_document(META_HTML), "alice")

    assert fields is not None
    assert fields.avatar_url == "https://cdn.example.com/alice.jpg"
    assert fields.follower_count == 12345
    assert fields.tier == "meta"


def test_meta_tier_falls_back_to_plain_description():
    html = """
    <html><head>
      <meta property="og:image" content="https://cdn.example.com/bob.jpg">
      <meta name="description" content="3,210 Followers, 5 Following">
    </head></html>
    """
    fields = extract_from_meta(parse_document(html), "bob")

    assert fields is not None
    assert fields.follower_count == 3210


@pytest.mark.parametrize(
    "head",
    [
        '<meta property="og:description" content="10 Followers">',
        '<meta property="og:image" content="https://cdn.example.com/a.jpg">',
        '<meta property="og:image" content="https://cdn.example.com/a.jpg">'
        '<meta property="og:description" content="0 Followers, 3 Following">',
        '<meta property="og:image" content="https://cdn.example.com/a.jpg">'
        '<meta property="og:description" content="See Instagram photos and videos">',
    ],
    ids=["no-image", "no-description", "zero-followers", "no-count"],
)
def test_meta_tier_fails_as_a_whole(head):
    soup = parse_document(f"<html><head>{head}</head></html>")

    assert extract_from_meta(soup, "alice") is None


def test_markup_tier_finds_avatar_and_list_count():
    fields = extract_from_markup(parse_document(MARKUP_HTML), "alice")

    assert fields is not None
    assert fields.avatar_url == "https://cdn.example.com/alice-small.jpg"
    assert fields.follower_count == 2048
    assert fields.tier == "markup"


def test_markup_tier_uses_followers_link_and_identifier_alt():
    html = """
    <html><body>
      <img alt="logo" src="/logo.png">
      <img alt="Photo of carol" src="https://cdn.example.com/carol.jpg">
      <a href="/carol/followers/"><span title="4,321">4,321</span></a>
    </body></html>
    """
    fields = extract_from_markup(parse_document(html), "carol")

    assert fields is not None
    assert fields.avatar_url == "https://cdn.example.com/carol.jpg"
    assert fields.follower_count == 4321


def test_markup_tier_prefers_profile_picture_alt_over_identifier():
    html = """
    <html><body>
      <img alt="dave at the beach" src="/beach.jpg">
      <img alt="dave's profile picture" src="/avatar.jpg">
      <p>55 followers</p>
    </body></html>
    """
    fields = extract_from_markup(parse_document(html), "dave")

    assert fields is not None
    assert fields.avatar_url == "/avatar.jpg"


def test_markup_tier_reads_label_before_count():
    html = '<img alt="alice profile picture" src="/a.jpg"><ul><li>Followers: 1,234</li></ul>'

    fields = extract_from_markup(parse_document(html), "alice")

    assert fields is not None
    assert fields.avatar_url == "/a.jpg"
    assert fields.follower_count == 1234


def test_markup_tier_ignores_abbreviated_label_count():
    html = '<img alt="alice profile picture" src="/a.jpg"><p>Followers: 1.4M</p>'

    assert extract_from_markup(parse_document(html), "alice") is None


def test_markup_tier_requires_both_fields():
    html = '<html><body><img alt="profile picture" src="/a.jpg"></body></html>'

    assert extract_from_markup(parse_document(html), "alice") is None


def test_chain_uses_meta_tier_without_trying_markup():
    markup_spy = mock.Mock(return_value=None)
    with mock.patch.object(extractors, "STRATEGIES", (extract_from_meta, markup_spy)):
        fields = extract_profile_fields(parse_document(META_HTML), "alice")

    assert fields is not None
    assert fields.tier == "meta"
    markup_spy.assert_not_called()


def test_chain_falls_back_to_markup_tier():
    fields = extract_profile_fields(parse_document(MARKUP_HTML), "alice")

    assert fields is not None
    assert fields.tier == "markup"
    assert fields.follower_count == 2048


def test_chain_does_not_merge_partial_results():
    # Meta has the avatar but no count; markup has the count but no avatar.
    html = """
    <html><head>
      <meta property="og:image" content="https://cdn.example.com/a.jpg">
      <meta property="og:description" content="See Instagram photos and videos">
    </head><body><ul><li><span>99</span> followers</li></ul></body></html>
    """
    assert extract_profile_fields(parse_document(html), "alice") is None


def test_chain_reports_absence_when_all_tiers_fail():
    assert extract_profile_fields(parse_document(EMPTY_HTML), "alice") is None


def test_chain_accepts_custom_strategies():
    first = mock.Mock(return_value=None)
    second = mock.Mock(return_value=None)

    assert extract_profile_fields(parse_document(EMPTY_HTML), "alice", strategies=[first, second]) is None
    first.assert_called_once()
    second.assert_called_once()
