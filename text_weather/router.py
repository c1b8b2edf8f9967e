"""Parse-state tables and destination routing for the weather feed schema.

Several tag names (title, link, description, pubDate) occur both on the
channel and on each item. The outer state says whether the walker is inside
an item; the inner state tracks which item field is open. All functions here
are pure lookups over those two states and a tag name.
"""

from enum import Enum

from .builders import ChannelField, ItemField
from .elements import ElementKind
from .errors import FeedParseError

RSS_TAG = "rss"
ITEM_TAG = "item"
TITLE_TAG = "title"
LINK_TAG = "link"
DESCRIPTION_TAG = "description"
LANGUAGE_TAG = "language"
COPYRIGHT_TAG = "copyright"
PUB_DATE_TAG = "pubDate"
GUID_TAG = "guid"
GEO_POINT_TAG = "georss:point"


class OuterState(Enum):
    """Channel-level parse state."""

    INITIAL = "initial"
    SEEN_ROOT = "seen_root"
    TITLE = "title"
    LINK = "link"
    DESCRIPTION = "description"
    LANGUAGE = "language"
    COPYRIGHT = "copyright"
    PUB_DATE = "pub_date"
    ITEM = "item"
    COMPLETE = "complete"


class InnerState(Enum):
    """Item-level parse state, meaningful only while the outer state is ITEM."""

    INITIAL = "initial"
    TITLE = "title"
    LINK = "link"
    DESCRIPTION = "description"
    PUB_DATE = "pub_date"
    GUID = "guid"
    GEO_POINT = "geo_point"


class Destination(Enum):
    """Builder that receives a converted value."""

    CHANNEL = "channel"
    ITEM = "item"


_OUTER_FIELD_STATES = {
    TITLE_TAG: OuterState.TITLE,
    LINK_TAG: OuterState.LINK,
    DESCRIPTION_TAG: OuterState.DESCRIPTION,
    LANGUAGE_TAG: OuterState.LANGUAGE,
    COPYRIGHT_TAG: OuterState.COPYRIGHT,
    PUB_DATE_TAG: OuterState.PUB_DATE,
}

_INNER_FIELD_STATES = {
    TITLE_TAG: InnerState.TITLE,
    LINK_TAG: InnerState.LINK,
    DESCRIPTION_TAG: InnerState.DESCRIPTION,
    PUB_DATE_TAG: InnerState.PUB_DATE,
    GUID_TAG: InnerState.GUID,
    GEO_POINT_TAG: InnerState.GEO_POINT,
}

_CHANNEL_FIELDS = {
    TITLE_TAG: ChannelField.TITLE,
    LINK_TAG: ChannelField.LINK,
    DESCRIPTION_TAG: ChannelField.DESCRIPTION,
    LANGUAGE_TAG: ChannelField.LANGUAGE,
    COPYRIGHT_TAG: ChannelField.COPYRIGHT,
    PUB_DATE_TAG: ChannelField.PUB_DATE,
}

_ITEM_FIELDS = {
    TITLE_TAG: ItemField.TITLE,
    LINK_TAG: ItemField.LINK,
    DESCRIPTION_TAG: ItemField.DESCRIPTION,
    PUB_DATE_TAG: ItemField.PUB_DATE,
    GUID_TAG: ItemField.GUID,
    GEO_POINT_TAG: ItemField.GEO_POINT,
}

_FIELD_KINDS = {
    TITLE_TAG: ElementKind.STRING,
    LINK_TAG: ElementKind.URL,
    DESCRIPTION_TAG: ElementKind.STRING,
    LANGUAGE_TAG: ElementKind.STRING,
    COPYRIGHT_TAG: ElementKind.STRING,
    PUB_DATE_TAG: ElementKind.TIMESTAMP,
    GUID_TAG: ElementKind.URL,
    GEO_POINT_TAG: ElementKind.GEO_POINT,
}

CHANNEL_ONLY_TAGS = frozenset({LANGUAGE_TAG, COPYRIGHT_TAG})
ITEM_ONLY_TAGS = frozenset({GUID_TAG, GEO_POINT_TAG})
FIELD_TAGS = frozenset(_FIELD_KINDS)


def is_field_tag(tag: str) -> bool:
    """Return True if the tag carries a value the parser converts."""
    return tag in FIELD_TAGS


def field_kind(tag: str) -> ElementKind:
    """Return the element kind used to convert the text of a field tag."""
    return _FIELD_KINDS[tag]


def next_states(
    outer: OuterState, inner: InnerState, tag: str
) -> tuple[OuterState, InnerState]:
    """Compute the states after a start tag.

    Args:
        outer: Current channel-level state
        inner: Current item-level state
        tag: Qualified name of the element being opened

    Returns:
        The new (outer, inner) pair; unchanged for unrecognized tags

    Raises:
        FeedParseError: With kind STRUCTURE if the tag is not allowed here
    """
    if outer is OuterState.COMPLETE:
        return outer, inner

    if tag == RSS_TAG:
        if outer is not OuterState.INITIAL:
            raise FeedParseError.structure("Nested <rss> element", tag=tag)
        return OuterState.SEEN_ROOT, InnerState.INITIAL

    if tag == ITEM_TAG:
        if outer is OuterState.INITIAL:
            raise FeedParseError.structure("<item> before <rss>", tag=tag)
        if outer is OuterState.ITEM:
            raise FeedParseError.structure("Nested <item> element", tag=tag)
        return OuterState.ITEM, InnerState.INITIAL

    if tag not in FIELD_TAGS:
        return outer, inner

    if outer is OuterState.INITIAL:
        raise FeedParseError.structure(f"<{tag}> before <rss>", tag=tag)

    if outer is OuterState.ITEM:
        if tag in CHANNEL_ONLY_TAGS:
            raise FeedParseError.structure(
                f"Channel-only <{tag}> inside an item", tag=tag
            )
        return outer, _INNER_FIELD_STATES[tag]

    if tag in ITEM_ONLY_TAGS:
        raise FeedParseError.structure(f"Item-only <{tag}> outside an item", tag=tag)
    return _OUTER_FIELD_STATES[tag], inner


def route(
    outer: OuterState, inner: InnerState, tag: str
) -> tuple[Destination, ChannelField | ItemField]:
    """Decide which builder and field receive the value of a closing field tag.

    Raises:
        FeedParseError: With kind STRUCTURE if the tag does not close the
            field the states say is open
    """
    if tag not in FIELD_TAGS:
        raise FeedParseError.structure(f"<{tag}> is not a field element", tag=tag)

    if outer is OuterState.ITEM:
        if tag in CHANNEL_ONLY_TAGS:
            raise FeedParseError.structure(
                f"Channel-only <{tag}> inside an item", tag=tag
            )
        if inner is not _INNER_FIELD_STATES[tag]:
            raise FeedParseError.structure(
                f"</{tag}> does not close the open item field", tag=tag
            )
        return Destination.ITEM, _ITEM_FIELDS[tag]

    if tag in ITEM_ONLY_TAGS:
        raise FeedParseError.structure(f"Item-only <{tag}> outside an item", tag=tag)
    if outer is not _OUTER_FIELD_STATES[tag]:
        raise FeedParseError.structure(
            f"</{tag}> does not close the open channel field", tag=tag
        )
    return Destination.CHANNEL, _CHANNEL_FIELDS[tag]


def states_after_end(
    outer: OuterState, inner: InnerState, tag: str
) -> tuple[OuterState, InnerState]:
    """Compute the states after an end tag has been handled."""
    if tag == RSS_TAG:
        return OuterState.COMPLETE, InnerState.INITIAL
    if tag == ITEM_TAG:
        if outer is not OuterState.ITEM:
            raise FeedParseError.structure("</item> outside an item", tag=tag)
        return OuterState.SEEN_ROOT, InnerState.INITIAL
    if tag not in FIELD_TAGS:
        return outer, inner
    if outer is OuterState.ITEM:
        return outer, InnerState.INITIAL
    return OuterState.SEEN_ROOT, inner
