"""Staged builders that assemble feed items and the feed channel."""

from enum import Enum

from .elements import Element, ElementKind
from .errors import FeedParseError
from .models import ForecastChannel, ForecastItem


class ItemField(Enum):
    """Fields of a forecast item."""

    TITLE = "title"
    LINK = "link"
    DESCRIPTION = "description"
    PUB_DATE = "pub_date"
    GUID = "guid"
    GEO_POINT = "geo_point"


class ChannelField(Enum):
    """Fields of the feed channel."""

    TITLE = "title"
    LINK = "link"
    DESCRIPTION = "description"
    LANGUAGE = "language"
    COPYRIGHT = "copyright"
    PUB_DATE = "pub_date"
    ITEMS = "items"


ITEM_FIELD_KINDS = {
    ItemField.TITLE: ElementKind.STRING,
    ItemField.LINK: ElementKind.URL,
    ItemField.DESCRIPTION: ElementKind.STRING,
    ItemField.PUB_DATE: ElementKind.TIMESTAMP,
    ItemField.GUID: ElementKind.URL,
    ItemField.GEO_POINT: ElementKind.GEO_POINT,
}

CHANNEL_FIELD_KINDS = {
    ChannelField.TITLE: ElementKind.STRING,
    ChannelField.LINK: ElementKind.URL,
    ChannelField.DESCRIPTION: ElementKind.STRING,
    ChannelField.LANGUAGE: ElementKind.STRING,
    ChannelField.COPYRIGHT: ElementKind.STRING,
    ChannelField.PUB_DATE: ElementKind.TIMESTAMP,
}


class _Builder:
    """Accumulates optional elements keyed by a closed set of fields."""

    entity = "entity"
    field_kinds: dict = {}

    def __init__(self):
        self._values: dict = dict.fromkeys(self.field_kinds)
        self._consumed = False

    def set(self, field: Enum, element: Element) -> None:
        """Store an element for a field, replacing any earlier value.

        Raises:
            TypeError: If the field does not belong to this builder or the
                element kind does not match the field
            RuntimeError: If the builder has already been finalized
        """
        self._ensure_open()
        if field not in self.field_kinds:
            raise TypeError(f"{field!r} is not a field of {self.entity}")
        expected = self.field_kinds[field]
        if element.kind is not expected:
            raise TypeError(
                f"{self.entity} field {field.value} expects a {expected.value} "
                f"element, got {element.kind.value}"
            )
        self._values[field] = element

    def missing_fields(self) -> list[str]:
        """Return the names of required fields that have not been set."""
        return [field.value for field, value in self._values.items() if value is None]

    def _ensure_open(self) -> None:
        if self._consumed:
            raise RuntimeError(f"{self.entity} builder has already been finalized")

    def _take(self) -> dict:
        self._ensure_open()
        missing = self.missing_fields()
        if missing:
            raise FeedParseError.incomplete(self.entity, missing)
        self._consumed = True
        values = {field.value: value for field, value in self._values.items()}
        self._values = {}
        return values


class ItemBuilder(_Builder):
    """Builds one ``ForecastItem``."""

    entity = "item"
    field_kinds = ITEM_FIELD_KINDS

    def set_title(self, title: Element[str]) -> None:
        self.set(ItemField.TITLE, title)

    def set_link(self, link: Element[str]) -> None:
        self.set(ItemField.LINK, link)

    def set_description(self, description: Element[str]) -> None:
        self.set(ItemField.DESCRIPTION, description)

    def set_pub_date(self, pub_date: Element) -> None:
        self.set(ItemField.PUB_DATE, pub_date)

    def set_guid(self, guid: Element[str]) -> None:
        self.set(ItemField.GUID, guid)

    def set_geo_point(self, geo_point: Element) -> None:
        self.set(ItemField.GEO_POINT, geo_point)

    def finalize(self) -> ForecastItem:
        """Return the completed item.

        Raises:
            FeedParseError: With kind INCOMPLETE, listing every unset field
        """
        return ForecastItem(**self._take())


class ChannelBuilder(_Builder):
    """Builds the ``ForecastChannel`` and collects its items in order."""

    entity = "channel"
    field_kinds = CHANNEL_FIELD_KINDS

    def __init__(self):
        super().__init__()
        self._items: list[ForecastItem] = []

    def set_title(self, title: Element[str]) -> None:
        self.set(ChannelField.TITLE, title)

    def set_link(self, link: Element[str]) -> None:
        self.set(ChannelField.LINK, link)

    def set_description(self, description: Element[str]) -> None:
        self.set(ChannelField.DESCRIPTION, description)

    def set_language(self, language: Element[str]) -> None:
        self.set(ChannelField.LANGUAGE, language)

    def set_copyright(self, copyright: Element[str]) -> None:
        self.set(ChannelField.COPYRIGHT, copyright)

    def set_pub_date(self, pub_date: Element) -> None:
        self.set(ChannelField.PUB_DATE, pub_date)

    def add_item(self, item: ForecastItem) -> None:
        """Append a finalized item after those already collected."""
        self._ensure_open()
        self._items.append(item)

    @property
    def item_count(self) -> int:
        return len(self._items)

    def missing_fields(self) -> list[str]:
        missing = super().missing_fields()
        # A channel without items is incomplete
        if not self._items:
            missing.append(ChannelField.ITEMS.value)
        return missing

    def finalize(self) -> ForecastChannel:
        """Return the completed channel.

        Raises:
            FeedParseError: With kind INCOMPLETE, listing every unset field
                (``items`` when no item was added)
        """
        values = self._take()
        items = tuple(self._items)
        self._items = []
        return ForecastChannel(items=items, **values)
