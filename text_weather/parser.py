"""Streaming parser for the weather RSS/GeoRSS feed.

The document is fed in chunks to an lxml pull parser and flattened into a
sequence of start/text/end tokens. ``FeedWalker`` consumes the tokens in
order, drives the parse states from ``router`` and pushes converted elements
into the item and channel builders. Any failure aborts the whole parse.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from lxml import etree

from .builders import ChannelBuilder, ItemBuilder
from .elements import convert
from .errors import FeedParseError
from .logging_config import ExecutionLogger, create_execution_logger
from .models import ForecastChannel
from .router import (
    ITEM_TAG,
    RSS_TAG,
    Destination,
    InnerState,
    OuterState,
    field_kind,
    is_field_tag,
    next_states,
    route,
    states_after_end,
)

DEFAULT_CHUNK_SIZE = 4096


class TokenKind(Enum):
    START = "start"
    TEXT = "text"
    END = "end"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """One event of the flattened document."""

    kind: TokenKind
    name: str = ""
    text: str = ""


def _make_pull_parser(encoding: str | None) -> etree.XMLPullParser:
    return etree.XMLPullParser(
        events=("start", "end"),
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        collect_ids=False,
    )


def _qualified_name(element) -> str:
    # lxml expands prefixes to {uri}local; the schema names tags by prefix
    local_name = etree.QName(element).localname
    if element.prefix:
        return f"{element.prefix}:{local_name}"
    return local_name


def _drain(parser: etree.XMLPullParser) -> Iterator[Token]:
    for event, element in parser.read_events():
        name = _qualified_name(element)
        if event == "start":
            yield Token(TokenKind.START, name)
            continue
        if element.text:
            yield Token(TokenKind.TEXT, name, element.text)
        yield Token(TokenKind.END, name)
        element.clear(keep_tail=True)


def iter_tokens(
    body: str | bytes, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[Token]:
    """Tokenize a document into start/text/end events followed by EOF.

    Args:
        body: The XML document. Text is encoded as UTF-8; bytes are decoded
            according to the document's own declaration.
        chunk_size: Number of bytes handed to the tokenizer at a time

    Yields:
        Tokens in document order

    Raises:
        FeedParseError: With kind TOKENIZER for empty or malformed markup
    """
    if isinstance(body, str):
        try:
            data = body.encode("utf-8")
        except UnicodeEncodeError as e:
            raise FeedParseError.tokenizer(str(e)) from e
        encoding = "utf-8"
    else:
        data = bytes(body)
        encoding = None

    if not data.strip():
        raise FeedParseError.tokenizer("document is empty")

    parser = _make_pull_parser(encoding)
    try:
        for offset in range(0, len(data), chunk_size):
            parser.feed(data[offset : offset + chunk_size])
            yield from _drain(parser)
        parser.close()
        yield from _drain(parser)
    except (etree.XMLSyntaxError, etree.ParserError) as e:
        raise FeedParseError.tokenizer(str(e)) from e

    yield Token(TokenKind.EOF)


class FeedWalker:
    """State machine that turns feed tokens into a populated channel builder.

    A walker serves exactly one parse: it owns the channel builder, the
    builder of the item currently open and the single pending text buffer.
    """

    def __init__(self, logger: ExecutionLogger):
        self.logger = logger
        self.outer = OuterState.INITIAL
        self.inner = InnerState.INITIAL
        self.channel_builder = ChannelBuilder()
        self.item_builder = ItemBuilder()
        self.text_buffer = ""

    def walk(self, tokens: Iterator[Token]) -> ChannelBuilder:
        """Consume tokens until the root element closes.

        Returns:
            The channel builder, ready to be finalized

        Raises:
            FeedParseError: On the first invalid field, misplaced tag,
                incomplete item or tokenizer failure
        """
        for token in tokens:
            if token.kind is TokenKind.START:
                self._on_start(token.name)
            elif token.kind is TokenKind.TEXT:
                self.text_buffer = token.text
            elif token.kind is TokenKind.END:
                self._on_end(token.name)
            else:
                break

            if self.outer is OuterState.COMPLETE:
                self._expect_eof(tokens)
                return self.channel_builder

        raise FeedParseError.structure("Document ended before </rss>", tag=RSS_TAG)

    def _expect_eof(self, tokens: Iterator[Token]) -> None:
        # Well-formed XML has no elements after the root; this still lets the
        # tokenizer reject trailing garbage
        for token in tokens:
            if token.kind is not TokenKind.EOF:
                raise FeedParseError.structure(
                    f"Unexpected <{token.name}> after </rss>", tag=token.name
                )

    def _on_start(self, tag: str) -> None:
        self.text_buffer = ""
        outer, inner = next_states(self.outer, self.inner, tag)
        if tag == ITEM_TAG:
            self.item_builder = ItemBuilder()
        self.outer, self.inner = outer, inner

    def _on_end(self, tag: str) -> None:
        outer, inner = states_after_end(self.outer, self.inner, tag)

        if tag == ITEM_TAG:
            self._finish_item()
        elif is_field_tag(tag):
            self._store_field(tag)

        self.outer, self.inner = outer, inner

    def _store_field(self, tag: str) -> None:
        destination, field = route(self.outer, self.inner, tag)
        try:
            element = convert(field_kind(tag), self.text_buffer)
        except FeedParseError as e:
            e.tag = tag
            raise

        if destination is Destination.ITEM:
            self.item_builder.set(field, element)
        else:
            self.channel_builder.set(field, element)

        self.logger.debug(
            f"Stored {destination.value} field {field.value}", tag=tag
        )

    def _finish_item(self) -> None:
        try:
            item = self.item_builder.finalize()
        except FeedParseError as e:
            e.tag = ITEM_TAG
            raise
        self.channel_builder.add_item(item)
        self.item_builder = ItemBuilder()
        self.logger.debug(
            "Item completed", items_count=self.channel_builder.item_count
        )


def parse_document(
    body: str | bytes,
    execution_id: str | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> ForecastChannel:
    """Parse a weather feed document into a ``ForecastChannel``.

    Each call builds its own walker and builders, so calls are independent.

    Args:
        body: Raw feed document, already fetched
        execution_id: Execution ID for logging context
        chunk_size: Number of bytes handed to the tokenizer at a time

    Returns:
        The completed channel with its items in document order

    Raises:
        FeedParseError: If the document is malformed, violates the feed
            schema, holds an invalid field or lacks a required field
    """
    logger = create_execution_logger("feed_parser", execution_id)
    logger.debug("Parsing feed document", document_length=len(body))

    walker = FeedWalker(logger)
    tokens = iter_tokens(body, chunk_size)
    try:
        channel = walker.walk(tokens).finalize()
    except FeedParseError as e:
        logger.error(
            f"Feed parse failed: {e}", error_kind=e.kind.value, tag=e.tag
        )
        raise
    finally:
        tokens.close()

    logger.info("Feed parsed successfully", items_count=len(channel.items))
    return channel
