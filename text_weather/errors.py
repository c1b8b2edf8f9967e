"""Error types for the weather feed parser."""

from enum import Enum


class ErrorKind(Enum):
    """Discriminant for every way a feed parse can fail."""

    FIELD_VALIDATION = "field_validation"
    STRUCTURE = "structure"
    INCOMPLETE = "incomplete"
    TOKENIZER = "tokenizer"


class FeedParseError(ValueError):
    """Single error type raised by any stage of a feed parse.

    The ``kind`` attribute tells callers which stage failed; the remaining
    attributes carry whatever context that stage had (offending tag, raw
    text, element kind, missing fields).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        tag: str | None = None,
        raw_text: str | None = None,
        element_kind: str | None = None,
        reason: str | None = None,
        missing_fields: list[str] | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.tag = tag
        self.raw_text = raw_text
        self.element_kind = element_kind
        self.reason = reason
        self.missing_fields = list(missing_fields or [])

    def __repr__(self) -> str:
        return f"FeedParseError(kind={self.kind.value!r}, message={self.message!r})"

    @classmethod
    def field_validation(
        cls, element_kind: str, raw_text: str, reason: str, tag: str | None = None
    ) -> "FeedParseError":
        preview = raw_text if len(raw_text) <= 40 else f"{raw_text[:40]}..."
        return cls(
            ErrorKind.FIELD_VALIDATION,
            f"Invalid {element_kind} element ({reason}): {preview!r}",
            tag=tag,
            raw_text=raw_text,
            element_kind=element_kind,
            reason=reason,
        )

    @classmethod
    def structure(cls, message: str, tag: str | None = None) -> "FeedParseError":
        return cls(ErrorKind.STRUCTURE, message, tag=tag)

    @classmethod
    def incomplete(cls, entity: str, missing_fields: list[str]) -> "FeedParseError":
        return cls(
            ErrorKind.INCOMPLETE,
            f"{entity} is missing required fields: {', '.join(missing_fields)}",
            missing_fields=missing_fields,
        )

    @classmethod
    def tokenizer(cls, message: str) -> "FeedParseError":
        return cls(ErrorKind.TOKENIZER, f"Malformed XML: {message}")
