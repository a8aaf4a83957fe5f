"""Locate a top-level claim in the JWT payload text without re-encoding it.

The circuit hashes the literal payload bytes, so keys and values are returned
exactly as written: string values lose only their surrounding quotes and are
not unescaped, every other value is returned as its raw token.
"""

from pydantic import BaseModel, ConfigDict

from keyless.core.errors import FieldNotFound, MalformedToken

_WHITESPACE = " \t\r\n"
_SCALAR_TERMINATORS = _WHITESPACE + ",}]"


class ParsedField(BaseModel):
    """A claim as it appears in the payload.

    ``whole_field`` runs from the key's opening quote through the ``,`` or
    ``}`` that ends the field. ``index`` is the offset of the opening quote in
    the payload; ``colon_index`` and ``value_index`` are relative to
    ``whole_field``.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    key: str
    value: str
    colon_index: int
    value_index: int
    whole_field: str


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def _expect(text: str, pos: int, char: str) -> None:
    if pos >= len(text) or text[pos] != char:
        found = text[pos] if pos < len(text) else "end of input"
        raise MalformedToken(f"Expected {char!r} at offset {pos}, found {found!r}")


def _string_end(text: str, pos: int) -> int:
    """Index of the quote closing the string that opens at ``pos``."""
    i = pos + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == '"':
            return i
        i += 1
    raise MalformedToken(f"Unterminated string starting at offset {pos}")


def _container_end(text: str, pos: int) -> int:
    """Index just past the object or array that opens at ``pos``."""
    depth = 0
    i = pos
    while i < len(text):
        char = text[i]
        if char == '"':
            i = _string_end(text, i)
        elif char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    raise MalformedToken(f"Unterminated value starting at offset {pos}")


def _parse_value(text: str, pos: int) -> tuple[str, int, int]:
    """Return ``(value, value_start, value_end)`` for the value at ``pos``."""
    if pos >= len(text):
        raise MalformedToken("Missing value at end of input")
    if text[pos] == '"':
        end = _string_end(text, pos)
        return text[pos + 1 : end], pos + 1, end + 1
    if text[pos] in "{[":
        end = _container_end(text, pos)
        return text[pos:end], pos, end
    end = pos
    while end < len(text) and text[end] not in _SCALAR_TERMINATORS:
        end += 1
    if end == pos:
        raise MalformedToken(f"Missing value at offset {pos}")
    return text[pos:end], pos, end


def find_and_parse_field(payload: str, key: str) -> ParsedField:
    """Find the first top-level ``"<key>":`` in ``payload``."""
    pos = _skip_whitespace(payload, 0)
    _expect(payload, pos, "{")
    pos = _skip_whitespace(payload, pos + 1)
    if pos < len(payload) and payload[pos] == "}":
        raise FieldNotFound(key)

    while True:
        _expect(payload, pos, '"')
        key_start = pos
        key_end = _string_end(payload, key_start)
        found_key = payload[key_start + 1 : key_end]

        colon = _skip_whitespace(payload, key_end + 1)
        _expect(payload, colon, ":")
        value_pos = _skip_whitespace(payload, colon + 1)
        value, value_start, value_end = _parse_value(payload, value_pos)

        delimiter = _skip_whitespace(payload, value_end)
        if delimiter >= len(payload) or payload[delimiter] not in ",}":
            raise MalformedToken(f"Expected ',' or '}}' at offset {delimiter}")

        if found_key == key:
            return ParsedField(
                index=key_start,
                key=found_key,
                value=value,
                colon_index=colon - key_start,
                value_index=value_start - key_start,
                whole_field=payload[key_start : delimiter + 1],
            )
        if payload[delimiter] == "}":
            raise FieldNotFound(key)
        pos = _skip_whitespace(payload, delimiter + 1)
