"""Minimal JSON parser that tolerates trailing non-JSON content.

parse_json() returns:
  - None if the text does not start with a JSON token (after whitespace)
  - ParseResult(node, end) where end is the offset just past the value
  - raises MalformedJsonError if a value starts but is structurally invalid
"""

import re
from dataclasses import dataclass
from decimal import Decimal

from prettyjsonlog.nodes import (
    JsonArray,
    JsonBoolean,
    JsonNode,
    JsonNull,
    JsonNumber,
    JsonString,
    make_object,
)

DEFAULT_MAX_DEPTH = 512

_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")

_WHITESPACE = " \t\n\r"

_NUMBER_START = "-0123456789"

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_LITERALS = (
    ("true", JsonBoolean(True)),
    ("false", JsonBoolean(False)),
    ("null", JsonNull()),
)


class MalformedJsonError(ValueError):
    """Raised when text starts like JSON but breaks the grammar."""

    def __init__(self, reason: str, position: int):
        super().__init__(f"{reason} at offset {position}")
        self.reason = reason
        self.position = position


@dataclass(frozen=True)
class ParseResult:
    node: JsonNode
    end: int

    def rest(self, text: str) -> str:
        """Return whatever follows the JSON value in *text*."""
        return text[self.end:]


def parse_json(text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> ParseResult | None:
    """Parse the first JSON value in *text*.

    Leading whitespace is skipped. Trailing content is left alone and its
    start is reported as ``ParseResult.end``.
    """
    parser = _Parser(text, max_depth)
    parser.skip_whitespace()
    if not parser.at_value_start():
        return None
    node = parser.parse_value()
    return ParseResult(node=node, end=parser.pos)


class _Parser:
    def __init__(self, text: str, max_depth: int):
        self.text = text
        self.pos = 0
        self.max_depth = max_depth

    def skip_whitespace(self) -> None:
        text = self.text
        while self.pos < len(text) and text[self.pos] in _WHITESPACE:
            self.pos += 1

    def at_value_start(self) -> bool:
        if self.pos >= len(self.text):
            return False
        ch = self.text[self.pos]
        if ch in '{["':
            return True
        if ch in _NUMBER_START:
            return _NUMBER_RE.match(self.text, self.pos) is not None
        return any(self.text.startswith(word, self.pos) for word, _ in _LITERALS)

    def error(self, reason: str) -> MalformedJsonError:
        return MalformedJsonError(reason, self.pos)

    def peek(self) -> str:
        if self.pos >= len(self.text):
            raise self.error("Unexpected end of input")
        return self.text[self.pos]

    def expect(self, ch: str) -> None:
        if self.peek() != ch:
            raise self.error(f"Expected {ch!r}, found {self.text[self.pos]!r}")
        self.pos += 1

    # -- values -------------------------------------------------------------

    def parse_value(self) -> JsonNode:
        """Parse one value, nested containers included, without recursion.

        Open containers live on an explicit stack, so nesting is bounded by
        max_depth only.
        """
        stack: list[_Container] = []
        while True:
            ch = self.peek()
            if ch in "{[":
                if len(stack) >= self.max_depth:
                    raise self.error(f"Nesting deeper than {self.max_depth}")
                self.pos += 1
                self.skip_whitespace()
                container = _Container(is_object=ch == "{")
                if self.peek() != container.closer:
                    stack.append(container)
                    if container.is_object:
                        container.key = self.parse_key()
                    continue
                self.pos += 1
                value = container.build()
            else:
                value = self.parse_scalar(ch)

            # Attach the finished value, closing every container it completes
            while stack:
                container = stack[-1]
                container.add(value)
                self.skip_whitespace()
                ch = self.peek()
                if ch == ",":
                    self.pos += 1
                    self.skip_whitespace()
                    if container.is_object:
                        container.key = self.parse_key()
                    break
                if ch != container.closer:
                    raise self.error(f"Expected ',' or {container.closer!r}")
                self.pos += 1
                stack.pop()
                value = container.build()
            else:
                return value

    def parse_key(self) -> str:
        if self.peek() != '"':
            raise self.error("Object key must be a string")
        key = self.parse_string()
        self.skip_whitespace()
        self.expect(":")
        self.skip_whitespace()
        return key

    def parse_scalar(self, ch: str) -> JsonNode:
        if ch == '"':
            return JsonString(self.parse_string())
        if ch in _NUMBER_START:
            return self.parse_number()
        for word, node in _LITERALS:
            if self.text.startswith(word, self.pos):
                self.pos += len(word)
                return node
        raise self.error(f"Unexpected character {ch!r}")

    def parse_number(self) -> JsonNode:
        m = _NUMBER_RE.match(self.text, self.pos)
        if not m:
            raise self.error("Invalid number")
        literal = m.group(0)
        self.pos = m.end()
        fraction, exponent = m.groups()
        if fraction is None and exponent is None:
            return JsonNumber(int(literal))
        return JsonNumber(Decimal(literal))

    def parse_string(self) -> str:
        self.expect('"')
        text = self.text
        chunks = []
        start = self.pos
        while True:
            if self.pos >= len(text):
                raise MalformedJsonError("Unterminated string", start - 1)
            ch = text[self.pos]
            if ch == '"':
                chunks.append(text[start:self.pos])
                self.pos += 1
                return "".join(chunks)
            if ch == "\\":
                chunks.append(text[start:self.pos])
                self.pos += 1
                chunks.append(self.parse_escape())
                start = self.pos
            elif ch < " ":
                raise self.error("Unescaped control character in string")
            else:
                self.pos += 1

    def parse_escape(self) -> str:
        ch = self.peek()
        self.pos += 1
        if ch in _ESCAPES:
            return _ESCAPES[ch]
        if ch != "u":
            self.pos -= 1
            raise self.error(f"Invalid escape '\\{ch}'")
        code = self.read_hex4()
        if 0xD800 <= code <= 0xDBFF:
            # High surrogate must be followed by an escaped low surrogate
            if not self.text.startswith("\\u", self.pos):
                raise self.error("Unpaired high surrogate")
            self.pos += 2
            low = self.read_hex4()
            if not 0xDC00 <= low <= 0xDFFF:
                raise self.error("Invalid low surrogate")
            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
        elif 0xDC00 <= code <= 0xDFFF:
            raise self.error("Unpaired low surrogate")
        return chr(code)

    def read_hex4(self) -> int:
        digits = self.text[self.pos:self.pos + 4]
        if len(digits) != 4 or any(c not in "0123456789abcdefABCDEF" for c in digits):
            raise self.error("Invalid unicode escape")
        self.pos += 4
        return int(digits, 16)


class _Container:
    """An object or array still being filled in by the parser."""

    def __init__(self, is_object: bool):
        self.is_object = is_object
        self.closer = "}" if is_object else "]"
        self.items = []
        self.key = None

    def add(self, value: JsonNode) -> None:
        self.items.append((self.key, value) if self.is_object else value)

    def build(self) -> JsonNode:
        if self.is_object:
            return make_object(self.items)
        return JsonArray(tuple(self.items))
