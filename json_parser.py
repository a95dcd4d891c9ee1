# json_parser.py
# Hand-rolled JSON reader: one left-to-right scan, one value tree out.
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER A CHARACTER CURSOR
# =============================================================================
#
# There is no separate lexer. Every grammar production is a function that
# pulls characters straight off a shared Cursor, so each error carries the
# exact character that broke the grammar and its character offset in the
# input [cs.rochester.edu, Recursive-Descent Parsing].
#
# Layout:
# 1. Cursor - random-access index into the input str. Offsets are counted
#    in decoded characters, never bytes.
# 2. Dispatcher - one character of lookahead picks the production
#    (n/t/f, quote, bracket, brace, minus or digit).
# 3. Productions - literal, string (+ unicode escape), number, array, object.
# 4. Driver - one value, then nothing but whitespace.
#
# Grammar departures from RFC 8259, kept on purpose:
# - \b and \f escapes are rejected as unknown escapes.
# - \uXXXX escapes are decoded one at a time; surrogate halves fail, pairs
#   are never recombined.
# - a fraction may be empty ("1." is 1.0).
# - a leading zero after a minus sign is not special ("-01" is -1.0).
# - duplicate object keys are all kept, in source order.
#
# No depth guard: nesting is bounded by the interpreter's recursion limit
# and the resulting RecursionError is left to the caller.
#
# =============================================================================
#  REFERENCES
# =============================================================================
# [1] cs.rochester.edu - Recursive-Descent Parsing
# [2] RFC 8259 - The JavaScript Object Notation (JSON) standard
# =============================================================================

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
WHITESPACE        = " \t\r\n"
DIGITS            = "0123456789"
HEX_DIGITS        = "0123456789abcdefABCDEF"
DEFAULT_ENCODING  = "utf-8"
DEFAULT_LOG_LEVEL = "WARNING"

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class ParseError(Exception):
    """Base class for everything the parser raises."""


class UnexpectedEndOfInput(ParseError, SyntaxError):
    """The input ran out where a character was required."""

    def __init__(self):
        super().__init__("Unexpected end of input")


class UnexpectedToken(ParseError, SyntaxError):
    """
    A specific character at a specific position fits no continuation.

    ``position`` is a character offset from the start of the input.
    """

    def __init__(self, character: str, position: int):
        super().__init__(f"Unexpected token '{character}' at position '{position}'")
        self.character = character
        self.position = position


class NumericConversionFailure(ParseError, ValueError):
    """A number literal passed the grammar but float() refused it."""

    def __init__(self, literal: str):
        super().__init__(f"Failed to parse number '{literal}'")
        self.literal = literal


def _unexpected(data: Optional[Tuple[int, str]]) -> ParseError:
    if data is None:
        return UnexpectedEndOfInput()
    position, ch = data
    return UnexpectedToken(ch, position)

# ---------------------------------------------------------------------------
# VALUE TREE
# ---------------------------------------------------------------------------
class Value:
    """
    Parsed JSON entity. Concrete variants are frozen dataclasses; a tree is
    never modified after the production that built it returns.
    """

    __slots__ = ()

    def to_python(self) -> Any:
        """Plain Python data: None, bool, str, float, list or dict."""
        raise NotImplementedError


@dataclass(frozen=True)
class JsonNull(Value):
    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class JsonTrue(Value):
    def to_python(self) -> bool:
        return True


@dataclass(frozen=True)
class JsonFalse(Value):
    def to_python(self) -> bool:
        return False


@dataclass(frozen=True)
class JsonString(Value):
    text: str

    def to_python(self) -> str:
        return self.text


@dataclass(frozen=True)
class JsonNumber(Value):
    value: float

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class JsonArray(Value):
    items: Tuple[Value, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def to_python(self) -> List[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class JsonObject(Value):
    """
    Key/value pairs in source order. Duplicate keys are all retained;
    lookups and conversions fold them so the last occurrence wins.
    """

    pairs: Tuple[Tuple[str, Value], ...] = ()

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[Tuple[str, Value]]:
        return iter(self.pairs)

    def keys(self) -> List[str]:
        return [key for key, _ in self.pairs]

    def get(self, key: str, default: Optional[Value] = None) -> Optional[Value]:
        for k, value in reversed(self.pairs):
            if k == key:
                return value
        return default

    def as_dict(self) -> Dict[str, Value]:
        return dict(self.pairs)

    def to_python(self) -> Dict[str, Any]:
        return {key: value.to_python() for key, value in self.pairs}


NULL  = JsonNull()
TRUE  = JsonTrue()
FALSE = JsonFalse()

# ---------------------------------------------------------------------------
# CURSOR
# ---------------------------------------------------------------------------
class Cursor:
    """
    Left-to-right position over the input text.

    Characters are handed out as ``(position, char)`` pairs; ``None`` stands
    for end of input.
    """

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self._end = len(text)

    @property
    def position(self) -> int:
        return self._pos

    def at_end(self) -> bool:
        return self._pos >= self._end

    def peek(self) -> Optional[str]:
        if self._pos < self._end:
            return self._text[self._pos]
        return None

    def advance(self) -> Optional[Tuple[int, str]]:
        if self._pos < self._end:
            data = (self._pos, self._text[self._pos])
            self._pos += 1
            return data
        return None

    def consume_if(self, expected: str) -> bool:
        if self.peek() == expected:
            self._pos += 1
            return True
        return False

    def require(self, expected: str) -> None:
        data = self.advance()
        if data is None or data[1] != expected:
            raise _unexpected(data)

    def skip_whitespace(self) -> None:
        while self._pos < self._end and self._text[self._pos] in WHITESPACE:
            self._pos += 1

# ---------------------------------------------------------------------------
# CORE VALUE PARSER
# ---------------------------------------------------------------------------
def _parse_value(cursor: Cursor) -> Value:
    """
    Dispatch on the next character. Whitespace on both sides of the value
    is consumed here, so callers never skip it around a value themselves.
    """
    cursor.skip_whitespace()
    data = cursor.advance()
    if data is None:
        raise UnexpectedEndOfInput()

    ch = data[1]
    if ch == "n":
        value = _parse_literal(cursor, "ull", NULL)
    elif ch == "t":
        value = _parse_literal(cursor, "rue", TRUE)
    elif ch == "f":
        value = _parse_literal(cursor, "alse", FALSE)
    elif ch == '"':
        value = JsonString(_parse_string(cursor))
    elif ch == "[":
        value = _parse_array(cursor)
    elif ch == "{":
        value = _parse_object(cursor)
    elif ch == "-" or ch in DIGITS:
        value = _parse_number(cursor, ch)
    else:
        raise UnexpectedToken(ch, data[0])

    cursor.skip_whitespace()
    return value


def _parse_literal(cursor: Cursor, rest: str, value: Value) -> Value:
    for expected in rest:
        data = cursor.advance()
        if data is None or data[1] != expected:
            raise _unexpected(data)
    return value

# ---------------------------------------------------------------------------
# STRINGS
# ---------------------------------------------------------------------------
def _parse_string(cursor: Cursor) -> str:
    """
    Decode a string body; the opening quote is already consumed.

    Only the escapes in ``_ESCAPES`` plus ``\\uXXXX`` are recognised.
    Raw control characters are copied through unchanged.
    """
    chunks: List[str] = []
    while True:
        data = cursor.advance()
        if data is None:
            raise UnexpectedEndOfInput()
        ch = data[1]
        if ch == '"':
            return "".join(chunks)
        if ch != "\\":
            chunks.append(ch)
            continue

        data = cursor.advance()
        if data is None:
            raise UnexpectedEndOfInput()
        esc = data[1]
        if esc in _ESCAPES:
            chunks.append(_ESCAPES[esc])
        elif esc == "u":
            chunks.append(_parse_unicode(cursor, data[0]))
        else:
            raise UnexpectedToken(esc, data[0])


def _parse_unicode(cursor: Cursor, start: int) -> str:
    """
    Four hex digits, most significant first. ``start`` is the offset of the
    ``u`` and is what gets reported when the code point is not a character.
    """
    code = 0
    for _ in range(4):
        data = cursor.advance()
        if data is None or data[1] not in HEX_DIGITS:
            raise _unexpected(data)
        code = code * 16 + int(data[1], 16)

    # lone surrogate halves are not characters
    if 0xD800 <= code <= 0xDFFF:
        raise UnexpectedToken("u", start)
    return chr(code)

# ---------------------------------------------------------------------------
# NUMBERS
# ---------------------------------------------------------------------------
def _collect_digits(cursor: Cursor, buf: List[str]) -> None:
    while True:
        ch = cursor.peek()
        if ch is None or ch not in DIGITS:
            return
        cursor.advance()
        buf.append(ch)


def _require_digit(cursor: Cursor, buf: List[str]) -> None:
    data = cursor.advance()
    if data is None or data[1] not in DIGITS:
        raise _unexpected(data)
    buf.append(data[1])


def _parse_number(cursor: Cursor, first: str) -> JsonNumber:
    """
    Parse a number whose first character (``-`` or a digit) was consumed by
    the dispatcher.

    A lone ``0`` ends the integer part; any digit after it is left in the
    input for the caller to reject. The fraction may be empty, the exponent
    may not.
    """
    literal: List[str] = [first]
    if first == "0":
        if cursor.peek() not in (".", "e", "E"):
            return JsonNumber(0.0)
    elif first == "-":
        _require_digit(cursor, literal)
        _collect_digits(cursor, literal)
    else:
        _collect_digits(cursor, literal)

    if cursor.consume_if("."):
        literal.append(".")
        _collect_digits(cursor, literal)

    if cursor.peek() in ("e", "E"):
        literal.append(cursor.advance()[1])
        if cursor.peek() in ("+", "-"):
            literal.append(cursor.advance()[1])
        _require_digit(cursor, literal)
        _collect_digits(cursor, literal)

    text = "".join(literal)
    try:
        return JsonNumber(float(text))
    except ValueError:
        raise NumericConversionFailure(text) from None

# ---------------------------------------------------------------------------
# ARRAY PARSER
# ---------------------------------------------------------------------------
def _parse_array(cursor: Cursor) -> JsonArray:
    """
    Parse a JSON array; the ``[`` is already consumed. A comma must be
    followed by a value, so ``[1,]`` fails on the ``]``.
    """
    items: List[Value] = []
    cursor.skip_whitespace()
    if cursor.consume_if("]"):
        return JsonArray(())

    while True:
        items.append(_parse_value(cursor))
        if cursor.consume_if(","):
            continue
        cursor.require("]")
        return JsonArray(tuple(items))

# ---------------------------------------------------------------------------
# OBJECT PARSER
# ---------------------------------------------------------------------------
def _parse_object(cursor: Cursor) -> JsonObject:
    """
    Parse a JSON object; the ``{`` is already consumed.

    Pairs are recorded in source order with no duplicate check. Trailing
    commas fail on the closing brace, where a key's opening quote was due.
    """
    pairs: List[Tuple[str, Value]] = []
    cursor.skip_whitespace()
    if cursor.consume_if("}"):
        return JsonObject(())

    while True:
        cursor.skip_whitespace()
        cursor.require('"')
        key = _parse_string(cursor)
        cursor.skip_whitespace()
        cursor.require(":")
        pairs.append((key, _parse_value(cursor)))
        if cursor.consume_if(","):
            continue
        cursor.require("}")
        return JsonObject(tuple(pairs))

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(text: str) -> Value:
    """
    Parse a complete JSON document into a Value tree.

    Any value is accepted at the root. Everything after it must be
    whitespace; the first other character is reported with its offset.
    Raises UnexpectedEndOfInput, UnexpectedToken or NumericConversionFailure,
    all subclasses of ParseError.
    """
    cursor = Cursor(text)
    value = _parse_value(cursor)
    if not cursor.at_end():
        raise _unexpected(cursor.advance())
    log.debug("parsed %d characters into %s", len(text), type(value).__name__)
    return value


def _read(path: str, encoding: str = DEFAULT_ENCODING) -> str:
    with open(path, "r", encoding=encoding) as fh:
        return fh.read()


def load(path: str, encoding: str = DEFAULT_ENCODING) -> Value:
    """Read a whole file and parse it."""
    return parse(_read(path, encoding))

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _cli(argv: List[str]) -> int:
    """
    Command-line interface for validation and timing runs.

    Exit codes: 0 when the file parses, 1 when it does not or cannot be
    read. argparse itself exits 2 on bad usage.
    """
    ap = argparse.ArgumentParser(description="JSON reader")
    ap.add_argument("file", help="JSON file to parse")
    ap.add_argument("--debug", action="store_true", help="print the parsed value as Python data and exit")
    ap.add_argument("--time", action="store_true", help="print elapsed parse time in seconds instead of OK")
    ap.add_argument("--encoding", default=DEFAULT_ENCODING)
    ap.add_argument("-v", "--verbose", action="store_true", help="shorthand for --log-level DEBUG")
    ap.add_argument("--log-level", default=DEFAULT_LOG_LEVEL,
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)

    logging.basicConfig(
        level="DEBUG" if args.verbose else args.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        data = _read(args.file, args.encoding)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    log.debug("read %d characters from %s", len(data), args.file)

    start = time.perf_counter()
    try:
        value = parse(data)
    except SyntaxError as exc:
        print(f"SyntaxError: {exc}", file=sys.stderr)
        return 1
    except NumericConversionFailure as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except RecursionError:
        print("Error: nesting too deep", file=sys.stderr)
        return 1
    elapsed = time.perf_counter() - start
    log.debug("parsed %s in %.6fs", args.file, elapsed)

    if args.debug:
        print(repr(value.to_python()))
        return 0

    print(elapsed if args.time else "OK")
    return 0


def main() -> None:
    sys.exit(_cli(sys.argv[1:]))

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    main()
