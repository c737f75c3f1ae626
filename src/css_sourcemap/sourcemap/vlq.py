"""Base64 VLQ codec for sourcemap ``mappings`` strings.

Each generated line is a ``;``-separated group of ``,``-separated
segments. A segment holds 1, 4 or 5 VLQ-encoded fields: generated
column, source index, source line, source column and name index. On
the wire every field is a delta against the previous segment; the
generated column resets at each line, the other fields carry across
lines.

The functions here work on absolute segments so callers never deal
with deltas.
"""

from css_sourcemap.errors.exceptions import SourceMapDecodeError

Segment = tuple[int, ...]
"""Absolute segment: (gen_col,), (gen_col, src, line, col) or with name."""

BASE64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_VALUES = {char: index for index, char in enumerate(BASE64_ALPHABET)}

_VLQ_BASE_SHIFT = 5
_VLQ_BASE = 1 << _VLQ_BASE_SHIFT
_VLQ_BASE_MASK = _VLQ_BASE - 1
_VLQ_CONTINUATION_BIT = _VLQ_BASE

_VALID_SEGMENT_LENGTHS = frozenset({1, 4, 5})
_STATE_FIELDS = 5


def encode_vlq(value: int) -> str:
    """Encode a signed integer as base64 VLQ.

    Args:
        value: Integer to encode.

    Returns:
        The encoded characters.

    """
    vlq = ((-value) << 1) | 1 if value < 0 else value << 1
    encoded = []
    while True:
        digit = vlq & _VLQ_BASE_MASK
        vlq >>= _VLQ_BASE_SHIFT
        if vlq:
            digit |= _VLQ_CONTINUATION_BIT
        encoded.append(BASE64_ALPHABET[digit])
        if not vlq:
            return "".join(encoded)


def decode_vlq(text: str, pos: int = 0) -> tuple[int, int]:
    """Decode one base64 VLQ value starting at ``pos``.

    Args:
        text: String holding VLQ characters.
        pos: Offset of the first character of the value.

    Returns:
        Tuple of (decoded value, offset just past the value).

    Raises:
        SourceMapDecodeError: On a non-base64 character or a value cut
            short by the end of input.

    """
    result = 0
    shift = 0
    while True:
        if pos >= len(text):
            msg = "unexpected end of VLQ value"
            raise SourceMapDecodeError(msg, position=pos)
        char = text[pos]
        digit = _BASE64_VALUES.get(char)
        if digit is None:
            msg = f"invalid base64 character {char!r}"
            raise SourceMapDecodeError(msg, position=pos)
        pos += 1
        result += (digit & _VLQ_BASE_MASK) << shift
        if not digit & _VLQ_CONTINUATION_BIT:
            break
        shift += _VLQ_BASE_SHIFT

    negative = result & 1
    result >>= 1
    return (-result if negative else result), pos


def decode_mappings(mappings: str) -> list[list[Segment]]:
    """Decode a ``mappings`` string into absolute segments per line.

    Args:
        mappings: The encoded mappings.

    Returns:
        One list of segments per generated line. An empty string
        decodes to no lines.

    Raises:
        SourceMapDecodeError: If the string is malformed.

    """
    if not mappings:
        return []

    # source, source line, source column, name carry across lines
    state = [0] * _STATE_FIELDS
    lines: list[list[Segment]] = []
    offset = 0
    for line_text in mappings.split(";"):
        state[0] = 0
        segments: list[Segment] = []
        for segment_text in line_text.split(","):
            if not segment_text:
                offset += 1
                continue
            fields = []
            pos = 0
            while pos < len(segment_text):
                try:
                    value, pos = decode_vlq(segment_text, pos)
                except SourceMapDecodeError as e:
                    raise SourceMapDecodeError(
                        str(e),
                        position=offset + (e.position or 0),
                    ) from e
                fields.append(value)
            if len(fields) not in _VALID_SEGMENT_LENGTHS:
                msg = f"segment {segment_text!r} has {len(fields)} fields"
                raise SourceMapDecodeError(msg, position=offset)
            for index, delta in enumerate(fields):
                state[index] += delta
            segments.append(tuple(state[: len(fields)]))
            offset += len(segment_text) + 1
        lines.append(segments)
    return lines


def encode_mappings(lines: list[list[Segment]]) -> str:
    """Encode absolute segments per line into a ``mappings`` string.

    Args:
        lines: One list of absolute segments per generated line.

    Returns:
        The encoded mappings.

    """
    state = [0] * _STATE_FIELDS
    encoded_lines = []
    for segments in lines:
        state[0] = 0
        encoded_segments = []
        for segment in segments:
            encoded_segments.append(
                "".join(
                    encode_vlq(value - state[index])
                    for index, value in enumerate(segment)
                ),
            )
            state[: len(segment)] = segment
        encoded_lines.append(",".join(encoded_segments))
    return ";".join(encoded_lines)
