"""Input normalization — undo common obfuscation before pattern matching.

Stages run in a fixed order; each relies on the previous one having
simplified the input:

  1. trim
  2. strip invisible / zero-width formatting characters
  3. percent-decode (``+`` as space, never raises)
  4. HTML numeric and named character references
  5. JavaScript escapes (``\\u{...}``, ``\\uXXXX``, ``\\xXX``), then the
     invisible characters those decodings produced
  6. null-byte representations
  7. whitespace and control characters between ``<`` and a tag name
  8. runs of control/whitespace characters
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional
from urllib.parse import unquote

logger = logging.getLogger(__name__)

_INVISIBLE_RE = re.compile(
    "[\u00ad\u0600-\u0605\u061c\u06dd\u070f\u17b4\u17b5"
    "\u2000-\u200f\u2028-\u202f\u205f\u2060-\u206f\ufeff]"
)

# Characters whose presence marks a deliberate obfuscation attempt.
_HIDDEN_MARKER_RE = re.compile("[\u00ad\u200b\u200c\u200d\u2060\ufeff]")

_PERCENT_PAIR_RE = re.compile(r"%([0-9a-fA-F]{2})")
_MALFORMED_PERCENT_RE = re.compile(r"%(?![0-9a-fA-F]{2})")

_DEC_ENTITY_RE = re.compile(r"&#(\d+);?")
_HEX_ENTITY_RE = re.compile(r"&#x([0-9a-fA-F]+);?")
_NAMED_ENTITY_RE = re.compile(r"&(lt|gt|amp|quot|apos);", re.IGNORECASE)
_NAMED_ENTITIES = {"lt": "<", "gt": ">", "amp": "&", "quot": '"', "apos": "'"}

_JS_BRACED_RE = re.compile(r"\\u\{([0-9a-fA-F]+)\}")
_JS_SURROGATE_PAIR_RE = re.compile(
    r"\\u([dD][89abAB][0-9a-fA-F]{2})\\u([dD][c-fC-F][0-9a-fA-F]{2})"
)
_JS_UNICODE_RE = re.compile(r"\\u([0-9a-fA-F]{4})")
_JS_HEX_RE = re.compile(r"\\x([0-9a-fA-F]{2})")

_NULL_RE = re.compile(r"\x00|%00|\\0|&#0;")
_TAG_GAP_RE = re.compile(r"<[\x00-\x20]+(?=[^\x00-\x20>])")
_WS_RUN_RE = re.compile(r"[\x00-\x20]{2,}")


def _code_point(digits: str, base: int) -> Optional[str]:
    """Character for *digits*, or None when outside the Unicode range.

    Surrogate halves count as out of range; they cannot be encoded to UTF-8.
    """
    try:
        code = int(digits, base)
    except ValueError:
        return None
    if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        return None
    return chr(code)


def _join_surrogates(match: re.Match) -> str:
    high = int(match.group(1), 16)
    low = int(match.group(2), 16)
    return chr(0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00))


def remove_invisible_characters(value: str) -> str:
    return _INVISIBLE_RE.sub("", value)


def percent_decode(value: str) -> str:
    """Decode URL encoding without raising on malformed sequences.

    Well-formed UTF-8 is decoded as a whole. Otherwise only valid ``%XX``
    pairs are decoded, each to one code point, and the rest is left alone.
    """
    if "%" not in value and "+" not in value:
        return value
    if not _MALFORMED_PERCENT_RE.search(value):
        try:
            return unquote(value.replace("+", " "), errors="strict")
        except UnicodeDecodeError:
            pass
    logger.debug("Malformed percent-encoding, falling back to pairwise decode")
    return _PERCENT_PAIR_RE.sub(lambda m: chr(int(m.group(1), 16)), value)


def decode_html_entities(value: str) -> str:
    value = _DEC_ENTITY_RE.sub(lambda m: _code_point(m.group(1), 10) or "", value)
    value = _HEX_ENTITY_RE.sub(lambda m: _code_point(m.group(1), 16) or "", value)
    return _NAMED_ENTITY_RE.sub(lambda m: _NAMED_ENTITIES[m.group(1).lower()], value)


def decode_js_escapes(value: str) -> str:
    value = _JS_BRACED_RE.sub(lambda m: _code_point(m.group(1), 16) or m.group(0), value)
    value = _JS_SURROGATE_PAIR_RE.sub(_join_surrogates, value)
    # unpaired surrogate halves decode to nothing
    value = _JS_UNICODE_RE.sub(lambda m: _code_point(m.group(1), 16) or "", value)
    return _JS_HEX_RE.sub(lambda m: chr(int(m.group(1), 16)), value)


def remove_null_bytes(value: str) -> str:
    return _NULL_RE.sub("", value)


def close_tag_gaps(value: str) -> str:
    """``< s c r i p t>`` -> ``<s c r i p t>``: drop whitespace and control characters after ``<``."""
    return _TAG_GAP_RE.sub("<", value)


def collapse_whitespace(value: str) -> str:
    return _WS_RUN_RE.sub(" ", value)


DECODERS: List[Callable[[str], str]] = [
    percent_decode,
    decode_html_entities,
    decode_js_escapes,
]

PIPELINE: List[Callable[[str], str]] = [
    str.strip,
    remove_invisible_characters,
    *DECODERS,
    # entities and escapes can decode into characters stage 2 already removed
    remove_invisible_characters,
    remove_null_bytes,
    close_tag_gaps,
    collapse_whitespace,
]


def normalize(value: str) -> str:
    """Run *value* through every normalization stage in order."""
    if not value:
        return value
    for stage in PIPELINE:
        value = stage(value)
    return value


def contains_hidden_chars(original: str, normalized: str) -> bool:
    """True when normalization changed *original* and it held invisible characters.

    Markers spelled as entities or escapes (``&#8203;``, ``\\u200b``) count
    too. A value that normalizes to nothing is not reported.
    """
    if not original or not normalized or original == normalized:
        return False
    if _HIDDEN_MARKER_RE.search(original):
        return True
    decoded = remove_invisible_characters(original.strip())
    for stage in DECODERS:
        decoded = stage(decoded)
    return _HIDDEN_MARKER_RE.search(decoded) is not None
