"""
EDIFACT Tokenizer Module

Splits raw EDIFACT text into segments, elements and components while
honoring the release (escape) character at every level.

Raw tokens keep their escape sequences so that lower split levels still see
them; only final values are passed through unescape().
"""
from typing import List, Optional, Tuple

from pydantic import ValidationError

from .config import UNA_LENGTH, UNA_TAG, DelimiterConfig
from .errors import EdifactSyntaxError

# Line breaks between segments are layout, not data.
LAYOUT_CHARS = frozenset("\r\n")

_NORMAL = 0
_ESCAPED = 1


def _scan(text: str, delimiter: str, escape_char: str, drop_layout: bool = False) -> List[str]:
    """
    Split text on unescaped occurrences of delimiter.

    Two-state scanner: in the escaped state the current character is kept as
    data whatever it is. Escape sequences are copied through unchanged.
    Trailing empty tokens are kept; callers decide what to drop.

    Args:
        text: Text to split
        delimiter: Active delimiter for this level
        escape_char: Release character
        drop_layout: Skip unescaped CR/LF characters (segment level only)

    Returns:
        List of raw tokens
    """
    tokens: List[str] = []
    current: List[str] = []
    state = _NORMAL

    for ch in text:
        if state == _ESCAPED:
            current.append(ch)
            state = _NORMAL
        elif ch == escape_char:
            current.append(ch)
            state = _ESCAPED
        elif ch == delimiter:
            tokens.append("".join(current))
            current = []
        elif drop_layout and ch in LAYOUT_CHARS:
            continue
        else:
            current.append(ch)

    if state == _ESCAPED:
        raise EdifactSyntaxError("dangling escape")

    tokens.append("".join(current))
    return tokens


def split_una(raw: str) -> Tuple[Optional[DelimiterConfig], str]:
    """
    Strip a leading UNA service string advice.

    Args:
        raw: Raw interchange text

    Returns:
        (DelimiterConfig from the UNA or None, remaining text)
    """
    text = raw.lstrip()
    if not text.startswith(UNA_TAG):
        return None, raw

    if len(text) < UNA_LENGTH:
        raise EdifactSyntaxError(f"truncated UNA service string advice: {text!r}")

    try:
        cfg = DelimiterConfig.from_una(text[:UNA_LENGTH])
    except (ValueError, ValidationError) as e:
        raise EdifactSyntaxError(f"invalid UNA service string advice: {e}") from e

    return cfg, text[UNA_LENGTH:]


def tokenize(raw: str, cfg: DelimiterConfig) -> List[str]:
    """
    Split raw EDIFACT text into raw segment strings.

    Args:
        raw: Raw EDIFACT text
        cfg: Delimiter configuration

    Returns:
        Ordered list of raw segments (escape sequences preserved)
    """
    if cfg is None:
        raise TypeError("tokenize() requires a DelimiterConfig")

    if not raw or not raw.strip():
        raise EdifactSyntaxError("empty message")

    segments = _scan(raw, cfg.segment_terminator, cfg.escape_char, drop_layout=True)

    # Only the token after the final terminator may be dropped.
    if not segments[-1].strip():
        segments.pop()

    if not segments:
        raise EdifactSyntaxError("empty message")

    return segments


def split_elements(segment: str, cfg: DelimiterConfig) -> Tuple[str, List[str]]:
    """
    Split a raw segment into its tag and raw element strings.

    Trailing empty elements are preserved (NAD+BY+++NAME has four).

    Returns:
        (tag, raw elements)
    """
    parts = _scan(segment, cfg.element_separator, cfg.escape_char)
    return parts[0].strip(), parts[1:]


def split_components(element: str, cfg: DelimiterConfig) -> List[str]:
    """Split a raw composite element into unescaped components."""
    return [unescape(part, cfg) for part in _scan(element, cfg.component_separator, cfg.escape_char)]


def has_unescaped(text: str, char: str, cfg: DelimiterConfig) -> bool:
    """Return True if char occurs in text outside an escape sequence."""
    escaped = False
    for ch in text:
        if escaped:
            escaped = False
        elif ch == cfg.escape_char:
            escaped = True
        elif ch == char:
            return True
    return False


def unescape(text: str, cfg: DelimiterConfig) -> str:
    """Remove release characters; ?? becomes a literal ?."""
    if cfg.escape_char not in text:
        return text

    out: List[str] = []
    escaped = False
    for ch in text:
        if escaped:
            out.append(ch)
            escaped = False
        elif ch == cfg.escape_char:
            escaped = True
        else:
            out.append(ch)

    if escaped:
        raise EdifactSyntaxError("dangling escape")

    return "".join(out)


def escape(value: str, cfg: DelimiterConfig) -> str:
    """
    Prefix every service character and line break in value with the
    release character so it survives tokenizing.
    """
    special = set(cfg.delimiters()) | LAYOUT_CHARS
    return "".join(f"{cfg.escape_char}{ch}" if ch in special else ch for ch in value)
