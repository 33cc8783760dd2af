from __future__ import annotations

import json
import re
from typing import Callable, NamedTuple, Optional, Tuple

from .rules import (
    MEDIA_BASE_URL,
    MEDIA_HASH_PATTERN,
    MEDIA_MARKER,
    MEDIA_URI_SCHEME,
    MULTI_VALUE_SEPARATORS,
    STRUCTURED_IMAGE_KEYS,
    THUMBNAIL_HEIGHT,
    THUMBNAIL_PATH,
    THUMBNAIL_WIDTH,
)

_MEDIA_HASH_RE = re.compile(MEDIA_HASH_PATTERN, re.IGNORECASE)
_SEPARATOR_RE = re.compile(MULTI_VALUE_SEPARATORS)


class ImageUrls(NamedTuple):
    full: str
    thumb: str


class Rewrite(NamedTuple):
    """Cleans the raw cell before it is classified."""
    name: str
    applies: Callable[[str], bool]
    rewrite: Callable[[str], str]


class Resolver(NamedTuple):
    """Turns a cleaned value into full + thumbnail URLs; first match wins."""
    name: str
    applies: Callable[[str], bool]
    resolve: Callable[[str], ImageUrls]


def media_id(value: str) -> Optional[str]:
    """
    Extract a Wix media id from a raw filename, a full URL or a wix:image URI.
    Returns None when the value does not look like Wix media.
    """
    if not value:
        return None
    clean = value.strip()

    if clean.startswith(MEDIA_URI_SCHEME):
        for part in clean.split("/"):
            if MEDIA_MARKER in part:
                return part.split("#")[0]

    if MEDIA_MARKER in clean:
        last = clean.split("/")[-1]
        return last.split("?")[0].split("#")[0]

    m = _MEDIA_HASH_RE.search(clean)
    if m:
        return m.group(0)
    return None


def media_url(mid: str) -> str:
    return f"{MEDIA_BASE_URL}{mid}"


def thumbnail_url(mid: str) -> str:
    return media_url(mid) + THUMBNAIL_PATH.format(w=THUMBNAIL_WIDTH, h=THUMBNAIL_HEIGHT)


def _is_absolute(value: str) -> bool:
    return value.startswith(("http://", "https://"))


# --- rewrites ---

def _looks_structured(value: str) -> bool:
    return value.startswith(("[", "{"))


def _unwrap_structured(value: str) -> str:
    try:
        parsed = json.loads(value)
    except (ValueError, RecursionError):
        return value

    first = parsed
    if isinstance(parsed, list):
        if not parsed:
            return value
        first = parsed[0]

    if isinstance(first, dict):
        for key in STRUCTURED_IMAGE_KEYS:
            candidate = first.get(key)
            if isinstance(candidate, str) and candidate:
                return candidate
            # numeric media ids; bool is an int subclass
            if key == "id" and isinstance(candidate, (int, float)) and not isinstance(candidate, bool) and candidate:
                return str(candidate)
        return value
    if isinstance(first, str) and first:
        return first
    return value


def _first_of_many(value: str) -> str:
    return _SEPARATOR_RE.split(value)[0].strip()


def _absolute_protocol(value: str) -> str:
    return f"https:{value}"


REWRITES: Tuple[Rewrite, ...] = (
    Rewrite("structured", _looks_structured, _unwrap_structured),
    Rewrite("multi_value", lambda v: True, _first_of_many),
    Rewrite("protocol_relative", lambda v: v.startswith("//"), _absolute_protocol),
)


# --- resolvers ---

def _media_from_url(value: str) -> ImageUrls:
    return ImageUrls(value, thumbnail_url(media_id(value)))


def _media_from_id(value: str) -> ImageUrls:
    mid = media_id(value)
    return ImageUrls(media_url(mid), thumbnail_url(mid))


def _verbatim(value: str) -> ImageUrls:
    return ImageUrls(value, value)


RESOLVERS: Tuple[Resolver, ...] = (
    Resolver("media_url", lambda v: _is_absolute(v) and media_id(v) is not None, _media_from_url),
    Resolver("url", _is_absolute, _verbatim),
    Resolver("media_id", lambda v: media_id(v) is not None, _media_from_id),
    Resolver("fallback", lambda v: True, _verbatim),
)


def clean_image_value(raw: str) -> str:
    value = (raw or "").strip()
    for step in REWRITES:
        if step.applies(value):
            value = step.rewrite(value)
    return value


def resolve_image_urls(raw: str) -> ImageUrls:
    """
    Resolve a raw image cell into full-size and thumbnail URLs.

    Examples:
        "8bb231_abf910~mv2.jpg" -> Wix static URL + 400x400 fill thumbnail
        '["https://a/x.jpg", "https://a/y.jpg"]' -> "https://a/x.jpg" for both
        "//cdn.shop.com/p.jpg; //cdn.shop.com/q.jpg" -> "https://cdn.shop.com/p.jpg"
    """
    if not raw or not raw.strip():
        return ImageUrls("", "")
    value = clean_image_value(raw)
    if not value:
        return ImageUrls("", "")
    for resolver in RESOLVERS:
        if resolver.applies(value):
            return resolver.resolve(value)
    return _verbatim(value)
