"""
Catalogue views over normalized products: search box + sort selector.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

from .rules import SORT_OPTIONS

_PRICE_JUNK = re.compile(r"[^0-9.-]+")
_PRICE_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)")


def price_value(price: str) -> float:
    """Numeric value of a raw price string ("$1,299.00" -> 1299.0); 0 when unreadable."""
    stripped = _PRICE_JUNK.sub("", price or "")
    m = _PRICE_NUMBER.match(stripped)
    if not m:
        return 0.0
    return float(m.group(0))


def search_products(products: List[Dict[str, Any]], query: str) -> List[Dict[str, Any]]:
    q = (query or "").strip().lower()
    if not q:
        return list(products)
    keys = ("name", "description", "collection", "sku")
    return [p for p in products if any(q in (p.get(k) or "").lower() for k in keys)]


def sort_products(products: List[Dict[str, Any]], option: str = "newest") -> List[Dict[str, Any]]:
    if option not in SORT_OPTIONS:
        raise ValueError(f"Unknown sort option: {option!r}")

    if option == "newest":
        return sorted(products, key=lambda p: p.get("dateUploaded") or 0, reverse=True)
    if option == "name-asc":
        return sorted(products, key=lambda p: (p.get("name") or "").casefold())
    if option == "name-desc":
        return sorted(products, key=lambda p: (p.get("name") or "").casefold(), reverse=True)
    if option == "price-high":
        return sorted(products, key=lambda p: price_value(p.get("price")), reverse=True)
    if option == "price-low":
        return sorted(products, key=lambda p: price_value(p.get("price")))
    # size / collection
    return sorted(products, key=lambda p: (p.get(option) or "").casefold())
