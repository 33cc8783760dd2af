"""
Product normalization.

Responsibilities:
- byte decoding (encoding detection) for hosts that receive uploads
- header resolution against the fuzzy vocabulary
- per-row extraction into canonical product records
- validity filtering (name + image URL)
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

from charset_normalizer import from_bytes

from .fields import extract_size, parse_timestamp
from .images import resolve_image_urls
from .rules import HEADER_VOCABULARY, SYNTHETIC_TIMESTAMP_STEP_MS
from .tokenizer import parse_rows

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_header(text: str) -> str:
    return _NON_ALNUM.sub("", (text or "").lower())


def resolve_headers(header_row: Sequence[str]) -> Dict[str, Optional[int]]:
    """
    Map each canonical field to a column index, or None when absent.

    Spellings are tried in vocabulary order; the first one present in the
    header wins, at its first position.
    """
    normalized = [normalize_header(h) for h in header_row]
    columns: Dict[str, Optional[int]] = {}
    for field, spellings in HEADER_VOCABULARY.items():
        columns[field] = None
        for spelling in spellings:
            target = normalize_header(spelling)
            if target in normalized:
                columns[field] = normalized.index(target)
                break
    return columns


def _cell(row: Sequence[str], idx: Optional[int]) -> str:
    if idx is None or idx >= len(row):
        return ""
    return (row[idx] or "").strip()


def build_record(row: Sequence[str], columns: Dict[str, Optional[int]], index: int, now_ms: int) -> Dict[str, Any]:
    """Build one canonical record from a data row; never raises on cell content."""
    def get(field: str) -> str:
        return _cell(row, columns.get(field))

    name = get("name")
    image = resolve_image_urls(get("imageUrl"))

    size = get("size") or extract_size(name)

    timestamp = parse_timestamp(get("dateUploaded"))
    if timestamp is None:
        timestamp = now_ms - index * SYNTHETIC_TIMESTAMP_STEP_MS

    return {
        "handleId": get("handleId") or f"item-{index}",
        "name": name,
        "description": get("description"),
        "imageUrl": image.full,
        "thumbnailUrl": image.thumb,
        "price": get("price"),
        "sku": get("sku"),
        "collection": get("collection"),
        "size": size,
        "dateUploaded": timestamp,
    }


def _drop_reason(record: Dict[str, Any]) -> Optional[str]:
    if not record["name"]:
        return "missing_name"
    if not record["imageUrl"]:
        return "missing_image"
    return None


def normalize_rows_with_report(
    rows: Sequence[Sequence[str]], now_ms: Optional[int] = None
) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """
    Normalize tokenized rows and describe what happened.

    Returns (products, report). The report carries the resolved header for
    each canonical field and the rows dropped by the validity filter.
    """
    report: Dict[str, Any] = {"rows": 0, "columns": {}, "dropped": []}
    if len(rows) < 2:
        logger.debug("fewer than two rows (%d); nothing to normalize", len(rows))
        return [], report

    if now_ms is None:
        now_ms = int(time.time() * 1000)

    header = rows[0]
    columns = resolve_headers(header)
    report["columns"] = {
        field: (header[idx].strip() if idx is not None else None) for field, idx in columns.items()
    }
    logger.debug("resolved columns: %s", report["columns"])

    products: List[Dict[str, Any]] = []
    data = rows[1:]
    report["rows"] = len(data)
    for index, row in enumerate(data):
        record = build_record(row, columns, index, now_ms)
        reason = _drop_reason(record)
        if reason:
            # +2: one-based, header is line 1
            report["dropped"].append({"row": index + 2, "issue": reason})
            logger.debug("dropping row %d: %s", index + 2, reason)
            continue
        products.append(record)

    return products, report


def normalize_rows(rows: Sequence[Sequence[str]], now_ms: Optional[int] = None) -> List[Dict[str, Any]]:
    products, _ = normalize_rows_with_report(rows, now_ms=now_ms)
    return products


def parse_product_csv(text: str, now_ms: Optional[int] = None) -> List[Dict[str, Any]]:
    """Raw CSV text in, canonical product records out."""
    return normalize_rows(parse_rows(text or ""), now_ms=now_ms)


def decode_csv_bytes(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is stripped.
    - If decode fails, try UTF-8, then decode with replacement characters.
    - Never raises.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8", "ascii"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        decode_fallback = True

    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }


def ingest_csv_bytes(raw: bytes, now_ms: Optional[int] = None) -> Dict[str, Any]:
    """
    Decode, tokenize and normalize an uploaded CSV.
    Returns a dict matching the API's response envelope.
    """
    text, enc_report = decode_csv_bytes(raw)
    rows = parse_rows(text)
    products, report = normalize_rows_with_report(rows, now_ms=now_ms)

    logger.info(
        "ingested %d products from %d data rows (%d dropped, encoding=%s)",
        len(products), report["rows"], len(report["dropped"]), enc_report["decode_used"],
    )

    return {
        "products": products,
        "report": {
            "summary": {
                "rows": report["rows"],
                "products": len(products),
                "dropped": len(report["dropped"]),
            },
            "columns": report["columns"],
            "encoding": enc_report,
            "dropped": report["dropped"],
        },
    }
