"""
Ingestion rules.

Header vocabulary, media URL templates and size patterns live here so the
heuristics stay in one auditable place.
"""

import os

# Canonical field -> accepted header spellings, in priority order.
# Spellings are compared after normalize_header(), so "Product Name",
# "product_name" and "PRODUCT-NAME" all hit "productname".
HEADER_VOCABULARY = {
    "name": ["name", "title", "productname", "producttitle", "handle", "itemname"],
    "imageUrl": [
        "productimageurl", "productimage", "image", "images", "thumbnail",
        "mainimage", "picture", "url", "src", "img", "media", "photo", "gallery",
    ],
    "handleId": ["handleid", "id", "productid", "handle", "sku"],
    "description": [
        "description", "plaindescription", "productdescription", "content",
        "body", "excerpt", "shortdescription",
    ],
    "price": ["price", "value", "pricevalue", "amount", "regularprice", "saleprice", "cost"],
    "sku": ["sku", "code", "reference", "partnumber"],
    "collection": ["collection", "category", "type", "categories", "tag"],
    "size": ["size", "option1", "variantinventorysize", "variantsize", "optionsize"],
    "dateUploaded": ["date", "created", "createdat", "dateuploaded"],
}

# Keys probed, in order, on a structured (JSON) image cell.
STRUCTURED_IMAGE_KEYS = ("url", "src", "image", "id")

# Separators used by exports that pack several images into one cell.
MULTI_VALUE_SEPARATORS = r"[;|,]"

# Wix media addressing
MEDIA_MARKER = "~mv2"
MEDIA_URI_SCHEME = "wix:image"
MEDIA_BASE_URL = "https://static.wixstatic.com/media/"
THUMBNAIL_WIDTH = 400
THUMBNAIL_HEIGHT = 400
THUMBNAIL_PATH = "/v1/fill/w_{w},h_{h},al_c,q_80/thumbnail.jpg"
MEDIA_HASH_PATTERN = r"[a-f0-9]{6,}_[a-f0-9]{6,}\.(jpg|png|webp|jpeg)"

# Title size heuristics, tried in order; first hit wins.
# Waist sizes 24-48 with an optional W suffix, then NN/NN, then letter sizes.
# NOTE: a bare two digit number in range (a year fragment, a pack count) is
# also taken as a waist size.
SIZE_PATTERNS = (
    r"\b(2[4-9]|3[0-9]|4[0-8])([wW])?\b",
    r"\b(2[4-9]|3[0-9]|4[0-8])/(2[4-9]|3[0-9]|4[0-8])\b",
    r"\b(XS|S|M|L|XL|XXL|XXXL|2XL|3XL)\b",
)

# Spacing between synthetic timestamps of consecutive rows (milliseconds).
SYNTHETIC_TIMESTAMP_STEP_MS = 1000

# Host-side guard; the engine itself never limits input size.
MAX_UPLOAD_BYTES = int(os.getenv("PRODUCT_INGEST_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

SORT_OPTIONS = ("newest", "name-asc", "name-desc", "price-high", "price-low", "size", "collection")
