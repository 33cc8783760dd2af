import logging

from fastapi import FastAPI, UploadFile, File, HTTPException
from .models import IngestResponse, HealthResponse
from .normalize import ingest_csv_bytes
from .catalog import search_products, sort_products
from .rules import MAX_UPLOAD_BYTES, SORT_OPTIONS

logger = logging.getLogger(__name__)

app = FastAPI(
    title="product-ingest",
    description="Turns messy e-commerce CSV exports into canonical product records",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/products/ingest", response_model=IngestResponse)
async def ingest_products(file: UploadFile = File(...), q: str = "", sort: str = "newest"):
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")
    if sort not in SORT_OPTIONS:
        raise HTTPException(status_code=422, detail=f"sort must be one of: {', '.join(SORT_OPTIONS)}")

    raw = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(raw) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"CSV exceeds {MAX_UPLOAD_BYTES} bytes")

    result = ingest_csv_bytes(raw)
    if not result["products"]:
        logger.warning("no usable products in %s", file.filename)
        raise HTTPException(status_code=422, detail="CSV format error: no usable product rows")

    result["products"] = sort_products(search_products(result["products"], q), sort)
    return result
