from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ProductRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    handle_id: str = Field(alias="handleId", min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    image_url: str = Field(alias="imageUrl", min_length=1)
    thumbnail_url: str = Field(alias="thumbnailUrl")
    price: str = ""
    sku: Optional[str] = None
    collection: Optional[str] = None
    size: Optional[str] = None
    date_uploaded: int = Field(alias="dateUploaded")


class IngestSummary(BaseModel):
    rows: int = 0
    products: int = 0
    dropped: int = 0


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str = "utf-8"
    decode_fallback: bool = False


class DroppedRow(BaseModel):
    row: int
    issue: str


class IngestReport(BaseModel):
    summary: IngestSummary
    columns: Dict[str, Optional[str]] = Field(default_factory=dict)
    encoding: EncodingReport
    dropped: List[DroppedRow] = Field(default_factory=list)


class IngestResponse(BaseModel):
    products: List[ProductRecord]
    report: IngestReport


class HealthResponse(BaseModel):
    ok: bool = True
