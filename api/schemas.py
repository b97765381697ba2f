from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel


class ChartOptionsModel(BaseModel):
    bucket_step: float = 0.5
    include_points: bool = True


class ChartMetaModel(BaseModel):
    id: int
    slug: str
    title: str
    description: str


class MetaChartsResponse(BaseModel):
    charts: List[ChartMetaModel]


class MetaDatasetResponse(BaseModel):
    source: Optional[str] = None
    records: int
    non_null: Dict[str, int]
