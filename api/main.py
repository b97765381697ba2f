from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import ChartOptionsModel, MetaChartsResponse, MetaDatasetResponse
from sleepstats.catalog import CHARTS, compute_chart, get_chart
from sleepstats.data import dataset_summary, get_source_file, load_dataset
from sleepstats.filters import normalize_options


app = FastAPI(title="Sleep Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/charts", response_model=MetaChartsResponse)
def meta_charts():
    return _json({"charts": [spec.meta() for spec in CHARTS]})


@app.get("/meta/dataset", response_model=MetaDatasetResponse)
def meta_dataset():
    try:
        dataset = load_dataset()
        summary = dataset_summary(dataset)
        summary["source"] = str(get_source_file())
        return _json(summary)
    except Exception as exc:
        logger.exception("meta_dataset failed")
        return _error(500, exc)


@app.post("/charts/{chart}")
def chart(chart: str, options: Optional[ChartOptionsModel] = None):
    try:
        get_chart(chart)
    except KeyError as exc:
        return _error(404, exc)
    try:
        dataset = load_dataset()
        opts = normalize_options(options.model_dump() if options else None)
        return _json(compute_chart(chart, dataset, opts))
    except Exception as exc:
        logger.exception("chart %s failed", chart)
        return _error(500, exc)
