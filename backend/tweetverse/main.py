"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, List

from fastapi import Depends, FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from tweetverse.config import CORS_ALLOW_ORIGINS, WORD_CLOUD_LIMIT, settings
from tweetverse.core.parser import ensure_csv_filename, parse_upload
from tweetverse.core.sentiment import distribution, group_by_sentiment, summary, time_series
from tweetverse.core.words import hot_topics, tokenize
from tweetverse.errors import TweetVerseError
from tweetverse.schemas import (
    DateRangeIn,
    DateRangeOut,
    RangeResponse,
    RecordOut,
    RecordsResponse,
    SummaryDetailResponse,
    SummaryOut,
    TimeSeriesPointOut,
    UploadResponse,
    WordOut,
)
from tweetverse.store import Dataset, DatasetStore
from tweetverse.utils import now_utc, setup_logging

# Configure logging
logger = logging.getLogger("uvicorn")

UPLOAD_CHUNK_BYTES = 64 * 1024


def get_store(request: Request) -> DatasetStore:
    return request.app.state.store


def require_dataset(store: DatasetStore = Depends(get_store)) -> Dataset:
    """Resolve the loaded dataset or fail with 404."""
    if store.dataset is None:
        raise HTTPException(status_code=404, detail="No dataset loaded")
    return store.dataset


async def read_limited(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read an upload in chunks, failing with 413 once it exceeds max_bytes.
    """
    if file.size is not None and file.size > max_bytes:
        raise HTTPException(status_code=413, detail="File is too large.")

    chunks: List[bytes] = []
    received = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        received += len(chunk)
        if received > max_bytes:
            raise HTTPException(status_code=413, detail="File is too large.")
        chunks.append(chunk)
    return b"".join(chunks)


def build_range_response(store: DatasetStore) -> RangeResponse:
    dataset = store.dataset
    return RangeResponse(
        date_range=DateRangeOut.from_range(dataset.date_range),
        bounds=DateRangeOut.from_range(store.bounds()),
        total=len(dataset.records),
        shown=len(store.filtered()),
    )


def create_app(store: DatasetStore | None = None) -> FastAPI:
    """
    Build the API application.

    Args:
        store: Dataset store to serve (a fresh one by default)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="TweetVerse API",
        version="0.1.0",
        description="API for exploring sentiment-annotated posts uploaded as CSV"
    )
    app.state.store = store or DatasetStore()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "ok",
            "as_of": now_utc().isoformat(),
            "service": "tweetverse-api"
        }

    @app.post("/upload", response_model=UploadResponse)
    async def upload_dataset(
        file: UploadFile = File(...),
        store: DatasetStore = Depends(get_store),
    ):
        """
        Parse an uploaded CSV and make it the current dataset.

        Any parser failure is reported as a single 400 with a readable message;
        the previous dataset stays in place.
        """
        filename = file.filename or ""
        try:
            ensure_csv_filename(filename)
            content = await read_limited(file, settings.MAX_UPLOAD_MB * 1024 * 1024)

            # Parse in a worker thread so the event loop stays responsive
            result = await asyncio.to_thread(parse_upload, content)
        except HTTPException:
            raise
        except TweetVerseError as e:
            logger.warning(f"Rejected upload {filename!r}: {e}")
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            logger.error(f"Error parsing upload {filename!r}: {e}")
            raise HTTPException(status_code=500, detail="Failed to parse CSV file. Please check the format.")

        dataset = store.install(filename, result)
        logger.info(f"Loaded {len(dataset.records)} records from {filename}")

        return UploadResponse(
            filename=dataset.filename,
            total=len(dataset.records),
            rows_dropped=dataset.rows_dropped,
            date_range=DateRangeOut.from_range(dataset.date_range),
            uploaded_at=dataset.uploaded_at.isoformat(),
        )

    @app.delete("/dataset", status_code=204)
    async def reset_dataset(store: DatasetStore = Depends(get_store)):
        """Discard the current dataset."""
        store.clear()

    @app.get("/range", response_model=RangeResponse)
    async def get_range(
        dataset: Dataset = Depends(require_dataset),
        store: DatasetStore = Depends(get_store),
    ):
        return build_range_response(store)

    @app.put("/range", response_model=RangeResponse)
    async def select_range(
        selection: DateRangeIn,
        dataset: Dataset = Depends(require_dataset),
        store: DatasetStore = Depends(get_store),
    ):
        """Select a start and/or end date; conflicting bounds are pulled together."""
        store.select_range(start=selection.start, end=selection.end)
        return build_range_response(store)

    @app.get("/records", response_model=RecordsResponse)
    async def get_records(
        dataset: Dataset = Depends(require_dataset),
        store: DatasetStore = Depends(get_store),
    ):
        shown = store.filtered()
        return RecordsResponse(
            total=len(dataset.records),
            shown=len(shown),
            records=[RecordOut.from_record(r) for r in shown],
        )

    @app.get("/words", response_model=List[WordOut])
    async def get_words(
        limit: int = Query(WORD_CLOUD_LIMIT, ge=1, le=WORD_CLOUD_LIMIT, description="Number of words to return"),
        dataset: Dataset = Depends(require_dataset),
        store: DatasetStore = Depends(get_store),
    ):
        texts = [r.translated_text for r in store.filtered()]
        return [WordOut.from_entry(e) for e in tokenize(texts, limit=limit)]

    @app.get("/sentiment/distribution", response_model=Dict[str, int])
    async def get_distribution(
        dataset: Dataset = Depends(require_dataset),
        store: DatasetStore = Depends(get_store),
    ):
        return distribution(store.filtered())

    @app.get("/sentiment/timeseries", response_model=List[TimeSeriesPointOut])
    async def get_time_series(
        dataset: Dataset = Depends(require_dataset),
        store: DatasetStore = Depends(get_store),
    ):
        return [TimeSeriesPointOut.from_point(p) for p in time_series(store.filtered())]

    @app.get("/summary", response_model=SummaryOut)
    async def get_summary(
        dataset: Dataset = Depends(require_dataset),
        store: DatasetStore = Depends(get_store),
    ):
        return SummaryOut.from_stats(summary(store.filtered()))

    @app.get("/summary/detail", response_model=SummaryDetailResponse)
    async def get_summary_detail(
        dataset: Dataset = Depends(require_dataset),
        store: DatasetStore = Depends(get_store),
    ):
        """Summary page payload: stats, active range, hot topics and posts per sentiment."""
        shown = store.filtered()
        groups = group_by_sentiment(shown)
        return SummaryDetailResponse(
            summary=SummaryOut.from_stats(summary(shown)),
            date_range=DateRangeOut.from_range(dataset.date_range),
            hot_topics=[WordOut.from_entry(e) for e in hot_topics(r.translated_text for r in shown)],
            groups={label: [RecordOut.from_record(r) for r in items] for label, items in groups.items()},
        )

    return app


setup_logging()

# Initialize FastAPI app
app = create_app()


if __name__ == "__main__":
    # For development
    import uvicorn
    uvicorn.run("tweetverse.main:app", host=settings.HOST, port=settings.PORT, reload=True)
