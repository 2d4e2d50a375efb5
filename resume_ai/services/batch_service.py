"""Batch processing: independent pipelines under a concurrency limit."""

import asyncio
import time
import uuid
from typing import List, Optional, Sequence

from resume_ai.config import BATCH_CONCURRENCY, BATCH_MAX_SIZE
from resume_ai.resume_pipeline.resume_extractor import ModelInvoker, process_resume
from resume_ai.schemas.api_response import BatchResumeItem, BatchResumeResult, ProcessResumeBatchResponse
from resume_ai.services.outcome_log import OutcomeReporter
from resume_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _check_batch(items: Sequence[BatchResumeItem], max_size: int) -> None:
    if not items:
        raise ValueError("Batch must contain at least one resume")
    if len(items) > max_size:
        raise ValueError(f"Batch size {len(items)} exceeds the maximum of {max_size}")
    ids = [item.id for item in items]
    if len(set(ids)) != len(ids):
        raise ValueError("Batch item ids must be unique")


async def process_batch(
    items: Sequence[BatchResumeItem],
    invoke: ModelInvoker,
    max_concurrency: int = BATCH_CONCURRENCY,
    reporter: Optional[OutcomeReporter] = None,
    max_size: int = BATCH_MAX_SIZE,
) -> ProcessResumeBatchResponse:
    """
    Run every item through its own pipeline, at most ``max_concurrency`` at a time.
    One item's failure never affects its siblings; results keep input order.
    """
    _check_batch(items, max_size)
    batch_id = uuid.uuid4().hex
    started = time.perf_counter()
    sem = asyncio.Semaphore(max_concurrency)

    async def task(item: BatchResumeItem) -> BatchResumeResult:
        async with sem:
            try:
                response = await process_resume(
                    item.resume_text,
                    invoke,
                    item.options,
                    reporter,
                    request_id=f"{batch_id}:{item.id}",
                )
            except Exception as e:
                logger.exception("Batch %s item %s failed: %s", batch_id, item.id, e)
                return BatchResumeResult(id=item.id, status="failed", error=str(e))
            if response.error_code:
                return BatchResumeResult(id=item.id, status="failed", result=response, error=response.error_code)
            return BatchResumeResult(id=item.id, status="completed", result=response)

    results: List[BatchResumeResult] = await asyncio.gather(*[task(item) for item in items])
    completed = sum(1 for r in results if r.status == "completed")
    failed = len(results) - completed
    logger.info("Batch %s finished: total=%s completed=%s failed=%s", batch_id, len(results), completed, failed)
    return ProcessResumeBatchResponse(
        batch_id=batch_id,
        status="completed" if completed else "failed",
        total_resumes=len(results),
        completed_count=completed,
        failed_count=failed,
        results=results,
        processing_time_ms=int((time.perf_counter() - started) * 1000),
    )
