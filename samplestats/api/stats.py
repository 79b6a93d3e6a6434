import logging
import math
from typing import Optional, Sequence

from fastapi import APIRouter, HTTPException, Request
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from samplestats.api.schemas import SampleIn, StatisticOut, StatisticsOut
from samplestats.observability.metrics import record_statistic
from samplestats.services.summary import find_statistic, summarize

logger = logging.getLogger(__name__)

router = APIRouter()


def check_sample_size(request: Request, numbers: Sequence[float]) -> None:
    limit = request.app.state.settings.limits.max_sample_size
    if len(numbers) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"sample has {len(numbers)} values, limit is {limit}",
        )


def check_finite(name: str, value: Optional[float]) -> None:
    # JSON has no encoding for inf/nan
    if value is not None and not math.isfinite(value):
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail=f"{name} of this sample is not finite ({value})",
        )


@router.post("/stats", response_model=StatisticsOut)
async def describe(body: SampleIn, request: Request):
    """
    Accepts a JSON payload with 'numbers'.
    Returns mean, stddev, median and l2; undefined statistics are null.
    """
    check_sample_size(request, body.numbers)
    try:
        values = summarize(body.numbers)
    except ValueError as exc:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    # Reject the whole response before counting any outcome
    for name, value in values.items():
        check_finite(name, value)
    for name, value in values.items():
        record_statistic(name, value)
    logger.debug("described sample of %d values", len(body.numbers))
    return StatisticsOut(count=len(body.numbers), **values)


@router.post("/stats/{statistic}", response_model=StatisticOut)
async def compute(statistic: str, body: SampleIn, request: Request):
    """
    Computes a single statistic selected by name.
    Responds with 404 for unknown statistics.
    """
    try:
        fn = find_statistic(statistic)
    except KeyError as exc:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=f"unknown statistic {statistic!r}") from exc
    check_sample_size(request, body.numbers)
    try:
        value = fn(body.numbers)
    except ValueError as exc:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    check_finite(statistic, value)
    record_statistic(statistic, value)
    logger.debug("computed %s over %d values", statistic, len(body.numbers))
    return StatisticOut(statistic=statistic, count=len(body.numbers), value=value)
