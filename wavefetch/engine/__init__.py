"""Fetch engine: rate gate → single fetcher → batch runner → paging orchestrator."""

from wavefetch.engine.batch import ConcurrentBatchRunner, FetchUnit
from wavefetch.engine.fetcher import (
    NO_RETRY,
    RetryPolicy,
    SingleFetcher,
    default_status_interpreter,
    envelope_decoder,
    json_decoder,
    raw_decoder,
)
from wavefetch.engine.paging import PagingOrchestrator, PagingParams
from wavefetch.engine.rate_gate import RateGate
from wavefetch.engine.shapes import PageShape

__all__ = [
    "ConcurrentBatchRunner",
    "FetchUnit",
    "NO_RETRY",
    "PageShape",
    "PagingOrchestrator",
    "PagingParams",
    "RateGate",
    "RetryPolicy",
    "SingleFetcher",
    "default_status_interpreter",
    "envelope_decoder",
    "json_decoder",
    "raw_decoder",
]
