"""
Batching of bulk comment-count lookups.

SUDS receives article ids in the query string, so a long list has to be
split across several requests to keep each URL within the transport's
size limit. Sizes are estimated as the endpoint URL length plus the
length of every stringified id in the batch.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from shared.logging import get_logger
from shared.errors import NoDataReceivedError


DEFAULT_URL_BUDGET = 1000


@dataclass
class ArticleIdBatch:
    """Article ids sent in one request, with the estimated URL size."""
    size: int
    article_ids: List[Any] = field(default_factory=list)

    def append(self, article_id: Any) -> None:
        self.article_ids.append(article_id)
        self.size += len(str(article_id))


def plan_batches(article_ids: Iterable[Any], base_length: int, budget: int = DEFAULT_URL_BUDGET) -> List[ArticleIdBatch]:
    """Split ids into ordered batches.

    A new batch is opened when the most recent one has reached ``budget``.
    The check runs before appending, so the last id added to a batch may
    carry it past the budget.
    """
    batches: List[ArticleIdBatch] = []
    for article_id in article_ids:
        if not batches or batches[-1].size >= budget:
            batches.append(ArticleIdBatch(size=base_length))
        batches[-1].append(article_id)
    return batches


def merge_counts(results: Iterable[Optional[Dict[str, Any]]]) -> Dict[str, Any]:
    """Merge per-batch count mappings in batch order."""
    merged: Dict[str, Any] = {}
    for result in results:
        if result is None:
            continue
        if not isinstance(result, dict):
            raise NoDataReceivedError(
                "No data received from SUDS.",
                details={"unexpected_type": type(result).__name__}
            )
        merged.update(result)
    return merged


class BatchPlanner:
    """Fans bulk lookups out as one concurrent request per batch."""

    def __init__(self, budget: int = DEFAULT_URL_BUDGET, *, metrics=None):
        self.budget = budget
        self.metrics = metrics
        self.logger = get_logger("suds.batching")

    def plan(self, article_ids: Iterable[Any], url: str) -> List[ArticleIdBatch]:
        return plan_batches(article_ids, len(url), self.budget)

    async def fetch_counts(
        self,
        article_ids: Iterable[Any],
        url: str,
        fetch: Callable[[ArticleIdBatch], Awaitable[Optional[Dict[str, Any]]]],
    ) -> Dict[str, Any]:
        """Run ``fetch`` for every batch and merge the results.

        Every batch runs to completion. If any of them failed, the first
        failure in batch order is raised and nothing is returned.
        """
        batches = self.plan(article_ids, url)
        if not batches:
            return {}

        if self.metrics:
            self.metrics.record_batches(len(batches))

        self.logger.debug(
            "Fetching comment counts",
            batches=len(batches),
            sizes=[batch.size for batch in batches]
        )

        results = await asyncio.gather(
            *(fetch(batch) for batch in batches),
            return_exceptions=True
        )

        for index, outcome in enumerate(results):
            if isinstance(outcome, BaseException):
                self.logger.error(
                    "Comment count batch failed",
                    batch=index,
                    batches=len(batches),
                    error=str(outcome)
                )
                raise outcome

        return merge_counts(results)
