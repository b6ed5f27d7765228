"""
Unit tests for bulk comment-count batching.
"""

import asyncio

import pytest
from prometheus_client import CollectorRegistry

from service_suds.app.batching.planner import (
    ArticleIdBatch,
    BatchPlanner,
    plan_batches,
    merge_counts,
)
from shared.errors import NoDataReceivedError, TransportError
from shared.metrics import MetricsCollector


class TestPlanBatches:
    """Test cases for plan_batches."""

    def test_empty_input_has_no_batches(self):
        assert plan_batches([], base_length=10, budget=20) == []

    def test_batch_is_closed_once_budget_is_reached(self):
        batches = plan_batches(["aaaa"] * 10, base_length=10, budget=20)

        assert [len(batch.article_ids) for batch in batches] == [3, 3, 3, 1]
        # The last append may carry a batch past the budget
        assert [batch.size for batch in batches] == [22, 22, 22, 14]

    def test_exact_budget_opens_a_new_batch(self):
        batches = plan_batches(["aaaaa", "aaaaa", "a"], base_length=10, budget=20)

        assert batches[0].size == 20
        assert [batch.article_ids for batch in batches] == [["aaaaa", "aaaaa"], ["a"]]

    def test_base_length_over_budget_gives_one_id_per_batch(self):
        batches = plan_batches([1, 2, 3], base_length=50, budget=20)

        assert [batch.article_ids for batch in batches] == [[1], [2], [3]]

    def test_ids_are_sized_by_their_string_form(self):
        batches = plan_batches([12345, 7], base_length=0)

        assert batches == [ArticleIdBatch(size=6, article_ids=[12345, 7])]

    def test_order_is_preserved_and_every_id_planned_once(self):
        article_ids = [f"id-{i}" for i in range(500)]

        batches = plan_batches(article_ids, base_length=43, budget=1000)

        flattened = [article_id for batch in batches for article_id in batch.article_ids]
        assert flattened == article_ids
        for batch in batches[:-1]:
            assert batch.size >= 1000
            # Dropping the last id brings the batch back under the budget
            assert batch.size - len(str(batch.article_ids[-1])) < 1000


class TestMergeCounts:
    """Test cases for merge_counts."""

    def test_merges_in_order(self):
        assert merge_counts([{"a": 1}, None, {"b": 2}]) == {"a": 1, "b": 2}

    def test_no_results(self):
        assert merge_counts([]) == {}

    def test_non_mapping_result(self):
        with pytest.raises(NoDataReceivedError):
            merge_counts([{"a": 1}, ["b"]])


class TestBatchPlanner:
    """Test cases for BatchPlanner.fetch_counts."""

    URL = "https://suds.test/v1/livefyre/commentcounts"

    @pytest.mark.asyncio
    async def test_batches_run_concurrently(self):
        planner = BatchPlanner(budget=len(self.URL) + 1)
        article_ids = ["a", "b", "c", "d"]
        started = []
        all_started = asyncio.Event()

        async def fetch(batch):
            started.append(batch.article_ids[0])
            if len(started) == len(article_ids):
                all_started.set()
            await all_started.wait()
            return {batch.article_ids[0]: 1}

        result = await asyncio.wait_for(planner.fetch_counts(article_ids, self.URL, fetch), timeout=1.0)

        assert result == {"a": 1, "b": 1, "c": 1, "d": 1}

    @pytest.mark.asyncio
    async def test_first_failure_in_batch_order_is_raised_after_all_complete(self):
        planner = BatchPlanner(budget=1)
        finished = []
        first, second = TransportError("first"), TransportError("second")

        async def fetch(batch):
            article_id = batch.article_ids[0]
            if article_id == "b":
                await asyncio.sleep(0.01)
                finished.append(article_id)
                raise first
            if article_id == "c":
                finished.append(article_id)
                raise second
            await asyncio.sleep(0.02)
            finished.append(article_id)
            return {article_id: 1}

        with pytest.raises(TransportError) as exc_info:
            await planner.fetch_counts(["a", "b", "c", "d"], self.URL, fetch)

        assert exc_info.value is first
        assert sorted(finished) == ["a", "b", "c", "d"]

    @pytest.mark.asyncio
    async def test_nothing_planned_means_no_fetch(self):
        planner = BatchPlanner()

        async def fetch(batch):  # pragma: no cover - must not run
            raise AssertionError("fetch should not be called")

        assert await planner.fetch_counts([], self.URL, fetch) == {}

    @pytest.mark.asyncio
    async def test_records_batch_metrics(self):
        metrics = MetricsCollector(registry=CollectorRegistry())
        planner = BatchPlanner(budget=1, metrics=metrics)

        async def fetch(batch):
            return {}

        await planner.fetch_counts(["a", "b"], self.URL, fetch)

        assert metrics.sample("suds_batches_total") == 2.0
