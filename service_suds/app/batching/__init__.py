"""
Batching package: splits bulk comment-count lookups into URL-sized requests.
"""

from .planner import ArticleIdBatch, BatchPlanner, plan_batches, merge_counts, DEFAULT_URL_BUDGET

__all__ = ["ArticleIdBatch", "BatchPlanner", "plan_batches", "merge_counts", "DEFAULT_URL_BUDGET"]
