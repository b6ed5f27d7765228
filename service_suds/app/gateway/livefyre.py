"""
Livefyre related SUDS endpoints: widget init and comment counts.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Union

from shared.errors import ValidationError, NoDataReceivedError

from .base import BaseGateway
from .models import InitRequest
from ..batching.planner import ArticleIdBatch, BatchPlanner


class LivefyreGateway(BaseGateway):
    """Widget init (optionally cached) and comment counts."""

    logger_name = "suds.gateway.livefyre"

    def __init__(self, *args, batch_planner: Optional[BatchPlanner] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.batch_planner = batch_planner or BatchPlanner(self.settings.batch_url_budget, metrics=self.metrics)

    async def get_init_config(self, request: Union[InitRequest, Mapping[str, Any]]) -> Dict[str, Any]:
        """Init data for a comment widget.

        With caching enabled, a cached payload for the article is returned
        without touching the network unless ``force`` is set. Successful
        responses for classified articles that may host a collection are
        written back, together with the auth payload that came with them.
        """
        if request is None:
            raise TypeError("No configuration parameters provided")
        conf = InitRequest.from_value(request)

        missing = conf.missing_fields()
        if missing:
            raise ValidationError(
                f"{missing[0]} not provided",
                details={"missing": missing}
            )

        with self._session_scope() as session_id:
            cache_enabled = self.cache_enabled(session_id)

            if cache_enabled and conf.force is not True:
                cached = await self.cache.get_init(conf.article_id)
                if cached is not None:
                    cached = dict(cached)
                    cached["el"] = conf.element_id
                    self.logger.debug("Serving init from cache", article_id=conf.article_id)
                    return cached

            data = await self._call("init", conf.to_payload(session_id))

            init = data.get("init") if isinstance(data, Mapping) else None
            if init is None or not isinstance(init, Mapping):
                raise NoDataReceivedError("No data received from SUDS.", details={"article_id": conf.article_id})

            if cache_enabled and self._is_cacheable(init):
                await self.cache.cache_init(conf.article_id, init)
                auth = data.get("auth")
                if isinstance(auth, Mapping) and auth.get("token"):
                    await self.cache.cache_auth(dict(auth), session_id)
                else:
                    await self.cache.remove_auth()

            return init

    @staticmethod
    def _is_cacheable(init: Mapping[str, Any]) -> bool:
        return (
            init.get("unclassifiedArticle") is not True
            and init.get("notAllowedToCreateCollection") is not True
            and bool(init.get("collectionMeta"))
        )

    async def get_comment_count(self, article_id: Any) -> Any:
        """Comment count of a single article."""
        if article_id is None or article_id == "":
            raise ValidationError("Article ID not provided")

        data = await self._call("comment_count", {"articleId": article_id})

        if isinstance(data, Mapping) and "count" in data:
            return data["count"]
        raise NoDataReceivedError("No data received from SUDS.", details={"article_id": article_id})

    async def get_comment_counts(self, article_ids: Optional[Iterable[Any]]) -> Dict[str, Any]:
        """Comment counts of many articles, keyed by article id.

        An empty or missing list resolves to an empty mapping without any
        request being made.
        """
        if article_ids is None:
            return {}
        if isinstance(article_ids, (str, bytes)) or not isinstance(article_ids, Iterable):
            raise TypeError("Article IDs must be a collection of IDs")

        article_ids = list(article_ids)
        if not article_ids:
            return {}

        target = self.settings.endpoint_path("comment_counts")

        async def fetch(batch: ArticleIdBatch):
            return await self.remote_call(target, {"articleIds": batch.article_ids})

        return await self.batch_planner.fetch_counts(
            article_ids,
            self.settings.endpoint_url("comment_counts"),
            fetch
        )
