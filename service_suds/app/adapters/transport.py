"""
Transport used to reach SUDS.
"""

import time
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx

from shared.logging import get_logger
from shared.errors import TransportError


class RemoteCall(Protocol):
    """A single request/response exchange with SUDS.

    Implementations resolve ``target`` (an endpoint path) against their base
    address, send ``payload`` and return the decoded response body. Failures
    are raised; the gateways pass them through unchanged.
    """

    async def __call__(self, target: str, payload: Mapping[str, Any]) -> Any:
        ...

    async def aclose(self) -> None:
        ...


def encode_params(payload: Mapping[str, Any]) -> Dict[str, str]:
    """Flatten a payload into query-string parameters.

    Lists are comma-joined, booleans lower-cased and ``None`` values dropped.
    """
    params: Dict[str, str] = {}
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            params[key] = ",".join(str(item) for item in value)
        else:
            params[key] = str(value)
    return params


class HttpxRemoteCall:
    """Cross-origin capable GET transport built on httpx."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        client: Optional[httpx.AsyncClient] = None,
        metrics=None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.metrics = metrics
        self.logger = get_logger("suds.transport")
        self._client = client

    async def __call__(self, target: str, payload: Mapping[str, Any]) -> Any:
        url = target if target.startswith(("http://", "https://")) else f"{self.base_url}{target}"
        params = encode_params(payload)
        start = time.perf_counter()
        outcome = "error"

        try:
            if self._client is not None:
                response = await self._client.get(url, params=params)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=params)

            if not response.is_success:
                self.logger.error(
                    "SUDS request failed",
                    url=url,
                    status_code=response.status_code,
                    response=response.text
                )
                raise TransportError(
                    f"SUDS error: {response.status_code}",
                    details={"status_code": response.status_code, "url": url}
                )

            if not response.content.strip():
                outcome = "empty"
                return None

            try:
                data = response.json()
            except ValueError as e:
                raise TransportError(
                    "Malformed response from SUDS",
                    details={"url": url, "error": str(e)}
                )

            outcome = "ok"
            self.logger.debug("SUDS request completed", url=url)
            return data

        except httpx.HTTPError as e:
            self.logger.error("SUDS HTTP error", url=url, error=str(e))
            raise TransportError(
                "SUDS unavailable",
                details={"http_error": str(e), "url": url}
            )
        finally:
            self._record(target, outcome, time.perf_counter() - start)

    def _record(self, target: str, outcome: str, duration: float) -> None:
        if not self.metrics:
            return
        try:
            self.metrics.record_remote_call(target, outcome, duration)
        except Exception as exc:  # pragma: no cover - metrics failures should never break a call
            self.logger.debug("Failed to record remote call metrics", error=str(exc))

    async def aclose(self) -> None:
        """Close the injected client, if any."""
        if self._client is not None:
            await self._client.aclose()
