"""Client for the model service that classifies SMS messages."""

from __future__ import annotations

from typing import Any

import httpx

from frontend.lib.logger import get_logger


class ModelServiceError(RuntimeError):
    """Raised when the model service cannot produce a prediction."""


logger = get_logger(__name__)


class ModelClient:
    """Thin wrapper for calling the model service's ``/predict`` endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def predict(self, sms: str) -> str:
        """Return the model's label for ``sms`` with surrounding whitespace removed."""

        data = await self._post_predict({"sms": sms})
        result = data.get("result")
        if not isinstance(result, str):
            raise ModelServiceError("Model response is missing a result")
        return result.strip()

    async def _post_predict(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            logger.info("model.request", extra={"base_url": self.base_url})
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post("/predict", json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            detail = exc.response.text[:200]
            logger.warning(
                "model.request.http_error",
                extra={"base_url": self.base_url, "status": status, "detail": detail},
            )
            raise ModelServiceError(f"Model request failed ({status})") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "model.request.network_error",
                extra={"base_url": self.base_url, "error": str(exc)},
            )
            raise ModelServiceError("Model request failed (network)") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise ModelServiceError("Invalid JSON returned from model service") from exc

        if not isinstance(data, dict):
            raise ModelServiceError("Unexpected model response shape")
        return data
