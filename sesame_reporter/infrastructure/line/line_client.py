# sesame_reporter/infrastructure/line/line_client.py
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from sesame_reporter.core.exceptions import NotificationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one push call.

    Callers treat sending as fire-and-forget: a result with ``ok=False`` is
    logged here and otherwise ignored by the pipeline.
    """

    ok: bool
    status_code: int
    body: str


class LineClient:

    def __init__(
        self,
        push_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.push_url = push_url
        self.timeout = timeout
        self._client = client

    @staticmethod
    def build_payload(text: str, recipient_id: str) -> dict:
        return {
            "to": recipient_id,
            "messages": [
                {
                    "type": "text",
                    "text": text,
                }
            ],
        }

    async def _post(self, payload: dict, headers: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(
                self.push_url, json=payload, headers=headers, timeout=self.timeout
            )

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.push_url, json=payload, headers=headers)

    async def send_message(self, text: str, access_token: str, recipient_id: str) -> DeliveryResult:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }

        try:
            resp = await self._post(self.build_payload(text, recipient_id), headers)
        except httpx.RequestError as exc:
            logger.error(f"LineClient: request error while sending push message: {exc}")
            raise NotificationError(f"LINE push request failed: {exc}") from exc

        result = DeliveryResult(
            ok=resp.is_success,
            status_code=resp.status_code,
            body=resp.text,
        )

        if result.ok:
            logger.info(f"LineClient: push message sent ({len(text)} chars)")
        else:
            logger.warning(
                f"LineClient: push API responded with error: {result.status_code} {result.body}"
            )

        return result
