# sesame_reporter/infrastructure/sesame/sesame_client.py
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from sesame_reporter.core.exceptions import DeviceStatusError
from sesame_reporter.domain.device.device_model import DeviceStatus

logger = logging.getLogger(__name__)


class SesameClient:

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def status_url(self, device_uuid: str) -> str:
        return f"{self.base_url}/{device_uuid}"

    async def _get(self, url: str, headers: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, headers=headers, timeout=self.timeout)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, headers=headers)

    async def get_status(self, device_uuid: str, api_key: str) -> DeviceStatus:
        url = self.status_url(device_uuid)

        try:
            resp = await self._get(url, headers={"x-api-key": api_key})
            resp.raise_for_status()
            raw = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                f"SesameClient: status request for {device_uuid} failed: "
                f"{exc.response.status_code}"
            )
            raise DeviceStatusError(
                f"Sesame API returned {exc.response.status_code} for device {device_uuid}",
                device_uuid=device_uuid,
            ) from exc
        except httpx.RequestError as exc:
            logger.error(f"SesameClient: request error for {device_uuid}: {exc}")
            raise DeviceStatusError(
                f"Sesame API request failed for device {device_uuid}: {exc}",
                device_uuid=device_uuid,
            ) from exc
        except ValueError as exc:
            logger.error(f"SesameClient: non-JSON response for {device_uuid}")
            raise DeviceStatusError(
                f"Sesame API returned invalid JSON for device {device_uuid}",
                device_uuid=device_uuid,
            ) from exc

        try:
            status = DeviceStatus.model_validate(raw)
        except ValidationError as exc:
            fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
            logger.error(
                f"SesameClient: unexpected status payload for {device_uuid} (fields: {fields})"
            )
            raise DeviceStatusError(
                f"Sesame API response for device {device_uuid} is missing or has invalid "
                f"fields: {fields or 'body'}",
                device_uuid=device_uuid,
            ) from exc

        logger.debug(
            f"SesameClient: {device_uuid} locked={status.locked} "
            f"battery={status.battery_percentage}"
        )
        return status
