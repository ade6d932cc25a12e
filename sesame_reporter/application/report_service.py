import logging
from typing import List, Sequence

from sesame_reporter.domain.device.device_model import Device
from sesame_reporter.domain.report.report_format import compose_report, format_device_status
from sesame_reporter.infrastructure.line.line_client import LineClient
from sesame_reporter.infrastructure.sesame.sesame_client import SesameClient

logger = logging.getLogger(__name__)


class ReportService:
    """Polls every configured device in order and pushes one combined report.

    Devices are polled one after another. The first failing device aborts
    the run: nothing is sent and the error reaches the caller, which decides
    between an HTTP error response and a fallback notification.
    """

    def __init__(
        self,
        sesame_client: SesameClient,
        line_client: LineClient,
        devices: Sequence[Device],
        sesame_api_key: str,
        line_access_token: str,
        line_user_id: str,
    ):
        self.sesame_client = sesame_client
        self.line_client = line_client
        self.devices = tuple(devices)
        self._sesame_api_key = sesame_api_key
        self._line_access_token = line_access_token
        self._line_user_id = line_user_id

    async def collect_fragments(self, devices: Sequence[Device], sesame_api_key: str) -> List[str]:
        fragments: List[str] = []

        for device in devices:
            status = await self.sesame_client.get_status(device.uuid, sesame_api_key)
            fragments.append(format_device_status(device, status))

        return fragments

    async def build_and_send(
        self,
        devices: Sequence[Device],
        sesame_api_key: str,
        line_access_token: str,
        line_user_id: str,
    ) -> str:
        fragments = await self.collect_fragments(devices, sesame_api_key)
        final_message = compose_report(fragments)

        # Delivery result is intentionally not inspected; LineClient logs failures.
        await self.line_client.send_message(final_message, line_access_token, line_user_id)

        logger.info(f"Status report sent | devices={len(fragments)}")
        return final_message

    async def run(self) -> str:
        return await self.build_and_send(
            self.devices,
            self._sesame_api_key,
            self._line_access_token,
            self._line_user_id,
        )

    async def send_text(self, text: str):
        return await self.line_client.send_message(
            text, self._line_access_token, self._line_user_id
        )
