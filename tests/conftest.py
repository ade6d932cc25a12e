"""Pytest configuration and fixtures for Sesame reporter tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from sesame_reporter.application.report_service import ReportService
from sesame_reporter.core.config import Settings
from sesame_reporter.core.exceptions import DeviceStatusError
from sesame_reporter.domain.device.device_model import Device, DeviceStatus
from sesame_reporter.infrastructure.line.line_client import DeliveryResult

SESAME_API_KEY = "sesame-key"
LINE_TOKEN = "line-token"
LINE_USER = "U1234567890"
GATEWAY_KEY = "gateway-secret"


@pytest.fixture
def test_settings() -> Settings:
    """Settings built from explicit values only (no .env, no environment)."""
    return Settings(
        _env_file=None,
        GATEWAY_API_KEY=GATEWAY_KEY,
        SESAME_API_KEY=SESAME_API_KEY,
        LINE_ACCESS_TOKEN=LINE_TOKEN,
        LINE_USER_ID=LINE_USER,
        SESAME_DEVICES={
            "front": {"name": "Front Door", "uuid": "uuid-front"},
            "back": {"name": "Back Door", "uuid": "uuid-back"},
        },
    )


@pytest.fixture
def devices() -> list[Device]:
    return [
        Device(key="front", name="Front Door", uuid="uuid-front"),
        Device(key="back", name="Back Door", uuid="uuid-back"),
        Device(key="garage", name="Garage", uuid="uuid-garage"),
    ]


@pytest.fixture
def statuses() -> dict[str, DeviceStatus]:
    return {
        "uuid-front": DeviceStatus(locked=True, battery_percentage=87),
        "uuid-back": DeviceStatus(locked=False, battery_percentage=42),
        "uuid-garage": DeviceStatus(locked=True, battery_percentage=100),
    }


@pytest.fixture
def failing_uuids() -> set[str]:
    """UUIDs for which the mocked Sesame client raises."""
    return set()


@pytest.fixture
def mock_sesame_client(statuses, failing_uuids):
    """Mock Sesame client answering from ``statuses``."""

    def get_status(device_uuid: str, api_key: str) -> DeviceStatus:
        if device_uuid in failing_uuids:
            raise DeviceStatusError(f"Sesame API returned 503 for device {device_uuid}", device_uuid)
        return statuses[device_uuid]

    client = MagicMock()
    client.get_status = AsyncMock(side_effect=get_status)
    return client


@pytest.fixture
def mock_line_client():
    """Mock LINE client that always reports a successful push."""
    client = MagicMock()
    client.send_message = AsyncMock(return_value=DeliveryResult(ok=True, status_code=200, body="{}"))
    return client


@pytest.fixture
def report_service(mock_sesame_client, mock_line_client, devices) -> ReportService:
    return ReportService(
        sesame_client=mock_sesame_client,
        line_client=mock_line_client,
        devices=devices,
        sesame_api_key=SESAME_API_KEY,
        line_access_token=LINE_TOKEN,
        line_user_id=LINE_USER,
    )
