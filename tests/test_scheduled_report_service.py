import asyncio

import pytest

from sesame_reporter.application.scheduled_report_service import ScheduledReportService
from sesame_reporter.core.exceptions import NotificationError
from sesame_reporter.domain.report.report_format import FALLBACK_MESSAGE, REPORT_HEADER

from conftest import LINE_TOKEN, LINE_USER


async def test_run_once_sends_report(report_service, mock_line_client):
    await ScheduledReportService(report_service).run_once()

    mock_line_client.send_message.assert_awaited_once()
    text, token, user = mock_line_client.send_message.await_args.args
    assert text.startswith(REPORT_HEADER)
    assert (token, user) == (LINE_TOKEN, LINE_USER)


@pytest.mark.parametrize("failing_uuids", [{"uuid-back"}])
async def test_run_once_sends_fallback_on_failure(report_service, mock_line_client):
    # Must not raise.
    await ScheduledReportService(report_service).run_once()

    mock_line_client.send_message.assert_awaited_once_with(FALLBACK_MESSAGE, LINE_TOKEN, LINE_USER)


@pytest.mark.parametrize("failing_uuids", [{"uuid-back"}])
async def test_run_once_swallows_fallback_failure(report_service, mock_line_client):
    mock_line_client.send_message.side_effect = NotificationError("LINE push request failed")

    await ScheduledReportService(report_service).run_once()

    mock_line_client.send_message.assert_awaited_once()


async def test_start_is_noop_when_interval_is_zero(report_service):
    scheduler = ScheduledReportService(report_service, interval=0)

    await scheduler.start()

    assert scheduler.running is False


async def test_loop_runs_immediately_and_stops(report_service, mock_line_client):
    scheduler = ScheduledReportService(report_service, interval=3600)

    await scheduler.start()
    for _ in range(20):
        if mock_line_client.send_message.await_count:
            break
        await asyncio.sleep(0)
    await scheduler.stop()

    assert scheduler.running is False
    assert mock_line_client.send_message.await_count == 1
