import asyncio
import logging
from typing import Optional

from sesame_reporter.application.report_service import ReportService
from sesame_reporter.domain.report.report_format import FALLBACK_MESSAGE

logger = logging.getLogger(__name__)


class ScheduledReportService:

    def __init__(self, report_service: ReportService, interval: int = 0):
        self.report_service = report_service
        self._interval = interval
        self._task: Optional[asyncio.Task] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def run_once(self) -> None:
        """One timer firing. Never raises; failures end in a fallback push."""
        try:
            await self.report_service.run()
            return
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Scheduled status report failed")

        try:
            await self.report_service.send_text(FALLBACK_MESSAGE)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Fallback error notification failed")

    async def start(self):
        if self._running:
            return

        if self._interval <= 0:
            logger.info("REPORT_INTERVAL is 0; scheduled reports disabled.")
            return

        logger.info(f"Starting scheduled reports every {self._interval}s.")
        self._running = True
        self._task = asyncio.create_task(self._loop())

    async def stop(self):
        if not self._running:
            return

        logger.info("Stopping scheduled report loop.")
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def _loop(self):
        while self._running:
            await self.run_once()
            await asyncio.sleep(self._interval)
