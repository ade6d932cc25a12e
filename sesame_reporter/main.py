# sesame_reporter/main.py

import argparse
import asyncio
import logging
import sys
from typing import Optional

import uvicorn

from sesame_reporter.application.report_service import ReportService
from sesame_reporter.application.scheduled_report_service import ScheduledReportService
from sesame_reporter.core.config import Settings, settings
from sesame_reporter.core.exceptions import ConfigurationError
from sesame_reporter.core.logging_config import configure_logging
from sesame_reporter.infrastructure.config.device_config import load_devices
from sesame_reporter.infrastructure.line.line_client import LineClient
from sesame_reporter.infrastructure.sesame.sesame_client import SesameClient
from sesame_reporter.interfaces.http.gateway import RequestGateway, create_app

logger = logging.getLogger(__name__)


def build_report_service(config: Settings) -> ReportService:
    return ReportService(
        sesame_client=SesameClient(config.SESAME_API_URL, timeout=config.HTTP_TIMEOUT),
        line_client=LineClient(config.LINE_PUSH_URL, timeout=config.HTTP_TIMEOUT),
        devices=load_devices(config.SESAME_DEVICES),
        sesame_api_key=config.SESAME_API_KEY,
        line_access_token=config.LINE_ACCESS_TOKEN,
        line_user_id=config.LINE_USER_ID,
    )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sesame lock status reporter")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run one scheduled report (with fallback notification) and exit",
    )
    return parser.parse_args(argv)


def main(argv=None, config: Optional[Settings] = None) -> int:
    args = parse_args(argv)
    config = config or settings

    configure_logging(config)

    missing = config.missing_credentials(serving=not args.once)
    if missing:
        logger.error(f"Missing required settings: {', '.join(missing)}")
        return 2

    try:
        report_service = build_report_service(config)
    except ConfigurationError as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 2

    logger.info(f"Configured devices: {len(report_service.devices)}")

    if args.once:
        asyncio.run(ScheduledReportService(report_service).run_once())
        return 0

    gateway = RequestGateway(report_service, config.GATEWAY_API_KEY, config.TRIGGER_MODE)
    scheduler = ScheduledReportService(report_service, interval=config.REPORT_INTERVAL)
    app = create_app(gateway, scheduler)

    try:
        uvicorn.run(app, host=config.HOST, port=config.PORT, log_config=None)
    except KeyboardInterrupt:
        logger.info("Sesame reporter stopping due to keyboard interrupt.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
