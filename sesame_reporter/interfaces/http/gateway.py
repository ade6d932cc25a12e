# sesame_reporter/interfaces/http/gateway.py
import hmac
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from sesame_reporter.application.report_service import ReportService
from sesame_reporter.application.scheduled_report_service import ScheduledReportService
from sesame_reporter.core.config import TriggerMode

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-KEY"
SENT_STATUS = "送信完了"

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


class PrettyJSONResponse(JSONResponse):

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


class RequestGateway:
    """Validates one inbound request and runs the report pipeline.

    ``TriggerMode.METHOD`` accepts POST on any path; ``TriggerMode.PATH``
    accepts GET on ``/`` only and answers mismatches in plain text.
    """

    def __init__(self, report_service: ReportService, api_key: str, mode: TriggerMode = TriggerMode.METHOD):
        self.report_service = report_service
        self.mode = TriggerMode(mode)
        self._api_key = api_key

    @property
    def trigger_method(self) -> str:
        return "POST" if self.mode == TriggerMode.METHOD else "GET"

    def _reject(self, status_code: int, error: str, plain: bool = False) -> Response:
        if plain:
            return PlainTextResponse(error, status_code=status_code)
        return JSONResponse({"error": error}, status_code=status_code)

    def _is_valid_key(self, provided: str) -> bool:
        if not self._api_key:
            return False
        return hmac.compare_digest(provided.encode("utf-8"), self._api_key.encode("utf-8"))

    async def handle(self, request: Request) -> Response:
        method = request.method
        path = request.url.path

        if path.endswith("/favicon.ico"):
            return Response(status_code=404)

        if self.mode == TriggerMode.PATH and path != "/":
            logger.warning(f"Rejected request: unknown path {method} {path}")
            return self._reject(404, "Not Found", plain=True)

        if method != self.trigger_method:
            logger.warning(f"Rejected request: method {method} not allowed on {path}")
            return self._reject(405, "Method Not Allowed", plain=self.mode == TriggerMode.PATH)

        provided = request.headers.get(API_KEY_HEADER)
        if provided is None:
            logger.warning(f"Rejected request: {API_KEY_HEADER} header missing")
            return self._reject(401, "API Key Required")

        if not self._is_valid_key(provided):
            logger.warning(f"Rejected request: invalid {API_KEY_HEADER}")
            return self._reject(401, "Invalid API Key")

        try:
            final_message = await self.report_service.run()
        except Exception as exc:
            logger.exception("Status report request failed")
            return JSONResponse({"error": str(exc)}, status_code=500)

        return PrettyJSONResponse({"status": SENT_STATUS, "message": final_message})


def create_app(
    gateway: RequestGateway,
    scheduler: Optional[ScheduledReportService] = None,
) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Sesame reporter gateway starting (trigger: {gateway.trigger_method})")
        if scheduler is not None:
            await scheduler.start()
        yield
        if scheduler is not None:
            await scheduler.stop()
        logger.info("Sesame reporter gateway shutting down")

    app = FastAPI(
        title="Sesame Reporter",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def dispatch(request: Request):
        return await gateway.handle(request)

    @app.exception_handler(StarletteHTTPException)
    async def dispatch_unlisted_method(request: Request, exc: StarletteHTTPException):
        # Verbs outside ALL_METHODS fail routing with 405 before reaching dispatch.
        if exc.status_code == 405:
            return await gateway.handle(request)
        return await http_exception_handler(request, exc)

    app.state.gateway = gateway
    app.state.scheduler = scheduler
    return app
