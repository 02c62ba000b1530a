import time
import uuid

from starlette.types import ASGIApp, Scope, Receive, Send, Message
from structlog.contextvars import bound_contextvars

from patient_store.logger import LogLike

REQUEST_ID_HEADER = b"x-request-id"


class HTTPLogMiddleware:
    """Tags every log line of a request with its id, method and path.

    The id comes from ``x-request-id`` when the client sends one and is
    echoed back on the response either way.
    """

    def __init__(self, app: ASGIApp, logger: LogLike, dev: bool = False):
        self.app = app
        self._logger = logger
        self._dev = dev

    @staticmethod
    def _request_id(scope: Scope) -> str:
        for key, value in scope.get("headers", []):
            if key.lower() == REQUEST_ID_HEADER and value:
                return value.decode()
        return str(uuid.uuid4())

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request_id = self._request_id(scope)
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = [(k, v) for k, v in message.get("headers", []) if k.lower() != REQUEST_ID_HEADER]
                headers.append((REQUEST_ID_HEADER, request_id.encode()))
                message["headers"] = headers
            await send(message)

        with bound_contextvars(request_id=request_id, method=scope.get("method"), path=scope.get("path")):
            client = scope.get("client")
            self._logger.debug(
                "http_request_start",
                client_ip=client[0] if client else None,
                env=("dev" if self._dev else "prod"),
            )
            start_time = time.perf_counter()
            try:
                await self.app(scope, receive, send_wrapper)
            except Exception:
                self._logger.exception(
                    "http_request_fail",
                    status=status_code,
                    duration_ms=int((time.perf_counter() - start_time) * 1000),
                )
                raise
            self._logger.info(
                "http_request_end",
                status=status_code,
                duration_ms=int((time.perf_counter() - start_time) * 1000),
            )
