"""
Plain HTTP responses served next to the WebSocket endpoint.

Requests that are not WebSocket upgrades are answered here through the
server's ``process_request`` hook: a health check, the game page and any
static assets under the public directory.
"""

import email.utils
import logging
from http import HTTPStatus
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlsplit

from websockets.asyncio.server import ServerConnection
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

HEALTH_PATH = "/healthz"
INDEX_PATHS = ("/", "/index.html")
INDEX_FILE = "index.html"

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".js": "text/javascript",
    ".css": "text/css",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def file_response(status: HTTPStatus, body: bytes, content_type: str) -> Response:
    """Build a response carrying ``body`` with the given content type."""
    headers = Headers()
    headers["Date"] = email.utils.formatdate(usegmt=True)
    headers["Connection"] = "close"
    headers["Content-Length"] = str(len(body))
    headers["Content-Type"] = content_type
    return Response(status.value, status.phrase, headers, body)


class StaticFileHandler:
    """``process_request`` hook answering non-upgrade HTTP requests."""

    def __init__(self, public_dir: str, logger: logging.Logger) -> None:
        self.public_dir = Path(public_dir).resolve()
        self.logger = logger

    def __call__(
        self, connection: ServerConnection, request: Request
    ) -> Optional[Response]:
        if "websocket" in request.headers.get("Upgrade", "").lower():
            return None

        path = unquote(urlsplit(request.path).path)

        if path == HEALTH_PATH:
            return connection.respond(HTTPStatus.OK, "ok")

        if path in INDEX_PATHS:
            index = self.public_dir / INDEX_FILE
            try:
                body = index.read_bytes()
            except OSError:
                self.logger.error(f"Missing {index}")
                return connection.respond(
                    HTTPStatus.INTERNAL_SERVER_ERROR, "Missing public/index.html"
                )
            return file_response(HTTPStatus.OK, body, content_type_for(index))

        target = self.resolve(path)
        if target is None:
            return connection.respond(HTTPStatus.FORBIDDEN, "Forbidden")

        try:
            body = target.read_bytes()
        except (OSError, ValueError):
            return connection.respond(HTTPStatus.NOT_FOUND, "Not found")
        return file_response(HTTPStatus.OK, body, content_type_for(target))

    def resolve(self, path: str) -> Optional[Path]:
        """Map a request path into the public directory, or None if it escapes it."""
        if "\x00" in path:
            return None
        target = (self.public_dir / path.lstrip("/")).resolve()
        if target != self.public_dir and self.public_dir not in target.parents:
            return None
        return target
