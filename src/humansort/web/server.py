"""
Web server for the browser front-end.

Serves the single-page app and a small JSON API. Requests are handled
one at a time, each as a load-reduce-store cycle on the app state file.

Usage:
    humansort serve
    humansort serve --port 8080 --state ./my_state.json
"""

import http.server
import json
import logging
import socketserver
import webbrowser
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import ValidationError

from humansort.ranking.engine import SELECTION_BIAS, select_batch
from humansort.ranking.errors import InsufficientItems, RankingError
from humansort.web.app_state import AppState, AppStateStore, parse_action
from humansort.web.page import PAGE_HTML

load_dotenv()

logger = logging.getLogger(__name__)


class HumansortHandler(http.server.BaseHTTPRequestHandler):
    """Request handler for the page and the JSON API."""

    def __init__(
        self,
        *args,
        store: AppStateStore,
        bias: float = SELECTION_BIAS,
        output_limit: int = 10,
        **kwargs,
    ):
        self.store = store
        self.bias = bias
        self.output_limit = output_limit
        super().__init__(*args, **kwargs)

    def do_GET(self):
        """Handle GET requests."""
        path = urlparse(self.path).path

        if path in ("/", "/index.html"):
            self._send_html(PAGE_HTML)
        elif path == "/api/state":
            self._send_json(200, self._state_payload(self.store.load_or_default()))
        elif path == "/api/batch":
            self._send_batch()
        else:
            self._send_json(404, {"error": "Not found"})

    def do_POST(self):
        """Handle POST requests."""
        path = urlparse(self.path).path

        if path == "/api/action":
            self._handle_action()
        else:
            self._send_json(404, {"error": "Not found"})

    def _handle_action(self):
        """Apply one action to the stored app state."""
        try:
            content_length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            content_length = -1
        if content_length < 0:
            self._send_json(400, {"error": "Invalid Content-Length"})
            return

        try:
            body = self.rfile.read(content_length)
            action = parse_action(json.loads(body))
        except (json.JSONDecodeError, UnicodeDecodeError):
            self._send_json(400, {"error": "Invalid JSON body"})
            return
        except ValidationError as e:
            self._send_json(400, {"error": f"Invalid action: {e.error_count()} error(s)"})
            return

        state = self.store.load_or_default()
        try:
            new_state = state.reduce(action)
        except RankingError as e:
            self._send_json(400, {"error": str(e)})
            return

        self.store.store(new_state)
        self._send_json(200, self._state_payload(new_state))

    def _send_batch(self):
        """Send the next batch to choose from."""
        state = self.store.load_or_default()
        try:
            batch = select_batch(state.humansort_state, bias=self.bias)
        except InsufficientItems as e:
            self._send_json(409, {"error": str(e)})
            return
        self._send_json(200, {"batch": batch})

    def _state_payload(self, state: AppState) -> dict:
        ranking = state.humansort_state
        return {
            "view": state.current_view.value,
            "batch_size": ranking.batch_size,
            "can_sort": state.can_sort,
            "output_limit": self.output_limit,
            "items": [item.model_dump() for item in ranking.items],
        }

    def _send_json(self, status_code: int, data: dict):
        """Send a JSON response."""
        body = json.dumps(data).encode()
        self.send_response(status_code)
        self.send_header("Content-type", "application/json")
        self.send_header("Content-Length", len(body))
        self.end_headers()
        self.wfile.write(body)

    def _send_html(self, html: str):
        body = html.encode()
        self.send_response(200)
        self.send_header("Content-type", "text/html; charset=utf-8")
        self.send_header("Content-Length", len(body))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        """Route access logs through logging."""
        logger.info(f"{self.address_string()} {format % args}")


class HumansortServer(socketserver.TCPServer):
    allow_reuse_address = True


def create_handler(
    store: AppStateStore,
    bias: float = SELECTION_BIAS,
    output_limit: int = 10,
):
    """Create a handler class with the app state store bound."""
    def handler(*args, **kwargs):
        return HumansortHandler(
            *args,
            store=store,
            bias=bias,
            output_limit=output_limit,
            **kwargs,
        )
    return handler


def make_server(
    host: str,
    port: int,
    state_path: str | Path,
    bias: float = SELECTION_BIAS,
    output_limit: int = 10,
) -> HumansortServer:
    """Bind a server without starting it. Port 0 picks a free port."""
    store = AppStateStore(state_path)
    handler = create_handler(store, bias=bias, output_limit=output_limit)
    return HumansortServer((host, port), handler)


def serve(
    host: str,
    port: int,
    state_path: str | Path,
    bias: float = SELECTION_BIAS,
    output_limit: int = 10,
    open_browser: bool = True,
) -> None:
    """Run the web front-end until interrupted."""
    with make_server(host, port, state_path, bias, output_limit) as httpd:
        url = f"http://{host}:{httpd.server_address[1]}"
        logger.info(f"Serving humansort at {url} (state: {state_path})")

        if open_browser:
            webbrowser.open(url)

        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down server")
