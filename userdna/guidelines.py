"""Documentation guidelines endpoint for userdna.

Fetches a platform's documentation page and returns its visible text,
whitespace-collapsed and cut short, so it can sit next to a profile in a
model's context.

Run: python -m userdna --serve-guidelines [--port 3000]

    POST /get-guidelines  {"platform_name": "...", "doc_url": "https://..."}
    → 200 {"summary": "📘 <platform_name> Docs Summary:\\n\\n<text>"}
"""

import json
import logging
import re
from http.server import HTTPServer, BaseHTTPRequestHandler

import requests
from bs4 import BeautifulSoup

from .config import DEFAULTS

logger = logging.getLogger(__name__)

FETCH_ERROR = "Failed to fetch or parse the documentation."


def extract_page_text(html: str) -> str:
    """Visible body text with whitespace runs collapsed to single spaces."""
    soup = BeautifulSoup(html, "html.parser")
    root = soup.body or soup
    return re.sub(r"\s+", " ", root.get_text()).strip()


def fetch_guidelines(platform_name: str, doc_url: str,
                     max_chars: int = DEFAULTS["guidelines_max_chars"],
                     timeout: float = DEFAULTS["fetch_timeout"]) -> str:
    """Fetch a documentation page and build its summary text.

    Raises requests.RequestException when the page can't be fetched or
    answers with an error status.
    """
    response = requests.get(doc_url, timeout=timeout)
    response.raise_for_status()
    text = extract_page_text(response.text)[:max_chars]
    return f"📘 {platform_name} Docs Summary:\n\n{text}"


class GuidelinesHandler(BaseHTTPRequestHandler):
    max_chars = DEFAULTS["guidelines_max_chars"]
    timeout = DEFAULTS["fetch_timeout"]

    def do_OPTIONS(self):
        self.send_response(204)
        self._cors_headers()
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()

    def do_POST(self):
        if self.path != "/get-guidelines":
            self._json_response({"error": "Not found"}, 404)
            return

        length = int(self.headers.get("Content-Length") or 0)
        try:
            body = json.loads(self.rfile.read(length) or b"{}")
        except json.JSONDecodeError:
            self._json_response({"error": "Invalid JSON body"}, 400)
            return

        platform_name = body.get("platform_name") if isinstance(body, dict) else None
        doc_url = body.get("doc_url") if isinstance(body, dict) else None
        if not doc_url:
            self._json_response({"error": FETCH_ERROR}, 500)
            return

        try:
            summary = fetch_guidelines(platform_name, doc_url,
                                       max_chars=self.max_chars, timeout=self.timeout)
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Guidelines fetch failed for {doc_url}: {e}")
            self._json_response({"error": FETCH_ERROR}, 500)
            return

        self._json_response({"summary": summary})

    def _cors_headers(self):
        self.send_header("Access-Control-Allow-Origin", "*")

    def _json_response(self, data, status=200):
        body = json.dumps(data, ensure_ascii=False).encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self._cors_headers()
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.info(format % args)


def serve_guidelines(port: int = DEFAULTS["guidelines_port"],
                     max_chars: int = DEFAULTS["guidelines_max_chars"],
                     timeout: float = DEFAULTS["fetch_timeout"]):
    GuidelinesHandler.max_chars = max_chars
    GuidelinesHandler.timeout = timeout
    server = HTTPServer(("", port), GuidelinesHandler)
    logger.info(f"Guidelines API running on port {port}")
    print(f"Guidelines API running on port {port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
