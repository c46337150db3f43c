# File: tests/conftest.py
import threading
import time
from email.message import Message
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict, List

import pytest

from breakcheck.config import Config

LAST_MODIFIED = "Mon, 06 Oct 2025 10:00:00 GMT"
BUILD_DATE = "Mon, 06 Oct 2025 09:58:12 +0000"


def rss(build_date: str = BUILD_DATE) -> bytes:
    date = f"<lastBuildDate>{build_date}</lastBuildDate>" if build_date is not None else ""
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<rss version="2.0"><channel><title>Arch Linux: Recent news updates</title>'
        f"<link>https://archlinux.org/news/</link>{date}"
        "<item><title>Some news</title><link>https://archlinux.org/news/some-news/</link></item>"
        "</channel></rss>"
    ).encode("utf-8")


class FeedServer:
    """
    Serves one canned response for every request and records request headers.
    """

    def __init__(self) -> None:
        self.status = 200
        self.body = rss()
        self.headers: Dict[str, str] = {"Last-Modified": LAST_MODIFIED}
        self.delay = 0.0
        # when set, the body is written in pieces of chunk_size with chunk_delay between them
        self.chunk_size = 0
        self.chunk_delay = 0.0
        # send the body even with a 304
        self.force_body = False
        self.requests: List[Message] = []
        server = self

        class Handler(BaseHTTPRequestHandler):
            def do_GET(self):
                server.requests.append(self.headers)
                if server.delay:
                    time.sleep(server.delay)
                self.send_response(server.status)
                for k, v in server.headers.items():
                    self.send_header(k, v)
                body = server.body if server.status != 304 or server.force_body else b""
                if "Content-Length" not in server.headers:
                    self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                if not server.chunk_size:
                    self.wfile.write(body)
                    return
                for i in range(0, len(body), server.chunk_size):
                    self.wfile.write(body[i:i + server.chunk_size])
                    self.wfile.flush()
                    time.sleep(server.chunk_delay)

            def log_message(self, *args):
                pass

        self.httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
        self.httpd.daemon_threads = True
        self.url = f"http://127.0.0.1:{self.httpd.server_address[1]}/feeds/news/"

    def respond(self, status: int = 200, body: bytes = None, headers: Dict[str, str] = None) -> None:
        self.status = status
        if body is not None:
            self.body = body
        if headers is not None:
            self.headers = headers


@pytest.fixture()
def feed_server():
    """
    Run a FeedServer on a free local port for the duration of a test.
    """
    server = FeedServer()
    thread = threading.Thread(target=server.httpd.serve_forever, daemon=True)
    thread.start()
    yield server
    server.httpd.shutdown()
    server.httpd.server_close()


@pytest.fixture()
def state_file(tmp_path):
    return tmp_path / "breakcheck.json"


@pytest.fixture()
def config(feed_server, state_file) -> Config:
    """
    Return a Config pointing at the local feed server and a temporary state file.
    """
    return Config(url=feed_server.url, state_file=state_file, timeout=5)
