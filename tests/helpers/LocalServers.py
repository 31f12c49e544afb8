"""
Local HTTP(S) target server and forward proxy for transport tests.
"""
import http.client
import json
import select
import socket
import ssl
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

HOP_BY_HOP = {
    'connection', 'keep-alive', 'proxy-authenticate', 'proxy-authorization',
    'proxy-connection', 'te', 'trailers', 'transfer-encoding', 'upgrade',
}


class RecordedRequest:
    def __init__(self, method: str, path: str, headers: Dict[str, str], body: bytes = b""):
        self.method = method
        self.path = path
        self.headers = headers
        self.body = body

    def json(self):
        return json.loads(self.body.decode('utf-8'))


class _RecordingServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, handlerClass):
        super().__init__(('127.0.0.1', 0), handlerClass)
        self.requests: List[RecordedRequest] = []
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.server_address[1]

    def record(self, method: str, path: str, headers, body: bytes = b"") -> None:
        self.requests.append(RecordedRequest(method, path, {k.lower(): v for k, v in headers.items()}, body))

    def start(self):
        self._thread = threading.Thread(target=self.serve_forever, daemon=True)
        self._thread.start()
        return self

    def stop(self) -> None:
        self.shutdown()
        self.server_close()

    def __enter__(self):
        return self.start()

    def __exit__(self, *exc):
        self.stop()


# ============================================================================
# Target server
# ============================================================================


def defaultResponder(method: str, path: str, body: bytes) -> Tuple[int, dict]:
    if path.rstrip('/').endswith('/missing'):
        return 404, {"message": "Not Found"}
    return 200, {"method": method, "path": path}


class _TargetHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def log_message(self, format, *args):
        pass

    def _respond(self):
        length = int(self.headers.get('Content-Length') or 0)
        body = self.rfile.read(length) if length else b""
        self.server.record(self.command, self.path, self.headers, body)

        status, payload = self.server.responder(self.command, self.path, body)
        data = json.dumps(payload).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json; charset=utf-8')
        self.send_header('Content-Length', str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    do_GET = do_POST = do_PATCH = do_PUT = do_DELETE = _respond


class TargetServer(_RecordingServer):
    """JSON API stand-in; optionally served over TLS."""

    def __init__(self, responder: Callable = defaultResponder, sslContext: Optional[ssl.SSLContext] = None):
        super().__init__(_TargetHandler)
        self.responder = responder
        self.scheme = 'http'
        if sslContext is not None:
            self.socket = sslContext.wrap_socket(self.socket, server_side=True)
            self.scheme = 'https'

    @property
    def url(self) -> str:
        return f"{self.scheme}://127.0.0.1:{self.port}"


# ============================================================================
# Forward proxy
# ============================================================================


class _ProxyHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def log_message(self, format, *args):
        pass

    def do_CONNECT(self):
        self.server.record('CONNECT', self.path, self.headers)
        host, port = self.path.rsplit(':', 1)
        upstream = socket.create_connection((host, int(port)), timeout=10)

        self.send_response(200, 'Connection Established')
        self.end_headers()
        self._pipe(self.connection, upstream)
        self.close_connection = True

    @staticmethod
    def _pipe(client: socket.socket, upstream: socket.socket) -> None:
        sockets = [client, upstream]
        try:
            while True:
                readable, _, errored = select.select(sockets, [], sockets, 5)
                if errored or not readable:
                    return
                for source in readable:
                    data = source.recv(65536)
                    if not data:
                        return
                    (upstream if source is client else client).sendall(data)
        finally:
            upstream.close()

    def _forward(self):
        length = int(self.headers.get('Content-Length') or 0)
        body = self.rfile.read(length) if length else None
        self.server.record(self.command, self.path, self.headers, body or b"")

        url = urlsplit(self.path)
        headers = {k: v for k, v in self.headers.items() if k.lower() not in HOP_BY_HOP}
        headers['Via'] = '1.1 test-proxy'
        headers['X-Forwarded-For'] = self.client_address[0]

        connection = http.client.HTTPConnection(url.hostname, url.port or 80, timeout=10)
        target = url.path + ('?' + url.query if url.query else '')
        try:
            connection.request(self.command, target, body=body, headers=headers)
            response = connection.getresponse()
            payload = response.read()
        finally:
            connection.close()

        self.send_response(response.status, response.reason)
        for name, value in response.getheaders():
            if name.lower() not in HOP_BY_HOP | {'content-length', 'server', 'date'}:
                self.send_header(name, value)
        self.send_header('Content-Length', str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = do_POST = do_PATCH = do_PUT = do_DELETE = _forward


class ForwardProxy(_RecordingServer):
    """Plain forward proxy (adds Via / X-Forwarded-For) with CONNECT tunnelling."""

    def __init__(self):
        super().__init__(_ProxyHandler)

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.port}"
