"""
Shared pytest fixtures.

Both SOAP stand-ins listen on ephemeral localhost ports in background
threads: the spyne country service and a Flask app that replies with
whatever XML a test hands it.
"""

import socket
import threading
import time
from wsgiref.simple_server import WSGIRequestHandler, make_server

import pytest
from flask import Flask, Response, request
from werkzeug.serving import make_server as make_werkzeug_server

from country_gateway.client import CountryClient
from country_gateway.marshalling import create_marshaller
from country_gateway.micro_server import create_wsgi_app

SOAP_ACTION = "http://local/gs-producing-web-service/GetCountryRequest"


class QuietHandler(WSGIRequestHandler):
    def log_message(self, format, *args):
        pass


class CannedSoapService:
    """Flask endpoint replying with a preset body and status."""

    def __init__(self):
        self.body = ""
        self.status = 200
        self.delay = 0
        self.received = []
        self.app = Flask("canned_soap")

        @self.app.post("/ws")
        def ws():
            self.received.append({
                "soap_action": request.headers.get("SOAPAction"),
                "content_type": request.headers.get("Content-Type"),
                "body": request.get_data(),
            })
            if self.delay:
                time.sleep(self.delay)
            return Response(self.body, status=self.status,
                            content_type="text/xml; charset=utf-8")

    def reply(self, body, status=200):
        self.body = body
        self.status = status


def _serve(server):
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return thread


@pytest.fixture(scope="session")
def country_service_url():
    """URL of the spyne country service."""
    server = make_server("127.0.0.1", 0, create_wsgi_app(), handler_class=QuietHandler)
    _serve(server)
    yield f"http://127.0.0.1:{server.server_port}/ws"
    server.shutdown()
    server.server_close()


@pytest.fixture
def canned_service():
    service = CannedSoapService()
    server = make_werkzeug_server("127.0.0.1", 0, service.app, threaded=True)
    _serve(server)
    service.url = f"http://127.0.0.1:{server.server_port}/ws"
    yield service
    server.shutdown()


@pytest.fixture
def unreachable_url():
    """A localhost URL nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"http://127.0.0.1:{port}/ws"


@pytest.fixture(scope="session")
def marshaller():
    return create_marshaller()


@pytest.fixture
def make_client(marshaller):
    def _make(url, timeout=5.0, soap_version="1.1"):
        return CountryClient(url, SOAP_ACTION, marshaller, marshaller,
                             timeout=timeout, soap_version=soap_version)
    return _make
