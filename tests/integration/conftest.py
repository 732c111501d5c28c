"""
Live stub of the PetClinic REST API for integration tests.

A tiny Flask app answers every ``/petclinic/api/...`` route with
``200`` (or a status forced per path) and records each request it
receives.  It is served by Werkzeug on a free loopback port in a
background thread, so a real Locust ``HttpSession`` can talk to it.

Key SDET Concepts Demonstrated:
- Stub servers that stand in for a real downstream system
- Live server fixture in a daemon thread with clean shutdown
- Request journaling on the server side for order assertions
"""

from __future__ import annotations

import threading

import pytest
from flask import Flask, jsonify, request
from locust.clients import HttpSession
from locust.event import Events
from werkzeug.serving import make_server

CONTEXT_PATH = "/petclinic"


def create_stub_app() -> Flask:
    """
    Build a PetClinic stand-in that records every API call.

    ``app.config["REQUEST_LOG"]`` collects ``(method, path)`` tuples in
    arrival order; ``app.config["FORCED_STATUS"]`` maps a path to the
    status it should answer with instead of ``200``.
    """
    app = Flask(__name__)
    app.config["REQUEST_LOG"] = []
    app.config["FORCED_STATUS"] = {}

    @app.route(f"{CONTEXT_PATH}/api/<path:resource>", methods=["GET", "PUT", "POST"])
    def api(resource: str):
        path = f"/api/{resource}"
        app.config["REQUEST_LOG"].append((request.method, path))
        status = app.config["FORCED_STATUS"].get(path, 200)
        return jsonify({"path": path}), status

    return app


@pytest.fixture
def stub_app() -> Flask:
    return create_stub_app()


@pytest.fixture
def live_stub(stub_app):
    """
    Serve the stub app on a free port for the duration of one test.

    Yields:
        str: The stub's PetClinic base URL, e.g. ``http://127.0.0.1:PORT/petclinic``.
    """
    server = make_server("127.0.0.1", 0, stub_app, threaded=True)
    server_thread = threading.Thread(target=server.serve_forever)
    server_thread.daemon = True
    server_thread.start()

    yield f"http://127.0.0.1:{server.server_port}{CONTEXT_PATH}"

    server.shutdown()
    server_thread.join(timeout=5)


@pytest.fixture
def locust_session(live_stub):
    """
    Provide a real Locust ``HttpSession`` aimed at the live stub.

    Every request event Locust fires is appended to ``session.fired`` as
    ``(request_type, name, exception)``.
    """
    events = Events()
    fired: list[tuple[str, str, Exception | None]] = []

    def _record(request_type, name, exception=None, **_kwargs):
        fired.append((request_type, name, exception))

    events.request.add_listener(_record)
    session = HttpSession(base_url=live_stub, request_event=events.request, user=None)
    session.fired = fired
    yield session
    session.close()
