import os
import threading
import pytest
import requests
from config import Settings
from services.request_service import MegaverseClient


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """
    Records every request. `routes` maps (method, url) to a FakeResponse or an
    exception instance to raise; anything else answers 200.
    """

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []
        self.closed = False
        self._lock = threading.Lock()

    def request(self, method, url, headers=None, data=None, timeout=None):
        with self._lock:
            self.calls.append({"method": method, "url": url, "data": data, "timeout": timeout})
        outcome = self.routes.get((method, url), FakeResponse(200, {}))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


@pytest.fixture
def settings():
    return Settings(base_url="http://megaverse.test/api", candidate_id="cand-1", timeout=5)


@pytest.fixture
def make_client(settings):
    def _make(routes=None, **overrides):
        s = settings.model_copy(update=overrides) if overrides else settings
        return MegaverseClient(s, session=FakeSession(routes))
    return _make


@pytest.fixture
def clean_env(monkeypatch):
    env = {k: v for k, v in os.environ.items() if not k.startswith("MEGAVERSE_") and k != "LOG_LEVEL"}
    monkeypatch.setattr(os, "environ", env)
    return env
