import json
from pathlib import Path

import pytest
import requests

from linode_uptime.config import Settings

API_URI = "https://uptime.example.com/api"


def make_response(status: int = 200, body=b"{}") -> requests.Response:
    if not isinstance(body, bytes):
        body = json.dumps(body).encode()
    r = requests.Response()
    r.status_code = status
    r._content = body
    r.encoding = "utf-8"
    return r


class FakeSession:
    """Substitui requests.Session: registra as chamadas e responde por (método, caminho)"""

    def __init__(self, checks=None, routes=None):
        self.headers = {}
        self.auth = None
        self.closed = False
        self.calls = []
        self.routes = {("GET", "checks"): make_response(200, checks or [])}
        self.routes.update(routes or {})

    def request(self, method, url, data=None, timeout=None):
        self.calls.append({"method": method, "url": url, "data": data, "timeout": timeout})
        path = url[len(API_URI) + 1:]
        outcome = self.routes.get((method, path), make_response())
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True

    def writes(self):
        return [c for c in self.calls if c["method"] != "GET"]


def write_inventory(path: Path, hosts: dict) -> Path:
    path.write_text(json.dumps({
        "_meta": {"hostvars": hosts},
        "hosts": list(hosts),
    }), encoding="utf-8")
    return path


@pytest.fixture
def inventory_path(tmp_path):
    return write_inventory(tmp_path / "inventory.json", {
        "a": {"host_label": "web1", "host_public_ip": "1.2.3.4"},
    })


@pytest.fixture
def settings(tmp_path, inventory_path):
    return Settings(
        API_URI=API_URI,
        BASIC_AUTH_NAME="monitor",
        BASIC_AUTH_PASSWORD="s3cret",
        INVENTORY_PATH=inventory_path,
        LOG_FILE=tmp_path / "logs" / "actions.jsonl",
    )
