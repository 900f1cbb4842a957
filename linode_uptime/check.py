from dataclasses import dataclass
from typing import Dict, List, Optional
import json
import requests

from linode_uptime.config import Settings
from linode_uptime.inventory import Host
from linode_uptime.utils import UptimeSyncError

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class ApiError(UptimeSyncError):
    pass


class DecodeError(UptimeSyncError):
    pass


@dataclass(frozen=True)
class Check:
    id: str
    name: str
    is_paused: bool = False
    is_up: Optional[bool] = None

    @classmethod
    def from_json(cls, obj) -> "Check":
        if not isinstance(obj, dict):
            raise DecodeError(f"Check esperado como objeto, recebido {type(obj).__name__}")

        name = obj.get("name")
        if not isinstance(name, str):
            raise DecodeError(f"Campo 'name' ausente ou inválido: {obj!r}")

        check_id = obj.get("_id", "")
        if check_id is None:
            check_id = ""
        if not isinstance(check_id, str):
            raise DecodeError(f"Campo '_id' inválido no check {name!r}: {check_id!r}")

        is_paused = obj.get("isPaused", False)
        if not isinstance(is_paused, bool):
            raise DecodeError(f"Campo 'isPaused' inválido no check {name!r}: {is_paused!r}")

        is_up = obj.get("isUp")
        if is_up is not None and not isinstance(is_up, bool):
            raise DecodeError(f"Campo 'isUp' inválido no check {name!r}: {is_up!r}")

        return cls(id=check_id, name=name, is_paused=is_paused, is_up=is_up)


def decode_checks(body: bytes) -> List[Check]:
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodeError(f"Lista de checks não é JSON válido: {e}")
    if not isinstance(data, list):
        raise DecodeError(f"Lista de checks esperada, recebido {type(data).__name__}")
    return [Check.from_json(item) for item in data]


def check_map(checks: List[Check]) -> Dict[str, Check]:
    """Nome -> Check; em nomes duplicados o último vence"""
    return {c.name: c for c in checks}


def make_request_body(settings: Settings, **overrides) -> Dict[str, str]:
    body = {
        "name": "",
        "url": "http://",
        "type": settings.CHECK_TYPE,
        "alertTreshold": str(settings.CHECK_ALERT_THRESHOLD),
        "maxTime": str(settings.CHECK_MAX_TIME),
        "interval": str(settings.CHECK_INTERVAL),
    }
    body.update({k: str(v) for k, v in overrides.items()})
    return body


def live_url(settings: Settings, host: Host) -> str:
    return "http://" + host.public_ip + settings.LIVE_PATH


class UptimeClient:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()
        self.session.auth = (settings.BASIC_AUTH_NAME, settings.BASIC_AUTH_PASSWORD)
        self.session.headers["Content-Type"] = FORM_CONTENT_TYPE

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.session.close()

    def url_for(self, path: str) -> str:
        return self.settings.API_URI + "/" + path.lstrip("/")

    def request(self, method: str, path: str, body: Optional[Dict[str, str]] = None) -> bytes:
        method = method.upper()
        url = self.url_for(path)
        data = body if method in ("POST", "PUT") else None
        try:
            r = self.session.request(method, url, data=data, timeout=self.settings.HTTP_TIMEOUT)
        except requests.RequestException as e:
            raise ApiError(f"{method} {url} falhou: {e}")
        if not r.ok:
            raise ApiError(f"{method} {url} retornou HTTP {r.status_code}: {r.text[:200]}")
        return r.content

    def list_checks(self) -> List[Check]:
        return decode_checks(self.request("GET", "checks"))

    def _host_body(self, host: Host) -> Dict[str, str]:
        return make_request_body(self.settings, name=host.label, url=live_url(self.settings, host))

    def create_check(self, host: Host) -> bytes:
        return self.request("PUT", "checks", self._host_body(host))

    def update_check(self, check_id: str, host: Host) -> bytes:
        return self.request("POST", "checks/" + check_id, self._host_body(host))
