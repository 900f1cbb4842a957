from configparser import ConfigParser, Error as ConfigParserError
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo
from typing import Optional
from dotenv import load_dotenv
import os
import sys

from linode_uptime.utils import UptimeSyncError

CONFIG_NAME = "linode-uptime.ini"
CONFIG_SECTION = "Uptime"


class ConfigError(UptimeSyncError):
    pass


@dataclass
class Settings:
    API_URI: str
    BASIC_AUTH_NAME: str = ""
    BASIC_AUTH_PASSWORD: str = ""
    INVENTORY_PATH: Path = Path("/tmp/inventory.json")
    LOG_FILE: Optional[Path] = None
    TIMEZONE: str = "UTC"
    HTTP_TIMEOUT: Optional[float] = 30.0

    # Defaults of every create/update request body
    CHECK_TYPE: str = "http"
    CHECK_ALERT_THRESHOLD: int = 2
    CHECK_MAX_TIME: int = 5000
    CHECK_INTERVAL: int = 120
    LIVE_PATH: str = "/live/live.htm"

    def __post_init__(self):
        if not self.API_URI:
            raise ConfigError("uri é obrigatório na seção [Uptime]")
        self.API_URI = self.API_URI.rstrip("/")

        try:
            self.tz = ZoneInfo(self.TIMEZONE)
        except Exception as e:
            raise ConfigError(f"Timezone inválido: {e}")


def find_config_file() -> Path:
    """Localiza o linode-uptime.ini: ao lado do executável, senão no diretório atual"""
    override = os.getenv("LINODE_UPTIME_CONFIG", "").strip()
    if override:
        return Path(override)

    exe_dir = Path(sys.argv[0]).resolve().parent
    path = exe_dir / CONFIG_NAME
    if path.exists():
        return path
    return Path(CONFIG_NAME)


def read_credentials(path: Path) -> dict:
    parser = ConfigParser(interpolation=None)
    try:
        with open(path, encoding="utf-8") as f:
            parser.read_file(f)
    except OSError as e:
        raise ConfigError(f"Não foi possível ler {path}: {e}")
    except ConfigParserError as e:
        raise ConfigError(f"Arquivo de configuração inválido {path}: {e}")

    if not parser.has_section(CONFIG_SECTION):
        raise ConfigError(f"Seção [{CONFIG_SECTION}] ausente em {path}")

    section = parser[CONFIG_SECTION]
    return {
        "uri": section.get("uri", "").strip(),
        "username": section.get("username", "").strip(),
        "password": section.get("password", ""),
    }


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} deve ser um número inteiro, recebido {raw!r}")


def _timeout_env() -> Optional[float]:
    raw = os.getenv("HTTP_TIMEOUT", "30").strip()
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigError(f"HTTP_TIMEOUT inválido: {raw!r}")
    return timeout if timeout > 0 else None


def load_settings(path: Optional[Path] = None) -> Settings:
    load_dotenv()
    if path is None:
        path = find_config_file()
    creds = read_credentials(path)

    log_file = os.getenv("LOG_FILE", "").strip()
    return Settings(
        API_URI=creds["uri"],
        BASIC_AUTH_NAME=creds["username"],
        BASIC_AUTH_PASSWORD=creds["password"],
        INVENTORY_PATH=Path(os.getenv("INVENTORY_PATH", "/tmp/inventory.json").strip()),
        LOG_FILE=Path(log_file) if log_file else None,
        TIMEZONE=os.getenv("TIMEZONE", "UTC"),
        HTTP_TIMEOUT=_timeout_env(),
        CHECK_TYPE=os.getenv("CHECK_TYPE", "http").strip() or "http",
        CHECK_ALERT_THRESHOLD=_int_env("CHECK_ALERT_THRESHOLD", 2),
        CHECK_MAX_TIME=_int_env("CHECK_MAX_TIME", 5000),
        CHECK_INTERVAL=_int_env("CHECK_INTERVAL", 120),
        LIVE_PATH=os.getenv("LIVE_PATH", "/live/live.htm").strip() or "/live/live.htm",
    )
