from dataclasses import dataclass
from pathlib import Path
from typing import List
import json

from linode_uptime.utils import UptimeSyncError, warn


class InventoryError(UptimeSyncError):
    pass


@dataclass(frozen=True)
class Host:
    label: str
    public_ip: str


def load_inventory(path: Path) -> List[Host]:
    """
    Lê o inventário (formato de inventário dinâmico do Ansible):
    {"_meta": {"hostvars": {<id>: {"host_label": ..., "host_public_ip": ...}}}, "hosts": [...]}

    Falha de leitura é fatal; JSON malformado resulta em lista vazia.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise InventoryError(f"Erro ao ler inventário {path}: {e}")

    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        warn(f"Inventário {path} inválido, ignorado: {e}")
        return []

    return parse_hosts(data)


def parse_hosts(data) -> List[Host]:
    if not isinstance(data, dict):
        return []
    meta = data.get("_meta")
    if not isinstance(meta, dict):
        return []
    hostvars = meta.get("hostvars")
    if not isinstance(hostvars, dict):
        return []

    hosts: List[Host] = []
    for node in hostvars.values():
        if not isinstance(node, dict):
            continue
        label = node.get("host_label")
        if not isinstance(label, str) or not label:
            continue
        ip = node.get("host_public_ip")
        hosts.append(Host(label=label, public_ip=ip if isinstance(ip, str) else ""))
    return hosts
