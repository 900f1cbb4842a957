from dataclasses import dataclass, field
from typing import Dict, List, Optional

from linode_uptime.check import ApiError, Check, UptimeClient, check_map, live_url
from linode_uptime.config import Settings
from linode_uptime.inventory import Host, load_inventory
from linode_uptime.utils import append_log, report, warn

CREATE = "create"
UPDATE = "update"
SKIP = "skip"


@dataclass(frozen=True)
class Action:
    kind: str
    host: Host
    check_id: str = ""

    def to_dict(self, settings: Settings) -> dict:
        return {
            "action": self.kind,
            "name": self.host.label,
            "url": live_url(settings, self.host),
            "check_id": self.check_id or None,
        }


@dataclass
class RunResult:
    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def decide(host: Host, checks: Dict[str, Check]) -> Optional[Action]:
    """
    Tabela de decisão por host:
    - sem check com o mesmo nome -> create
    - check pausado com id -> update (reativa)
    - check pausado sem id -> skip (não há como endereçá-lo)
    - check ativo -> nada
    """
    existing = checks.get(host.label)
    if existing is None:
        return Action(CREATE, host)
    if not existing.is_paused:
        return None
    if existing.id:
        return Action(UPDATE, host, existing.id)
    return Action(SKIP, host)


def plan(hosts: List[Host], checks: List[Check]) -> List[Action]:
    by_name = check_map(checks)
    actions = []
    for host in hosts:
        action = decide(host, by_name)
        if action is not None:
            actions.append(action)
    return actions


class Reconciler:
    def __init__(self, settings: Settings, client: UptimeClient):
        self.settings = settings
        self.client = client

    def build_plan(self) -> List[Action]:
        hosts = load_inventory(self.settings.INVENTORY_PATH)
        checks = self.client.list_checks()
        return plan(hosts, checks)

    def run(self) -> RunResult:
        result = RunResult()
        for action in self.build_plan():
            self._apply(action, result)
        return result

    def _apply(self, action: Action, result: RunResult):
        label = action.host.label
        entry = action.to_dict(self.settings)

        if action.kind == SKIP:
            warn(f"Check pausado sem id para {label}, ignorado")
            result.skipped.append(label)
            entry["ok"] = False
            append_log(self.settings, entry)
            return

        try:
            if action.kind == CREATE:
                report(f"N:{label}")
                self.client.create_check(action.host)
                result.created.append(label)
            else:
                report(f"U:{action.check_id}")
                self.client.update_check(action.check_id, action.host)
                result.updated.append(label)
            entry["ok"] = True
        except ApiError as e:
            warn(f"Erro ao sincronizar {label}: {e}")
            result.failed.append(label)
            entry["ok"] = False
            entry["error"] = str(e)

        append_log(self.settings, entry)
