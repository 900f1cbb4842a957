import json
import sys

from linode_uptime.check import UptimeClient
from linode_uptime.config import load_settings
from linode_uptime.reconcile import Reconciler
from linode_uptime.utils import UptimeSyncError, warn

def main():
    """Mostra o que seria criado/atualizado, sem alterar nada no provedor"""
    try:
        settings = load_settings()
        with UptimeClient(settings) as client:
            actions = Reconciler(settings, client).build_plan()
    except UptimeSyncError as e:
        warn(str(e))
        sys.exit(1)

    print(json.dumps([a.to_dict(settings) for a in actions], ensure_ascii=False, indent=2))

if __name__ == '__main__':
    main()
