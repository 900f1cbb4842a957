import sys

from linode_uptime.check import UptimeClient
from linode_uptime.config import load_settings
from linode_uptime.reconcile import Reconciler
from linode_uptime.utils import UptimeSyncError, append_log, warn

def main():
    try:
        # Carrega configurações
        settings = load_settings()

        with UptimeClient(settings) as client:
            result = Reconciler(settings, client).run()

        append_log(settings, {
            "created": len(result.created),
            "updated": len(result.updated),
            "skipped": len(result.skipped),
            "failed": len(result.failed),
        })
    except UptimeSyncError as e:
        warn(str(e))
        sys.exit(1)

if __name__ == "__main__":
    main()
