from datetime import datetime
import json
import sys


class UptimeSyncError(Exception):
    """Erro base; main() converte em mensagem no stderr e exit 1"""


def now_str(settings) -> str:
    """Retorna timestamp atual formatado"""
    return datetime.now(settings.tz).strftime("%Y-%m-%d %H:%M:%S %Z")

def append_log(settings, entry: dict):
    """Adiciona entrada ao arquivo de log (JSONL), se LOG_FILE estiver configurado"""
    if settings.LOG_FILE is None:
        return
    entry['recorded_at'] = now_str(settings)
    try:
        settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(settings.LOG_FILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    except OSError as e:
        warn(f"Erro ao gravar log {settings.LOG_FILE}: {e}")

def report(line: str):
    print(line, flush=True)

def warn(text: str):
    print(text, file=sys.stderr, flush=True)
