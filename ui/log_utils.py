"""Shared logging utilities."""

import json
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"

_SENSITIVE_MARKERS = ("key", "authorization", "cookie", "token")


def write_relay_log(
    method: str,
    path: str,
    target_url: str,
    status: int,
    elapsed_ms: int,
    headers: list[tuple[str, str]],
    *,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single relayed request log entry."""
    payload = {
        "timestamp": _utc_now(),
        "method": method,
        "path": path,
        "target": target_url,
        "status": status,
        "elapsed_ms": elapsed_ms,
        "headers": _redact_headers(headers),
    }
    return _write_json(log_root / "relay", payload)


def write_cli_log(
    level: str,
    message: str,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    CLI_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with CLI_LOG_FILE.open("a") as f:
        f.write(line)


def clear_logs(log_root: Path = LOG_ROOT) -> None:
    """Remove per-request logs from a previous run, keep the CLI log."""
    relay_dir = log_root / "relay"
    if relay_dir.exists():
        shutil.rmtree(relay_dir, ignore_errors=True)


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _redact_headers(headers: list[tuple[str, str]]) -> list[list[str]]:
    """Redact sensitive headers, keeping repeated names."""
    redacted = []
    for key, value in headers:
        if any(marker in key.lower() for marker in _SENSITIVE_MARKERS):
            redacted.append([key, _mask(value)])
        else:
            redacted.append([key, value])
    return redacted


def _mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
