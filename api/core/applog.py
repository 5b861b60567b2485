"""
Request/response audit log.

Every handled request produces one JSON line:

    {"request": {...}, "response": {...}}

Lines go to `<LOG_DIR>/<LOG_PREFIX>.log`, rotated at local midnight, and are
echoed to the console when `LOG_CONSOLE` is on. Credentials never reach the
log: the Authorization header is dropped and sensitive keys are masked.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
from datetime import datetime
from typing import Any

from core import settings

AUDIT_LOGGER_NAME = "budget_api.audit"
SENSITIVE_KEYS = frozenset({"token", "pwd", "password"})
MASK = "***"

logger = logging.getLogger(__name__)


def log_dir() -> str:
    return settings.env_str("LOG_DIR", "./log")


def log_prefix() -> str:
    return settings.env_str("LOG_PREFIX", "log")


def configure(*, directory: str | None = None, console: bool | None = None) -> logging.Logger:
    """
    Attach handlers to the audit logger. Safe to call more than once.
    """
    audit = logging.getLogger(AUDIT_LOGGER_NAME)
    for handler in list(audit.handlers):
        audit.removeHandler(handler)
        handler.close()

    audit.setLevel(logging.INFO)
    audit.propagate = False
    formatter = logging.Formatter("%(asctime)s.%(msecs)03d %(message)s", datefmt="%Y%m%d %H%M%S")

    directory = directory or log_dir()
    os.makedirs(directory, exist_ok=True)
    file_handler = logging.handlers.TimedRotatingFileHandler(
        os.path.join(directory, f"{log_prefix()}.log"),
        when="midnight",
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    audit.addHandler(file_handler)

    if console is None:
        console = settings.env_bool("LOG_CONSOLE", True)
    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        audit.addHandler(stream_handler)

    logger.info("audit_log_configured directory=%s", directory)
    return audit


def shutdown() -> None:
    audit = logging.getLogger(AUDIT_LOGGER_NAME)
    for handler in list(audit.handlers):
        audit.removeHandler(handler)
        handler.close()


def mask_sensitive(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: MASK if str(key).lower() in SENSITIVE_KEYS else mask_sensitive(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [mask_sensitive(item) for item in value]
    return value


def _decode_body(body: Any) -> Any:
    if not body:
        return None
    if not isinstance(body, (bytes, bytearray)):
        # Already decoded upstream (e.g. the body attached to a validation error).
        return body
    try:
        return json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raw = body.decode("utf-8", errors="replace")
        return {"raw_body": raw.replace("\n", "").replace("\r", "")}


def build_request_log(
    *,
    method: str,
    url: str,
    headers: dict[str, str],
    client_ip: str | None,
    body: Any = b"",
) -> dict[str, Any]:
    return {
        "body": _decode_body(body),
        "method": method,
        "url": url,
        "headers": {k: v for k, v in headers.items() if k.lower() != "authorization"},
        "client_ip": client_ip,
        "time": datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3],
        "agent": headers.get("user-agent", ""),
    }


def response_success(data: Any) -> dict[str, Any]:
    return {"status": "success", "data": data}


def response_error(message: str, detail: str | None = None) -> dict[str, Any]:
    # `detail` carries the underlying cause and is never sent to the client.
    log = {"status": "error", "message": message}
    if detail:
        log["detail"] = detail
    return log


def log_request_response(request_log: dict[str, Any], response_log: dict[str, Any]) -> str:
    line = json.dumps(
        mask_sensitive({"request": request_log, "response": response_log}),
        default=str,
    )
    logging.getLogger(AUDIT_LOGGER_NAME).info(line)
    return line
