"""Audit trail and application logging for receipt processing."""

import json
import logging
import os
from pathlib import Path

from src.utils import iso_now

DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOGGER_NAME = "receipt_processor"


def log_dir() -> Path:
    return Path(os.environ.get("RECEIPT_PROCESSOR_LOG_DIR") or DEFAULT_LOG_DIR)


def _ensure_log_dir() -> Path:
    path = log_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def audit_log(
    action: str,
    status: str,
    *,
    receipt_id: str | None = None,
    points: int | None = None,
    receipt_hash: str | None = None,
    code: str | None = None,
    error: str | None = None,
    extra: dict | None = None,
):
    """Append a structured audit entry to the audit log (JSONL). Never records raw receipts."""
    audit_file = _ensure_log_dir() / "audit.log"
    entry = {
        "timestamp": iso_now(),
        "action": action,
        "status": status,
    }
    if receipt_id is not None:
        entry["receipt_id"] = receipt_id
    if points is not None:
        entry["points"] = points
    if receipt_hash:
        entry["receipt_hash"] = receipt_hash
    if code:
        entry["code"] = code
    if error:
        entry["error"] = error
    if extra:
        entry.update(extra)

    with open(audit_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")


def setup_app_logging():
    """
    Configure application logging to console and file. Safe to call repeatedly;
    the file handler follows the current log dir.
    """
    logger = logging.getLogger(LOGGER_NAME)
    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    if not logger.handlers:
        logger.setLevel(logging.DEBUG)
        # Console
        ch = logging.StreamHandler()
        ch.setLevel(logging.INFO)
        ch.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
        logger.addHandler(ch)

    app_log = os.path.abspath(_ensure_log_dir() / "app.log")
    for h in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
        if h.baseFilename == app_log:
            return logger
        logger.removeHandler(h)
        h.close()

    # File
    fh = logging.FileHandler(app_log, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(fh)

    return logger
