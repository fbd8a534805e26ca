#!/usr/bin/env python3
"""Flask web app for the Receipt Processor."""

import logging
import os

from flask import Flask, jsonify, request
from dotenv import load_dotenv

from receipt_processor.audit import LOGGER_NAME, audit_log, log_dir, setup_app_logging
from receipt_processor.service import get_points, process_receipt
from receipt_processor.store import ReceiptNotFoundError, ReceiptStore
from src.utils import hash_document
from src.validation import ReceiptValidationError, ViolationKind

load_dotenv()

log = logging.getLogger(LOGGER_NAME)


def _audit(action: str, status: str, **kwargs) -> None:
    """Write an audit entry; a failed write is logged and never changes the response."""
    try:
        audit_log(action, status, **kwargs)
    except OSError:
        log.exception("Audit write failed: action=%s status=%s", action, status)


def create_app(store: ReceiptStore | None = None) -> Flask:
    """Build the app around an injected store. A fresh in-memory store is used if none is given."""
    setup_app_logging()
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = 1024 * 1024  # 1MB
    store = store if store is not None else ReceiptStore()
    app.extensions["receipt_store"] = store

    @app.route("/receipts/process", methods=["POST"])
    def api_process_receipt():
        """Validate and score a receipt. Returns the generated id."""
        document = request.get_json(force=True, silent=True)
        receipt_hash = hash_document(document) if isinstance(document, dict) else None
        try:
            if document is None:
                raise ReceiptValidationError(ViolationKind.MALFORMED_INPUT, "body is not JSON")
            scored = process_receipt(store, document)
        except ReceiptValidationError as e:
            _audit(
                "process",
                "rejected",
                receipt_hash=receipt_hash,
                code=e.kind.value,
                error=e.detail,
            )
            log.info("Receipt rejected: code=%s detail=%s", e.kind.value, e.detail)
            return jsonify({"error": e.message, "code": e.kind.value}), 400
        except Exception as e:
            _audit("process", "error", receipt_hash=receipt_hash, error=str(e))
            log.exception("Receipt processing failed")
            return jsonify({"error": str(e)}), 500

        # Stored already: from here on the client must get its id.
        _audit(
            "process",
            "success",
            receipt_id=scored.receipt_id,
            points=scored.points,
            receipt_hash=receipt_hash,
            extra={"num_items": len(scored.receipt.items)},
        )
        log.info("Receipt processed: id=%s points=%d", scored.receipt_id, scored.points)
        return jsonify({"id": scored.receipt_id})

    @app.route("/receipts/<receipt_id>/points", methods=["GET"])
    def api_receipt_points(receipt_id: str):
        """Return the points awarded to a stored receipt."""
        try:
            points = get_points(store, receipt_id)
        except ReceiptNotFoundError:
            _audit("points", "not_found", receipt_id=receipt_id)
            log.info("Points lookup missed: id=%r", receipt_id)
            return jsonify({"error": "No receipt found for that ID.", "code": "NOT_FOUND"}), 404
        _audit("points", "success", receipt_id=receipt_id, points=points)
        return jsonify({"points": points})

    @app.errorhandler(404)
    def not_found(_e):
        return jsonify({"error": "Not Found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return jsonify({"error": "Method Not Allowed"}), 405

    @app.errorhandler(413)
    def payload_too_large(_e):
        _audit("process", "rejected", code="PAYLOAD_TOO_LARGE")
        return jsonify({"error": "The receipt is too large.", "code": "PAYLOAD_TOO_LARGE"}), 413

    return app


if __name__ == "__main__":
    host = os.getenv("RECEIPT_PROCESSOR_HOST", "127.0.0.1")
    port = int(os.getenv("RECEIPT_PROCESSOR_PORT", "8080"))
    debug = os.getenv("RECEIPT_PROCESSOR_DEBUG", "").strip().lower() in ("1", "true", "yes")
    app = create_app()
    logs = log_dir()
    log.info(
        "Receipt Processor starting on http://%s:%d | Logs: %s | Audit: %s",
        host,
        port,
        logs / "app.log",
        logs / "audit.log",
    )
    app.run(host=host, port=port, debug=debug)
