from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import ConflictError, DomainError, NotFoundError, TransientStoreError, ValidationError

logger = logging.getLogger(__name__)


def _error(name: str, message: str, status: int):
    return jsonify({"success": False, "error": name, "message": message}), status


def json_body() -> dict:
    """Request JSON object; an empty or non-object body reads as {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def ok(payload: dict | None = None, status: int = 200):
    return jsonify({"success": True, **(payload or {})}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return _error(e.code, str(e), 400)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return _error(e.code, str(e), 404)

    @app.errorhandler(ConflictError)
    def _conflict(e: ConflictError):
        return _error(e.code, str(e), 409)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return _error(e.code, str(e), 400)

    @app.errorhandler(TransientStoreError)
    def _transient(e: TransientStoreError):
        logger.warning("Store unavailable on %s %s: %s", request.method, request.path, e)
        return _error("TransientStoreError", "Storage temporarily unavailable, retry later", 503)
