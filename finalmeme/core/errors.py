# finalmeme/core/errors.py
import logging
from typing import Optional

from flask import Flask, jsonify
from google.api_core.exceptions import GoogleAPICallError
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException


class HttpError(Exception):
    """
    Domain failure carrying the HTTP status to answer with.

    :param status: numeric HTTP status code (404, 401, 498, ...)
    :param status_message: short status phrase ("Not found")
    :param message: human readable detail, also used as the reason phrase
    """

    def __init__(self, status: int, status_message: str, message: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.status_message = status_message
        self.message = message

    def __eq__(self, other):
        if not isinstance(other, HttpError):
            return NotImplemented
        return (self.status, self.status_message, self.message) == (
            other.status, other.status_message, other.message)

    def __hash__(self):
        return hash((self.status, self.status_message, self.message))

    def __repr__(self):
        return f"HttpError({self.status}, {self.status_message!r}, {self.message!r})"


def _with_reason(response, code: int, reason: Optional[str]):
    response.status_code = code
    if reason:
        response.status = f"{code} {reason}"
    return response


def register_error_handlers(app: Flask):
    """Maps every failure that escapes a route to its response. Each one is logged first."""

    @app.errorhandler(HttpError)
    def handle_http_error(err: HttpError):
        logging.error(f"{err.status} {err.status_message} {err.message}")
        return _with_reason(jsonify({"status": err.status}), err.status, err.message)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        logging.error(f"400 Bad Request {err.messages}")
        return _with_reason(jsonify({"status": "400 Bad Request"}), 400, "Bad Request")

    @app.errorhandler(GoogleAPICallError)
    def handle_persistence_error(err: GoogleAPICallError):
        logging.error(f"406 Not accepted {err}")
        return _with_reason(jsonify({"status": "406 Not accepted"}), 406, "Not accepted")

    @app.errorhandler(HTTPException)
    def handle_werkzeug_exception(err: HTTPException):
        logging.error(f"{err.code} {err.name}: {err.description}")
        return jsonify({"status": err.code}), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err: Exception):
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        return jsonify({"error": str(err)}), 500
