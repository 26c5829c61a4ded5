"""
Unified response format utilities
"""
from flask import jsonify
from typing import Any, Optional


def success_response(data: Any = None, message: str = "Success", status_code: int = 200,
                     key: str = "data"):
    """
    Generate a successful response

    Args:
        data: Response data
        message: Success message
        status_code: HTTP status code
        key: Name of the field that carries the data (e.g. "model")

    Returns:
        Flask response with JSON format
    """
    response = {
        "success": True,
        "message": message
    }

    if data is not None:
        response[key] = data

    return jsonify(response), status_code


def error_response(error_code: str, message: str, status_code: int = 400,
                   details: Optional[dict] = None):
    """
    Generate an error response

    Args:
        error_code: Error code identifier
        message: Human-readable error message
        status_code: HTTP status code
        details: Extra fields merged into the body

    Returns:
        Flask response with JSON format
    """
    body = {
        "success": False,
        "error": message,
        "code": error_code,
    }
    if details:
        body.update(details)
    return jsonify(body), status_code


# Common error responses
def bad_request(message: str = "Invalid request"):
    return error_response("INVALID_REQUEST", message, 400)


def not_found(resource: str = "Resource", message: Optional[str] = None):
    code = f"{resource.upper().replace(' ', '_')}_NOT_FOUND"
    return error_response(code, message or f"{resource} not found", 404)


def payload_too_large(limit_bytes: Optional[int] = None):
    if limit_bytes:
        message = f"File too large. Maximum size is {limit_bytes // (1024 * 1024)}MB."
    else:
        message = "File too large."
    return error_response("FILE_TOO_LARGE", message, 413)
