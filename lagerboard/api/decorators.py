from __future__ import annotations

from functools import wraps
from flask import jsonify
from typing import Callable, Any


def handle_unknown_period(func: Callable[..., Any]):
    """
    Decorator: convert an unknown period slug (KeyError) into HTTP 404.

    Contract:
    - Only catches KeyError
    - Assumes KeyError means the <slug> path parameter is not a period
    - Returns JSON {error, period}
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyError:
            return jsonify({
                "error": "unknown period",
                "period": kwargs.get("slug"),
            }), 404

    return wrapper
