from __future__ import annotations

from typing import Any, Dict

from flask import request


def request_payload() -> Dict[str, Any]:
    """JSON body for POST, query string for GET; anything else is empty."""
    if request.method == "GET":
        return request.args.to_dict()
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}
