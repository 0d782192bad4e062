from __future__ import annotations

from typing import Any, Optional

from flask import jsonify

from .pagination import PageMetadata


def web_response(
    message: str,
    *,
    data: Any = None,
    paging: Optional[PageMetadata] = None,
    errors: Any = None,
    status: int = 200,
):
    """JSON envelope ``{message, data?, paging?, errors?}`` shared by every endpoint."""
    body: dict = {"message": message}
    if data is not None:
        body["data"] = data
    if paging is not None:
        body["paging"] = paging.to_dict()
    if errors is not None:
        body["errors"] = errors
    return jsonify(body), status
