"""Map store HTTP responses back onto application errors."""
from __future__ import annotations

import httpx

from lostfound_chat.application.exceptions import (
    AppError,
    InvalidStatusError,
    NotFoundError,
    TransientFetchError,
    ValidationError,
)

_BY_STATUS: dict[int, type[AppError]] = {
    400: InvalidStatusError,
    404: NotFoundError,
    422: ValidationError,
}


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return response.text


def raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    error_cls = _BY_STATUS.get(response.status_code)
    if error_cls is None:
        raise TransientFetchError(
            f"{response.request.method} {response.request.url.path} -> {response.status_code}: {_detail(response)}"
        )
    raise error_cls(_detail(response))
