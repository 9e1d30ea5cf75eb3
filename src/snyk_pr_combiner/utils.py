from __future__ import annotations

from typing import Any, Optional
import requests


def safe_json(resp: requests.Response) -> Any:
    if resp.status_code == 204 or not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None


def req_id(resp: requests.Response) -> Optional[str]:
    return resp.headers.get("X-GitHub-Request-Id")


def is_rate_limited(resp: requests.Response) -> bool:
    remaining = resp.headers.get("X-RateLimit-Remaining")
    if remaining is not None and remaining.isdigit() and int(remaining) == 0:
        return True

    payload = safe_json(resp)
    if isinstance(payload, dict):
        msg = str(payload.get("message", "")).lower()
        if "rate limit" in msg:
            return True
    return False


def try_get_rate_limit_reset(resp: requests.Response) -> Optional[int]:
    reset = resp.headers.get("X-RateLimit-Reset")
    if reset and reset.isdigit():
        return int(reset)
    return None


def error_message(resp: requests.Response) -> str:
    """
    GitHub error bodies look like {"message": "...", "errors": [...]}.
    Falls back to the first 200 chars of the raw body.
    """
    payload = safe_json(resp)
    if isinstance(payload, dict) and "message" in payload:
        return str(payload.get("message", ""))
    return resp.text[:200]
