from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .exceptions import (
    GitHubApiError,
    GitHubAuthError,
    GitHubConflictError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubValidationError,
)
from .utils import (
    error_message,
    is_rate_limited,
    req_id,
    safe_json,
    try_get_rate_limit_reset,
)

log = logging.getLogger(__name__)

_STATUS_ERRORS = {
    401: (GitHubAuthError, "Unauthorized"),
    404: (GitHubNotFoundError, "Not Found"),
    409: (GitHubConflictError, "Conflict"),
    422: (GitHubValidationError, "Validation Failed"),
}


@dataclass
class GitHubRestClient:
    """
    Thin authenticated session over the GitHub REST API.

    Every call is made exactly once: non-2xx responses are mapped to the
    exceptions in .exceptions and raised, network errors propagate as-is.
    Calls from threads other than the creating one get their own Session.
    """

    token: str
    base_url: str = "https://api.github.com"
    api_version: str = "2022-11-28"
    timeout_s: int = 30

    user_agent: str = "snyk-pr-combiner/1.0"

    def __post_init__(self) -> None:
        self.session = self._new_session()
        self._owner_thread = threading.get_ident()
        self._local = threading.local()

    def _new_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": self.api_version,
            "User-Agent": self.user_agent,
        })
        return session

    def _thread_session(self) -> requests.Session:
        if threading.get_ident() == self._owner_thread:
            return self.session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = self._new_session()
        return session

    def _build_url(self, path: str) -> str:
        return self.base_url.rstrip("/") + path

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        url = self._build_url(path)
        log.debug("%s %s", method.upper(), url)
        resp = self._thread_session().request(
            method=method.upper(),
            url=url,
            params=params,
            json=json_body,
            timeout=self.timeout_s,
        )
        if resp.status_code >= 400:
            self._raise_for_status(resp)
        return resp

    def json(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Like request(), but returns the decoded body (None for 204)."""
        return safe_json(self.request(method, path, params=params, json_body=json_body))

    def _raise_for_status(self, resp: requests.Response) -> None:
        payload = safe_json(resp)
        msg = error_message(resp)
        request_id = req_id(resp)

        if resp.status_code == 429 or (resp.status_code == 403 and is_rate_limited(resp)):
            raise GitHubRateLimitError(
                resp.status_code,
                msg or "Rate limit exceeded",
                reset_epoch=try_get_rate_limit_reset(resp),
                response_json=payload,
                request_id=request_id,
            )

        if resp.status_code in _STATUS_ERRORS:
            exc_type, default = _STATUS_ERRORS[resp.status_code]
            raise exc_type(resp.status_code, msg or default, response_json=payload, request_id=request_id)

        raise GitHubApiError(resp.status_code, msg or "Request failed", response_json=payload, request_id=request_id)
