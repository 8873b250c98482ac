from __future__ import annotations

import urllib.parse
from typing import Any

import requests

from otim_settle.domain import ClientError, OtimApiError


def _error_message(r: requests.Response) -> tuple[str, str | None]:
    try:
        body = r.json()
    except ValueError:
        text = (r.text or "").strip()
        return (text[:300] or r.reason or "request failed"), None
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict):
            return str(err.get("message") or err), err.get("code")
        msg = body.get("message") or err or body
        return str(msg), body.get("code")
    return str(body), None


class HttpService:
    """Blocking JSON-over-HTTP layer bound to one API base URL. No retries."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        parsed = urllib.parse.urlparse(str(base_url or "").strip())
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ClientError(f"invalid API URL: {base_url!r}")
        if not str(api_key or "").strip():
            raise ClientError("API key is empty")

        self.base_url = parsed.geturl().rstrip("/")
        self._timeout = max(1.0, float(timeout))
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {
                "User-Agent": "otim-settle/1.0",
                "Accept": "application/json",
                "Content-Type": "application/json",
                "X-API-Key": api_key.strip(),
            }
        )

    def close(self) -> None:
        self._session.close()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request_json(self, method: str, path: str, *, payload: dict | None = None) -> Any:
        url = self.url_for(path)
        try:
            r = self._session.request(method, url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            raise ClientError(f"{method} {url} failed: {e}") from e

        if r.status_code >= 400:
            message, code = _error_message(r)
            raise OtimApiError(status=r.status_code, message=message, code=code, path=path)

        if r.status_code == 204 or not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise ClientError(f"{method} {url} returned a non-JSON body") from e
