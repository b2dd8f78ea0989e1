# src/mtgox/exchanges/http.py
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional
from dataclasses import dataclass
import base64
import hashlib
import hmac
import logging
import time
from urllib.parse import urlencode

import requests

from mtgox.errors import (
    HTTPStatusError,
    MysqlError,
    NotFound,
    RemoteError,
    TransportError,
    UnauthorizedError,
)
from mtgox.settings import Settings

log = logging.getLogger("http")


@dataclass
class MtGoxCreds:
    key: str
    secret: str  # base64, as issued by the exchange


def raise_for_payload(data: Any) -> Any:
    """Turn an application-level error embedded in a 200 response into RemoteError."""
    if not isinstance(data, Mapping):
        return data
    message = data.get("error")
    if message is None and data.get("result") == "error":
        message = data.get("message") or "unknown error"
    if message is None:
        return data

    message = str(message)
    if "Must be logged in" in message:
        raise UnauthorizedError(message)
    if message.startswith("Mysql error"):
        raise MysqlError(message)
    raise RemoteError(message)


class HttpTransport:
    """requests-based transport. GET = public, POST = signed private call."""

    name = "mtgox"

    def __init__(
        self,
        base_url: str = "https://mtgox.com",
        creds: MtGoxCreds | None = None,
        timeout: int = 10,
        verify_ssl: bool = True,
        retries: int = 3,
        user_agent: str = "mtgox-client",
        session: Optional[requests.Session] = None,
    ):
        self.base = base_url.rstrip("/")
        self.creds = creds
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.retries = max(1, retries)
        self.s = session or requests.Session()
        self.s.headers.update({"Accept": "application/json", "User-Agent": user_agent})

    @classmethod
    def from_settings(
        cls, settings: Settings, session: Optional[requests.Session] = None
    ) -> "HttpTransport":
        creds = None
        if settings.api.key and settings.api.secret:
            creds = MtGoxCreds(key=settings.api.key, secret=settings.api.secret)
        ex = settings.exchange
        return cls(
            base_url=ex.base_url,
            creds=creds,
            timeout=ex.timeout_s,
            verify_ssl=ex.verify_ssl,
            retries=ex.retries,
            user_agent=ex.user_agent,
            session=session,
        )

    # --- Helper: nonce + HMAC-SHA512 signature ---
    @staticmethod
    def _nonce() -> str:
        return str(int(time.time() * 1_000_000))

    def _signed_headers(self, body: str) -> Dict[str, str]:
        if self.creds is None:
            raise UnauthorizedError("Private endpoint requires credentials")
        try:
            secret = base64.b64decode(self.creds.secret)
        except ValueError as e:
            raise UnauthorizedError(f"API secret is not valid base64: {e}") from None
        sig = hmac.new(secret, body.encode(), hashlib.sha512).digest()
        return {
            "Rest-Key": self.creds.key,
            "Rest-Sign": base64.b64encode(sig).decode(),
            "Content-Type": "application/x-www-form-urlencoded",
        }

    def _url(self, path: str) -> str:
        return f"{self.base}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, params: Dict[str, Any]) -> requests.Response:
        if method == "GET":
            return self.s.get(
                self._url(path),
                params=params,
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        # fresh nonce (and so a fresh signature) for every attempt
        body = urlencode({**params, "nonce": self._nonce()})
        return self.s.post(
            self._url(path),
            data=body,
            headers=self._signed_headers(body),
            timeout=self.timeout,
            verify=self.verify_ssl,
        )

    def request(
        self, method: str, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        method = method.upper()
        if method not in ("GET", "POST"):
            raise ValueError(f"Unsupported method: {method}")
        query = dict(params or {})

        # 429 = not processed, safe to resend. 5xx only for GET: a private POST
        # (order, withdraw) may have gone through before the gateway failed.
        backoff = 0.5
        for attempt in range(1, self.retries + 1):
            try:
                r = self._send(method, path, query)
            except requests.RequestException as e:
                raise TransportError(f"{method} {path} failed: {e}") from e

            retryable = r.status_code == 429 or (
                method == "GET" and 500 <= r.status_code < 600
            )
            if retryable:
                if attempt == self.retries:
                    raise HTTPStatusError(r.status_code, r.text)
                log.warning(
                    "%s %s failed (status=%s), retrying in %.1fs...",
                    method,
                    path,
                    r.status_code,
                    backoff,
                )
                time.sleep(backoff)
                backoff = min(backoff * 2, 8.0)
                continue
            if r.status_code == 404:
                raise NotFound(body=r.text, headers=r.headers)
            if r.status_code >= 400:
                raise HTTPStatusError(r.status_code, r.text)

            try:
                data = r.json()
            except ValueError as e:
                raise TransportError(f"{method} {path}: response is not JSON") from e
            log.debug("%s %s -> %s", method, path, r.status_code)
            return raise_for_payload(data)

        raise TransportError(f"{method} {path} failed after retries")
