from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Protocol

import requests
from loguru import logger
from requests_oauthlib import OAuth1


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: Optional[str] = None


class SignedTransport(Protocol):
    def post(self, url: str, body: bytes, headers: Dict[str, str]) -> TransportResponse:
        ...


class OAuthTransportFactory(Protocol):
    def build(self, oauth_key: str, oauth_secret: str) -> SignedTransport:
        ...


class RequestsOAuthTransport:
    """Executes OAuth1-signed (two-legged, HMAC-SHA1) requests; each POST opens and closes its own connection."""

    def __init__(self, auth: OAuth1):
        self._auth = auth

    def post(self, url: str, body: bytes, headers: Dict[str, str]) -> TransportResponse:
        logger.debug(f"POST {url} ({len(body)} bytes)")
        resp = requests.post(url, data=body, headers=headers, auth=self._auth)
        return TransportResponse(status_code=resp.status_code, body=resp.text or None)


class RequestsOAuthTransportFactory:
    def build(self, oauth_key: str, oauth_secret: str) -> RequestsOAuthTransport:
        return RequestsOAuthTransport(OAuth1(oauth_key, client_secret=oauth_secret))
