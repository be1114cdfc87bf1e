"""AWS Signature V4 request signing for ``httpx``.

External dependencies:
    - ``botocore`` performs the canonical request construction and signing
      (``S3SigV4Auth``), including the ``X-Amz-Content-SHA256`` payload hash
      the admin API requires.
    - ``httpx`` auth flow integration via :class:`httpx.Auth`.

Only ``Content-Type`` and ``Host`` take part in the signature; every other
header is sent unsigned so transport-level headers can change freely.
"""
from __future__ import annotations

from typing import Generator, Optional

import httpx
from botocore.auth import S3SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from ..constants import SIGNING_REGION, SIGNING_SERVICE


class SigV4Auth(httpx.Auth):
    """Sign each outgoing request with static V4 credentials."""

    requires_request_body = True

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        session_token: Optional[str] = None,
        *,
        region: str = SIGNING_REGION,
        service: str = SIGNING_SERVICE,
    ) -> None:
        self._credentials = Credentials(access_key, secret_key, session_token)
        self._region = region
        self._service = service

    @property
    def access_key(self) -> str:
        return self._credentials.access_key

    def sign(self, request: httpx.Request) -> None:
        """Add the signature headers to ``request`` in place."""
        headers = {}
        if "content-type" in request.headers:
            headers["Content-Type"] = request.headers["content-type"]
        aws_request = AWSRequest(
            method=request.method,
            url=str(request.url),
            data=request.content,
            headers=headers,
        )
        S3SigV4Auth(self._credentials, self._service, self._region).add_auth(aws_request)
        for name, value in aws_request.headers.items():
            request.headers[name] = value

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        self.sign(request)
        yield request


__all__ = ["SigV4Auth"]
