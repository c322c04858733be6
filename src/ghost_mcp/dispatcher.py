"""
Authenticated request dispatcher for the Ghost Admin API.

Turns (endpoint, method, data) into one signed HTTP call against
{base_url}/ghost/api/admin/{endpoint}/ and normalizes the result into a
RequestOutcome. Failures are returned, not raised.
"""

from typing import Any, Dict, Optional, Tuple
from urllib.parse import unquote

import httpx

from . import __version__
from .config import GhostSettings
from .errors import FailureKind
from .logging_config import get_logger
from .schemas import WRITE_METHODS, RequestOutcome, RequestSpec
from .signer import CredentialSigner

logger = get_logger("dispatcher")

API_PREFIX = "/ghost/api/admin/"
DEFAULT_TIMEOUT = 10.0
ERROR_BODY_LIMIT = 500


def normalize_endpoint(endpoint: str) -> Tuple[str, str]:
    """
    Reduce a caller-supplied endpoint to a relative path and a query string.

    Leading, trailing and repeated slashes are dropped, so "/posts", "posts"
    and "posts/" are equivalent. Raises ValueError for endpoints that are
    empty, contain control characters or would leave the Admin API prefix.
    """
    raw = (endpoint or "").strip()
    if any(ord(ch) < 32 or ord(ch) == 127 for ch in raw):
        raise ValueError("Endpoint must not contain control characters")
    path, _, query = raw.partition("?")
    if "://" in path:
        raise ValueError("Endpoint must be a path relative to the Admin API, not a URL")

    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        raise ValueError("Endpoint must not be empty")
    for segment in segments:
        if unquote(segment) in (".", "..") or "\\" in segment:
            raise ValueError(f"Endpoint segment {segment!r} is not allowed")
    return "/".join(segments), query


def build_url(base_url: str, endpoint: str) -> str:
    path, query = normalize_endpoint(endpoint)
    url = f"{base_url.rstrip('/')}{API_PREFIX}{path}/"
    if query:
        url = f"{url}?{query}"
    return url


def _error_messages(body: Any) -> list:
    if not isinstance(body, dict):
        return []
    messages = []
    for item in body.get("errors") or []:
        if not isinstance(item, dict) or not item.get("message"):
            continue
        message = str(item["message"])
        if item.get("context"):
            message = f"{message} ({item['context']})"
        messages.append(message)
    return messages


def _describe_upstream_error(response: httpx.Response, body: Any) -> str:
    prefix = f"Ghost API responded with {response.status_code}"
    if response.reason_phrase:
        prefix = f"{prefix} {response.reason_phrase}"

    messages = _error_messages(body)
    if messages:
        return f"{prefix}: {'; '.join(messages)}"
    if isinstance(body, str) and body.strip():
        return f"{prefix}: {body.strip()}"
    if body:
        return f"{prefix}: {body}"
    return prefix


class GhostDispatcher:
    """
    Executes authorized requests against one Ghost site.

    Holds only read-only configuration and the signer; every call builds its
    own token and HTTP client, so concurrent calls share nothing mutable.
    """

    def __init__(
        self,
        base_url: str,
        signer: CredentialSigner,
        api_version: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._signer = signer
        self._api_version = api_version
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: GhostSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "GhostDispatcher":
        return cls(
            base_url=settings.api_url,
            signer=CredentialSigner.from_key(settings.admin_api_key),
            api_version=settings.api_version,
            timeout=settings.request_timeout,
            transport=transport,
        )

    def _headers(self, spec: RequestSpec) -> Dict[str, str]:
        headers = {
            "Authorization": f"Ghost {self._signer.sign()}",
            "Accept": "application/json",
            "User-Agent": f"ghost-mcp/{__version__}",
        }
        if spec.method in WRITE_METHODS:
            headers["Content-Type"] = "application/json"
        if self._api_version:
            headers["Accept-Version"] = self._api_version
        return headers

    def build_request(self, client: httpx.AsyncClient, spec: RequestSpec) -> httpx.Request:
        return client.build_request(
            spec.method,
            build_url(self.base_url, spec.endpoint),
            headers=self._headers(spec),
            json=spec.data if spec.sends_body else None,
        )

    async def make_request(self, endpoint: str, method: str, data: Optional[Any] = None) -> RequestOutcome:
        """
        Dispatch one request. Returns a successful outcome carrying the decoded
        body unchanged, or a failure outcome. Never raises: bad input,
        transport, upstream and decode problems all come back as failures.
        """
        try:
            spec = RequestSpec(endpoint=endpoint, method=method, data=data)
            url = build_url(self.base_url, spec.endpoint)
        except ValueError as e:
            logger.warning("Rejected Ghost request method=%s endpoint=%r: %s", method, endpoint, e)
            return RequestOutcome.failure(FailureKind.INVALID_REQUEST, f"Invalid request: {e}")

        payload_keys = list(spec.data.keys()) if spec.sends_body and isinstance(spec.data, dict) else None
        logger.info("Ghost %s %s payload_keys=%s", spec.method, url, payload_keys)

        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            try:
                request = self.build_request(client, spec)
            except (httpx.InvalidURL, ValueError, TypeError) as e:
                logger.warning("Could not build Ghost %s %s: %s", spec.method, url, e)
                return RequestOutcome.failure(FailureKind.INVALID_REQUEST, f"Invalid request: {e}")

            try:
                response = await client.send(request)
            except httpx.TimeoutException as e:
                logger.error("Ghost %s %s timed out: %s", spec.method, url, e)
                return RequestOutcome.failure(
                    FailureKind.TRANSPORT,
                    f"Request to the Ghost Admin API timed out after {self._timeout} seconds",
                )
            except httpx.HTTPError as e:
                logger.error("Ghost %s %s transport error: %s", spec.method, url, e)
                return RequestOutcome.failure(
                    FailureKind.TRANSPORT,
                    f"Could not reach the Ghost Admin API: {type(e).__name__}: {e}",
                )

        return self._to_outcome(spec, url, response)

    def _to_outcome(self, spec: RequestSpec, url: str, response: httpx.Response) -> RequestOutcome:
        if response.is_success:
            if not response.content.strip():
                logger.info("Ghost %s %s -> %s (empty body)", spec.method, url, response.status_code)
                return RequestOutcome.success(None)
            try:
                data = response.json()
            except ValueError as e:
                logger.error(
                    "Ghost %s %s -> %s with undecodable body: %s",
                    spec.method,
                    url,
                    response.status_code,
                    e,
                )
                return RequestOutcome.failure(
                    FailureKind.DECODE,
                    f"Ghost API returned {response.status_code} with a body that is not valid JSON",
                    status=response.status_code,
                    body=response.text[:ERROR_BODY_LIMIT],
                )
            logger.info("Ghost %s %s -> %s", spec.method, url, response.status_code)
            return RequestOutcome.success(data)

        try:
            body = response.json()
        except ValueError:
            body = response.text[:ERROR_BODY_LIMIT]
        message = _describe_upstream_error(response, body)
        logger.error("Ghost %s %s failed status=%s detail=%s", spec.method, url, response.status_code, message)
        return RequestOutcome.failure(
            FailureKind.UPSTREAM,
            message,
            status=response.status_code,
            body=body,
        )
