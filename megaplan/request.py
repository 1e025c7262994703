"""A single signed call to the Megaplan API.

``MegaplanRequest`` is built by :class:`megaplan._base.BaseMegaplanClient`,
optionally signed, then sent exactly once.  ``send`` never raises for
remote or transport problems: it hands exactly one payload to exactly one
of the success/failure callbacks.

Failure payloads:
    ``{"error": <status>}``                          remote status is not ``ok``
    ``{"error": {code: ":invalidjson"}, "exception"}``  body is not usable JSON
    ``{"error": {code: ":hangup"}, "chunks"}``          connection closed mid-body
    ``{"error": {code: ":network"}, "exception"}``      transport error
"""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from email.utils import formatdate
from typing import Any

import httpx

from _constants import (
    CONTENT_TYPE,
    ERR_HANGUP,
    ERR_INVALID_JSON,
    ERR_NETWORK,
    HTTP_METHOD,
    REQUEST_ERRORS,
    USER_AGENT,
)
from megaplan import utils
from megaplan.errors import MegaplanAPIError
from megaplan.serverconf import ServerConfig

__all__ = ["Callback", "MegaplanRequest", "ResponseFilter"]

logger = logging.getLogger("megaplan_mcp.request")

Callback = Callable[[Any], Any | Awaitable[Any]]
ResponseFilter = str | Callable[[Any], Any]
RequestFilter = Callable[[Mapping[str, Any]], Mapping[str, Any]]


def _error(code: str, **extra: Any) -> dict[str, Any]:
    return {"error": {"code": code, "message": REQUEST_ERRORS[code]}, **extra}


def _ignore(payload: Any) -> None:
    return None


class MegaplanRequest:
    """One POST to ``{scheme}://{hostname}:{port}/{uri}``.

    Args:
        http: Shared ``httpx.AsyncClient`` used as transport.
        server: Target server.
        access_id: Access ID used in ``X-Authorization`` once signed.
        secret_key: Key the signature is computed with.
        uri: API path with shortcuts already expanded.
        data: Parameters, snake_case keyed.
        response_filter: Key to pluck from the response, or a callable
            applied to it.
        request_filter: Transform applied to *data* before encoding.
            Defaults to PascalCase key conversion.
    """

    method: str = HTTP_METHOD
    content_type: str = CONTENT_TYPE
    user_agent: str = USER_AGENT

    def __init__(
        self,
        http: httpx.AsyncClient,
        server: ServerConfig,
        access_id: str | None,
        secret_key: str | None,
        uri: str,
        data: Mapping[str, Any] | None = None,
        response_filter: ResponseFilter | None = None,
        request_filter: RequestFilter | None = None,
    ) -> None:
        self._http = http
        self.server = server
        self.uri = uri
        # Signed text uses host and path, without scheme or port.
        self.url = f"{server.hostname}/{uri}"
        self.access_id = access_id
        self.secret_key = secret_key
        self.now: str = formatdate(usegmt=True)
        self.data: dict[str, Any] = dict(data or {})
        self.response_filter = response_filter
        self.request_filter: RequestFilter = request_filter or utils.convert_keys_to_pascal_case
        self.signature: str | None = None
        self.auth_key: str | None = None
        self.on_success: Callback | None = None
        self.on_failure: Callback | None = None
        self._sent = False

    def __repr__(self) -> str:
        return f"<MegaplanRequest {self.method} /{self.uri} signed={self.auth_key is not None}>"

    @property
    def full_url(self) -> str:
        return f"{self.server.base_url}/{self.uri}"

    @property
    def sent(self) -> bool:
        return self._sent

    def callbacks(self, on_success: Callback | None, on_failure: Callback | None) -> MegaplanRequest:
        """Set the callbacks used when ``send`` is called without any."""
        self.on_success = on_success
        self.on_failure = on_failure
        return self

    # -- signing -------------------------------------------------------------

    def canonical_text(self) -> str:
        """Newline-joined method, empty content field, content type, date, URL."""
        return "\n".join([self.method, "", self.content_type, self.now, self.url])

    def sign(self) -> MegaplanRequest:
        if not self.secret_key:
            raise ValueError("Cannot sign a request without a secret key")
        self.signature = utils.make_signature(self.secret_key, self.canonical_text())
        self.auth_key = f"{self.access_id}:{self.signature}"
        return self

    # -- wire ----------------------------------------------------------------

    def encode_body(self) -> bytes:
        return utils.encode_form(self.request_filter(self.data)).encode("utf-8")

    def headers(self, content_length: int) -> dict[str, str]:
        headers = {
            "Date": self.now,
            "Accept": "application/json",
            "User-Agent": self.user_agent,
            "Content-Length": str(content_length),
            "Content-Type": self.content_type,
        }
        if self.auth_key:
            headers["X-Authorization"] = self.auth_key
        return headers

    async def send(
        self,
        on_success: Callback | None = None,
        on_failure: Callback | None = None,
    ) -> Any:
        """Send the request and settle it through one of the callbacks.

        Returns whatever payload was handed to the callback that fired.

        Raises:
            RuntimeError: If the request was already sent.
        """
        if self._sent:
            raise RuntimeError("MegaplanRequest is single-use and was already sent")
        self._sent = True

        on_success = on_success or self.on_success
        on_failure = on_failure or self.on_failure

        ok, payload = await self._exchange()
        callback = on_success if ok else on_failure
        if callback is not None:
            result = callback(payload)
            if inspect.isawaitable(result):
                await result
        return payload

    async def fetch(self) -> Any:
        """Send the request and return the success payload.

        The client-wide default callbacks are not fired.

        Raises:
            MegaplanAPIError: With the failure payload.
        """
        failure: list[dict[str, Any]] = []
        payload = await self.send(_ignore, failure.append)
        if failure:
            raise MegaplanAPIError(failure[0])
        return payload

    async def _exchange(self) -> tuple[bool, Any]:
        body = self.encode_body()
        headers = self.headers(len(body))
        logger.debug("Megaplan %s /%s (%d bytes)", self.method, self.uri, len(body))

        basic = self.server.basic_auth
        chunks: list[str] = []
        try:
            async with self._http.stream(
                self.method,
                self.full_url,
                content=body,
                headers=headers,
                auth=httpx.BasicAuth(*basic) if basic else None,
            ) as response:
                try:
                    async for chunk in response.aiter_text():
                        chunks.append(chunk)
                except (httpx.RemoteProtocolError, httpx.ReadError) as exc:
                    logger.warning("Megaplan /%s connection closed mid-body: %s", self.uri, exc)
                    return False, _error(ERR_HANGUP, chunks=chunks)
        except httpx.TransportError as exc:
            logger.warning("Megaplan /%s transport error: %s", self.uri, exc)
            return False, _error(ERR_NETWORK, exception=exc)

        return self._settle("".join(chunks))

    def _settle(self, text: str) -> tuple[bool, Any]:
        try:
            envelope = json.loads(text)
        except ValueError as exc:
            logger.warning("Megaplan /%s returned invalid JSON", self.uri)
            return False, _error(ERR_INVALID_JSON, exception=exc)
        if not isinstance(envelope, dict):
            return False, _error(
                ERR_INVALID_JSON, exception=ValueError("response envelope is not an object")
            )

        status = envelope.get("status")
        code = status.get("code") if isinstance(status, dict) else None
        if code != "ok":
            logger.warning("Megaplan /%s rejected: %s", self.uri, status)
            return False, {"error": status}

        try:
            result = envelope.get("data") or envelope.get("json") or {}
            result = utils.convert_values_to_natives(utils.convert_keys_to_underscore(result))
            result = self._apply_response_filter(result)
        except Exception as exc:
            logger.warning("Megaplan /%s response could not be shaped: %s", self.uri, exc)
            return False, _error(ERR_INVALID_JSON, exception=exc)
        return True, result

    def _apply_response_filter(self, result: Any) -> Any:
        rf = self.response_filter
        if rf is None:
            return result
        if callable(rf):
            return rf(result)
        if not isinstance(result, dict) or rf not in result:
            raise KeyError(f"key {rf} not exists in json")
        return result[rf]
