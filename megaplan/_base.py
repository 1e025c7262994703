"""Base Megaplan client: transport, credentials and request building.

Provides ``BaseMegaplanClient`` -- owner of the shared ``httpx.AsyncClient``
and of the access ID / secret key pair.  Domain clients hold a reference to
it and call :meth:`BaseMegaplanClient._request` to get an unsent
:class:`~megaplan.request.MegaplanRequest`.

Auth state:
    anonymous      no access ID / secret key; every signed call raises
                   ``NotAuthenticatedError`` before any network I/O.
    authenticated  both set, either by a successful ``auth`` call or by
                   ``set_credentials``.  Observers registered with
                   ``on_auth`` are told about every transition and every
                   failed login.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from _constants import AUTH_SHORTCUT
from megaplan import utils
from megaplan.errors import NotAuthenticatedError, UsageError
from megaplan.request import Callback, MegaplanRequest, RequestFilter, ResponseFilter
from megaplan.serverconf import ServerConfig

__all__ = ["AuthNotifier", "AuthObserver", "BaseMegaplanClient", "Credentials"]

logger = logging.getLogger("megaplan_mcp.client")

AuthObserver = Callable[[dict[str, Any] | None, dict[str, Any] | None], Any]


@dataclass
class Credentials:
    """Access ID / secret key pair issued by Megaplan after login."""

    access_id: str | None = None
    secret_key: str | None = None

    @property
    def complete(self) -> bool:
        return bool(self.access_id and self.secret_key)


class AuthNotifier:
    """Observers of the client's auth outcome.

    Each observer is called as ``observer(payload, error)``: the credential
    payload on success with ``error=None``, or ``payload=None`` and the
    failure payload after a rejected login.  Coroutine observers run as
    tasks held until they finish; their exceptions are logged.
    """

    def __init__(self) -> None:
        self._observers: list[AuthObserver] = []
        self._pending: list[dict[str, Any] | None] = []
        self._tasks: set[asyncio.Task[Any]] = set()

    def subscribe(self, observer: AuthObserver) -> None:
        self._observers.append(observer)
        if self._pending:
            pending, self._pending = self._pending, []
            for payload in pending:
                self.emit_soon(payload)

    def unsubscribe(self, observer: AuthObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def __len__(self) -> int:
        return len(self._observers)

    def emit(self, payload: dict[str, Any] | None, error: dict[str, Any] | None = None) -> None:
        for observer in list(self._observers):
            result = observer(payload, error)
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(self._observer_done)

    def emit_soon(self, payload: dict[str, Any] | None) -> None:
        """Emit on the next loop iteration.

        Outside a running loop the payload goes to the current observers
        at once, or is held for the first observer to subscribe.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._observers:
                self.emit(payload)
            else:
                self._pending.append(payload)
            return
        loop.call_soon(self.emit, payload)

    def _observer_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Auth observer failed", exc_info=task.exception())


class BaseMegaplanClient:
    """Async Megaplan transport plus the mutable credential pair.

    Args:
        server: Hostname, mapping or :class:`ServerConfig`.
        access_id: Resume a session with an existing access ID.
        secret_key: Secret key matching *access_id*.
        timeout: ``httpx`` timeout; ``None`` disables timeouts.
        transport: Custom ``httpx`` transport, e.g. ``httpx.MockTransport``.
    """

    def __init__(
        self,
        server: str | Mapping[str, Any] | ServerConfig,
        access_id: str | None = None,
        secret_key: str | None = None,
        *,
        timeout: httpx.Timeout | float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.server: ServerConfig = ServerConfig.create(server)
        self.credentials = Credentials()
        self.auth_events = AuthNotifier()
        self._default_success: Callback | None = None
        self._default_failure: Callback | None = None
        self._http: httpx.AsyncClient = httpx.AsyncClient(
            follow_redirects=False,
            timeout=timeout,
            transport=transport,
        )
        if access_id or secret_key:
            self.set_credentials(access_id, secret_key)

    async def close(self) -> None:
        """Close the underlying httpx client."""
        await self._http.aclose()

    async def __aenter__(self) -> BaseMegaplanClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # -- state ---------------------------------------------------------------

    @property
    def authenticated(self) -> bool:
        return self.credentials.complete

    def set_default_callbacks(
        self,
        on_success: Callback | None,
        on_failure: Callback | None,
    ) -> None:
        """Callbacks given to every request built from now on."""
        self._default_success = on_success
        self._default_failure = on_failure

    def on_auth(self, observer: AuthObserver) -> None:
        self.auth_events.subscribe(observer)

    # -- authentication ------------------------------------------------------

    def set_credentials(
        self,
        access_id: str | None,
        secret_key: str | None,
    ) -> BaseMegaplanClient:
        """Use an existing access ID / secret key pair.

        Observers are notified on the next loop iteration.  Passing two
        empty values changes nothing.
        """
        if not access_id and not secret_key:
            return self
        self.credentials.access_id = access_id
        self.credentials.secret_key = secret_key
        logger.info("Megaplan credentials set (access_id=%s)", access_id)
        self.auth_events.emit_soon({"access_id": access_id, "secret_key": secret_key})
        return self

    async def auth(
        self,
        login: str | None = None,
        password: str | None = None,
        one_time_key: str | None = None,
        *,
        on_success: Callback | None = None,
        on_failure: Callback | None = None,
    ) -> Credentials | None:
        """Log in with a login/password pair or a one-time key.

        The password is md5-hashed before it leaves the process.  On success
        the credential pair is stored and observers receive the full
        response payload (``access_id``, ``secret_key``, ``user_id``, ...).

        Returns:
            The stored credentials, or ``None`` if the login failed.

        Raises:
            UsageError: If neither login+password nor a one-time key is given.
        """
        if (not login or not password) and not one_time_key:
            raise UsageError("No login/password information provided to auth method")

        if one_time_key:
            args: dict[str, Any] = {"one_time_key": one_time_key}
        else:
            args = {"login": login, "password": utils.md5(password or "")}

        outcome: dict[str, Any] = {}

        def _succeeded(data: Any) -> None:
            outcome["data"] = data

        def _failed(err: Any) -> None:
            outcome["error"] = err

        await self._request(AUTH_SHORTCUT, args).send(_succeeded, _failed)

        if "error" in outcome:
            logger.warning("Megaplan login failed for %s", login or "one-time key")
            self.auth_events.emit(None, outcome["error"])
            if on_failure is not None:
                result = on_failure(outcome["error"])
                if inspect.isawaitable(result):
                    await result
            return None

        data = outcome["data"] if isinstance(outcome.get("data"), dict) else {}
        self.credentials.access_id = data.get("access_id")
        self.credentials.secret_key = data.get("secret_key")
        logger.info("Megaplan login succeeded (access_id=%s)", self.credentials.access_id)
        self.auth_events.emit(data)
        if on_success is not None:
            result = on_success(data)
            if inspect.isawaitable(result):
                await result
        return self.credentials

    # -- request builder -----------------------------------------------------

    def _request(
        self,
        uri: str,
        data: Mapping[str, Any] | None = None,
        response_filter: ResponseFilter | None = None,
        request_filter: RequestFilter | None = None,
    ) -> MegaplanRequest:
        """Build an unsent request for *uri* (shortcuts allowed).

        Raises:
            NotAuthenticatedError: For any URI but the auth endpoint while
                the client has no credentials.
            UsageError: If *uri* starts with an unknown shortcut.
        """
        signed = uri != AUTH_SHORTCUT
        if signed and not self.credentials.complete:
            raise NotAuthenticatedError()

        resolved = utils.subst_uri(uri)
        req = MegaplanRequest(
            self._http,
            self.server,
            self.credentials.access_id,
            self.credentials.secret_key,
            resolved,
            data or {},
            response_filter,
            request_filter,
        )
        req.callbacks(self._default_success, self._default_failure)
        if signed:
            req.sign()
        logger.debug("Built Megaplan request %s -> /%s", uri, resolved)
        return req

    @staticmethod
    def _params(params: Mapping[str, Any] | None, extra: Mapping[str, Any]) -> dict[str, Any]:
        """Merge an options mapping with keyword options, dropping ``None``."""
        merged = dict(params or {})
        merged.update(extra)
        return utils.object_filter(merged)

    def _add_comment(
        self,
        subject_type: str,
        subject_id: Any,
        text: str | None,
        hours: float | int | None = 0,
        *,
        normalize: bool = True,
    ) -> MegaplanRequest:
        """Build a comment-create request for any commentable subject.

        Raises:
            UsageError: If the subject id or the text is missing.
        """
        if not subject_id or not text:
            raise UsageError("Can't post empty comment to nothing")
        return self._request(
            "::comment/create.api",
            {
                "subject_type": subject_type or "task",
                "subject_id": utils.normalize_id(subject_id) if normalize else subject_id,
                "model": {"text": text, "work": hours or 0},
            },
        )
