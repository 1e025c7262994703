"""Megaplan server address: hostname, port, scheme and basic auth."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from _constants import DEFAULT_PORT
from megaplan.errors import ConfigurationError

__all__ = ["ServerConfig"]


@dataclass(frozen=True)
class ServerConfig:
    """Immutable server address.

    ``scheme`` is ``"https"`` whenever the port is 443 or https was asked
    for explicitly, ``"http"`` otherwise.  ``auth`` holds ``"user:pass"``
    for HTTP basic auth, or ``None``.
    """

    hostname: str
    port: int = DEFAULT_PORT
    scheme: str = "https"
    auth: str | None = None

    @classmethod
    def create(
        cls,
        server: str | Mapping[str, Any] | ServerConfig,
        port: int | str | None = None,
        scheme: str | None = None,
        auth: str | None = None,
    ) -> ServerConfig:
        """Build a config from a hostname or a mapping.

        A mapping may carry ``hostname`` (or ``host``), ``port``, ``scheme``,
        ``auth``, ``user`` and ``pass``/``password``.  An existing
        ``ServerConfig`` is returned unchanged.

        Raises:
            ConfigurationError: If no hostname is given.
        """
        if isinstance(server, ServerConfig):
            return server

        if isinstance(server, Mapping):
            opts: dict[str, Any] = dict(server)
        else:
            opts = {"hostname": server, "port": port, "scheme": scheme, "auth": auth}

        hostname = opts.get("hostname") or opts.get("host")
        if not hostname:
            raise ConfigurationError("No required property `hostname` provided")

        try:
            resolved_port = int(opts.get("port") or DEFAULT_PORT)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid port: {opts.get('port')!r}") from exc

        requested = str(opts.get("scheme") or "").lower()
        resolved_scheme = "https" if resolved_port == 443 or requested == "https" else "http"

        basic = opts.get("auth")
        if not basic:
            user = opts.get("user") or ""
            password = opts.get("pass") or opts.get("password") or ""
            joined = f"{user}:{password}"
            basic = joined[1:] if joined.startswith(":") else joined

        return cls(
            hostname=str(hostname),
            port=resolved_port,
            scheme=resolved_scheme,
            auth=basic or None,
        )

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.hostname}:{self.port}"

    @property
    def basic_auth(self) -> tuple[str, str] | None:
        """``(user, password)`` for the HTTP client, or ``None``."""
        if not self.auth:
            return None
        user, _, password = self.auth.partition(":")
        return user, password
