"""``MegaplanClient`` -- one object exposing every Megaplan operation.

Domain clients share a single :class:`BaseMegaplanClient`, so one login
signs every request::

    client = MegaplanClient("example.megaplan.ru")
    await client.auth("user", "secret")
    tasks = await client.tasks.list(folder="owner").fetch()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from megaplan._base import AuthObserver, BaseMegaplanClient, Credentials
from megaplan.crm import ContractorsClient, DealsClient
from megaplan.events import EventsClient, TodoListsClient
from megaplan.projects import ProjectsClient
from megaplan.request import Callback
from megaplan.serverconf import ServerConfig
from megaplan.staff import DepartmentsClient, EmployeesClient
from megaplan.system import SystemClient
from megaplan.tasks import TasksClient

__all__ = ["MegaplanClient"]


class MegaplanClient:
    """Facade over the domain clients.

    Args:
        server: Hostname, mapping or :class:`ServerConfig`.
        access_id: Resume a session with an existing access ID.
        secret_key: Secret key matching *access_id*.
        on_success: Default success callback for every request.
        on_failure: Default failure callback for every request.
        timeout: ``httpx`` timeout; ``None`` disables timeouts.
        transport: Custom ``httpx`` transport.
    """

    def __init__(
        self,
        server: str | Mapping[str, Any] | ServerConfig,
        access_id: str | None = None,
        secret_key: str | None = None,
        on_success: Callback | None = None,
        on_failure: Callback | None = None,
        *,
        timeout: httpx.Timeout | float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base = BaseMegaplanClient(server, timeout=timeout, transport=transport)
        self.base.set_default_callbacks(on_success, on_failure)
        self.system = SystemClient(self.base)
        self.tasks = TasksClient(self.base)
        self.projects = ProjectsClient(self.base)
        self.employees = EmployeesClient(self.base)
        self.departments = DepartmentsClient(self.base)
        self.todolists = TodoListsClient(self.base)
        self.events = EventsClient(self.base)
        self.contractors = ContractorsClient(self.base)
        self.deals = DealsClient(self.base)
        self.base.set_credentials(access_id, secret_key)

    def __repr__(self) -> str:
        return f"<MegaplanClient {self.server.hostname} authenticated={self.authenticated}>"

    @property
    def server(self) -> ServerConfig:
        return self.base.server

    @property
    def credentials(self) -> Credentials:
        return self.base.credentials

    @property
    def authenticated(self) -> bool:
        return self.base.authenticated

    async def auth(
        self,
        login: str | None = None,
        password: str | None = None,
        one_time_key: str | None = None,
        *,
        on_success: Callback | None = None,
        on_failure: Callback | None = None,
    ) -> Credentials | None:
        return await self.base.auth(
            login, password, one_time_key, on_success=on_success, on_failure=on_failure
        )

    def set_credentials(self, access_id: str | None, secret_key: str | None) -> MegaplanClient:
        self.base.set_credentials(access_id, secret_key)
        return self

    def on_auth(self, observer: AuthObserver) -> None:
        self.base.on_auth(observer)

    def set_default_callbacks(
        self,
        on_success: Callback | None,
        on_failure: Callback | None,
    ) -> None:
        self.base.set_default_callbacks(on_success, on_failure)

    async def close(self) -> None:
        await self.base.close()

    async def __aenter__(self) -> MegaplanClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
