"""Static Megaplan dictionaries.

All tables are read-only module constants shared by every request.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

__all__ = [
    "ACTION_TYPES",
    "FOLDERS",
    "SUBJECT_TYPES",
    "TASK_STATUSES",
    "URI_SHORTCUTS",
]

# ``::name`` shortcuts expand to ``:namespace/Resource``; ``:namespace``
# expands to the literal API group segment.
URI_SHORTCUTS: Mapping[str, str] = MappingProxyType(
    {
        ":notify": "SdfNotify",
        ":common": "BumsCommonApiV01",
        ":task": "BumsTaskApiV01",
        ":project": "BumsProjectApiV01",
        ":time": "BumsTimeApiV01",
        ":trade": "BumsTradeApiV01",
        ":staff": "BumsStaffApiV01",
        ":crm": "BumsCrmApiV01",
        "::user": ":common/User",
        "::auth": ":common/User/authorize.api",
        "::system": ":common/System",
        "::search": ":common/Search",
        "::history": ":common/History",
        "::tags": ":common/Tags",
        "::task": ":task/Task",
        "::comment": ":common/Comment",
        "::reaction": ":notify/ReactionApi",
        "::project": ":project/Project",
        "::todo": ":time/TodoList",
        "::event": ":time/Event",
        "::employee": ":staff/Employee",
        "::department": ":staff/Department",
        "::contractor": ":crm/Contractor",
        "::deal": ":trade/Deal",
    }
)

FOLDERS: frozenset[str] = frozenset(
    {"incoming", "responsible", "executor", "owner", "auditor", "all"}
)

TASK_STATUSES: frozenset[str] = frozenset(
    {
        "actual",
        "inprocess",
        "new",
        "overdue",
        "done",
        "delayed",
        "completed",
        "failed",
        "any",
    }
)

ACTION_TYPES: frozenset[str] = frozenset(
    {
        "act_accept_task",
        "act_reject_task",
        "act_accept_work",
        "act_reject_work",
        "act_done",
        "act_pause",
        "act_resume",
        "act_cancel",
        "act_expire",
        "act_renew",
    }
)

# Subjects that have a change history.
SUBJECT_TYPES: frozenset[str] = frozenset({"task", "project"})
