"""Russian labels for Megaplan enumerations and entity fields."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

__all__ = ["FIELD_LABELS", "FOLDER_LABELS", "TASK_STATUS_LABELS", "labels_for"]

FOLDER_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "incoming": "входящие",
        "responsible": "ответственный",
        "executor": "соисполнитель",
        "owner": "исходящие",
        "auditor": "аудируемые",
        "all": "все",
    }
)

TASK_STATUS_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "actual": "актуальные",
        "inprocess": "в процессе",
        "new": "новые",
        "overdue": "просроченные",
        "done": "условно завершенные",
        "delayed": "отложенные",
        "completed": "завершенные",
        "failed": "проваленные",
        "any": "любые",
    }
)

_TASK = {
    "id": "ID задачи",
    "name": "Название",
    "status": "Статус",
    "deadline": "Дедлайн",
    "owner": "Постановщик (сотрудник)",
    "responsible": "Ответственный (сотрудник)",
    "severity": "Важность",
    "super_task": "Надзадача",
    "project": "Проект",
    "favorite": "В избранном",
    "time_created": "Время создания",
    "time_updated": "Время последней модификации",
    "folders": "Список папок, в которые попадает задача",
    "tags": "Тэги, привязанные к задаче",
    "activity": "Дата и время последней активности по задаче",
    "actions": "Список доступных действий над задачей",
    "is_overdue": "Является ли задача просроченной",
    "comments_unread": "Количество непрочитанных комментариев",
}

# Column captions used by the task list sort and filter UI.
_TASK_COLUMNS = {
    "id": "идентификатор",
    "name": "наименование",
    "activity": "активность",
    "deadline": "дата дедлайна",
    "responsible": "ответственный",
    "owner": "постановщик",
    "contractor": "заказчик",
    "start": "старт",
    "planned_finish": "плановый финиш",
    "planned_work": "запланировано",
    "actual_work": "отработано",
    "completed": "процент завершения",
    "bonus": "бонус",
    "fine": "штраф",
    "planned_time": "длительность",
}

_PROJECT = {
    "id": "ID проекта",
    "name": "Название",
    "status": "Статус",
    "deadline": "Дедлайн",
    "owner": "Владелец (сотрудник)",
    "responsible": "Менеджер (сотрудник)",
    "severity": "Важность",
    "super_project": "Надпроект",
    "favorite": "В избранном",
    "time_created": "Время создания",
    "time_updated": "Время последней модификации",
    "tags": "Тэги, привязанные к проекту",
    "start": "Старт проекта",
    "activity": "Дата и время последней активности по проекту",
    "actions": "Список допустимых действий над проектом",
    "is_overdue": "Является ли проект просроченным",
}

_EMPLOYEE = {
    "id": "ID сотрудника",
    "name": "Полное имя",
    "last_name": "Фамилия",
    "first_name": "Имя",
    "middle_name": "Отчество",
    "position": "Должность",
    "department": "Отдел",
    "phones": "Телефоны",
    "email": "E-mail",
    "status": "Статус",
    "time_created": "Время создания",
    "fire_day": "Дата увольнения",
    "avatar": "Адрес аватара сотрудника",
    "login": "Логин сотрудника",
}

_DEPARTMENT = {
    "id": "ID отдела",
    "name": "Название отдела",
    "head": "Начальник отдела",
    "employees": "Список сотрудников отдела",
    "employees_count": "Количество сотрудников в отделе",
}

_TODOLIST = {
    "id": "Id списка дел",
    "name": "Название списка дел",
    "todo_count": "Количество незавершенных дел в списке",
}

_EVENT = {
    "id": "Id события",
    "description": "Описание события",
    "name": "Название события",
    "time_created": "Дата и время создания",
    "start_time": "Начало события",
    "duration": "Продолжительность события",
    "is_personal": "Личное дело?",
    "event_category": "Категория события",
    "participants": "Список участников",
    "contractors": "Список контрагентов",
    "reminders": "Напоминания",
    "has_todo": "Имеет дела?",
    "has_communication": "Имеет коммуникации?",
    "todo_list_id": "Код списка дел, в котором находится событие",
    "position": "Порядковый номер события внутри списка дел",
    "owner": "Id пользователя, создавшего событие",
    "is_finished": "Является ли событие завершенным",
    "place": "Место события",
    "is_favorite": "Добавлено ли событие в избранное",
    "time_updated": "Время последней модификации события",
    "can_edit": "Можно ли редактировать событие",
    "is_overdue": "Просрочено ли событие",
}

_EVENT_PLACE = {"id": "Id места", "name": "Название места"}

_EVENT_CATEGORY = {"id": "Id категории", "name": "Название категории"}

_COMMENT = {
    "id": "ID комментария",
    "text": "Текст комментария",
    "work": "Кол-во потраченных минут, которое приплюсовано к комментируемому объекту",
    "work_date": "Дата, на которую списаны потраченные часы",
    "time_created": "Время создания",
    "author": "Автор комментария (сотрудник)",
    "avatar": "Адрес аватара автора",
    "attaches": "Файлы, прикрепленные к комментарию",
    "is_unread": "Является ли комментарий непрочитанным",
    "is_favorite": "Находится ли комментарий в избранном",
    "first_unread_comment": "ID первого непрочитанного комментария",
}

_NOTIFICATION = {
    "id": "ID уведомления",
    "subject": "Предмет уведомления",
    "content": "Содержимое уведомления",
    "time_created": "Время создания уведомления",
}

_CONTRACTOR = {
    "id": "Идентификатор клиента",
    "name": "Имя клиента",
    "birthday": "Дата рождения",
    "description": "Описание клиента",
    "email": "E-mail",
    "facebook": "Facebook",
    "jabber": "Jabber",
    "payers": "Список плательщиков",
    "person_type": "Тип клиента",
    "prefer_transport": "Предпочтительный способ связи",
    "promising_rate": "Перспективность",
    "responsibles": "Ответственные",
    "site": "Сайт",
    "time_created": "Время создания",
    "time_updated": "Время обновления",
    "twitter": "Twitter",
    "type": "Тип",
}

FIELD_LABELS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "task": MappingProxyType(_TASK),
        "task_column": MappingProxyType(_TASK_COLUMNS),
        "project": MappingProxyType(_PROJECT),
        "employee": MappingProxyType(_EMPLOYEE),
        "department": MappingProxyType(_DEPARTMENT),
        "todolist": MappingProxyType(_TODOLIST),
        "event": MappingProxyType(_EVENT),
        "event_place": MappingProxyType(_EVENT_PLACE),
        "event_category": MappingProxyType(_EVENT_CATEGORY),
        "comment": MappingProxyType(_COMMENT),
        "notification": MappingProxyType(_NOTIFICATION),
        "contractor": MappingProxyType(_CONTRACTOR),
    }
)


def labels_for(kind: str) -> Mapping[str, str] | None:
    """Labels of an entity's fields, or of the ``folder`` / ``task_status`` values."""
    if kind == "folder":
        return FOLDER_LABELS
    if kind == "task_status":
        return TASK_STATUS_LABELS
    return FIELD_LABELS.get(kind)
