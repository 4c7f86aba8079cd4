# -*- coding: utf-8 -*-
"""
Спільні хелпери для валідації JSON-запитів через WTForms.

WTForms працює з formdata (MultiDict), тому JSON-тіло «розплющується»
у ключі виду ``items-0-product_id`` — так само, як їх надсилає HTML-форма
з FieldList(FormField(...)).
"""

from __future__ import annotations

from typing import Any

from flask import request
from werkzeug.datastructures import MultiDict

from modules.common.errors import ValidationError


def _id(x):
    """Повертає .id для об'єктів (QuerySelectField) або саме значення."""
    return getattr(x, "id", x) if x is not None else None


def json_payload() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Очікується JSON-об'єкт у тілі запиту.")
    return payload


def json_formdata(payload: dict) -> MultiDict:
    md = MultiDict()

    def _walk(value: Any, key: str) -> None:
        # null і порожній рядок = поле не передане
        if value is None or value == "":
            return
        if isinstance(value, dict):
            for k, v in value.items():
                _walk(v, f"{key}-{k}" if key else str(k))
        elif isinstance(value, (list, tuple)):
            for idx, v in enumerate(value):
                _walk(v, f"{key}-{idx}")
        elif isinstance(value, bool):
            md.add(key, "y" if value else "")
        else:
            md.add(key, str(value))

    _walk(payload, "")
    return md


def validate_form(form_cls, payload: dict, **kwargs):
    """Створює форму з JSON-тіла і повертає її, або кидає ValidationError з помилками полів."""
    form = form_cls(formdata=json_formdata(payload), **kwargs)
    if not form.validate():
        raise ValidationError("Форма не пройшла валідацію.", details=form.errors)
    return form
