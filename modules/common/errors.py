# -*- coding: utf-8 -*-
"""
Таксономія помилок сервісного шару.

Кожен клас має власний HTTP-статус, тож API віддає різні коди
для «невалідні дані», «не знайдено» та «конфлікт».
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError


class ServiceError(Exception):
    kind = "error"
    status_code = 400

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def as_dict(self) -> dict:
        payload = {"error": self.message, "kind": self.kind}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(ServiceError):
    """Некоректні або неповні вхідні дані (в т.ч. посилання на неіснуючий запис)."""
    kind = "validation_error"
    status_code = 400


class NotFound(ServiceError):
    kind = "not_found"
    status_code = 404


class ConstraintViolation(ServiceError):
    """Порушення унікальності/цілісності або заборонений перехід статусу."""
    kind = "constraint_violation"
    status_code = 409


def from_integrity_error(exc: IntegrityError) -> ServiceError:
    """Класифікує IntegrityError за текстом помилки драйвера (SQLite / Postgres)."""
    msg = str(getattr(exc, "orig", exc))
    low = msg.lower()
    if "foreign key" in low:
        return ValidationError(f"Посилання на неіснуючий запис: {msg}")
    if "unique" in low or "duplicate key" in low:
        return ConstraintViolation(f"Запис з таким ключем вже існує: {msg}")
    return ConstraintViolation(f"Порушення цілісності даних: {msg}")
