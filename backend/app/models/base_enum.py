# backend/app/models/base_enum.py
"""
Safe enum helpers for SQLAlchemy.

SQLAlchemy's `Enum` type persists member NAMES by default ('SUPER_ADMIN'),
while raw SQL, seeds and the identity provider's webhooks use the lowercase
VALUES ('super_admin'). Columns built with `create_safe_enum` store values so
both paths agree.

Usage:
    from app.models.base_enum import create_safe_enum

    class OrganizationMembership(Base):
        role = Column(create_safe_enum(MembershipRole, "membership_role"), nullable=False)
"""

from enum import Enum
from typing import Sequence, Type

from sqlalchemy import Enum as SAEnum


def create_safe_enum(
    enum_class: Type[Enum],
    name: str,
    *,
    native_enum: bool = False,
    validate_strings: bool = True,
) -> SAEnum:
    """
    Create a SQLAlchemy Enum that stores enum values (not names).

    Non-native (VARCHAR + CHECK) storage is the default so the same column
    works on SQLite in tests and on PostgreSQL.
    """
    return SAEnum(
        enum_class,
        name=name,
        native_enum=native_enum,
        validate_strings=validate_strings,
        values_callable=_get_enum_values,
    )


def _get_enum_values(enum_class: Type[Enum]) -> Sequence[str]:
    return [member.value for member in enum_class]
