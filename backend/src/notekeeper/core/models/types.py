"""Custom SQLAlchemy types with cross-DB support."""

import enum
import json
from typing import List, Optional

from sqlalchemy import String, Text, TypeDecorator


class Role(str, enum.Enum):
    """Account role, stored upper-cased."""

    USER = "USER"
    ADMIN = "ADMIN"


class Visibility(str, enum.Enum):
    """Who may read a note through the public listing."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class StringListType(TypeDecorator):
    """
    Store an ordered list of strings in a DB-friendly way:

    - On PostgreSQL: uses ARRAY(String)
    - On SQLite (and others): stores JSON text in a TEXT column

    Always returns List[str]; order is preserved.
    """

    cache_ok = True
    impl = Text  # placeholder, real impl decided per-dialect

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import ARRAY

            return dialect.type_descriptor(ARRAY(String(100)))
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: Optional[List[str]], dialect):
        if value is None:
            return None
        values = [str(v) for v in value]
        if dialect.name == "postgresql":
            return values
        return json.dumps(values)

    def process_result_value(self, value, dialect) -> Optional[List[str]]:
        if value is None:
            return None
        if dialect.name == "postgresql":
            return [str(v) for v in value]
        if isinstance(value, list):
            return [str(v) for v in value]
        return [str(v) for v in json.loads(value)]
