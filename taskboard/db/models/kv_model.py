# taskboard/db/models/kv_model.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.sqltypes import String, Text

from taskboard.db.base import Base


class KeyValueEntry(Base):
    """One serialized value under a namespaced key."""

    __tablename__ = "kv_entries"

    namespace: Mapped[str] = mapped_column(String(length=100), primary_key=True)
    key: Mapped[str] = mapped_column(String(length=200), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
