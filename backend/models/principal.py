# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Principal ORM model – an identity that can log in and call the registry."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func

from database import Base

# Width of every column holding a principal name
NAME_MAX = 128


class Principal(Base):
    __tablename__ = "principals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # The identity string the registry records as originator / grantee.
    name = Column(String(NAME_MAX), unique=True, nullable=False, index=True)
    # passlib embeds the salt in the hash string
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
