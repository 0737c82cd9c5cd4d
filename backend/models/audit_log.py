# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""AuditLog ORM model – tracks every accepted registry call and login."""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from database import Base
from models.principal import NAME_MAX


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Principal who made the call
    actor = Column(String(NAME_MAX), nullable=False, index=True)
    # NULL for events not tied to a vault (logins)
    vault_id = Column(Integer, nullable=True, index=True)
    action = Column(String(64), nullable=False, index=True)   # e.g. "vault_register"
    detail = Column(Text, nullable=True)                      # human-readable note
    request_ip = Column(String(45), nullable=True)            # supports IPv6
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
