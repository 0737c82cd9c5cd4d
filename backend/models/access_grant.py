# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Grant ORM model – one row per (vault, grantee); later grants overwrite."""

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey

from database import Base
from models.principal import NAME_MAX


class Grant(Base):
    __tablename__ = "access_grants"

    vault_id = Column(
        Integer,
        ForeignKey("vaults.id", ondelete="CASCADE"),
        primary_key=True,
    )
    grantee = Column(String(NAME_MAX), primary_key=True)
    tier = Column(String(16), nullable=False)
    granted_at = Column(Integer, nullable=False)
    expires_at = Column(Integer, nullable=False)
    can_modify = Column(Boolean, nullable=False, default=False)
