# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""RegistrySequence ORM model – single row holding the highest vault id."""

from sqlalchemy import Column, Integer

from database import Base


class RegistrySequence(Base):
    __tablename__ = "registry_sequence"

    id = Column(Integer, primary_key=True, default=1)
    last_vault_id = Column(Integer, nullable=False, default=0)
