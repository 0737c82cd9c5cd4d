# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Vault ORM model – persisted form of a registry record."""

from sqlalchemy import Column, Integer, String, JSON

from database import Base
from models.principal import NAME_MAX


class Vault(Base):
    __tablename__ = "vaults"

    # Allocated by the registry sequence, never by the database.
    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(50), nullable=False)
    originator = Column(String(NAME_MAX), nullable=False, index=True)
    fingerprint = Column(String(64), nullable=False)
    summary = Column(String(200), nullable=False)
    classification = Column(String(20), nullable=False)
    # Ordered list of 1–5 strings
    labels = Column(JSON, nullable=False)
    # Heights from the chain clock, not timestamps
    created_at = Column(Integer, nullable=False)
    modified_at = Column(Integer, nullable=False)
