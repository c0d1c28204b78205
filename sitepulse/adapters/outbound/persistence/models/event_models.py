# sitepulse/adapters/outbound/persistence/models/event_models.py

"""
Analytics event records.

Each event row is tagged with the client_id resolved from the bearer
token, never with a value taken from the request body.
"""

from sqlalchemy import Column, String, Float, BigInteger, DateTime, Text, func
from sitepulse.adapters.outbound.persistence.database import Base
from sitepulse.adapters.outbound.persistence.models.types import BigIntegerPK


class EventMixin:
    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    client_id = Column(String(255), nullable=False, index=True)
    session_id = Column(String(255), nullable=False, index=True)
    url = Column(Text, nullable=False, index=True)
    time = Column(BigInteger, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    def to_dict(self) -> dict:
        return {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
            if column.name != "created_at"
        }


class Visit(EventMixin, Base):
    __tablename__ = "visits"


class Click(EventMixin, Base):
    __tablename__ = "clicks"

    x = Column(Float, nullable=False)
    y = Column(Float, nullable=False)


class Scroll(EventMixin, Base):
    __tablename__ = "scroll"

    x = Column(Float, nullable=False)
    y = Column(Float, nullable=False)


class PathEntry(EventMixin, Base):
    """One navigation step: the page reached and the page it came from."""
    __tablename__ = "paths"

    prev_url = Column(Text, nullable=True)
