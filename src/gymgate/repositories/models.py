# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from sqlalchemy import Column, Integer, String, DateTime, Date, JSON, Index
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class Company(Base):
    """Subsidiary company row, maintained by the admin screens."""
    __tablename__ = 'gym_companies'

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(32), nullable=False, unique=True)
    name = Column(String(128), nullable=False)
    mode = Column(String(8), nullable=False, default='FCFS')
    status = Column(String(16), nullable=False, default='active')
    # {"fullDay": n, "morning": n, "evening": n}
    quota = Column(JSON, nullable=True)
    paid = Column(JSON, nullable=True)
    available_from = Column(Date, nullable=True)
    available_until = Column(Date, nullable=True)
    created_at = Column(DateTime, default=_utcnow)

    def to_dict(self):
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}


class WhitelistMember(Base):
    """One admitted name on a company's lottery list for one product type."""
    __tablename__ = 'gym_whitelists'
    __table_args__ = (
        Index('ix_gym_whitelists_company_product', 'company_code', 'product_type'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    entry_id = Column(String(128), nullable=False, unique=True)
    company_code = Column(String(32), nullable=False)
    company_name = Column(String(128), nullable=False, default='')
    product_type = Column(String(16), nullable=False)
    name = Column(String(128), nullable=False)
    created_at = Column(DateTime, default=_utcnow)
