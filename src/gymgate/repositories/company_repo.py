# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from gymgate.common.snapshots import CompanySnapshot
from gymgate.repositories.database_manager import DatabaseManager
from gymgate.repositories.models import Company
from injector import inject


class CompanyRepo:
    @inject
    def __init__(self, db_manager: DatabaseManager):
        self.session = db_manager.get_session()

    def get_company_by_code(self, code: str) -> Company:
        return self.session.query(Company).filter(Company.code == code).first()

    def get_companies(self) -> list[Company]:
        return self.session.query(Company).order_by(Company.code).all()

    def save_company(self, company: Company) -> Company:
        self.session.add(company)
        self.session.commit()
        return company

    def get_snapshot(self, code: str) -> CompanySnapshot | None:
        """Read-only view of the company for one evaluation."""
        company = self.get_company_by_code(code)
        if not company:
            return None
        return CompanySnapshot.from_dict(company.to_dict())
