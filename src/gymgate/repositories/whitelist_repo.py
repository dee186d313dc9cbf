# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from gymgate.common.exceptions import GymGateException
from gymgate.common.interfaces.whitelist_lookup import WhitelistLookup
from gymgate.common.snapshots import PRODUCT_TYPES, ProductType, WhitelistEntry
from gymgate.repositories.database_manager import DatabaseManager
from gymgate.repositories.models import WhitelistMember
from injector import inject
from sqlalchemy.exc import SQLAlchemyError
import logging


class WhitelistRepo(WhitelistLookup):
    @inject
    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.session = db_manager.get_session()

    def _to_entry(self, row: WhitelistMember) -> WhitelistEntry:
        return WhitelistEntry(
            id=row.entry_id,
            company_code=row.company_code,
            company_name=row.company_name,
            name=row.name,
            product_type=ProductType(row.product_type),
            created_at=row.created_at,
        )

    def lookup(self, company_code: str, product_type: ProductType) -> list[WhitelistEntry]:
        # insertion order, so the first imported duplicate is the one matched
        rows = (
            self.session.query(WhitelistMember)
            .filter(WhitelistMember.company_code == company_code,
                    WhitelistMember.product_type == product_type.value)
            .order_by(WhitelistMember.id.asc())
            .all()
        )
        return [self._to_entry(row) for row in rows]

    def replace_whitelist(self,
                          company_code: str,
                          product_type: ProductType,
                          entries: list[WhitelistEntry]) -> int:
        """
        Bulk upload: the stored list for (company, product) is deleted and
        replaced by `entries`. An empty list just clears it.
        """
        try:
            (self.session.query(WhitelistMember)
             .filter(WhitelistMember.company_code == company_code,
                     WhitelistMember.product_type == product_type.value)
             .delete(synchronize_session=False))

            for entry in entries:
                self.session.add(WhitelistMember(
                    entry_id=entry.id,
                    company_code=company_code,
                    company_name=entry.company_name,
                    product_type=product_type.value,
                    name=entry.name.strip(),
                    created_at=entry.created_at,
                ))
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logging.error(f"whitelist upload failed for {company_code}/{product_type.value}: {e}")
            raise GymGateException(GymGateException.ErrorType.DATABASE_ERROR,
                                   f"cannot store whitelist for '{company_code}'") from e

        logging.info(f"stored {len(entries)} whitelist names for {company_code}/{product_type.value}")
        return len(entries)

    def count_by_product(self, company_code: str) -> dict[ProductType, int]:
        counts = {}
        for product_type in PRODUCT_TYPES:
            counts[product_type] = (
                self.session.query(WhitelistMember)
                .filter(WhitelistMember.company_code == company_code,
                        WhitelistMember.product_type == product_type.value)
                .count()
            )
        return counts
