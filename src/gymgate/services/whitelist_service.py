# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4
import io
import logging

import pandas as pd
from injector import inject

from gymgate.common.exceptions import GymGateException
from gymgate.common.interfaces.whitelist_lookup import WhitelistLookup
from gymgate.common.name_normalizer import normalize_company_name, normalize_name
from gymgate.common.snapshots import PRODUCT_TYPES, ProductType, WhitelistEntry
from gymgate.services.i18n_service import I18nService

CSV_HEADER = 'NO,계열사명,성명'
# column names accepted when a spreadsheet has a header row
NAME_COLUMNS = ('성명', '이름', 'name', 'Name')


@dataclass(frozen=True)
class CapacityCheck:
    valid: bool
    message: str


class WhitelistService:
    """
    Builds and queries the per-company, per-product admission lists used by
    lottery (WHL) companies. Matching is exact on company code and product
    type, and on the normalized person name.
    """

    @inject
    def __init__(self,
                 whitelist_lookup: WhitelistLookup,
                 i18n_service: I18nService):
        self.whitelist_lookup = whitelist_lookup
        self.i18n_service = i18n_service

    def parse(self,
              text: str,
              company_code: str,
              company_name: str,
              product_type: ProductType | str) -> list[WhitelistEntry]:
        """
        One entry per non-empty line of `text`, in input order. The product
        type may also be given as its stored or enum name ('fullDay', 'MORNING').
        """
        resolved_type = ProductType.parse(product_type)
        if resolved_type is None:
            raise GymGateException(GymGateException.ErrorType.INVALID_PARAMETER,
                                   f"unknown product type '{product_type}'")

        names = [line.strip() for line in (text or '').splitlines()]
        now = datetime.now(timezone.utc)

        return [
            WhitelistEntry(
                id=f"{company_code}-{resolved_type.value}-{uuid4().hex}",
                company_code=company_code,
                company_name=company_name,
                name=name,
                product_type=resolved_type,
                created_at=now,
            )
            for name in names if name
        ]

    @staticmethod
    def find(entries: list[WhitelistEntry],
             company_code: str,
             name: str,
             product_type: ProductType) -> WhitelistEntry | None:
        # with same-name duplicates the first entry wins; there is no secondary key
        normalized_user = normalize_name(name)
        for entry in entries:
            if (entry.company_code == company_code
                    and normalize_name(entry.name) == normalized_user
                    and entry.product_type == product_type):
                return entry
        return None

    def find_all_products_for_user(self, company_code: str, name: str) -> list[ProductType]:
        found = []
        for product_type in PRODUCT_TYPES:
            entries = self.whitelist_lookup.lookup(company_code, product_type)
            if self.find(entries, company_code, name, product_type):
                found.append(product_type)
        return found

    def is_listed(self, company_code: str, name: str, product_type: ProductType | None = None) -> bool:
        if product_type is None:
            return bool(self.find_all_products_for_user(company_code, name))
        entries = self.whitelist_lookup.lookup(company_code, product_type)
        return self.find(entries, company_code, name, product_type) is not None

    @staticmethod
    def dedup(entries: list[WhitelistEntry]) -> list[WhitelistEntry]:
        seen = set()
        unique = []
        for entry in entries:
            key = (normalize_company_name(entry.company_name), normalize_name(entry.name))
            if key not in seen:
                seen.add(key)
                unique.append(entry)
        return unique

    def validate_capacity(self, entries: list[WhitelistEntry], allocated_total: int) -> CapacityCheck:
        if len(entries) > allocated_total:
            return CapacityCheck(
                valid=False,
                message=self.i18n_service.t('whitelist.capacity_exceeded',
                                            count=len(entries),
                                            allocated=allocated_total))
        return CapacityCheck(valid=True, message=self.i18n_service.t('whitelist.capacity_ok'))

    @staticmethod
    def export_csv(entries: list[WhitelistEntry]) -> str:
        """
        Three-part layout expected by the HR download:
          NO,계열사명,성명
          ,<company names in first-seen order>,
          <n>,<company name>,<name>   (one row per entry, 1-based)
        """
        companies = list(dict.fromkeys(entry.company_name for entry in entries))
        company_row = f",{','.join(companies)},"
        data_rows = [f"{index + 1},{entry.company_name},{entry.name}" for index, entry in enumerate(entries)]
        return f"{CSV_HEADER}\n{company_row}\n" + '\n'.join(data_rows)

    def counts_by_product(self, company_code: str) -> dict[ProductType, int]:
        return {
            product_type: len(self.whitelist_lookup.lookup(company_code, product_type))
            for product_type in PRODUCT_TYPES
        }

    def read_excel_names(self, file_content: bytes) -> str:
        """
        Reads an uploaded spreadsheet of names and returns them one per line,
        ready for `parse`. Uses the name column when the sheet has a header
        the admin team recognizes, otherwise the first column.
        """
        try:
            df = pd.read_excel(io.BytesIO(file_content), sheet_name=0, dtype=str)
        except Exception as e:
            raise GymGateException(GymGateException.ErrorType.FILE_FORMAT_ERROR,
                                   self.i18n_service.t('errors.cannot_read_excel')) from e

        column = next((c for c in NAME_COLUMNS if c in df.columns), None)
        if column is None:
            if df.columns.empty:
                raise GymGateException(GymGateException.ErrorType.FILE_FORMAT_ERROR,
                                       self.i18n_service.t('errors.empty_excel'))
            # no recognised header: the header row itself is the first name
            column = df.columns[0]
            header = [] if str(column).startswith('Unnamed') else [str(column)]
            names = header + df[column].dropna().tolist()
        else:
            names = df[column].dropna().tolist()

        names = [str(n).strip() for n in names if str(n).strip()]
        if not names:
            raise GymGateException(GymGateException.ErrorType.FILE_FORMAT_ERROR,
                                   self.i18n_service.t('errors.empty_excel'))

        logging.info(f"read {len(names)} names from uploaded whitelist file")
        return '\n'.join(names)
