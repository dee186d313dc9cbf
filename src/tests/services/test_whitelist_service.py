# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

import io
import pandas as pd
import pytest
from unittest.mock import MagicMock
from gymgate.common.exceptions import GymGateException
from gymgate.common.interfaces.whitelist_lookup import InMemoryWhitelistLookup, WhitelistLookup
from gymgate.common.snapshots import ProductType, WhitelistEntry
from gymgate.common.util import Utility
from gymgate.services.i18n_service import I18nService
from gymgate.services.whitelist_service import WhitelistService


def make_entry(name, company_name='Acme', company_code='A01', product_type=ProductType.FULL_DAY, entry_id=None):
    return WhitelistEntry(id=entry_id or f"{company_code}-{name}",
                          company_code=company_code,
                          company_name=company_name,
                          name=name,
                          product_type=product_type)


class TestWhitelistService:

    def setup_method(self):
        self.mock_lookup = MagicMock(spec=WhitelistLookup)
        self.mock_lookup.lookup.return_value = []
        self.mock_i18n = MagicMock(spec=I18nService)
        self.mock_i18n.t.side_effect = lambda key, **kwargs: f"translated:{key}:{kwargs}"

        self.service = WhitelistService(whitelist_lookup=self.mock_lookup,
                                        i18n_service=self.mock_i18n)

    def _excel_bytes(self, data) -> bytes:
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            pd.DataFrame(data).to_excel(writer, index=False, sheet_name='명단')
        return output.getvalue()

    def test_parse_drops_blank_lines_and_keeps_order(self):
        text = "홍길동\n\n  Kim Chul Soo  \r\n   \n이영희"

        entries = self.service.parse(text, 'B01', '솔루션 전략', ProductType.MORNING)

        assert [e.name for e in entries] == ['홍길동', 'Kim Chul Soo', '이영희']
        assert all(e.company_code == 'B01' and e.company_name == '솔루션 전략' for e in entries)
        assert all(e.product_type == ProductType.MORNING for e in entries)
        assert all(e.created_at is not None for e in entries)

    def test_parse_generates_unique_ids(self):
        entries = self.service.parse("a\na\na", 'B01', 'X', ProductType.FULL_DAY)

        assert len({e.id for e in entries}) == 3
        assert entries[0].id.startswith('B01-fullDay-')

    def test_parse_accepts_product_type_names(self):
        entries = self.service.parse("Kim", 'B01', 'X', 'evening')
        by_enum_name = self.service.parse("Kim", 'B01', 'X', 'FULL_DAY')

        assert entries[0].product_type == ProductType.EVENING
        assert by_enum_name[0].product_type == ProductType.FULL_DAY
        assert by_enum_name[0].id.startswith('B01-fullDay-')

    def test_parse_unknown_product_type(self):
        with pytest.raises(GymGateException) as excinfo:
            self.service.parse("Kim", 'B01', 'X', 'weekend')

        assert excinfo.value.error_type == GymGateException.ErrorType.INVALID_PARAMETER

    def test_parse_empty_text(self):
        assert self.service.parse('', 'B01', 'X', ProductType.FULL_DAY) == []
        assert self.service.parse(None, 'B01', 'X', ProductType.FULL_DAY) == []

    def test_find_matches_on_normalized_name(self):
        entries = [make_entry('Lee'), make_entry('Kim Chul Soo')]

        found = WhitelistService.find(entries, 'A01', ' kimchul soo', ProductType.FULL_DAY)

        assert found is entries[1]

    def test_find_requires_exact_company_code_and_product(self):
        entries = [make_entry('Kim', company_code='A01', product_type=ProductType.MORNING)]

        assert WhitelistService.find(entries, 'a01', 'Kim', ProductType.MORNING) is None
        assert WhitelistService.find(entries, 'A01', 'Kim', ProductType.EVENING) is None
        assert WhitelistService.find(entries, 'A01', 'Kim', ProductType.MORNING) is entries[0]

    def test_find_returns_first_duplicate(self):
        first = make_entry('Kim', entry_id='first')
        second = make_entry('KIM', entry_id='second')

        assert WhitelistService.find([first, second], 'A01', 'kim', ProductType.FULL_DAY) is first

    def test_find_all_products_for_user_in_fixed_order(self):
        lookup = InMemoryWhitelistLookup([
            make_entry('Kim', product_type=ProductType.EVENING),
            make_entry('Kim', product_type=ProductType.FULL_DAY),
            make_entry('Lee', product_type=ProductType.MORNING),
        ])
        service = WhitelistService(whitelist_lookup=lookup, i18n_service=self.mock_i18n)

        assert service.find_all_products_for_user('A01', 'kim') == [ProductType.FULL_DAY, ProductType.EVENING]
        assert service.find_all_products_for_user('A01', 'Park') == []
        assert service.find_all_products_for_user('B99', 'Kim') == []

    def test_find_all_products_queries_each_product_list(self):
        self.service.find_all_products_for_user('A01', 'Kim')

        called = [c.args for c in self.mock_lookup.lookup.call_args_list]
        assert called == [('A01', ProductType.FULL_DAY), ('A01', ProductType.MORNING), ('A01', ProductType.EVENING)]

    def test_is_listed_for_single_product(self):
        self.mock_lookup.lookup.return_value = [make_entry('Kim', product_type=ProductType.MORNING)]

        assert self.service.is_listed('A01', 'Kim', ProductType.MORNING) is True
        assert self.service.is_listed('A01', 'Lee', ProductType.MORNING) is False

    def test_dedup_by_normalized_company_and_name(self):
        entries = [make_entry('Kim', 'Acme'), make_entry('kim', 'ACME '), make_entry('Lee', 'Acme')]

        unique = WhitelistService.dedup(entries)

        assert len(unique) == 2
        assert unique[0] is entries[0]
        assert unique[1] is entries[2]

    def test_dedup_keeps_same_name_in_different_companies(self):
        entries = [make_entry('Kim', '(주)한화오션'), make_entry('Kim', '한화시스템')]

        assert len(WhitelistService.dedup(entries)) == 2

    def test_validate_capacity_exceeded(self):
        entries = [make_entry(str(i)) for i in range(5)]

        result = self.service.validate_capacity(entries, 3)

        assert result.valid is False
        assert "5" in result.message and "3" in result.message

    def test_validate_capacity_exact_allocation_is_valid(self):
        result = self.service.validate_capacity([make_entry('a'), make_entry('b')], 2)

        assert result.valid is True

    def test_validate_capacity_with_real_messages(self):
        i18n = I18nService(Utility())
        i18n.language = 'ko'
        service = WhitelistService(whitelist_lookup=self.mock_lookup, i18n_service=i18n)

        result = service.validate_capacity([make_entry(str(i)) for i in range(5)], 3)

        assert result.message == "명단 인원(5명)이 할당량(3명)을 초과했습니다."

    def test_export_csv_layout(self):
        entries = [
            make_entry('홍길동', '솔루션 전략'),
            make_entry('Kim', '건설'),
            make_entry('이영희', '솔루션 전략'),
        ]

        csv_text = WhitelistService.export_csv(entries)

        assert csv_text.split('\n') == [
            'NO,계열사명,성명',
            ',솔루션 전략,건설,',
            '1,솔루션 전략,홍길동',
            '2,건설,Kim',
            '3,솔루션 전략,이영희',
        ]

    def test_export_csv_empty(self):
        assert WhitelistService.export_csv([]) == 'NO,계열사명,성명\n,,\n'

    def test_counts_by_product(self):
        lookup = InMemoryWhitelistLookup([
            make_entry('a'), make_entry('b'),
            make_entry('c', product_type=ProductType.EVENING),
        ])
        service = WhitelistService(whitelist_lookup=lookup, i18n_service=self.mock_i18n)

        assert service.counts_by_product('A01') == {
            ProductType.FULL_DAY: 2, ProductType.MORNING: 0, ProductType.EVENING: 1,
        }

    def test_read_excel_names_with_name_header(self):
        content = self._excel_bytes({'NO': [1, 2, 3], '성명': ['홍길동', ' Kim ', None]})

        names = self.service.read_excel_names(content)

        assert names == '홍길동\nKim'

    def test_read_excel_names_without_header_uses_first_column(self):
        content = self._excel_bytes({'홍길동': ['이영희', '박철수']})

        assert self.service.read_excel_names(content) == '홍길동\n이영희\n박철수'

    def test_read_excel_names_invalid_file(self):
        with pytest.raises(GymGateException) as excinfo:
            self.service.read_excel_names(b'not an excel file')

        assert excinfo.value.error_type == GymGateException.ErrorType.FILE_FORMAT_ERROR
        self.mock_i18n.t.assert_called_with('errors.cannot_read_excel')
