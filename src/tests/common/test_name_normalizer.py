# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

import pytest
from gymgate.common.name_normalizer import normalize_name, normalize_company_name


class TestNormalizeName:

    def test_whitespace_and_case_are_ignored(self):
        assert normalize_name(" Kim Chul  Soo ") == normalize_name("kimchulsoo")

    def test_korean_names_with_inner_spaces(self):
        assert normalize_name("홍 길동") == "홍길동"

    def test_tabs_and_newlines_are_removed(self):
        assert normalize_name("Lee\tYoung\nHee") == "leeyounghee"

    def test_none_and_empty_are_total(self):
        assert normalize_name(None) == ""
        assert normalize_name("   ") == ""

    def test_punctuation_is_kept_for_person_names(self):
        assert normalize_name("O'Neil") == "o'neil"

    @pytest.mark.parametrize("raw", [" Kim Chul Soo ", "홍 길동", "ÀBC d", "İstanbul", ""])
    def test_idempotent(self, raw):
        once = normalize_name(raw)
        assert normalize_name(once) == once


class TestNormalizeCompanyName:

    def test_spaces_case_and_symbols_are_removed(self):
        assert normalize_company_name(" ACME Corp. ") == "acmecorp"

    def test_hangul_and_parentheses(self):
        assert normalize_company_name("(주)한화오션") == "주한화오션"

    def test_comma_and_slash_are_stripped(self):
        assert normalize_company_name("전략,지원") == "전략지원"
        assert normalize_company_name("한화솔루션/인사이트부문") == "한화솔루션인사이트부문"

    def test_underscore_and_digits_survive(self):
        assert normalize_company_name("B_01 Team 2") == "b_01team2"

    def test_none_is_total(self):
        assert normalize_company_name(None) == ""

    @pytest.mark.parametrize("raw", ["(주)한화오션", " ACME Corp. ", "İnc.", "a-b c"])
    def test_idempotent(self, raw):
        once = normalize_company_name(raw)
        assert normalize_company_name(once) == once
