# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from __future__ import annotations

import re

_WHITESPACE = re.compile(r'\s+')
# word characters (letters, digits, underscore in any script) and Hangul syllables
_NOT_COMPANY_CHAR = re.compile(r'[^\w가-힣]')


def normalize_name(name: str | None) -> str:
    """
    Canonical form of a person's name for whitelist matching:
    whitespace removed, lowercased. " Kim Chul  Soo " -> "kimchulsoo".
    """
    text = str(name or '').strip().lower()
    return _WHITESPACE.sub('', text)


def normalize_company_name(company_name: str | None) -> str:
    """
    Canonical form of a company name, used only for duplicate detection.
    Company codes are exact keys and are never normalized.
    """
    # case folding runs before the filter: "İ".lower() emits a combining mark
    text = str(company_name or '').strip().lower()
    text = _WHITESPACE.sub('', text)
    return _NOT_COMPANY_CHAR.sub('', text)
