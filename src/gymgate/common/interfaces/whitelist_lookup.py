# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from __future__ import annotations

from abc import ABC, abstractmethod

from gymgate.common.snapshots import ProductType, WhitelistEntry


class WhitelistLookup(ABC):
    """Source of admission lists, one list per (company code, product type)."""

    @abstractmethod
    def lookup(self, company_code: str, product_type: ProductType) -> list[WhitelistEntry]:
        """Returns the stored entries, or an empty list when none exist."""


class InMemoryWhitelistLookup(WhitelistLookup):
    """Dict-backed lookup for tests, admin previews and scripted imports."""

    def __init__(self, entries: list[WhitelistEntry] | None = None):
        self._lists: dict[tuple[str, ProductType], list[WhitelistEntry]] = {}
        for entry in entries or []:
            self._lists.setdefault((entry.company_code, entry.product_type), []).append(entry)

    def lookup(self, company_code: str, product_type: ProductType) -> list[WhitelistEntry]:
        return list(self._lists.get((company_code, product_type), []))

    def replace(self, company_code: str, product_type: ProductType, entries: list[WhitelistEntry]) -> None:
        self._lists[(company_code, product_type)] = list(entries)
