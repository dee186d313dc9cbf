# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

"""
Read-only snapshots handed to the engine by the admin and storage layers.

Every evaluation receives these by value; nothing in here is mutated after
construction. The `from_dict` constructors accept the camelCase payloads the
admin screens store (`fullDay`, `fullDayPaid`, `productStatus`, ...) as well as
snake_case keys, and coerce incomplete numeric data to 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from gymgate.common.util import Utility


class ProductType(str, Enum):
    FULL_DAY = "fullDay"
    MORNING = "morning"
    EVENING = "evening"

    @classmethod
    def parse(cls, value) -> ProductType | None:
        if isinstance(value, cls):
            return value
        for product_type in cls:
            if value in (product_type.value, product_type.name, product_type.name.lower()):
                return product_type
        return None


# enumeration order used everywhere a per-product result list is built
PRODUCT_TYPES: tuple[ProductType, ...] = (ProductType.FULL_DAY, ProductType.MORNING, ProductType.EVENING)


class RegistrationMode(str, Enum):
    FCFS = "FCFS"
    WHL = "WHL"


class CompanyStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class RegistrationStatus(str, Enum):
    AVAILABLE = "available"
    IMMINENT = "imminent"
    FULL = "full"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"


_PRODUCT_KEYS = {
    ProductType.FULL_DAY: ("fullDay", "full_day"),
    ProductType.MORNING: ("morning",),
    ProductType.EVENING: ("evening",),
}


@dataclass(frozen=True)
class ProductCounts:
    """One integer per product type (quota, paid count or price)."""

    full_day: int = 0
    morning: int = 0
    evening: int = 0

    def get(self, product_type: ProductType) -> int:
        if product_type == ProductType.FULL_DAY:
            return self.full_day
        if product_type == ProductType.MORNING:
            return self.morning
        return self.evening

    @property
    def total(self) -> int:
        return self.full_day + self.morning + self.evening

    @classmethod
    def from_dict(cls, data: dict | None) -> ProductCounts:
        data = data or {}
        values = {}
        for product_type, keys in _PRODUCT_KEYS.items():
            raw = next((data[k] for k in keys if k in data), None)
            values[product_type] = Utility.to_int(raw)
        return cls(full_day=values[ProductType.FULL_DAY],
                   morning=values[ProductType.MORNING],
                   evening=values[ProductType.EVENING])


@dataclass(frozen=True)
class CompanySnapshot:
    code: str
    name: str = ""
    mode: RegistrationMode = RegistrationMode.FCFS
    status: CompanyStatus = CompanyStatus.ACTIVE
    quota: ProductCounts = field(default_factory=ProductCounts)
    paid: ProductCounts = field(default_factory=ProductCounts)
    available_from: date | None = None
    available_until: date | None = None

    @property
    def is_active(self) -> bool:
        return self.status == CompanyStatus.ACTIVE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CompanySnapshot:
        """
        Builds a snapshot from an admin row. Paid counts are read from a
        nested `paid` block or from the flat `fullDayPaid`/`morningPaid`/
        `eveningPaid` columns. Unknown modes fall back to FCFS, and anything
        other than "active" is treated as inactive.
        """
        paid = data.get('paid')
        if paid is None:
            paid = {
                'fullDay': data.get('fullDayPaid', data.get('full_day_paid')),
                'morning': data.get('morningPaid', data.get('morning_paid')),
                'evening': data.get('eveningPaid', data.get('evening_paid')),
            }

        mode = RegistrationMode.WHL if str(data.get('mode') or '').upper() == 'WHL' else RegistrationMode.FCFS
        status = CompanyStatus.ACTIVE if str(data.get('status') or '').lower() == 'active' else CompanyStatus.INACTIVE

        return cls(
            code=str(data.get('code') or data.get('id') or ''),
            name=str(data.get('name') or ''),
            mode=mode,
            status=status,
            quota=ProductCounts.from_dict(data.get('quota')),
            paid=ProductCounts.from_dict(paid),
            available_from=Utility.to_date(data.get('availableFrom', data.get('available_from'))),
            available_until=Utility.to_date(data.get('availableUntil', data.get('available_until'))),
        )


@dataclass(frozen=True)
class MembershipToggles:
    full_day: bool = True
    morning: bool = True
    evening: bool = True

    def is_enabled(self, product_type: ProductType) -> bool:
        if product_type == ProductType.FULL_DAY:
            return self.full_day
        if product_type == ProductType.MORNING:
            return self.morning
        return self.evening


@dataclass(frozen=True)
class ProductStatus:
    memberships: MembershipToggles = field(default_factory=MembershipToggles)
    locker: bool = True


@dataclass(frozen=True)
class RegistrationPeriod:
    enabled: bool = False
    start_date: date | None = date(2025, 1, 1)
    end_date: date | None = date(2025, 12, 31)


@dataclass(frozen=True)
class GuardFlags:
    """Feature flags read by individual guards."""

    enforce_registration_period: bool = False


@dataclass(frozen=True)
class GlobalSettings:
    version: int = 1
    product_status: ProductStatus = field(default_factory=ProductStatus)
    registration_period: RegistrationPeriod = field(default_factory=RegistrationPeriod)
    guard_flags: GuardFlags = field(default_factory=GuardFlags)
    membership_prices: ProductCounts = field(
        default_factory=lambda: ProductCounts(full_day=33000, morning=22000, evening=22000))
    locker_price: int = 27500
    membership_period: int = 3
    locker_period: int = 3
    membership_start_date: date | None = date(2025, 1, 1)
    locker_start_date: date | None = date(2025, 1, 1)
    max_registrations: int = 700


@dataclass(frozen=True)
class WhitelistEntry:
    id: str
    company_code: str
    company_name: str
    name: str
    product_type: ProductType
    created_at: datetime | None = None


@dataclass(frozen=True)
class Product:
    """Catalog item offered at checkout."""

    id: str
    name: str
    product_type: ProductType
