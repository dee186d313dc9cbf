# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta

from injector import inject

from gymgate.common.snapshots import GlobalSettings
from gymgate.services.i18n_service import I18nService


@dataclass(frozen=True)
class PaymentRecord:
    """A previous purchase of the user, as read from payment history."""

    id: int | str
    membership_type: str
    membership_period: int
    membership_start_date: date | None = None
    membership_end_date: date | None = None
    has_locker: bool = False
    locker_period: int = 0
    locker_start_date: date | None = None
    locker_end_date: date | None = None
    status: str = "completed"
    refunded: bool = False


@dataclass(frozen=True)
class PurchaseRequest:
    membership_type: str
    membership_period: int
    has_locker: bool = False
    locker_period: int = 0


@dataclass(frozen=True)
class OverlapResult:
    has_overlap: bool
    message: str
    overlapping: list[PaymentRecord] = field(default_factory=list)


def end_date(start: date, months: int) -> date:
    """
    Last day of a `months`-long period starting on `start`.
    The day is clamped to the target month's length (Jan 31 + 1 month -> Feb 28/29).
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day) - timedelta(days=1)


def periods_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    """Inclusive on both ends."""
    return start1 <= end2 and end1 >= start2


class OverlapService:
    """
    Rejects a purchase whose usage period overlaps a membership (or locker)
    the user already paid for. Only completed, non-refunded payments count.
    """

    @inject
    def __init__(self, i18n_service: I18nService):
        self.i18n_service = i18n_service

    def check_overlap(self,
                      existing_payments: list[PaymentRecord],
                      purchase: PurchaseRequest,
                      settings: GlobalSettings,
                      today: date | None = None) -> OverlapResult:
        active = [p for p in existing_payments if p.status == "completed" and not p.refunded]
        if not active:
            return OverlapResult(False, self.i18n_service.t('overlap.no_history'))

        today = today or date.today()
        membership_start = settings.membership_start_date or today
        locker_start = settings.locker_start_date or today
        membership_end = end_date(membership_start, purchase.membership_period)
        locker_end = end_date(locker_start, purchase.locker_period) if purchase.has_locker else None

        overlapping = []
        for payment in active:
            existing_start = payment.membership_start_date or membership_start
            existing_end = payment.membership_end_date or end_date(existing_start, payment.membership_period)
            membership_overlap = periods_overlap(membership_start, membership_end, existing_start, existing_end)

            locker_overlap = False
            if locker_end and payment.has_locker:
                existing_locker_start = payment.locker_start_date or locker_start
                existing_locker_end = (payment.locker_end_date
                                       or end_date(existing_locker_start, payment.locker_period))
                locker_overlap = periods_overlap(locker_start, locker_end,
                                                 existing_locker_start, existing_locker_end)

            if membership_overlap or locker_overlap:
                overlapping.append(payment)

        if overlapping:
            membership_types = ', '.join(dict.fromkeys(p.membership_type for p in overlapping))
            return OverlapResult(True,
                                 self.i18n_service.t('overlap.found', membership_types=membership_types),
                                 overlapping)

        return OverlapResult(False, self.i18n_service.t('overlap.none'))
