# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

import pytest
from datetime import date
from unittest.mock import MagicMock
from gymgate.common.snapshots import GlobalSettings
from gymgate.services.i18n_service import I18nService
from gymgate.services.overlap_service import (
    OverlapService, PaymentRecord, PurchaseRequest, end_date, periods_overlap,
)


class TestOverlapService:

    def setup_method(self):
        self.mock_i18n = MagicMock(spec=I18nService)
        self.mock_i18n.t.side_effect = lambda key, **kwargs: f"translated:{key}:{kwargs}"
        self.service = OverlapService(self.mock_i18n)
        self.settings = GlobalSettings(membership_start_date=date(2025, 4, 1),
                                       locker_start_date=date(2025, 4, 1))

    @pytest.mark.parametrize("start,months,expected", [
        (date(2025, 1, 1), 3, date(2025, 3, 31)),
        (date(2025, 11, 1), 3, date(2026, 1, 31)),
        (date(2025, 1, 31), 1, date(2025, 2, 27)),
        (date(2024, 1, 31), 1, date(2024, 2, 28)),
    ])
    def test_end_date(self, start, months, expected):
        assert end_date(start, months) == expected

    def test_periods_overlap_is_inclusive(self):
        assert periods_overlap(date(2025, 1, 1), date(2025, 3, 31), date(2025, 3, 31), date(2025, 6, 30))
        assert not periods_overlap(date(2025, 1, 1), date(2025, 3, 31), date(2025, 4, 1), date(2025, 6, 30))

    def test_no_history(self):
        result = self.service.check_overlap([], PurchaseRequest('fullDay', 3), self.settings)

        assert result.has_overlap is False
        self.mock_i18n.t.assert_called_with('overlap.no_history')

    def test_refunded_and_pending_payments_are_ignored(self):
        payments = [
            PaymentRecord(id=1, membership_type='fullDay', membership_period=3, refunded=True),
            PaymentRecord(id=2, membership_type='fullDay', membership_period=3, status='pending'),
        ]

        result = self.service.check_overlap(payments, PurchaseRequest('fullDay', 3), self.settings)

        assert result.has_overlap is False
        assert result.message.startswith('translated:overlap.no_history')

    def test_same_period_overlaps(self):
        payment = PaymentRecord(id=1, membership_type='morning', membership_period=3)

        result = self.service.check_overlap([payment], PurchaseRequest('fullDay', 3), self.settings)

        assert result.has_overlap is True
        assert result.overlapping == [payment]
        self.mock_i18n.t.assert_called_with('overlap.found', membership_types='morning')

    def test_earlier_period_does_not_overlap(self):
        payment = PaymentRecord(id=1, membership_type='fullDay', membership_period=3,
                                membership_start_date=date(2025, 1, 1),
                                membership_end_date=date(2025, 3, 31))

        result = self.service.check_overlap([payment], PurchaseRequest('fullDay', 3), self.settings)

        assert result.has_overlap is False
        self.mock_i18n.t.assert_called_with('overlap.none')

    def test_locker_overlap_alone_is_reported(self):
        payment = PaymentRecord(id=1, membership_type='evening', membership_period=3,
                                membership_start_date=date(2025, 1, 1),
                                membership_end_date=date(2025, 3, 31),
                                has_locker=True, locker_period=6,
                                locker_start_date=date(2025, 1, 1))

        with_locker = self.service.check_overlap([payment], PurchaseRequest('evening', 3, True, 3), self.settings)
        without_locker = self.service.check_overlap([payment], PurchaseRequest('evening', 3), self.settings)

        assert with_locker.has_overlap is True
        assert without_locker.has_overlap is False
