# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

"""
Checkout guards, one class per admission check.

Each guard reads the shared CheckoutContext and returns GuardResult values;
none of them touches storage or mutates the context. The chain order is
DEFAULT_GUARD_ORDER unless configuration overrides it (checkout.guard_order).
Later guards assume earlier ones passed: FCFS capacity is only meaningful
once the company is known to be active and to be the user's own.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable
import logging

from gymgate.common.exceptions import GymGateException
from gymgate.common.interfaces.checkout_guard import CheckoutContext, CheckoutGuard, GuardResult
from gymgate.common.snapshots import RegistrationMode, Severity
from gymgate.services import status_classifier
from gymgate.services.i18n_service import I18nService


class MessageGuard(CheckoutGuard):
    """Guard base with access to the message catalog."""

    def __init__(self, i18n_service: I18nService):
        self.i18n_service = i18n_service

    def fail(self, key: str, severity: Severity = Severity.ERROR, **kwargs) -> GuardResult:
        return GuardResult.failed(self.i18n_service.t(key, **kwargs), severity)


class CompanyActiveGuard(MessageGuard):
    name = "company_active"

    def evaluate(self, context: CheckoutContext) -> GuardResult:
        if not context.company.is_active:
            return self.fail('guards.company_inactive')
        return GuardResult.passed()


class CompanyMatchGuard(MessageGuard):
    """Blocks users trying to buy against another company's allocation."""

    name = "company_match"

    def evaluate(self, context: CheckoutContext) -> GuardResult:
        if context.user_company_id != context.company.code:
            return self.fail('guards.company_mismatch')
        return GuardResult.passed()


class RegistrationPeriodGuard(MessageGuard):
    """
    Registration window check. Payments are currently controlled by the
    company active switch alone, so this passes unless both
    guard_flags.enforce_registration_period and registration_period.enabled
    are set. The company's own window takes precedence over the global one.
    """

    name = "registration_period"

    def evaluate(self, context: CheckoutContext) -> GuardResult:
        settings = context.settings
        if not (settings.guard_flags.enforce_registration_period and settings.registration_period.enabled):
            return GuardResult.passed()

        today = (context.now or datetime.now()).date()
        start = context.company.available_from or settings.registration_period.start_date
        end = context.company.available_until or settings.registration_period.end_date

        if start and today < start:
            return self.fail('guards.period_not_started')
        if end and today > end:
            return self.fail('guards.period_ended')
        return GuardResult.passed()


class FcfsRemainingGuard(MessageGuard):
    name = "fcfs_remaining"

    def evaluate(self, context: CheckoutContext) -> GuardResult:
        if context.company.mode != RegistrationMode.FCFS:
            return GuardResult.passed()

        total_quota, total_paid = status_classifier.company_totals(context.company)
        if total_quota - total_paid <= 0:
            return self.fail('guards.fcfs_closed')
        return GuardResult.passed()


class WhitelistVerificationGuard(MessageGuard):
    name = "whitelist_verification"

    def evaluate(self, context: CheckoutContext) -> GuardResult:
        if context.company.mode != RegistrationMode.WHL:
            return GuardResult.passed()

        if not context.is_whitelist_verified:
            return self.fail('guards.whitelist_unverified')
        return GuardResult.passed()


class ProductSelectedGuard(MessageGuard):
    name = "product_selected"

    def evaluate(self, context: CheckoutContext) -> GuardResult:
        if len(context.selected_products) == 0:
            return self.fail('guards.no_product_selected', Severity.WARNING)
        return GuardResult.passed()


class ProductActiveGuard(MessageGuard):
    """Runs once per selected product id."""

    name = "product_active"

    def evaluate_product(self, context: CheckoutContext, product_id: str) -> GuardResult:
        product = context.find_product(product_id)
        if product is None:
            logging.warning(f"checkout references unknown product id '{product_id}'")
            return self.fail('guards.product_not_found')

        if not context.settings.product_status.memberships.is_enabled(product.product_type):
            return self.fail('guards.product_inactive', product_name=product.name)
        return GuardResult.passed()

    def evaluate_each(self, context: CheckoutContext) -> Iterable[GuardResult]:
        for product_id in context.selected_products:
            yield self.evaluate_product(context, product_id)

    def evaluate(self, context: CheckoutContext) -> GuardResult:
        for result in self.evaluate_each(context):
            if not result.can_pass:
                return result
        return GuardResult.passed()


class LockerActiveGuard(MessageGuard):
    name = "locker_active"

    def evaluate(self, context: CheckoutContext) -> GuardResult:
        if context.selected_locker and not context.settings.product_status.locker:
            return self.fail('guards.locker_inactive')
        return GuardResult.passed()


class RequiredAgreementsGuard(MessageGuard):
    """
    Agreements are collected at sign-up, not at payment, so this always
    passes. agreement_checks is still part of the context.
    """

    name = "required_agreements"

    def evaluate(self, context: CheckoutContext) -> GuardResult:
        return GuardResult.passed()


GUARD_REGISTRY: dict[str, type[MessageGuard]] = {
    guard_class.name: guard_class
    for guard_class in (
        CompanyActiveGuard,
        CompanyMatchGuard,
        RegistrationPeriodGuard,
        FcfsRemainingGuard,
        WhitelistVerificationGuard,
        ProductSelectedGuard,
        ProductActiveGuard,
        LockerActiveGuard,
        RequiredAgreementsGuard,
    )
}

DEFAULT_GUARD_ORDER: tuple[str, ...] = (
    "company_active",
    "company_match",
    "registration_period",
    "fcfs_remaining",
    "whitelist_verification",
    "product_selected",
    "product_active",
    "locker_active",
    "required_agreements",
)


def build_guards(i18n_service: I18nService, order: Iterable[str] | None = None) -> list[CheckoutGuard]:
    """Instantiates the guards named in `order`, keeping that order."""
    names = list(order) if order is not None else list(DEFAULT_GUARD_ORDER)

    unknown = [n for n in names if n not in GUARD_REGISTRY]
    if unknown:
        raise GymGateException(GymGateException.ErrorType.CONFIG_ERROR,
                               f"unknown checkout guards: {', '.join(unknown)}")

    return [GUARD_REGISTRY[n](i18n_service) for n in names]
