# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from __future__ import annotations

from dataclasses import dataclass, field

from injector import inject

from gymgate.common.interfaces.checkout_guard import EligibilityResult
from gymgate.common.snapshots import (
    PRODUCT_TYPES,
    CompanySnapshot,
    ProductType,
    RegistrationMode,
    RegistrationStatus,
    Severity,
)
from gymgate.services import status_classifier
from gymgate.services.i18n_service import I18nService
from gymgate.services.whitelist_service import WhitelistService


@dataclass(frozen=True)
class UserEligibility:
    eligibility: EligibilityResult
    purchasable_products: list[ProductType] = field(default_factory=list)


class EligibilityService:
    """
    Pre-checkout eligibility shown on the landing page. Advisory only:
    checkout re-validates everything through the guard chain.
    """

    @inject
    def __init__(self,
                 i18n_service: I18nService,
                 whitelist_service: WhitelistService):
        self.i18n_service = i18n_service
        self.whitelist_service = whitelist_service

    def _result(self, can_pass: bool, reason_key: str, status: RegistrationStatus, **kwargs) -> EligibilityResult:
        return EligibilityResult(
            can_pass=can_pass,
            reason=self.i18n_service.t(reason_key, **kwargs),
            severity=Severity.SUCCESS if can_pass else Severity.ERROR,
            status=status,
        )

    def check_fcfs(self, company: CompanySnapshot) -> EligibilityResult:
        status = status_classifier.company_status(company)

        if not company.is_active:
            return self._result(False, 'eligibility.not_in_period', status)

        if status == RegistrationStatus.FULL:
            return self._result(False, 'eligibility.closed', status)

        total_quota, total_paid = status_classifier.company_totals(company)
        remaining = total_quota - total_paid

        if status == RegistrationStatus.IMMINENT:
            return self._result(True, 'eligibility.remaining', status, remaining=remaining)

        return self._result(True, 'eligibility.available', status)

    def check_whl(self, company: CompanySnapshot, is_in_whitelist: bool) -> EligibilityResult:
        status = status_classifier.company_status(company)

        if not company.is_active:
            return self._result(False, 'eligibility.not_in_period', status)

        if not is_in_whitelist:
            return self._result(False, 'eligibility.not_in_whitelist', status)

        return self._result(True, 'eligibility.available', status)

    def check_eligibility(self, company: CompanySnapshot, is_in_whitelist: bool = False) -> EligibilityResult:
        if company.mode == RegistrationMode.WHL:
            return self.check_whl(company, is_in_whitelist)
        return self.check_fcfs(company)

    def check_user_eligibility(self, company: CompanySnapshot, user_name: str) -> UserEligibility:
        """
        Resolves whitelist membership for the user and returns the verdict
        together with the product types the user may buy.
        """
        if company.mode != RegistrationMode.WHL:
            result = self.check_fcfs(company)
            return UserEligibility(result, list(PRODUCT_TYPES) if result.can_pass else [])

        products = self.whitelist_service.find_all_products_for_user(company.code, user_name)
        result = self.check_whl(company, is_in_whitelist=bool(products))
        return UserEligibility(result, products if result.can_pass else [])

    def check_product_eligibility(self,
                                  company: CompanySnapshot,
                                  user_name: str,
                                  product_type: ProductType) -> EligibilityResult:
        user = self.check_user_eligibility(company, user_name)
        if not user.eligibility.can_pass:
            return user.eligibility

        if company.mode == RegistrationMode.WHL and product_type not in user.purchasable_products:
            return self._result(False,
                                'eligibility.product_not_in_whitelist',
                                user.eligibility.status,
                                product_type=product_type.value)
        return user.eligibility
