# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from gymgate.common.interfaces.checkout_guard import CheckoutContext, CheckoutGuard, GuardResult
from gymgate.services.checkout_guards import build_guards
from gymgate.services.i18n_service import I18nService
from gymgate.services.settings_service import SettingsService
from injector import inject
import logging


class GuardChainService:
    """
    Checkout-time authorization. Runs the configured guards in priority
    order and returns the first failure, or a generic success when every
    guard passes.
    """

    @inject
    def __init__(self,
                 i18n_service: I18nService,
                 settings_service: SettingsService):
        self.i18n_service = i18n_service
        self.guards = build_guards(i18n_service, settings_service.get_guard_order())

    @classmethod
    def with_guards(cls, i18n_service: I18nService, guards: list[CheckoutGuard]) -> 'GuardChainService':
        """Chain over an explicit guard list, bypassing configuration."""
        chain = cls.__new__(cls)
        chain.i18n_service = i18n_service
        chain.guards = list(guards)
        return chain

    def run(self, context: CheckoutContext) -> GuardResult:
        for guard in self.guards:
            for result in guard.evaluate_each(context):
                if not result.can_pass:
                    logging.debug(f"checkout blocked by '{guard.name}' for company "
                                  f"'{context.company.code}': {result.reason}")
                    return result

        return GuardResult.passed(self.i18n_service.t('guards.all_passed'))

    def evaluate_all(self, context: CheckoutContext) -> list[tuple[str, GuardResult]]:
        """Every guard result in chain order, without short-circuit. Used by admin test screens."""
        return [
            (guard.name, result)
            for guard in self.guards
            for result in guard.evaluate_each(context)
        ]
