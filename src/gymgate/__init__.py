# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from gymgate.gymgate import GymGate
from gymgate.common.exceptions import GymGateException
from gymgate.common.interfaces.checkout_guard import (
    CheckoutContext, CheckoutGuard, EligibilityResult, GuardResult,
)
from gymgate.common.interfaces.whitelist_lookup import InMemoryWhitelistLookup, WhitelistLookup
from gymgate.common.snapshots import (
    CompanySnapshot, CompanyStatus, GlobalSettings, Product, ProductCounts, ProductType,
    RegistrationMode, RegistrationStatus, Severity, WhitelistEntry,
)
from gymgate.services.eligibility_service import EligibilityService
from gymgate.services.guard_chain_service import GuardChainService
from gymgate.services.whitelist_service import WhitelistService

__all__ = [
    'GymGate',
    'GymGateException',
    'CheckoutContext',
    'CheckoutGuard',
    'EligibilityResult',
    'GuardResult',
    'InMemoryWhitelistLookup',
    'WhitelistLookup',
    'CompanySnapshot',
    'CompanyStatus',
    'GlobalSettings',
    'Product',
    'ProductCounts',
    'ProductType',
    'RegistrationMode',
    'RegistrationStatus',
    'Severity',
    'WhitelistEntry',
    'EligibilityService',
    'GuardChainService',
    'WhitelistService',
]
