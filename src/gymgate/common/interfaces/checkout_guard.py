# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping

from gymgate.common.snapshots import (
    CompanySnapshot,
    GlobalSettings,
    Product,
    RegistrationStatus,
    Severity,
)


@dataclass(frozen=True)
class GuardResult:
    """Verdict of one admission check. The reason is shown to the end user."""

    can_pass: bool
    reason: str = ""
    severity: Severity = Severity.SUCCESS

    @classmethod
    def passed(cls, reason: str = "") -> GuardResult:
        return cls(can_pass=True, reason=reason, severity=Severity.SUCCESS)

    @classmethod
    def failed(cls, reason: str, severity: Severity = Severity.ERROR) -> GuardResult:
        return cls(can_pass=False, reason=reason, severity=severity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "can_pass": self.can_pass,
            "reason": self.reason,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class EligibilityResult(GuardResult):
    """Pre-checkout verdict, carrying the capacity status for badge rendering."""

    status: RegistrationStatus = RegistrationStatus.AVAILABLE

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status"] = self.status.value
        return data


@dataclass(frozen=True)
class CheckoutContext:
    """Immutable input bundle shared by every checkout guard."""

    settings: GlobalSettings
    company: CompanySnapshot
    user_company_id: str
    user_name: str = ""
    selected_products: tuple[str, ...] = ()
    selected_locker: bool = False
    is_whitelist_verified: bool = False
    agreement_checks: Mapping[str, bool] = field(default_factory=dict)
    products: tuple[Product, ...] = ()
    now: datetime | None = None

    def find_product(self, product_id: str) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)


class CheckoutGuard(ABC):
    """Contract for one independent, side-effect free checkout check."""

    # stable key used by configuration to order the chain
    name: str = ""

    @abstractmethod
    def evaluate(self, context: CheckoutContext) -> GuardResult:
        """Evaluates the check against the context."""

    def evaluate_each(self, context: CheckoutContext) -> Iterable[GuardResult]:
        """
        Results contributed to the chain. Most guards yield a single result;
        guards that run once per selected item override this.
        """
        yield self.evaluate(context)
