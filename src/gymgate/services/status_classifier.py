# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from __future__ import annotations

from gymgate.common.snapshots import CompanySnapshot, RegistrationStatus

# fraction of the quota already sold at which a company is flagged
IMMINENT_THRESHOLD = 0.7
FULL_THRESHOLD = 1.0

_STATUS_VARIANTS = {
    RegistrationStatus.AVAILABLE: "default",
    RegistrationStatus.IMMINENT: "secondary",
    RegistrationStatus.FULL: "destructive",
}

_STATUS_LABELS = {
    RegistrationStatus.AVAILABLE: "여유",
    RegistrationStatus.IMMINENT: "임박",
    RegistrationStatus.FULL: "마감",
}


def registration_rate(registered: int, quota: int) -> float:
    """
    Share of the quota already sold, in [0, 1].
    A quota of 0 means no capacity was defined and yields 0, not full.
    """
    registered = max(registered or 0, 0)
    quota = max(quota or 0, 0)
    if quota == 0:
        return 0.0
    return min(registered / quota, 1.0)


def classify(rate: float) -> RegistrationStatus:
    if rate >= FULL_THRESHOLD:
        return RegistrationStatus.FULL
    if rate >= IMMINENT_THRESHOLD:
        return RegistrationStatus.IMMINENT
    return RegistrationStatus.AVAILABLE


def company_totals(company: CompanySnapshot) -> tuple[int, int]:
    """(total quota, total paid) across fullDay, morning and evening."""
    return company.quota.total, company.paid.total


def company_status(company: CompanySnapshot) -> RegistrationStatus:
    total_quota, total_paid = company_totals(company)
    return classify(registration_rate(total_paid, total_quota))


def status_label(status: RegistrationStatus, i18n_service=None) -> str:
    """Badge text, from the message catalog when one is given."""
    if i18n_service is None:
        return _STATUS_LABELS[status]
    return i18n_service.t(f"status.{status.value}")


def status_variant(status: RegistrationStatus) -> str:
    """Badge variant the UI uses for the status."""
    return _STATUS_VARIANTS[status]
