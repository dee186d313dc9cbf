# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from pathlib import Path
from gymgate.common.exceptions import GymGateException
from gymgate.common.snapshots import (
    GlobalSettings, GuardFlags, MembershipToggles, ProductCounts, ProductStatus, RegistrationPeriod,
)
from gymgate.common.util import Utility
from injector import inject
import logging
import os

DEFAULT_SETTINGS_PATH = Path("config") / "settings.yaml"


class SettingsService:
    """
    Loads the global settings (product toggles, registration window,
    prices, feature flags) from settings.yaml into an immutable
    GlobalSettings snapshot. Callers pass the snapshot by value into each
    evaluation; nothing reads settings from module state.
    """

    @inject
    def __init__(self, util: Utility):
        self.util = util
        self._config = None
        self._settings = None

    def _settings_path(self, path=None) -> Path:
        return Path(path or os.getenv('GYMGATE_SETTINGS_PATH') or DEFAULT_SETTINGS_PATH)

    def load(self, path=None) -> GlobalSettings:
        settings_path = self._settings_path(path)

        if settings_path.exists():
            config = self.util.load_schema_from_yaml(settings_path)
            logging.info(f"loaded settings from {settings_path}")
        else:
            logging.warning(f"settings file not found: {settings_path}, using built-in defaults")
            config = {}

        self._settings = self.settings_from_dict(config, source=str(settings_path))
        self._config = config
        return self._settings

    def get_settings(self) -> GlobalSettings:
        if self._settings is None:
            self.load()
        return self._settings

    def get_guard_order(self) -> list[str] | None:
        """Guard names from checkout.guard_order, or None for the default order."""
        if self._config is None:
            self.load()
        order = (self._config.get('checkout') or {}).get('guard_order')
        return list(order) if order else None

    def settings_from_dict(self, config: dict, source: str = 'settings') -> GlobalSettings:
        self._validate(config, source)
        defaults = GlobalSettings()

        status = config.get('product_status') or {}
        memberships = status.get('memberships') or {}
        period = config.get('registration_period') or {}
        flags = config.get('guard_flags') or {}

        return GlobalSettings(
            version=Utility.to_int(config.get('version', defaults.version)),
            product_status=ProductStatus(
                memberships=MembershipToggles(
                    full_day=memberships.get('full_day', memberships.get('fullDay', True)),
                    morning=memberships.get('morning', True),
                    evening=memberships.get('evening', True),
                ),
                locker=status.get('locker', True),
            ),
            registration_period=RegistrationPeriod(
                enabled=period.get('enabled', False),
                start_date=Utility.to_date(period.get('start_date', defaults.registration_period.start_date)),
                end_date=Utility.to_date(period.get('end_date', defaults.registration_period.end_date)),
            ),
            guard_flags=GuardFlags(
                enforce_registration_period=flags.get('enforce_registration_period', False),
            ),
            membership_prices=(ProductCounts.from_dict(config['membership_prices'])
                               if 'membership_prices' in config else defaults.membership_prices),
            locker_price=Utility.to_int(config.get('locker_price', defaults.locker_price)),
            membership_period=Utility.to_int(config.get('membership_period', defaults.membership_period)),
            locker_period=Utility.to_int(config.get('locker_period', defaults.locker_period)),
            membership_start_date=Utility.to_date(
                config.get('membership_start_date', defaults.membership_start_date)),
            locker_start_date=Utility.to_date(config.get('locker_start_date', defaults.locker_start_date)),
            max_registrations=Utility.to_int(config.get('max_registrations', defaults.max_registrations)),
        )

    def _validate(self, config: dict, source: str):
        """
        Collects every problem in the settings file and raises once.
        """
        errors = []

        def add_error(section, message):
            errors.append(f"[{section}] {message}")

        if not isinstance(config, dict):
            add_error("General", "settings must be a mapping")
            config = {}

        def mapping(parent, key, label):
            value = parent.get(key)
            if value is None:
                return {}
            if not isinstance(value, dict):
                add_error(label, "must be a mapping")
                return {}
            return value

        # 1. toggles must be real booleans, a quoted "false" would enable the product
        status = mapping(config, 'product_status', "product_status")
        memberships = mapping(status, 'memberships', "product_status.memberships")
        for key, value in memberships.items():
            if not isinstance(value, bool):
                add_error("product_status.memberships", f"'{key}' must be true or false")
        if 'locker' in status and not isinstance(status['locker'], bool):
            add_error("product_status", "'locker' must be true or false")

        # 2. registration window
        period = mapping(config, 'registration_period', "registration_period")
        if 'enabled' in period and not isinstance(period['enabled'], bool):
            add_error("registration_period", "'enabled' must be true or false")
        for key in ('start_date', 'end_date'):
            if key in period and Utility.to_date(period[key]) is None:
                add_error("registration_period", f"'{key}' is not a valid date")
        start = Utility.to_date(period.get('start_date'))
        end = Utility.to_date(period.get('end_date'))
        if start and end and start > end:
            add_error("registration_period", "'start_date' is after 'end_date'")

        flags = mapping(config, 'guard_flags', "guard_flags")
        for key, value in flags.items():
            if not isinstance(value, bool):
                add_error("guard_flags", f"'{key}' must be true or false")

        # 3. prices and periods
        for key, value in mapping(config, 'membership_prices', "membership_prices").items():
            if Utility.to_int(value) < 0:
                add_error("membership_prices", f"'{key}' cannot be negative")
        if Utility.to_int(config.get('locker_price', 0)) < 0:
            add_error("General", "'locker_price' cannot be negative")
        for key in ('membership_period', 'locker_period'):
            if key in config and Utility.to_int(config[key]) < 1:
                add_error("General", f"'{key}' must be at least 1 month")
        for key in ('membership_start_date', 'locker_start_date'):
            if key in config and Utility.to_date(config[key]) is None:
                add_error("General", f"'{key}' is not a valid date")

        # 4. guard order
        order = mapping(config, 'checkout', "checkout").get('guard_order')
        if order is not None and (not isinstance(order, list) or not all(isinstance(n, str) for n in order)):
            add_error("checkout", "'guard_order' must be a list of guard names")

        if errors:
            error_summary = f"settings file '{source}' has validation errors:\n" + "\n".join(
                f" - {e}" for e in errors)
            logging.error(error_summary)

            raise GymGateException(
                GymGateException.ErrorType.CONFIG_ERROR,
                'settings.yaml validation errors'
            )
