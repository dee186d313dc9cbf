# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from dotenv import load_dotenv
from injector import Binder, Injector, singleton
from gymgate.common.interfaces.whitelist_lookup import InMemoryWhitelistLookup, WhitelistLookup
from gymgate.common.util import Utility
from gymgate.repositories.database_manager import DatabaseManager
from gymgate.repositories.whitelist_repo import WhitelistRepo
from gymgate.services.i18n_service import I18nService
from gymgate.services.settings_service import SettingsService
import logging
import os


class GymGate:
    """
    Wires the engine for a host application: environment, logging,
    settings and the whitelist storage, all resolved through one Injector.

        injector = GymGate().create_injector()
        chain = injector.get(GuardChainService)
    """

    def __init__(self,
                 database_url: str | None = None,
                 settings_path: str | None = None,
                 whitelist_lookup: WhitelistLookup | None = None):
        self.database_url = database_url
        self.settings_path = settings_path
        self.whitelist_lookup = whitelist_lookup
        self._injector = None

    def _setup_logging(self):
        log_level_name = os.getenv('GYMGATE_LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_name, logging.INFO)
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - GYMGATE - %(name)s - %(levelname)s - %(message)s",
        )

    def _configure(self, binder: Binder):
        utility = Utility()
        binder.bind(Utility, to=utility, scope=singleton)
        binder.bind(I18nService, to=I18nService(utility), scope=singleton)

        settings_service = SettingsService(utility)
        settings_service.load(self.settings_path)
        binder.bind(SettingsService, to=settings_service, scope=singleton)

        if self.whitelist_lookup is not None:
            binder.bind(WhitelistLookup, to=self.whitelist_lookup, scope=singleton)
        elif self.database_url:
            db_manager = DatabaseManager(self.database_url)
            db_manager.create_all()
            binder.bind(DatabaseManager, to=db_manager, scope=singleton)
            binder.bind(WhitelistLookup, to=WhitelistRepo, scope=singleton)
        else:
            logging.warning("no database configured, whitelists are kept in memory")
            binder.bind(WhitelistLookup, to=InMemoryWhitelistLookup(), scope=singleton)

    def create_injector(self) -> Injector:
        if self._injector is not None:
            return self._injector

        load_dotenv()
        self._setup_logging()

        if self.database_url is None:
            self.database_url = os.getenv('GYMGATE_DATABASE_URI')

        self._injector = Injector([self._configure])
        logging.info("GymGate engine ready")
        return self._injector

    def get_injector(self) -> Injector:
        return self.create_injector()
