# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from pathlib import Path
from gymgate.common.util import Utility
from injector import inject
import logging
import os

DEFAULT_LANGUAGE = 'ko'
LOCALES_DIR = Path(__file__).parent.parent / 'locales'


class I18nService:
    """
    Resolves user-facing messages by dotted key ('guards.company_inactive').
    Missing keys resolve to the key itself so evaluation never fails
    on a translation gap.
    """

    @inject
    def __init__(self, util: Utility):
        self.util = util
        self.language = (os.getenv('GYMGATE_LOCALE') or DEFAULT_LANGUAGE).strip().lower()
        self._catalogs = {}

    def _load_catalog(self, language: str) -> dict:
        if language not in self._catalogs:
            path = LOCALES_DIR / f"{language}.yaml"
            if path.exists():
                self._catalogs[language] = self._flatten(self.util.load_schema_from_yaml(path))
            else:
                logging.warning(f"locale file not found: {path}, falling back to '{DEFAULT_LANGUAGE}'")
                self._catalogs[language] = {}
        return self._catalogs[language]

    def _flatten(self, data: dict, prefix: str = '') -> dict:
        flat = {}
        for key, value in data.items():
            full_key = f"{prefix}.{key}" if prefix else str(key)
            if isinstance(value, dict):
                flat.update(self._flatten(value, full_key))
            else:
                flat[full_key] = str(value)
        return flat

    def t(self, key: str, **kwargs) -> str:
        template = self._load_catalog(self.language).get(key)
        if template is None and self.language != DEFAULT_LANGUAGE:
            template = self._load_catalog(DEFAULT_LANGUAGE).get(key)
        if template is None:
            return key

        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return template
