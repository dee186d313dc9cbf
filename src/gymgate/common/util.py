# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from pathlib import Path
from datetime import date, datetime
from gymgate.common.exceptions import GymGateException
import yaml


class Utility:

    def load_schema_from_yaml(self, file_path) -> dict:
        """Reads a YAML file and returns its content, an empty file gives {}."""
        path = Path(file_path)
        try:
            with path.open('r', encoding='utf-8') as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise GymGateException(GymGateException.ErrorType.CONFIG_ERROR,
                                   f"invalid yaml in {path}: {e}") from e
        return content or {}

    @staticmethod
    def to_int(value) -> int:
        # admin-entered quotas can be blank, None or text
        if value is None or isinstance(value, bool):
            return 0
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            try:
                return int(float(value))
            except (TypeError, ValueError, OverflowError):
                return 0

    @staticmethod
    def to_date(value) -> date | None:
        """Accepts date, datetime, ISO string or None."""
        if value is None or value == '':
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return datetime.fromisoformat(str(value).strip()).date()
        except ValueError:
            return None
