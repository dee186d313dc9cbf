# Copyright (c) 2025 GymGate contributors
# Product: GymGate
#
# GymGate is open source software.

from enum import Enum


class GymGateException(Exception):
    """
    Raised by the admin-side layers (configuration, spreadsheet import,
    repositories). Guard and eligibility evaluation never raise: they
    report failures through GuardResult.
    """

    class ErrorType(Enum):
        CONFIG_ERROR = 1
        FILE_FORMAT_ERROR = 2
        DATABASE_ERROR = 3
        INVALID_PARAMETER = 4

    def __init__(self, error_type: ErrorType, message: str):
        self.error_type = error_type
        self.message = message
        super().__init__(message)

    def __str__(self):
        return f"{self.error_type.name}: {self.message}"
