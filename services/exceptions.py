#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BashPointsBot - Custom Exception Hierarchy
Structured error handling for all BPB services
"""

# ============================================================================
# BASE EXCEPTIONS
# ============================================================================

class BPBBaseException(Exception):
    """
    Base exception for all BashPointsBot errors.

    All custom exceptions inherit from this to allow catching all BPB-specific errors.
    Includes structured error data support.
    """
    def __init__(self, message: str, error_code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self):
        """Convert exception to structured dictionary for logging/replies."""
        return {
            'error': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'details': self.details
        }


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================

class ConfigServiceError(BPBBaseException):
    """Base exception for all configuration service errors."""

class ConfigLoadError(ConfigServiceError):
    """Raised when configuration loading fails."""

class MissingConfigError(ConfigLoadError):
    """Raised when required configuration is missing."""


# ============================================================================
# DATABASE/STORAGE EXCEPTIONS
# ============================================================================

class StorageError(BPBBaseException):
    """Base exception for all storage/database errors."""

class StoreUnavailableError(StorageError):
    """Raised when the datastore client cannot be created."""

class PersistenceError(StorageError):
    """
    Raised when a datastore operation fails.

    Carries the raw Postgres diagnostics (code, details, hint) so they can be
    shown to the requesting user.
    """
    def __init__(self, message: str, error_code: str = None, details: dict = None,
                 hint: str = None):
        super().__init__(message, error_code=error_code, details=details)
        self.hint = hint

    @property
    def pg_code(self):
        return self.details.get('code')

class DuplicateRewardKeyError(PersistenceError):
    """Raised when a ledger insert violates the reward key unique constraint."""


# ============================================================================
# DISCORD BOT EXCEPTIONS
# ============================================================================

class BotServiceError(BPBBaseException):
    """Base exception for all bot service errors."""

class EventDispatchError(BotServiceError):
    """Raised when an inbound event cannot be queued for handling."""


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_exception_info(exception: Exception) -> dict:
    """
    Extract structured information from any exception.

    Args:
        exception: The exception to extract info from

    Returns:
        Dictionary with exception details
    """
    if isinstance(exception, BPBBaseException):
        return exception.to_dict()
    else:
        return {
            'error': exception.__class__.__name__,
            'error_code': exception.__class__.__name__,
            'message': str(exception),
            'details': {}
        }
