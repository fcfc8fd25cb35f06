"""코어 모듈"""
from .exceptions import (
    FlyerPortalError,
    ValidationError,
    ConfigurationError,
    APIError,
    SupabaseError,
    UnitOfWorkError,
    ErrorCodes,
)
from .logging import setup_logger, configure_logging, PerformanceLogger

__all__ = [
    # 예외
    "FlyerPortalError",
    "ValidationError",
    "ConfigurationError",
    "APIError",
    "SupabaseError",
    "UnitOfWorkError",
    "ErrorCodes",
    # 로깅
    "setup_logger",
    "PerformanceLogger",
    "configure_logging",
]
