"""
logging.py - 로깅 설정

- Rich 콘솔 로거
- 다단계 작업(승인, 매장 저장) 실행 시간 추적
"""

import functools
import logging
import time
from contextlib import contextmanager
from typing import Callable

from rich.logging import RichHandler


def setup_logger(name: str = "flyer_portal", level: int = logging.INFO) -> logging.Logger:
    """Rich 포맷 로거 설정"""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger


class PerformanceLogger:
    """성능 추적 로거"""

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)

    @contextmanager
    def track(self, operation: str, **context):
        """
        작업 실행 시간 추적

        사용법:
            with perf_logger.track("신청 승인", request_id=request_id):
                ...
        """
        start_time = time.perf_counter()
        self.logger.debug(f"시작: {operation}", extra={"context": context})

        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start_time
            self.logger.error(
                f"실패: {operation} ({elapsed:.3f}s) - {str(e)}",
                extra={"context": {**context, "error": str(e), "duration_ms": elapsed * 1000}}
            )
            raise
        else:
            elapsed = time.perf_counter() - start_time
            self.logger.info(
                f"완료: {operation} ({elapsed:.3f}s)",
                extra={"context": {**context, "duration_ms": elapsed * 1000}}
            )

    def timed(self, operation: str = None):
        """함수 실행 시간 측정 데코레이터"""
        def decorator(func: Callable):
            op_name = operation or func.__name__

            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                with self.track(op_name):
                    return func(*args, **kwargs)

            return wrapper
        return decorator


def configure_logging(settings) -> logging.Logger:
    """설정(DEBUG, LOG_LEVEL)에 맞춰 패키지 로거 구성"""
    if settings.debug_mode:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(settings.log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    return setup_logger("flyer_portal", level)
