"""
커스텀 예외 클래스

Flyer Portal에서 사용하는 모든 커스텀 예외를 정의

- 검증 오류: 호출자에게 그대로 전달 (재시도 없음)
- 조회 실패(없음): 예외가 아니라 None 반환
- 백엔드 오류: SupabaseError로 감싸서 전파
"""

from typing import Optional, Dict, Any, List


class FlyerPortalError(Exception):
    """기본 예외 클래스"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        """
        Args:
            message: 에러 메시지
            error_code: 에러 코드
            details: 추가 상세 정보
            cause: 원인 예외
        """
        self.message = message
        self.error_code = error_code or self._default_code()
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def _default_code(self) -> str:
        return "FLY_UNKNOWN"

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ValidationError(FlyerPortalError):
    """데이터 검증 오류 (가격/할인율/slug 범위, 형식 위반)"""

    def __init__(
        self,
        message: str,
        field: str = None,
        value: Any = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        details = kwargs.pop("details", {})
        details["field"] = field
        details["value"] = str(value)[:100]  # 값 길이 제한
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "FLY_VALIDATION"


class ConfigurationError(FlyerPortalError):
    """설정 오류"""

    def __init__(
        self,
        message: str,
        config_key: str = None,
        **kwargs
    ):
        self.config_key = config_key
        details = kwargs.pop("details", {})
        details["config_key"] = config_key
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "FLY_CONFIG"


class APIError(FlyerPortalError):
    """원격 API 호출 오류 (기본)"""

    def __init__(
        self,
        message: str,
        status_code: int = None,
        endpoint: str = None,
        **kwargs
    ):
        self.status_code = status_code
        self.endpoint = endpoint
        details = kwargs.pop("details", {})
        details["status_code"] = status_code
        details["endpoint"] = endpoint
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "FLY_API"


class SupabaseError(APIError):
    """Supabase 쿼리 오류"""

    def __init__(
        self,
        message: str,
        table: str = None,
        operation: str = None,
        **kwargs
    ):
        self.table = table
        self.operation = operation
        details = kwargs.pop("details", {})
        details["table"] = table
        details["operation"] = operation
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "FLY_SUPABASE"


class UnitOfWorkError(FlyerPortalError):
    """다단계 쓰기 중 보상(롤백) 실패"""

    def __init__(
        self,
        message: str,
        step: str = None,
        compensation_errors: List[str] = None,
        **kwargs
    ):
        self.step = step
        self.compensation_errors = compensation_errors or []
        details = kwargs.pop("details", {})
        details["step"] = step
        details["compensation_errors"] = self.compensation_errors
        super().__init__(message, details=details, **kwargs)

    def _default_code(self) -> str:
        return "FLY_UNIT_OF_WORK"


# 에러 코드 상수
class ErrorCodes:
    """에러 코드 상수"""

    # 일반
    UNKNOWN = "FLY_UNKNOWN"
    VALIDATION = "FLY_VALIDATION"
    CONFIG = "FLY_CONFIG"

    # 가격/slug
    INVALID_PRICE = "FLY_INVALID_PRICE"
    INVALID_DISCOUNT = "FLY_INVALID_DISCOUNT"
    INVALID_SLUG = "FLY_INVALID_SLUG"

    # 백엔드
    API_ERROR = "FLY_API"
    SUPABASE_ERROR = "FLY_SUPABASE"
    UPLOAD_FAILED = "FLY_UPLOAD_FAILED"

    # 다단계 쓰기
    UNIT_OF_WORK = "FLY_UNIT_OF_WORK"
    TICKET_CLOSED = "FLY_TICKET_CLOSED"
    INVALID_TRANSITION = "FLY_INVALID_TRANSITION"
