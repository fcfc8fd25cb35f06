"""
unit_of_work.py - 다단계 쓰기 보상 처리

백엔드 트랜잭션이 없으므로 단계마다 되돌리기(보상) 함수를 등록하고,
중간에 실패하면 등록 역순으로 실행한다.

사용법:
    with UnitOfWork("신청 승인") as uow:
        uow.run("신청 상태 변경", approve, compensate=restore_pending)
        vendor = uow.run("거래처 생성", create_vendor)
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from flyer_portal.core.exceptions import UnitOfWorkError

Compensation = Callable[[], Any]


class UnitOfWork:
    """보상 트랜잭션 (saga)"""

    def __init__(self, name: str, logger: logging.Logger = None):
        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self._compensations: List[Tuple[str, Compensation]] = []
        self.failed_step: Optional[str] = None
        self.completed_steps: List[str] = []

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self._compensations.clear()
            return False

        errors = self.rollback()
        if errors:
            raise UnitOfWorkError(
                f"{self.name} 실패 후 복구하지 못했습니다: {exc}",
                step=self.failed_step,
                compensation_errors=errors,
                cause=exc
            ) from exc

        # 원래 예외 전파
        return False

    def on_rollback(self, step: str, compensate: Compensation):
        """보상 함수 등록"""
        self._compensations.append((step, compensate))

    def run(
        self,
        step: str,
        action: Callable[[], Any],
        compensate: Compensation = None,
        partial: bool = False
    ) -> Any:
        """
        단계 실행

        Args:
            step: 단계 이름 (로그/에러용)
            action: 실행 함수
            compensate: 되돌리기 함수
            partial: True면 실행 전에 보상 함수를 등록 (중간까지 반영될 수 있는 단계)
        """
        if compensate is not None and partial:
            self.on_rollback(step, compensate)

        try:
            result = action()
        except Exception:
            self.failed_step = step
            raise

        if compensate is not None and not partial:
            self.on_rollback(step, compensate)

        self.completed_steps.append(step)
        self.logger.debug(f"[{self.name}] 단계 완료: {step}")
        return result

    def rollback(self) -> List[str]:
        """등록 역순으로 보상 실행, 실패 메시지 목록 반환"""
        errors = []
        self.logger.warning(f"[{self.name}] '{self.failed_step}' 단계 실패, 롤백 시작")

        while self._compensations:
            step, compensate = self._compensations.pop()
            try:
                compensate()
                self.logger.info(f"[{self.name}] 롤백 완료: {step}")
            except Exception as e:
                self.logger.error(f"[{self.name}] 롤백 실패: {step} - {e}")
                errors.append(f"{step}: {e}")

        return errors
