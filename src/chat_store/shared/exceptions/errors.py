"""
목적: 대화 저장소 예외 분류를 제공한다.
설명: NotFound/AlreadyExists/Forbidden/StoreUnavailable 네 가지 결과를 코드가 고정된 예외로 표현하고,
      로그에 그대로 실을 수 있는 사전 형태를 제공한다.
디자인 패턴: 도메인 예외 객체
참조: src/chat_store/shared/exceptions/models.py, src/chat_store/integrations/kv/client.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from chat_store.shared.exceptions.models import ExceptionDetail


class ChatStoreError(Exception):
    """대화 저장소 예외의 공통 부모이다.

    detail을 생략하면 클래스의 code와 키워드 인자로 상세 모델을 만든다.
    operation/engine/pk/sk는 전용 필드로, 나머지 키워드는 metadata로 들어간다.

    Args:
        message: 호출자에게 전달할 메시지.
        detail: 미리 만든 상세 모델.
        original: 감싼 원본 예외.
    """

    code = "CHAT_STORE_ERROR"

    def __init__(
        self,
        message: str,
        detail: Optional[ExceptionDetail] = None,
        original: Optional[Exception] = None,
        *,
        cause: Optional[str] = None,
        hint: Optional[str] = None,
        operation: Optional[str] = None,
        engine: Optional[str] = None,
        pk: Optional[str] = None,
        sk: Optional[str] = None,
        **metadata: Any,
    ) -> None:
        super().__init__(message)
        if detail is None:
            detail = ExceptionDetail(
                code=self.code,
                cause=cause if cause is not None else (str(original) if original else None),
                hint=hint,
                operation=operation,
                engine=engine,
                pk=pk,
                sk=sk,
                metadata=metadata,
            )
        self._message = message
        self._detail = detail
        self._original = original

    @property
    def message(self) -> str:
        return self._message

    @property
    def detail(self) -> ExceptionDetail:
        return self._detail

    @property
    def original(self) -> Optional[Exception]:
        return self._original

    def to_dict(self) -> Dict[str, Any]:
        """로그 메타데이터로 쓰는 평탄한 사전을 반환한다. 비어 있는 필드는 생략한다."""

        payload: Dict[str, Any] = {"code": self._detail.code, "message": self._message}
        for name in ("cause", "hint", "operation", "engine"):
            value = getattr(self._detail, name)
            if value is not None:
                payload[name] = value
        if self._detail.key is not None:
            payload["key"] = self._detail.key
        payload.update(self._detail.metadata)
        if self._original is not None:
            payload["original"] = repr(self._original)
        return payload


class NotFoundError(ChatStoreError):
    """대상 엔티티가 존재하지 않는다."""

    code = "NOT_FOUND"


class AlreadyExistsError(ChatStoreError):
    """생성 시 유일성 조건을 위반했다."""

    code = "ALREADY_EXISTS"


class ForbiddenError(ChatStoreError):
    """소유권 확인에 실패했다."""

    code = "FORBIDDEN"


class StoreUnavailableError(ChatStoreError):
    """백엔드 저장소 I/O가 실패했다."""

    code = "STORE_UNAVAILABLE"
