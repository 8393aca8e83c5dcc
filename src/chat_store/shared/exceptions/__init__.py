"""
목적: 예외 모듈 공개 API를 제공한다.
설명: 외부에서 사용할 예외 상세 모델과 저장소 예외 분류를 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/shared/exceptions/models.py, src/chat_store/shared/exceptions/errors.py
"""

from chat_store.shared.exceptions.errors import (
    AlreadyExistsError,
    ChatStoreError,
    ForbiddenError,
    NotFoundError,
    StoreUnavailableError,
)
from chat_store.shared.exceptions.models import ExceptionDetail

__all__ = [
    "ExceptionDetail",
    "ChatStoreError",
    "NotFoundError",
    "AlreadyExistsError",
    "ForbiddenError",
    "StoreUnavailableError",
]
