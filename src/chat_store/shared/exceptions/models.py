"""
목적: 저장소 예외 상세 모델을 정의한다.
설명: 에러 코드와 함께 실패한 저장소 연산, 엔진 이름, 대상 키(PK/SK)를 구조화해 보관한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/chat_store/shared/exceptions/errors.py, src/chat_store/integrations/kv/client.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ExceptionDetail(BaseModel):
    """저장소 예외 상세 정보.

    operation/engine은 EntityStore가 I/O 실패를 감쌀 때 채우고,
    pk/sk는 엔진이 조건부 쓰기 실패를 알릴 때 채운다.
    """

    code: str = Field(..., description="에러 코드")
    cause: Optional[str] = Field(default=None, description="에러 원인")
    hint: Optional[str] = Field(default=None, description="해결 힌트")
    operation: Optional[str] = Field(default=None, description="실패한 저장소 연산 이름")
    engine: Optional[str] = Field(default=None, description="저장소 엔진 이름")
    pk: Optional[str] = Field(default=None, description="대상 파티션 키")
    sk: Optional[str] = Field(default=None, description="대상 정렬 키")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="엔티티 식별자 등 추가 정보")

    @property
    def key(self) -> Optional[str]:
        """대상 키를 `PK/SK` 형태로 반환한다. 키가 없으면 None이다."""

        if self.pk is None:
            return None
        return f"{self.pk}/{self.sk}" if self.sk is not None else self.pk
