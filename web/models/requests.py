"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증.
형식(타입, 필수 여부)은 여기서, 공백/날짜/금액 의미 검증은 core에서 한 번 더 수행.
"""

from decimal import Decimal

from pydantic import AliasChoices, BaseModel, Field


class RegisterRequest(BaseModel):
    """회원가입 요청"""

    name: str = Field(..., min_length=1, description="이름")
    phone: str = Field(..., min_length=1, description="전화번호 (로그인 ID)")
    password: str = Field(..., min_length=1, description="비밀번호")


class LoginRequest(BaseModel):
    """로그인 요청

    누락 시 400 + 전용 메시지를 주기 위해 선택 필드로 받고 core에서 검증.
    """

    phone: str | None = Field(default=None, description="전화번호")
    password: str | None = Field(default=None, description="비밀번호")


class BalanceRequest(BaseModel):
    """잔액 설정 요청 (음수 허용)"""

    balance: Decimal = Field(..., allow_inf_nan=False, description="설정할 잔액")

    model_config = {
        "json_schema_extra": {"examples": [{"balance": 1000}]}
    }


class SpendRequest(BaseModel):
    """지출 기록 요청"""

    amount: Decimal = Field(..., gt=0, allow_inf_nan=False, description="금액")
    for_what: str = Field(..., min_length=1, description="지출 항목")
    place: str | None = Field(default=None, description="장소")
    date: str = Field(..., min_length=1, description="지출일 (ISO 8601)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"amount": 200, "for_what": "Food", "place": "Cafe", "date": "2024-01-01"}
            ]
        }
    }


class LendRequest(BaseModel):
    """빌려준 기록 요청"""

    amount: Decimal = Field(..., gt=0, allow_inf_nan=False, description="금액")
    to_whom: str = Field(..., min_length=1, description="빌려준 상대")
    return_date: str = Field(..., min_length=1, description="반환 예정일")


class BorrowRequest(BaseModel):
    """빌린 기록 요청"""

    amount: Decimal = Field(..., gt=0, allow_inf_nan=False, description="금액")
    for_what: str = Field(..., min_length=1, description="용도")
    from_whom: str = Field(..., min_length=1, description="빌린 상대")
    return_date: str = Field(..., min_length=1, description="상환 예정일")


class DepositRequest(BaseModel):
    """입금 기록 요청

    모바일 앱은 fromWhom(camelCase)으로 전송.
    """

    amount: Decimal = Field(..., gt=0, allow_inf_nan=False, description="금액")
    from_whom: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("fromWhom", "from_whom"),
        description="입금 출처",
    )
    date: str = Field(..., min_length=1, description="입금일 (ISO 8601)")

    model_config = {
        "json_schema_extra": {
            "examples": [{"amount": 500, "fromWhom": "Salary", "date": "2024-01-05"}]
        }
    }
