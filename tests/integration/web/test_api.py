"""
HTTP API 통합 테스트

TestClient로 앱 전체(lifespan 포함)를 실행하여
인증, 잔액, 기록, 히스토리, 프로필 흐름을 확인.
"""

from datetime import timedelta
from decimal import Decimal
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from core.auth.tokens import TokenSigner
from core.config.loader import Settings, get_settings
from core.constants import Messages
from core.utils.timezone import now_utc
from web.app import app

PHONE = "9999999999"
PASSWORD = "secret"


@pytest.fixture
def client(temp_secrets_file: Path) -> Iterator[TestClient]:
    """임시 secrets.yaml / DB로 앱 실행"""
    Settings.reset()
    get_settings(temp_secrets_file)

    with TestClient(app) as test_client:
        yield test_client

    Settings.reset()


def _register_and_login(client: TestClient, phone: str = PHONE) -> str:
    response = client.post(
        "/api/register",
        json={"name": "Tester", "phone": phone, "password": PASSWORD},
    )
    assert response.status_code == 201

    response = client.post("/api/login", json={"phone": phone, "password": PASSWORD})
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    token = _register_and_login(client)
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    """헬스 체크"""

    def test_liveness(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "Backend is alive"}

    def test_db_health(self, client: TestClient) -> None:
        response = client.get("/health/db")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["time"]


class TestAuth:
    """회원가입 / 로그인"""

    def test_register_and_login(self, client: TestClient) -> None:
        response = client.post(
            "/api/register",
            json={"name": "Tester", "phone": PHONE, "password": PASSWORD},
        )
        assert response.status_code == 201
        assert response.json() == {"message": "User registered successfully"}

        response = client.post("/api/login", json={"phone": PHONE, "password": PASSWORD})
        body = response.json()

        assert response.status_code == 200
        assert body["message"] == "Login successful"
        assert body["user"]["phone"] == PHONE
        assert "password" not in body["user"]
        assert body["token"]

    def test_register_missing_field(self, client: TestClient) -> None:
        response = client.post("/api/register", json={"name": "Tester", "phone": PHONE})

        assert response.status_code == 400
        assert response.json() == {"message": "All fields are required"}

    def test_register_duplicate_phone(self, client: TestClient) -> None:
        payload = {"name": "Tester", "phone": PHONE, "password": PASSWORD}
        client.post("/api/register", json=payload)

        response = client.post("/api/register", json=payload)

        assert response.status_code == 409

    def test_login_missing_fields(self, client: TestClient) -> None:
        response = client.post("/api/login", json={"phone": PHONE})

        assert response.status_code == 400
        assert response.json() == {"message": "Phone and password are required"}

    def test_login_unknown_user(self, client: TestClient) -> None:
        response = client.post("/api/login", json={"phone": "123", "password": "x"})

        assert response.status_code == 404
        assert response.json() == {"message": "User not found. Please create an account."}

    def test_login_wrong_password(self, client: TestClient) -> None:
        _register_and_login(client)

        response = client.post("/api/login", json={"phone": PHONE, "password": "wrong"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid password"}

    def test_home(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get("/api/home", headers=auth_headers)

        assert response.status_code == 200
        assert isinstance(response.json()["user"]["userid"], int)


class TestCredentialGate:
    """보호된 엔드포인트 인증"""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/check-balance"),
            ("post", "/api/balance"),
            ("get", "/api/spend"),
            ("post", "/api/lend"),
            ("get", "/api/history"),
            ("get", "/api/profile"),
        ],
    )
    def test_missing_header(self, client: TestClient, method: str, path: str) -> None:
        """헤더 없음 → 401 (본문 검증보다 먼저)"""
        response = client.request(method, path, json={})

        assert response.status_code == 401
        assert response.json() == {"message": Messages.HEADER_MISSING}

    def test_null_token(self, client: TestClient) -> None:
        response = client.get("/api/check-balance", headers={"Authorization": "Bearer null"})

        assert response.status_code == 401
        assert response.json() == {"message": Messages.TOKEN_MISSING}

    def test_invalid_token(self, client: TestClient) -> None:
        response = client.get(
            "/api/check-balance", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == 403
        assert response.json() == {"message": Messages.TOKEN_INVALID}

    def test_expired_token(self, client: TestClient) -> None:
        signer = TokenSigner(get_settings().web_secret_key)
        token = signer.issue(1, issued_at=now_utc() - timedelta(days=8))

        response = client.get(
            "/api/check-balance", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403
        assert response.json() == {"message": Messages.TOKEN_EXPIRED}

    def test_token_signed_with_other_key(self, client: TestClient) -> None:
        """다른 키로 서명된 토큰"""
        token = TokenSigner("someone_else_secret").issue(1)

        response = client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403


class TestBalance:
    """잔액 설정 / 조회"""

    def test_check_before_set(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get("/api/check-balance", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"hasBalance": False}

    def test_set_and_check(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.post("/api/balance", json={"balance": 1000}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Balance updated successfully"

        response = client.get("/api/check-balance", headers=auth_headers)
        body = response.json()

        assert body["hasBalance"] is True
        assert Decimal(body["balance"]) == Decimal("1000")

    def test_non_numeric_balance(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.post("/api/balance", json={"balance": "lots"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Amount must be a positive number"}


class TestRecords:
    """기록 + 잔액 변경"""

    def test_non_positive_amount(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        client.post("/api/balance", json={"balance": 1000}, headers=auth_headers)

        response = client.post(
            "/api/spend",
            json={"amount": 0, "for_what": "Food", "date": "2024-01-01"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Amount must be a positive number"}

        balance = client.get("/api/check-balance", headers=auth_headers).json()["balance"]
        assert Decimal(balance) == Decimal("1000")

    def test_lend_without_balance(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """잔액 설정 전 lend → 500, 기록 없음"""
        response = client.post(
            "/api/lend",
            json={"amount": 100, "to_whom": "Bob", "return_date": "2024-02-01"},
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json() == {"message": Messages.BALANCE_NOT_FOUND}
        assert client.get("/api/lend", headers=auth_headers).json() == []

    def test_deposit_accepts_camel_case(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        client.post("/api/balance", json={"balance": 0}, headers=auth_headers)

        response = client.post(
            "/api/deposit",
            json={"amount": 500, "fromWhom": "Salary", "date": "2024-01-05"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert Decimal(response.json()["balance"]) == Decimal("500")

        records = client.get("/api/deposit", headers=auth_headers).json()
        assert records[0]["source"] == "Salary"

    def test_empty_lists(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """기록 없음 → 빈 리스트"""
        for path in ("/api/spend", "/api/lend", "/api/borrow", "/api/deposit", "/api/history"):
            response = client.get(path, headers=auth_headers)
            assert response.status_code == 200, path
            assert response.json() == [], path

    def test_records_are_per_user(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        """다른 사용자의 기록은 보이지 않음"""
        client.post("/api/balance", json={"balance": 100}, headers=auth_headers)
        client.post(
            "/api/spend",
            json={"amount": 10, "for_what": "Tea", "date": "2024-01-01"},
            headers=auth_headers,
        )

        other_token = _register_and_login(client, phone="8888888888")
        other_headers = {"Authorization": f"Bearer {other_token}"}

        assert client.get("/api/spend", headers=other_headers).json() == []
        assert client.get("/api/check-balance", headers=other_headers).json() == {
            "hasBalance": False
        }


class TestScenario:
    """가입 → 잔액 설정 → 입금/지출 → 히스토리/프로필"""

    def test_full_flow(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.post("/api/balance", json={"balance": 1000}, headers=auth_headers)
        assert response.status_code == 200

        response = client.post(
            "/api/deposit",
            json={"amount": 500, "fromWhom": "Salary", "date": "2024-01-05"},
            headers=auth_headers,
        )
        assert response.json()["message"] == "Deposit recorded and balance updated successfully"
        assert Decimal(response.json()["balance"]) == Decimal("1500")

        response = client.post(
            "/api/spend",
            json={"amount": 200, "for_what": "Food", "place": "Cafe", "date": "2024-01-01"},
            headers=auth_headers,
        )
        assert response.json()["message"] == "Spend record added & balance updated successfully"
        assert Decimal(response.json()["balance"]) == Decimal("1300")

        balance = client.get("/api/check-balance", headers=auth_headers).json()
        assert balance["hasBalance"] is True
        assert Decimal(balance["balance"]) == Decimal("1300")

        # 입금(2024-01-05)이 지출(2024-01-01)보다 앞
        history = client.get("/api/history", headers=auth_headers).json()
        assert [entry["type"] for entry in history] == ["Deposit", "Spent"]
        assert history[0]["description"] == "Salary"
        assert history[1]["description"] == "Food"
        assert history[1]["details"] == "Cafe"

        profile = client.get("/api/profile", headers=auth_headers).json()
        assert profile["user"]["phone"] == PHONE
        assert profile["records"] == {"lend": 0, "spent": 1, "borrowed": 0, "deposit": 1}

    def test_lend_and_borrow_flow(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        """빌려준 돈 / 빌린 돈은 생성 시각 기준으로 가장 최근"""
        client.post("/api/balance", json={"balance": 1000}, headers=auth_headers)
        client.post(
            "/api/spend",
            json={"amount": 100, "for_what": "Food", "date": "2024-01-01"},
            headers=auth_headers,
        )

        response = client.post(
            "/api/lend",
            json={"amount": 300, "to_whom": "Bob", "return_date": "2024-02-01"},
            headers=auth_headers,
        )
        assert response.json()["message"] == "Lend record added & balance updated successfully"
        assert Decimal(response.json()["balance"]) == Decimal("600")

        response = client.post(
            "/api/borrow",
            json={
                "amount": 50,
                "for_what": "Bus",
                "from_whom": "Carol",
                "return_date": "2024-03-01",
            },
            headers=auth_headers,
        )
        assert response.json()["message"] == "Borrow recorded and balance updated successfully"
        assert Decimal(response.json()["balance"]) == Decimal("650")

        history = client.get("/api/history", headers=auth_headers).json()
        assert history[-1]["type"] == "Spent"
        assert {entry["type"] for entry in history[:2]} == {"Lent", "Borrowed"}

        lend_details = [e["details"] for e in history if e["type"] == "Lent"]
        borrow_details = [e["details"] for e in history if e["type"] == "Borrowed"]
        assert lend_details == ["Return by 2024-02-01"]
        assert borrow_details == ["Due by 2024-03-01"]
