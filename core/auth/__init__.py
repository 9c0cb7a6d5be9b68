"""
인증 패키지

비밀번호 해시(bcrypt), 토큰 서명(JWT), Bearer 토큰 검증(CredentialGate).

사용 예시:
```python
from core.auth import CredentialGate, PasswordHasher, TokenSigner

signer = TokenSigner(secret_key, ttl_days=7)
token = signer.issue(user_id=1)

gate = CredentialGate(signer)
user_id = gate.authenticate(f"Bearer {token}")
```
"""

from core.auth.gate import CredentialGate, extract_bearer_token
from core.auth.passwords import PasswordHasher
from core.auth.tokens import TokenSigner

__all__ = [
    "CredentialGate",
    "PasswordHasher",
    "TokenSigner",
    "extract_bearer_token",
]
