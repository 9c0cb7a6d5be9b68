"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- auth: 회원가입 / 로그인
- balance: 잔액 설정 / 조회
- spend, lend, borrow, deposit: 기록 + 잔액 변경
- history: 히스토리 / 프로필
"""
