"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- accounts: 계좌
- transactions: 거래
- recurring: 반복 거래 정의 및 처리 트리거
- budgets: 예산
- goals: 저축 목표
"""
