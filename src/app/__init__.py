"""
App layer: API 서버 (FastAPI).

역할:
- POST /api/generate: 업로드 수신, 파이프라인 실행, ZIP 응답
- 빌드된 SPA 정적 서빙 (선택)
- ⚠️ 렌더링/변환 로직 없음 (render에 위임)
"""
