"""
FastAPI Routes.

API 라우트 (REST) + 정적 SPA 라우트
"""

from . import generate, spa

__all__ = ["generate", "spa"]
