"""
E2E 테스트용 앱/클라이언트 설정.

- create_app(settings, converter)로 테스트마다 새 앱 생성
- PDF 변환은 FakeConverter (LibreOffice 불필요)
- SPA 정적 파일은 tmp_path에 생성
"""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from merge_helpers import FakeConverter
from src.app.main import Settings, create_app
from src.render.pdf import Converter

INDEX_HTML = "<!doctype html><html><body><div id=\"root\"></div></body></html>"


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    """빌드된 프론트엔드 흉내 (index.html + assets)."""
    root = tmp_path / "dist"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (root / "assets" / "app.js").write_text("console.log('app');", encoding="utf-8")
    return root


@pytest.fixture
def make_app(public_dir: Path) -> Callable[..., FastAPI]:
    """설정/변환기를 바꿔 앱을 만드는 함수."""

    def _make(converter: Converter | None = None, **overrides) -> FastAPI:
        settings = Settings(public_dir=public_dir, **overrides)
        return create_app(settings, converter=converter or FakeConverter())

    return _make


@pytest.fixture
def client(make_app, fake_converter) -> Generator[TestClient, None, None]:
    """FakeConverter를 쓰는 TestClient."""
    with TestClient(make_app(fake_converter)) as client:
        yield client
