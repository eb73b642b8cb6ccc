"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run python -m src.app.main  (PORT 환경 변수 사용)
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Routes
from src.app.routes import generate, spa
from src.domain.constants import MAX_UPLOAD_SIZE_MB
from src.domain.errors import ERROR_MESSAGES, ErrorCodes, PipelineError
from src.render.pdf import DEFAULT_SOFFICE_BINARY, Converter, LibreOfficeConverter

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent

# =============================================================================
# Configuration
# =============================================================================


@dataclass
class Settings:
    """서버 설정 (default.yaml + 환경 변수)."""
    host: str = "0.0.0.0"
    port: int = 3000
    public_dir: Path = PROJECT_ROOT / "frontend" / "dist"
    max_file_size_mb: int = MAX_UPLOAD_SIZE_MB
    soffice_binary: str = DEFAULT_SOFFICE_BINARY
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = PROJECT_ROOT / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def load_settings(
    config_path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """
    Settings 구성.

    우선순위: 환경 변수(PORT, PUBLIC_DIR) > default.yaml > 기본값

    Args:
        config_path: 설정 파일 경로 (None이면 default.yaml)
        environ: 환경 변수 (None이면 .env 로드 후 os.environ)
    """
    if environ is None:
        load_dotenv()
        environ = dict(os.environ)

    config = load_config(config_path)
    server = config.get("server", {})
    upload = config.get("upload", {})
    static = config.get("static", {})
    converter = config.get("converter", {})
    cors = config.get("cors", {})

    settings = Settings()
    settings.host = server.get("host", settings.host)
    settings.port = int(environ.get("PORT") or server.get("port", settings.port))
    settings.max_file_size_mb = int(upload.get("max_file_size_mb", settings.max_file_size_mb))
    settings.soffice_binary = converter.get("soffice_binary", settings.soffice_binary)
    settings.cors_origins = list(cors.get("allow_origins", settings.cors_origins))

    public_dir = environ.get("PUBLIC_DIR") or static.get("public_dir")
    if public_dir:
        path = Path(public_dir)
        settings.public_dir = path if path.is_absolute() else PROJECT_ROOT / path

    return settings


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: PDF 변환 도구 확인 (없어도 docx 출력은 가능하므로 경고만)
    """
    converter = app.state.converter
    if isinstance(converter, LibreOfficeConverter) and not converter.is_available():
        logger.warning(
            f"'{converter.binary}' not found on PATH: pdf/both output will fail "
            "until LibreOffice is installed"
        )

    yield


# =============================================================================
# Error Handlers
# =============================================================================


async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    """PipelineError → {error, detail?, rowIndex?}."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """라우팅 실패(404/405) → 404 Not found."""
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={"error": ERROR_MESSAGES[ErrorCodes.NOT_FOUND]},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 형식 오류 (multipart 파싱 실패 등) → 400."""
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request.", "detail": str(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상치 못한 에러 → 500."""
    logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": ERROR_MESSAGES[ErrorCodes.INTERNAL_ERROR], "detail": str(exc)},
    )


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    settings: Settings | None = None,
    converter: Converter | None = None,
) -> FastAPI:
    """
    FastAPI 앱 생성.

    Args:
        settings: 서버 설정 (None이면 load_settings())
        converter: PDF 변환기 (None이면 LibreOfficeConverter)
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Mail Merge Reports",
        description="DOCX 템플릿 + CSV/XLSX 데이터 → 행별 문서 ZIP",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.converter = converter or LibreOfficeConverter(settings.soffice_binary)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PipelineError, pipeline_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # API 라우트
    app.include_router(generate.api_router, prefix="/api/generate", tags=["Generate API"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        """헬스 체크."""
        return {"status": "ok"}

    # SPA (마지막에 등록: catch-all)
    if settings.public_dir.is_dir():
        app.mount("/", spa.build_static_app(settings.public_dir), name="spa")
    else:
        logger.info(f"Static directory not found, SPA disabled: {settings.public_dir}")

    return app


app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================

def main() -> None:
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    settings = app.state.settings
    logger.info(f"Server running at http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
