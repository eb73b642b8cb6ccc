"""
SPA: 빌드된 프론트엔드 정적 파일 서빙 (Starlette StaticFiles).

- public_dir 안의 파일 → 그대로 반환 (Content-Type은 StaticFiles가 추론)
- 그 외 /api 가 아닌 GET → index.html (클라이언트 라우팅)
- public_dir 가 없으면 마운트하지 않음
"""

from pathlib import Path

from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

INDEX_FILENAME = "index.html"


def is_api_path(path: str) -> bool:
    path = path.strip("/")
    return path == "api" or path.startswith("api/")


class SPAStaticFiles(StaticFiles):
    """없는 파일 요청은 index.html로 대체 (/api 제외)."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as e:
            if e.status_code != 404 or is_api_path(path.replace("\\", "/")):
                raise
            return await super().get_response(INDEX_FILENAME, scope)


def build_static_app(public_dir: Path) -> SPAStaticFiles:
    """
    SPA 정적 앱 생성 (app.mount("/", ...) 용).

    Args:
        public_dir: 빌드 결과 디렉터리 (index.html 포함)
    """
    return SPAStaticFiles(directory=public_dir, html=True)
