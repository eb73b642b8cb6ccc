"""
Word (DOCX) 렌더러: docxtpl 기반.

규칙:
- placeholder: {{ column_name }} (Jinja2 구문)
- 식별자가 아닌 컬럼명 ({{First Name}}, {{E-mail}})은 행 dict 조회로 치환
- 문단 반복: {%p for ... %} / {%p endfor %}
- 값의 줄바꿈(\n)은 문서 줄바꿈으로 변환
- 정의되지 않은 placeholder → 렌더링 실패 (StrictUndefined)
- 동일 입력 → 동일 바이트 (ZIP 엔트리 timestamp 고정)
"""

import html
import io
import json
import re
import zipfile
from collections.abc import Iterable
from typing import Any

from docxtpl import DocxTemplate, Listing
from jinja2 import Environment, StrictUndefined

from src.domain.errors import ErrorCodes, PipelineError
from src.domain.schemas import Row

# ZIP 엔트리 고정 timestamp (ZIP 포맷 최소값)
FIXED_ZIP_TIMESTAMP = (1980, 1, 1, 0, 0, 0)

# 행 전체 dict를 담는 컨텍스트 키 (식별자가 아닌 컬럼 조회용)
ROW_CONTEXT_KEY = "_row"

PLACEHOLDER_PATTERN = re.compile(r"\{\{(?P<name>.*?)\}\}", re.DOTALL)

# 식별자지만 Jinja 표현식에서 변수로 해석되지 않는 이름
JINJA_RESERVED_NAMES = frozenset({
    "and", "or", "not", "in", "is", "if", "else",
    "true", "false", "none", "True", "False", "None",
})


def build_jinja_env() -> Environment:
    """렌더링용 Jinja2 환경 ({{ }} 구분자, 미정의 변수 에러)."""
    return Environment(
        variable_start_string="{{",
        variable_end_string="}}",
        undefined=StrictUndefined,
    )


def build_context(row: Row) -> dict[str, Any]:
    """
    Row → 렌더링 컨텍스트.

    줄바꿈이 포함된 값은 Listing으로 감싸서 <w:br/>로 변환되게 함.
    행 전체는 ROW_CONTEXT_KEY로도 조회 가능 (식별자가 아닌 컬럼명용).
    """
    context: dict[str, Any] = {}
    for key, value in row.items():
        if "\n" in value:
            context[key] = Listing(value.replace("\r\n", "\n"))
        else:
            context[key] = value
    context[ROW_CONTEXT_KEY] = dict(context)
    return context


def subscript_placeholders(xml: str, column_names: Iterable[str]) -> str:
    """
    {{First Name}} → {{ _row["First Name"] }}.

    컬럼명과 정확히 일치하고 Jinja 식별자가 아닌 placeholder만 치환.
    식별자 placeholder, 필터/표현식, {% %} 블록은 그대로 둠.
    """
    names = {
        name for name in column_names
        if not name.isidentifier() or name in JINJA_RESERVED_NAMES
    }
    if not names:
        return xml

    def replace(match: re.Match[str]) -> str:
        name = html.unescape(match.group("name")).strip()
        if name not in names:
            return match.group(0)
        return "{{ %s[%s] }}" % (ROW_CONTEXT_KEY, json.dumps(name, ensure_ascii=False))

    return PLACEHOLDER_PATTERN.sub(replace, xml)


class RowTemplate(DocxTemplate):
    """컬럼명 placeholder 치환을 docxtpl XML 전처리 뒤에 적용하는 템플릿."""

    def __init__(self, template_file: io.BytesIO, column_names: Iterable[str] = ()):
        super().__init__(template_file)
        self.column_names = tuple(column_names)

    def patch_xml(self, src_xml: str) -> str:
        return subscript_placeholders(super().patch_xml(src_xml), self.column_names)


def normalize_docx(content: bytes) -> bytes:
    """
    DOCX(ZIP) 재패키징: 엔트리 순서 유지, timestamp 고정.

    python-docx는 저장 시각을 ZIP 엔트리에 기록하므로 그대로 두면
    같은 입력이라도 바이트가 달라짐.
    """
    out = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(content)) as src, zipfile.ZipFile(
        out, "w", zipfile.ZIP_DEFLATED
    ) as dst:
        for item in src.infolist():
            info = zipfile.ZipInfo(item.filename, date_time=FIXED_ZIP_TIMESTAMP)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = item.external_attr
            dst.writestr(info, src.read(item.filename))
    return out.getvalue()


class DocxRenderer:
    """
    Word 문서 렌더러.

    템플릿 바이트를 보관하고, 행마다 새 DocxTemplate로 렌더링
    (docxtpl은 render 시 내부 XML을 변경하므로 재사용 불가).

    Usage:
        renderer = DocxRenderer(template_bytes)
        docx_bytes = renderer.render(row)
    """

    def __init__(self, template_bytes: bytes):
        """
        Args:
            template_bytes: DOCX 템플릿 파일 내용
        """
        self.template_bytes = template_bytes

    def _load_template(self, column_names: Iterable[str] = ()) -> RowTemplate:
        """템플릿 로드 (매 호출마다 새 인스턴스)."""
        return RowTemplate(io.BytesIO(self.template_bytes), column_names)

    def render(self, row: Row) -> bytes:
        """
        템플릿에 행 데이터를 채워 DOCX 생성.

        Args:
            row: 컬럼명 → 값

        Returns:
            렌더링된 DOCX 바이트

        Raises:
            PipelineError: RENDER_FAILED (error=원인 메시지)
        """
        try:
            doc = self._load_template(row.keys())
            doc.render(build_context(row), jinja_env=build_jinja_env(), autoescape=True)

            buffer = io.BytesIO()
            doc.save(buffer)
            return normalize_docx(buffer.getvalue())

        except PipelineError:
            raise
        except Exception as e:
            raise PipelineError(ErrorCodes.RENDER_FAILED, error=str(e)) from e

