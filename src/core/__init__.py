"""
Core layer: 요청 단위 공통 모듈.

역할:
- run_id 발급, run log 기록
"""

from .ids import fallback_base_name, generate_run_id
from .logging import complete_run_log, create_run_log, emit_run_log

__all__ = [
    # ids
    "generate_run_id",
    "fallback_base_name",
    # logging
    "create_run_log",
    "complete_run_log",
    "emit_run_log",
]
