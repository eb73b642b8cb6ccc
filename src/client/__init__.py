"""
Client: generate API 호출용 HTTP 클라이언트.
"""

from .api import GenerateClient, GenerateRequestError

__all__ = ["GenerateClient", "GenerateRequestError"]
