"""中继错误类型 — 在 HTTP 边界转换为 JSON 错误体。"""

from __future__ import annotations

from typing import Any


class RelayError(Exception):
    """所有显式返回给调用方的错误的基类。"""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message}


class BadRequestError(RelayError):
    """请求缺少必需字段。"""

    status_code = 400


class ConfigurationError(RelayError):
    """进程配置中缺少凭据。"""

    status_code = 500


class UpstreamError(RelayError):
    """Gemini 返回非 2xx，状态码和原始响应体原样透传。"""

    def __init__(self, message: str, status_code: int, details: str) -> None:
        super().__init__(message, status_code)
        self.details = details

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


class UpstreamShapeError(RelayError):
    """Gemini 返回 2xx 但缺少 candidates/content 结构。"""

    status_code = 500

    def __init__(self, message: str, data: Any) -> None:
        super().__init__(message)
        self.data = data

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, "data": self.data}
