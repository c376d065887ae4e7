"""分析中继 — 校验输入 → 调用 Gemini → 规范化结果。"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

from rumpex.analysis.extract import extract_first_json_object, strip_data_url
from rumpex.analysis.gemini import (
    NO_VALID_RESPONSE,
    build_generation_request,
    extract_candidate_text,
)
from rumpex.analysis.prompts import resolve_prompt
from rumpex.analysis.result import fallback_result, matches_schema
from rumpex.errors import BadRequestError, ConfigurationError, UpstreamError, UpstreamShapeError

if TYPE_CHECKING:
    from rumpex.analysis.gemini import GeminiClient
    from rumpex.config import Settings

logger = logging.getLogger(__name__)

API_KEY_ENV = "GOOGLE_API_KEY"


class AnalysisRelay:
    """无状态请求处理器，每次 analyze() 最多一次上游调用。"""

    def __init__(self, settings: Settings, gemini: GeminiClient) -> None:
        self.settings = settings
        self._gemini = gemini

    def resolve_api_key(self) -> str:
        """配置优先，其次 GOOGLE_API_KEY 环境变量。每次请求重新读取。"""
        return self.settings.gemini.api_key or os.getenv(API_KEY_ENV, "")

    async def analyze(self, payload: dict[str, Any]) -> dict[str, Any]:
        """处理一次分析请求，返回 AnalysisResult 形状的 dict。

        显式错误以 RelayError 子类抛出；模型输出无法解析时返回兜底结果而非报错。
        """
        image = payload.get("image")
        if not image:
            raise BadRequestError("Image is required")
        if not isinstance(image, str):
            raise BadRequestError("Image must be a string")

        api_key = self.resolve_api_key()
        if not api_key:
            raise ConfigurationError("Google API key not configured")

        prompt = payload.get("prompt")
        body = build_generation_request(
            resolve_prompt(prompt if isinstance(prompt, str) else None),
            strip_data_url(image),
            self.settings.gemini,
        )

        resp = await self._gemini.generate_content(body, api_key)
        if not resp.is_success:
            logger.error("Gemini API error (%s): %s", resp.status_code, resp.text)
            raise UpstreamError("Error from Gemini API", resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError:
            raise UpstreamShapeError(NO_VALID_RESPONSE, resp.text) from None
        logger.debug("Gemini API response: %s", data)

        text = extract_candidate_text(data)
        return self.normalize(text)

    def normalize(self, text: str) -> dict[str, Any]:
        """从模型文本中取出结果；失败走兜底。"""
        result = extract_first_json_object(text)
        if result is None:
            logger.warning("Failed to parse JSON from model reply: %r", text[:200])
            return fallback_result()
        if self.settings.analysis.strict_schema and not matches_schema(result):
            logger.warning("Model reply does not match AnalysisResult schema: %s", result)
            return fallback_result()
        return result
