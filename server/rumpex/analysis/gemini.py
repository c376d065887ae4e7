"""Gemini 客户端 — generateContent REST API 单轮多模态请求。"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from rumpex.errors import UpstreamShapeError

if TYPE_CHECKING:
    from rumpex.config import GeminiConfig

logger = logging.getLogger(__name__)

# 无论原始图片格式如何，上游一律声明为 JPEG
IMAGE_MIME_TYPE = "image/jpeg"

NO_VALID_RESPONSE = "No valid response from Gemini API"


def build_generation_request(
    prompt: str, image_b64: str, config: GeminiConfig
) -> dict[str, Any]:
    """组装单轮请求体（指令文本 + 内联图片 + 生成参数）。"""
    return {
        "contents": [
            {
                "parts": [
                    {"text": prompt},
                    {"inline_data": {"mime_type": IMAGE_MIME_TYPE, "data": image_b64}},
                ]
            }
        ],
        "generationConfig": {
            "temperature": config.temperature,
            "topK": config.top_k,
            "topP": config.top_p,
            "maxOutputTokens": config.max_output_tokens,
        },
    }


def extract_candidate_text(data: Any) -> str:
    """取 candidates[0].content.parts[0].text，结构缺失则抛 UpstreamShapeError。"""
    try:
        content = data["candidates"][0]["content"]
        text = content["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise UpstreamShapeError(NO_VALID_RESPONSE, data) from None
    if not isinstance(text, str):
        raise UpstreamShapeError(NO_VALID_RESPONSE, data)
    return text


class GeminiClient:
    """Gemini generateContent 客户端，每次调用只发一次 POST，不重试。"""

    def __init__(
        self, config: GeminiConfig, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            timeout=httpx.Timeout(self.config.timeout),
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def endpoint(self) -> str:
        return f"/models/{self.config.model}:generateContent"

    async def generate_content(self, body: dict[str, Any], api_key: str) -> httpx.Response:
        """POST 请求体到 generateContent，凭据通过 query 参数传递。"""
        if not self._client:
            raise RuntimeError("Gemini client not started")

        logger.info("Making request to Gemini API (model=%s)", self.config.model)
        return await self._client.post(self.endpoint, params={"key": api_key}, json=body)
