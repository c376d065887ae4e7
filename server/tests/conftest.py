"""共享 fixtures — 测试配置、Gemini 桩传输层等。"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from rumpex.analysis.gemini import GeminiClient
from rumpex.analysis.relay import AnalysisRelay
from rumpex.config import Settings, load_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ────────────────────── Gemini 桩 ──────────────────────


def gemini_reply(text: str) -> dict[str, Any]:
    """构造 generateContent 成功响应体。"""
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
            }
        ]
    }


class StubGemini:
    """模拟 Gemini 上游，记录收到的请求。"""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = gemini_reply('{"valido": true}')

    def reply_text(self, text: str) -> None:
        self.status_code = 200
        self.body = gemini_reply(text)

    def reply_raw(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict[str, Any]:
        """最后一次请求的 JSON 体。"""
        return json.loads(self.requests[-1].content)


# ────────────────────── Fixtures ──────────────────────


@pytest.fixture
def test_config() -> Settings:
    """加载测试专用配置。"""
    return load_settings(FIXTURES_DIR / "test_config.toml")


@pytest.fixture
def stub_gemini() -> StubGemini:
    return StubGemini()


@pytest.fixture
async def gemini_client(test_config, stub_gemini):
    client = GeminiClient(test_config.gemini, transport=stub_gemini.transport)
    await client.start()
    yield client
    await client.close()


@pytest.fixture
def relay(test_config, gemini_client) -> AnalysisRelay:
    return AnalysisRelay(test_config, gemini_client)
