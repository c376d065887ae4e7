"""FastAPI 应用工厂 + lifespan。"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from rumpex.analysis.gemini import GeminiClient
from rumpex.analysis.relay import AnalysisRelay
from rumpex.config import Settings, load_settings
from rumpex.errors import RelayError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """启动/关闭生命周期管理。"""
    settings: Settings = app.state.settings

    # 1. 日志
    logging.basicConfig(
        level=getattr(logging, settings.server.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    # 2. Gemini
    gemini = GeminiClient(settings.gemini, transport=app.state.transport)
    await gemini.start()

    # 3. Relay
    app.state.gemini = gemini
    app.state.relay = AnalysisRelay(settings, gemini)

    yield

    await gemini.close()


def cors_headers(settings: Settings) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.cors.allow_origin,
        "Access-Control-Allow-Headers": ", ".join(settings.cors.allow_headers),
    }


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """创建 FastAPI 应用。transport 用于替换 Gemini 的 HTTP 传输层。"""
    if settings is None:
        settings = load_settings()

    app = FastAPI(title="Rumpex Relay", lifespan=lifespan)
    app.state.settings = settings
    app.state.transport = transport
    headers = cors_headers(settings)

    @app.middleware("http")
    async def cors(request: Request, call_next):
        # 预检请求在任何业务逻辑之前返回
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)
        response = await call_next(request)
        for key, value in headers.items():
            response.headers[key] = value
        return response

    @app.post("/analyze-image")
    async def analyze_image(request: Request):
        relay: AnalysisRelay = app.state.relay
        try:
            payload = await request.json()
            if not isinstance(payload, dict):
                payload = {}
            result = await relay.analyze(payload)
            # JSONResponse 在构造时序列化，放在 try 内以保证错误体带 CORS 头
            return JSONResponse(result)
        except RelayError as e:
            return JSONResponse(e.to_body(), status_code=e.status_code)
        except Exception as e:
            logger.exception("Error in analyze-image handler")
            return JSONResponse({"error": str(e) or "Internal server error"}, status_code=500)

    @app.get("/health")
    async def health():
        relay = getattr(app.state, "relay", None)
        return {
            "status": "ok",
            "gemini_configured": bool(relay.resolve_api_key()) if relay else False,
        }

    return app
