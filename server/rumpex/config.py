"""配置管理 — Pydantic Settings 从 TOML 加载。"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

_DEFAULT_TOML = Path(__file__).resolve().parent.parent / "config" / "default.toml"


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class GeminiConfig(BaseModel):
    api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-1.5-flash"
    api_key: str = ""
    temperature: float = 0.3
    top_k: int = 32
    top_p: float = 1.0
    max_output_tokens: int = 512
    # None = 不设客户端超时，由宿主环境决定
    timeout: float | None = None


class AnalysisConfig(BaseModel):
    strict_schema: bool = False


class CORSConfig(BaseModel):
    allow_origin: str = "*"
    allow_headers: list[str] = ["authorization", "x-client-info", "apikey", "content-type"]


class Settings(BaseSettings):
    server: ServerConfig = ServerConfig()
    gemini: GeminiConfig = GeminiConfig()
    analysis: AnalysisConfig = AnalysisConfig()
    cors: CORSConfig = CORSConfig()

    model_config = SettingsConfigDict(env_prefix="RUMPEX_", env_nested_delimiter="__")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # 优先级：构造参数 > 环境变量 > TOML 文件 > 默认值
        return (init_settings, env_settings, TomlConfigSettingsSource(settings_cls))


def load_settings(toml_path: Path = _DEFAULT_TOML) -> Settings:
    """从 TOML 文件加载配置，环境变量可覆盖。文件不存在则使用默认值。"""

    class _FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=toml_path)

    return _FileSettings()
