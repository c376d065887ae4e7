"""分析结果模型 — Pydantic 模型 + 兜底结果。"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class Categoria(str, Enum):
    ALTO = "Alto"
    NIVELADO = "Nivelado"
    LIGERA_CAIDA = "Ligera caída"
    INTERMEDIO = "Intermedio"
    PRONUNCIADA = "Pronunciada"


class AnalysisResult(BaseModel):
    """模型返回的臀角评估结果。

    valido=False 时只有 razonInvalidez（以及可选的 numeroVacasDetectadas）有意义。
    anguloCm 的单位是度，字段名沿用历史叫法。
    """

    model_config = ConfigDict(extra="allow")

    valido: bool
    razonInvalidez: str | None = None
    numeroVacasDetectadas: int | None = None
    vacaAnalizada: int | None = None
    anguloCm: float | None = None
    puntajeLineal: int | None = Field(default=None, ge=1, le=9)
    categoria: Categoria | None = None
    recomendacion: str | None = None


FALLBACK_REASON = "Error al procesar la respuesta del análisis. Intenta con otra imagen."


def fallback_result() -> dict[str, Any]:
    """模型输出无法解析时返回的固定无效结果（每次新建）。"""
    return {
        "valido": False,
        "razonInvalidez": FALLBACK_REASON,
        "numeroVacasDetectadas": 0,
        "vacaAnalizada": None,
        "anguloCm": None,
        "puntajeLineal": None,
        "categoria": None,
        "recomendacion": None,
    }


def matches_schema(data: dict[str, Any]) -> bool:
    """检查解析出的对象是否符合 AnalysisResult 结构。"""
    try:
        AnalysisResult.model_validate(data)
    except ValidationError:
        return False
    return True
