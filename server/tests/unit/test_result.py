"""测试 result.py — 结果模型、兜底结果、结构校验。"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rumpex.analysis.result import (
    FALLBACK_REASON,
    AnalysisResult,
    Categoria,
    fallback_result,
    matches_schema,
)


class TestFallback:
    """兜底结果。"""

    def test_shape(self):
        assert fallback_result() == {
            "valido": False,
            "razonInvalidez": FALLBACK_REASON,
            "numeroVacasDetectadas": 0,
            "vacaAnalizada": None,
            "anguloCm": None,
            "puntajeLineal": None,
            "categoria": None,
            "recomendacion": None,
        }

    def test_fresh_dict_each_call(self):
        first = fallback_result()
        first["valido"] = True
        assert fallback_result()["valido"] is False

    def test_fallback_matches_schema(self):
        assert matches_schema(fallback_result())


class TestAnalysisResult:
    """AnalysisResult 模型。"""

    def test_valid_full_result(self):
        result = AnalysisResult.model_validate({
            "valido": True,
            "razonInvalidez": None,
            "numeroVacasDetectadas": 1,
            "vacaAnalizada": 1,
            "anguloCm": 12.5,
            "puntajeLineal": 7,
            "categoria": "Nivelado",
            "recomendacion": "Buena conformación.",
        })
        assert result.categoria is Categoria.NIVELADO
        assert result.anguloCm == 12.5

    def test_accented_category(self):
        result = AnalysisResult(valido=True, categoria="Ligera caída")
        assert result.categoria is Categoria.LIGERA_CAIDA

    def test_extra_fields_allowed(self):
        assert matches_schema({"valido": True, "confianza": 0.8})

    @pytest.mark.parametrize("score", [0, 10])
    def test_score_out_of_range(self, score):
        with pytest.raises(ValidationError):
            AnalysisResult(valido=True, puntajeLineal=score)

    def test_unknown_category(self):
        assert not matches_schema({"valido": True, "categoria": "Excelente"})

    def test_missing_valido(self):
        assert not matches_schema({"puntajeLineal": 5})
