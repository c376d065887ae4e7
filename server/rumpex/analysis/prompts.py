"""兽医分析指令 — 臀角评估 prompt 与线性评分表。"""

from __future__ import annotations

# (最低分, 最高分, 角度范围, 描述)
SCORE_BANDS: list[tuple[int, int, str, str]] = [
    (1, 2, ">35°", "Anca muy caída - Defecto severo"),
    (3, 4, "25-35°", "Anca pronunciadamente caída - Defecto moderado"),
    (5, 6, "15-25°", "Anca intermedia/ligera caída - Aceptable"),
    (7, 8, "5-15°", "Anca nivelada/alta - Deseable"),
    (9, 9, "<5°", "Anca muy alta - Excelente"),
]


def _render_bands() -> str:
    lines = []
    for low, high, angle, label in SCORE_BANDS:
        score = str(low) if low == high else f"{low}-{high}"
        lines.append(f"- {score}: {label} ({angle})")
    return "\n".join(lines)


ANALYSIS_PROMPT = f"""Eres un experto veterinario especializado en conformación bovina. Analiza esta imagen de una vaca lechera y evalúa ESPECÍFICAMENTE el ángulo de su anca (rump angle).

PROCESO DE ANÁLISIS TÉCNICO:
1. VALIDACIÓN: Confirma que la imagen contiene una vaca lechera vista de perfil lateral
2. IDENTIFICACIÓN ANATÓMICA: Localiza exactamente:
   - Tuberosidad coxal (hueso de la cadera)
   - Tuberosidad isquiática (pin bone/isquion)
   - Línea dorsal del anca
3. MEDICIÓN PRECISA: Mide el ángulo en grados entre la línea horizontal y la línea que conecta estos puntos anatómicos
4. EVALUACIÓN CRÍTICA: Analiza la conformación real de ESTA vaca específica

ESCALA DE PUNTUACIÓN LINEAL (1-9):
{_render_bands()}

Devuelve ÚNICAMENTE un JSON válido con este formato exacto:
{{
  "valido": boolean,
  "razonInvalidez": string|null,
  "numeroVacasDetectadas": number,
  "vacaAnalizada": number|null,
  "anguloCm": number|null,
  "puntajeLineal": number|null,
  "categoria": "Alto|Nivelado|Ligera caída|Intermedio|Pronunciada",
  "recomendacion": string|null
}}

Criterios:
- valido: true si hay al menos una vaca visible y se puede evaluar el anca, false si no
- razonInvalidez: explicación si valido=false
- numeroVacasDetectadas: cantidad de vacas en la imagen
- vacaAnalizada: número de la vaca analizada (1, 2, etc.)
- anguloCm: ángulo del anca en grados
- puntajeLineal: escala 1-9 según la tabla anterior
- categoria: clasificación según puntaje
- recomendacion: consejo breve para el ganadero

NO agregues texto adicional, solo el JSON."""


def resolve_prompt(prompt: str | None) -> str:
    """调用方提供的指令优先，否则使用内置指令。"""
    if prompt and prompt.strip():
        return prompt
    return ANALYSIS_PROMPT
