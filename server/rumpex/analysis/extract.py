"""文本解析 — 剥离 data URL 前缀，从模型回复中提取 JSON 对象。"""

from __future__ import annotations

import json
import math
import re
from typing import Any

# 贪婪匹配：第一个 { 到最后一个 }
_JSON_SPAN_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


def _reject_constant(name: str) -> Any:
    # NaN / Infinity 不是合法 JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _finite_float(value: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Number out of range: {value}")
    return number


def strip_data_url(image: str) -> str:
    """去掉 `data:<mime>;base64,` 前缀。

    取第一个逗号之后的部分；没有逗号或逗号后为空则原样返回。
    不校验 MIME 类型和 base64 合法性。
    """
    parts = image.split(",")
    if len(parts) > 1 and parts[1]:
        return parts[1]
    return image


def extract_first_json_object(text: str) -> dict[str, Any] | None:
    """从自由文本中提取 JSON 对象。

    模型回复可能夹杂说明文字或 ``` 代码块。找不到 {...} 片段、
    片段无法解析或解析结果不是对象时返回 None。
    """
    if not text:
        return None
    match = _JSON_SPAN_PATTERN.search(text)
    if match is None:
        return None
    try:
        data = json.loads(
            match.group(0), parse_constant=_reject_constant, parse_float=_finite_float
        )
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    return data
