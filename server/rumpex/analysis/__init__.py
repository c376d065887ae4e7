"""臀角分析：prompt、Gemini 调用与结果规范化。"""
