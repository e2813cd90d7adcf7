"""
输出截断

按字符（而非字节）限制返回的输出长度，避免截断多字节字符。
"""

TRUNCATION_MARKER = "...\n[Output truncated]"


def truncate_output(text: str, limit: int) -> str:
    """
    截断输出

    Args:
        text: 原始输出
        limit: 最大字符数

    Returns:
        长度不超过 limit 时原样返回，否则返回前 limit 个字符加截断标记
    """
    if len(text) > limit:
        return f"{text[:limit]}{TRUNCATION_MARKER}"
    return text
