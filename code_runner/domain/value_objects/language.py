"""
语言标签值对象

定义支持的编程语言枚举。
"""
from enum import Enum

from code_runner.shared.errors.domain import ValidationError


class LanguageTag(str, Enum):
    """支持的语言枚举（封闭集合）"""
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    GOLANG = "golang"
    KOTLIN = "kotlin"

    @classmethod
    def parse(cls, value: str) -> "LanguageTag":
        """
        解析语言标签（大小写不敏感）

        Args:
            value: 语言文本，如 "Python", "javascript"

        Returns:
            对应的 LanguageTag

        Raises:
            ValidationError: 不支持的语言，不会回退到默认值
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unsupported language: {value}",
                details={"language": value},
            )
