"""
执行请求值对象

表示提交给执行 Actor 的代码执行请求。
"""
from dataclasses import dataclass
from typing import Optional

from code_runner.domain.value_objects.language import LanguageTag
from code_runner.shared.errors.domain import ValidationError


@dataclass(frozen=True)
class ExecutionRequest:
    """
    执行请求值对象（提交后不可变）

    stdin 只被接受，不会传给容器。
    """

    language: LanguageTag
    code: str
    timeout: Optional[float] = None  # 秒
    stdin: Optional[str] = None

    def __post_init__(self):
        """验证执行请求"""
        if not isinstance(self.language, LanguageTag):
            raise ValidationError(f"Unsupported language: {self.language}")

        if not self.code:
            raise ValidationError("code is empty")

        if self.timeout is not None and self.timeout <= 0:
            raise ValidationError(
                "timeout must be a positive number of seconds",
                details={"timeout": self.timeout},
            )

    @classmethod
    def from_raw(
        cls,
        language: str,
        code: Optional[str],
        timeout: Optional[float] = None,
        stdin: Optional[str] = None,
    ) -> "ExecutionRequest":
        """从未经验证的字段构建请求，失败时抛出 ValidationError"""
        return cls(
            language=LanguageTag.parse(language),
            code=code or "",
            timeout=timeout,
            stdin=stdin,
        )
