"""
语言运行配置值对象

将语言标签映射为容器镜像和容器内命令行模板。
"""
from dataclasses import dataclass
from typing import Tuple

from code_runner.domain.value_objects.language import LanguageTag


@dataclass(frozen=True)
class LanguageProfile:
    """语言运行配置（不可变，每次请求重新计算）"""
    image: str
    extension: str  # 源文件扩展名，如 "py"
    run_command: str  # 写入源文件后执行的命令

    @property
    def source_path(self) -> str:
        return f"/app/code.{self.extension}"

    def command(self, code: str) -> Tuple[str, ...]:
        """
        生成容器入口命令

        创建 /app 目录，把源码写入源文件，然后运行。
        """
        shell_command = (
            f"mkdir -p /app && echo '{escape_code(code)}' > {self.source_path} "
            f"&& {self.run_command}"
        )
        return ("sh", "-c", shell_command)


_PROFILES = {
    LanguageTag.PYTHON: LanguageProfile(
        image="python:3.9-slim",
        extension="py",
        run_command="python /app/code.py",
    ),
    LanguageTag.JAVASCRIPT: LanguageProfile(
        image="node:18-alpine",
        extension="js",
        run_command="node /app/code.js",
    ),
    LanguageTag.GOLANG: LanguageProfile(
        image="golang:1.19-alpine",
        extension="go",
        run_command="cd /app && go run code.go",
    ),
    LanguageTag.KOTLIN: LanguageProfile(
        image="kotlin:latest",
        extension="kt",
        run_command="cd /app && kotlinc code.kt -include-runtime -d code.jar && java -jar code.jar",
    ),
}


def escape_code(code: str) -> str:
    """
    将源码中的单引号替换为双引号

    注意：这不是真正的 shell 转义。源码被嵌入 echo '...' 中，
    其他 shell 元字符依然可能改变命令。隔离依赖容器的资源限制和网络模式。
    """
    return code.replace("'", '"')


def resolve_profile(language: LanguageTag) -> LanguageProfile:
    """
    解析语言运行配置（纯函数，覆盖所有枚举成员）

    Args:
        language: 语言标签

    Returns:
        LanguageProfile
    """
    return _PROFILES[LanguageTag(language)]
