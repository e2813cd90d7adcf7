"""
应用配置

使用 Pydantic Settings 管理应用配置。启动时读取一次，运行期间只读。
"""
import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MEMORY_LIMIT_BYTES = 100 * 1024 * 1024

_MEMORY_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmg]?)(?:i?b?)?\s*$", re.IGNORECASE)
_MEMORY_UNITS = {
    "": 1,
    "k": 1024,
    "m": 1024 * 1024,
    "g": 1024 * 1024 * 1024,
}


def parse_memory_limit(value: str) -> int:
    """
    解析内存限制为字节数

    Args:
        value: 如 "100m", "512Mi", "1G", "1GB", "104857600"

    Returns:
        字节数，无法解析时返回 100 MiB
    """
    match = _MEMORY_PATTERN.match(value or "")
    if not match:
        return DEFAULT_MEMORY_LIMIT_BYTES
    number, unit = match.groups()
    size = int(float(number) * _MEMORY_UNITS[unit.lower()])
    if size <= 0:
        return DEFAULT_MEMORY_LIMIT_BYTES
    return size


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============== 应用配置 ==============
    app_name: str = Field(default="Code Runner")
    app_version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)

    # ============== 服务器配置 ==============
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)

    # ============== Docker 配置 ==============
    docker_socket_path: str = Field(default="/var/run/docker.sock")
    docker_network: str = Field(default="none")
    docker_memory_limit: str = Field(default="100m")
    docker_cpu_shares: int = Field(default=512)

    # ============== 执行配置 ==============
    default_timeout: int = Field(default=120, description="默认执行超时时间（秒）")
    max_output_size: int = Field(default=10 * 1024 * 1024, description="stdout/stderr 最大字符数")
    actor_queue_size: int = Field(default=32, description="执行队列容量，满时提交方阻塞")
    cleanup_on_startup: bool = Field(default=True, description="启动时删除遗留的受管容器")

    # ============== 日志配置 ==============
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text")  # json, text

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "text"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}")
        return v.lower()

    @field_validator("default_timeout", "max_output_size", "actor_queue_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @property
    def docker_url(self) -> str:
        """Docker daemon 连接 URL"""
        return f"unix://{self.docker_socket_path}"

    @property
    def memory_limit_bytes(self) -> int:
        return parse_memory_limit(self.docker_memory_limit)


@lru_cache()
def get_settings() -> Settings:
    """
    获取配置单例

    使用 lru_cache 确保配置只加载一次。
    """
    return Settings()
