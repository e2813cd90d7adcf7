"""
领域服务模块
"""
from code_runner.domain.services.output_truncator import truncate_output, TRUNCATION_MARKER

__all__ = ["truncate_output", "TRUNCATION_MARKER"]
