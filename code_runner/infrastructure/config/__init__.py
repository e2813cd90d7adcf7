from code_runner.infrastructure.config.settings import Settings, get_settings, parse_memory_limit

__all__ = ["Settings", "get_settings", "parse_memory_limit"]
