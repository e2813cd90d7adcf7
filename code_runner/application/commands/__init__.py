from code_runner.application.commands.execute_code import ExecuteCodeCommand

__all__ = ["ExecuteCodeCommand"]
