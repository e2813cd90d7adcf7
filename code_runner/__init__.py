"""
Code Runner

在短生命周期、资源受限的 Docker 容器中执行用户提交的代码。
"""

__version__ = "0.1.0"
