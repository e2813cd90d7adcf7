"""
基础设施层

配置、日志以及 Docker daemon 适配器。
"""
