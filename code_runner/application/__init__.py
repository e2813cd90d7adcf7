"""
应用层

执行生命周期编排与执行 Actor。
"""
