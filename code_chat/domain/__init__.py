"""领域层模型。

包含：
- models: ChatMessage / ChatRequest / ChatResult 模型。
- exceptions: 业务异常类型定义。
"""
