"""Provider 抽象接口。

上层 Agent 不直接依赖具体厂商的 HTTP 细节，而是依赖此协议：
将 ChatRequest 转成具体 API 请求，并把响应 JSON 解析为 ChatResult。
"""

from typing import Protocol
from code_chat.domain.models import ChatRequest, ChatResult


class ProviderClient(Protocol):
    """LLM Provider 客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - chat(req): 执行一次非流式对话调用，失败时抛出 BusinessError 子类。
    """

    name: str

    def chat(self, req: ChatRequest) -> ChatResult:
        ...
