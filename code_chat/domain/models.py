"""统一的对话与结果数据模型。

- ChatMessage: 一条对话消息（system/user/assistant）。
- ChatRequest: 发给 Provider 的完整请求，构造后不可变。
- ChatResult: 从 Provider 响应解析出的统一结果。

Provider 适配器只依赖这些模型，并负责在各自的 API JSON 与模型之间转换。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple


# LLM 消息角色类型（与 OpenAI 的 role 字段对应）
Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """一条对话消息。顺序即发送给模型的会话历史顺序。"""

    role: Role
    content: str

    def to_payload(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ChatRequest:
    """一次完整的聊天请求，只在一次外呼期间存在。"""

    provider: str  # 逻辑 Provider 名，如 "openai"
    model: str  # 逻辑模型名，如 "code-chat"（再由 registry 映射为真实模型名）
    messages: Tuple[ChatMessage, ...]


@dataclass
class ChatUsage:
    """Provider 返回的 token 统计信息。"""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class ChatChoice:
    """单个候选回答。message 缺失时为 None。"""

    index: int
    message: Optional[ChatMessage]
    finish_reason: Optional[str] = None


@dataclass
class ChatResult:
    """一次对话调用的解析结果。

    - choices: 候选回答，通常只用 index=0 的一条。
    - usage: 可选的 token 使用统计。
    - raw: 原始响应 JSON，用于调试或日志记录。
    """

    provider: str
    model: str
    choices: List[ChatChoice] = field(default_factory=list)
    usage: Optional[ChatUsage] = None
    raw: Optional[Dict[str, Any]] = None

    @property
    def first_content(self) -> Optional[str]:
        """第一个候选回答的文本；路径缺失时返回 None。"""
        if not self.choices:
            return None
        message = self.choices[0].message
        return message.content if message else None
