"""请求组装。

消息顺序固定为：系统前言 → 调用方提供的历史 → 语言文档（可选）
→ 当前文件上下文（超长截断）→ 新的用户输入。
相同输入必须得到逐字节相同的消息列表，任何情况下都不调整顺序。
"""

from typing import Iterable, List, Optional

from code_chat.domain.models import ChatMessage, ChatRequest
from code_chat.prompts import SYSTEM_PREAMBLE


MAX_CODE_LEN = 5000
TRUNCATION_MARKER = "\n\nOUTPUT HAS BEEN TRUNCATED BECAUSE OF LARGE FILE SIZE"


def truncate_context(context: str, max_code_len: int = MAX_CODE_LEN) -> str:
    """按字符数截断（不感知 tokenizer），截断时追加提示标记。"""

    if len(context) > max_code_len:
        return f"{context[:max_code_len]}{TRUNCATION_MARKER}"
    return context


def build_messages(
    history: Iterable[ChatMessage],
    prompt: str,
    context: str,
    language_docs: Optional[str] = None,
    max_code_len: int = MAX_CODE_LEN,
) -> List[ChatMessage]:
    messages = [ChatMessage(role="system", content=SYSTEM_PREAMBLE)]
    messages.extend(history)
    if language_docs:
        messages.append(ChatMessage(role="system", content=language_docs))
    messages.append(ChatMessage(role="system", content=truncate_context(context, max_code_len)))
    messages.append(ChatMessage(role="user", content=prompt))
    return messages


def build_chat_request(
    history: Iterable[ChatMessage],
    prompt: str,
    context: str,
    language_docs: Optional[str] = None,
    *,
    provider: str = "openai",
    model: str = "code-chat",
    max_code_len: int = MAX_CODE_LEN,
) -> ChatRequest:
    return ChatRequest(
        provider=provider,
        model=model,
        messages=tuple(build_messages(history, prompt, context, language_docs, max_code_len)),
    )
