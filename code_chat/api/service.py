"""对外 API 服务模块。

提供不依赖面板的函数接口，供脚本或上层应用直接调用。
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from code_chat.agents.code_chat_agent import CodeChatAgent
from code_chat.context.editor import ActiveDocument, StaticEditorState
from code_chat.panel.protocol import HistoryMessage, build_reply
from code_chat.providers import create_provider
from code_chat.providers.base import ProviderClient


_provider: Optional[ProviderClient] = None


def get_default_provider() -> ProviderClient:
    """获取默认 Provider 实例（单例）。"""
    global _provider
    if _provider is None:
        _provider = create_provider()
    return _provider


def run_code_chat(
    messages: Iterable[Mapping[str, Any]],
    prompt: str,
    file_name: Optional[str] = None,
    text: Optional[str] = None,
) -> Dict[str, Any]:
    """运行一次代码聊天。

    Args:
        messages: 历史消息列表，每项包含 role 与 content
        prompt: 新的用户输入
        file_name: 当前文件路径（可选，不提供视为没有打开文件）
        text: 当前文件内容；提供 file_name 但省略 text 时从磁盘读取

    Returns:
        与面板回复相同结构的字典 {"command": "chat-newMesssage", "text": ...}

    Raises:
        pydantic.ValidationError: 历史消息格式不合法
    """
    history: List[HistoryMessage] = [HistoryMessage.model_validate(m) for m in messages]
    document = None
    if file_name:
        document = ActiveDocument(file_name, text) if text is not None else ActiveDocument.from_path(file_name)
    agent = CodeChatAgent(get_default_provider(), editor=StaticEditorState(document))
    reply = agent.reply([m.to_chat_message() for m in history], prompt)
    return build_reply(reply)
