"""插件入口：激活时向宿主注册聊天面板。"""

from pathlib import Path
from typing import Callable, Optional

from code_chat.agents.code_chat_agent import CodeChatAgent
from code_chat.context.editor import EditorState
from code_chat.panel.host import PANEL_VIEW_ID, ChatPanelHost, Dispatcher
from code_chat.providers import create_provider
from code_chat.providers.base import ProviderClient


def activate(
    register: Callable[[str, ChatPanelHost], None],
    editor: Optional[EditorState] = None,
    extension_root: Optional[str | Path] = None,
    provider_client: Optional[ProviderClient] = None,
    dispatch: Optional[Dispatcher] = None,
) -> ChatPanelHost:
    """创建面板宿主并以 PANEL_VIEW_ID 注册，返回该宿主。

    Args:
        register: 宿主提供的注册函数，接收 (view_id, host)
        editor: 宿主编辑器状态
        extension_root: 插件根目录，默认取配置
        provider_client: Provider 客户端，默认按配置创建
        dispatch: 请求派发方式，默认每个请求一个后台线程
    """
    agent = CodeChatAgent(provider_client or create_provider(), editor=editor)
    host = ChatPanelHost(agent, extension_root=extension_root, dispatch=dispatch)
    register(PANEL_VIEW_ID, host)
    return host


def deactivate() -> None:
    pass
