"""聊天面板宿主。

宿主环境第一次请求面板内容时调用 resolve：
设置脚本权限、注入脚本与样式、挂上入站消息监听，状态从
unresolved 变为 resolved，之后不再变化。

每条合法的 "chat-newMessage-human" 消息独立派发，完成后向面板
回复且仅回复一条 "chat-newMesssage"。多条消息之间不排队、不加锁，
回复顺序取决于网络返回的先后。
"""

import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Optional, Protocol

from code_chat.agents.code_chat_agent import CodeChatAgent
from code_chat.config.settings import settings
from code_chat.infrastructure.logging.logger import logger
from code_chat.panel.html import render_panel_html
from code_chat.panel.protocol import HumanMessageCommand, build_reply, parse_inbound


PANEL_VIEW_ID = "code-completion.webview"
# 面板前端构建产物所在目录（相对插件根目录）
ASSET_DIR = ("src", "client", "dist")

PanelState = Literal["unresolved", "resolved"]
Dispatcher = Callable[[Callable[[], None]], None]


class PanelTransport(Protocol):
    """宿主提供的面板通道。"""

    html: str
    enable_scripts: bool

    def as_webview_uri(self, path: Path) -> str:
        ...

    def on_inbound_message(self, handler: Callable[[Any], None]) -> None:
        ...

    def post_outbound_message(self, payload: Dict[str, Any]) -> None:
        ...


def thread_dispatcher(job: Callable[[], None]) -> None:
    """每个请求一个后台线程，避免阻塞宿主的消息循环。"""
    threading.Thread(target=job, daemon=True).start()


def inline_dispatcher(job: Callable[[], None]) -> None:
    job()


class ChatPanelHost:
    def __init__(
        self,
        agent: CodeChatAgent,
        extension_root: Optional[str | Path] = None,
        dispatch: Optional[Dispatcher] = None,
    ):
        self._agent = agent
        self._extension_root = Path(extension_root or settings.extension_root)
        self._dispatch = dispatch or thread_dispatcher
        self._transports: List[PanelTransport] = []

    @property
    def state(self) -> PanelState:
        return "resolved" if self._transports else "unresolved"

    def asset_path(self, filename: str) -> Path:
        return self._extension_root.joinpath(*ASSET_DIR, filename)

    def resolve(self, transport: PanelTransport) -> str:
        """生成面板文档并挂上消息监听，返回写入的 HTML。"""
        transport.enable_scripts = True
        script_uri = transport.as_webview_uri(self.asset_path("index.js"))
        style_uri = transport.as_webview_uri(self.asset_path("index.css"))
        transport.html = render_panel_html(script_uri, style_uri)

        if not any(t is transport for t in self._transports):
            transport.on_inbound_message(lambda raw: self.handle_message(transport, raw))
            self._transports.append(transport)
            logger.info("Panel resolved", extra={"extra": {"view_id": PANEL_VIEW_ID}})
        return transport.html

    def handle_message(self, transport: PanelTransport, raw: Any) -> None:
        message = parse_inbound(raw)
        if isinstance(message, HumanMessageCommand):
            self._dispatch(lambda: self._respond(transport, message))

    def _respond(self, transport: PanelTransport, message: HumanMessageCommand) -> None:
        text = self._agent.reply(message.history(), message.prompt)
        transport.post_outbound_message(build_reply(text))
