"""聊天面板宿主与消息协议。"""

from code_chat.panel.host import PANEL_VIEW_ID, ChatPanelHost, PanelTransport
from code_chat.panel.protocol import (
    ASSISTANT_MESSAGE_COMMAND,
    HUMAN_MESSAGE_COMMAND,
    AssistantMessageCommand,
    HumanMessageCommand,
    parse_inbound,
)

__all__ = [
    "PANEL_VIEW_ID",
    "ChatPanelHost",
    "PanelTransport",
    "ASSISTANT_MESSAGE_COMMAND",
    "HUMAN_MESSAGE_COMMAND",
    "AssistantMessageCommand",
    "HumanMessageCommand",
    "parse_inbound",
]
