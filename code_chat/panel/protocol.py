"""面板与宿主之间的消息协议。

入站消息按 command 字段区分类型：
- 已知 command 且字段合法：解析为对应模型。
- 未知 command：静默忽略。
- 已知 command 但字段不合法：记录警告后丢弃，不回复。
"""

from typing import Any, Dict, List, Literal, Optional, Type

import pydantic
from pydantic import BaseModel, ConfigDict

from code_chat.domain.models import ChatMessage, Role
from code_chat.infrastructure.logging.logger import logger


HUMAN_MESSAGE_COMMAND = "chat-newMessage-human"
# 面板端按这个拼写监听，属于协议的一部分
ASSISTANT_MESSAGE_COMMAND = "chat-newMesssage"


class HistoryMessage(BaseModel):
    """面板传来的一条历史消息，忽略面板附加的其他字段。"""

    model_config = ConfigDict(extra="ignore")

    role: Role
    content: str

    def to_chat_message(self) -> ChatMessage:
        return ChatMessage(role=self.role, content=self.content)


class HumanMessageCommand(BaseModel):
    """用户在面板发送了一条新消息。"""

    command: Literal["chat-newMessage-human"]
    messages: List[HistoryMessage]
    prompt: str

    def history(self) -> List[ChatMessage]:
        return [m.to_chat_message() for m in self.messages]


class AssistantMessageCommand(BaseModel):
    """宿主回给面板的模型回复，text 可能为 None。"""

    command: Literal["chat-newMesssage"] = ASSISTANT_MESSAGE_COMMAND
    text: Optional[str]


INBOUND_COMMANDS: Dict[str, Type[BaseModel]] = {
    HUMAN_MESSAGE_COMMAND: HumanMessageCommand,
}


def parse_inbound(payload: Any) -> Optional[BaseModel]:
    """把面板原始消息解析为协议模型；应忽略的消息返回 None。"""

    if not isinstance(payload, dict):
        logger.warning("Ignored non-object panel message", extra={"extra": {"type": type(payload).__name__}})
        return None
    command = payload.get("command")
    model = INBOUND_COMMANDS.get(command) if isinstance(command, str) else None
    if model is None:
        return None
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        logger.warning(
            "Rejected malformed panel message",
            extra={"extra": {"command": command, "errors": e.errors(include_url=False)}},
        )
        return None


def build_reply(text: Optional[str]) -> Dict[str, Any]:
    return AssistantMessageCommand(text=text).model_dump()
