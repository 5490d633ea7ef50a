"""代码聊天 Agent。

把编辑器上下文、语言文档与调用方历史组装成请求，
调用 Provider 一次，并把结果转换为面板可直接展示的文本。
"""

import logging
import time
from typing import Any, Dict, Iterable, Optional
from uuid import uuid4

from code_chat.agents.request_builder import build_chat_request
from code_chat.config.settings import settings
from code_chat.context.editor import (
    EditorState,
    StaticEditorState,
    get_current_editor_code,
    get_current_editor_language_docs,
)
from code_chat.domain.exceptions import BusinessError
from code_chat.domain.models import ChatMessage, ChatRequest, ChatResult
from code_chat.infrastructure.logging.logger import logger
from code_chat.providers.base import ProviderClient


# 所有失败原因对用户展示同一句话
FAILURE_TEXT = "There was a server error"


class CodeChatAgent:
    """一次用户动作对应一次外呼，不持有跨请求的会话状态。"""

    def __init__(
        self,
        provider_client: ProviderClient,
        editor: Optional[EditorState] = None,
        model_name: Optional[str] = None,
        max_code_len: Optional[int] = None,
    ):
        """初始化 Agent。

        Args:
            provider_client: Provider 客户端实例
            editor: 宿主编辑器状态，默认视为没有打开任何文件
            model_name: 逻辑模型名，默认取配置
            max_code_len: 文件上下文的最大字符数，默认取配置
        """
        self._provider_client = provider_client
        self._editor = editor or StaticEditorState()
        self._provider = getattr(provider_client, "name", None) or getattr(settings, "default_provider", "openai")
        self._model = model_name or getattr(settings, "default_model", "code-chat")
        self._max_code_len = max_code_len or getattr(settings, "max_code_len", 5000)

    def build_request(self, history: Iterable[ChatMessage], prompt: str) -> ChatRequest:
        """基于当前编辑器状态组装请求。"""
        document = self._editor.active_document()
        return build_chat_request(
            history,
            prompt,
            get_current_editor_code(document),
            get_current_editor_language_docs(document),
            provider=self._provider,
            model=self._model,
            max_code_len=self._max_code_len,
        )

    def reply(self, history: Iterable[ChatMessage], prompt: str) -> Optional[str]:
        """执行一次对话并返回回复文本。

        失败时返回 FAILURE_TEXT；响应中缺少 choices[0].message.content 时返回 None。
        """
        start_time = time.time()
        log_ctx: Dict[str, Any] = {"trace_id": f"tr-{uuid4().hex}", "provider": self._provider}
        try:
            req = self.build_request(history, prompt)
            self._log(logging.INFO, "Calling provider", log_ctx, model=req.model, message_count=len(req.messages))
            result: ChatResult = self._provider_client.chat(req)
        except BusinessError as e:
            self._log(logging.ERROR, "Chat completion failed", log_ctx, code=e.code, error=e.message)
            return FAILURE_TEXT
        except Exception as e:
            logger.exception("Chat completion failed", extra={"extra": {**log_ctx, "error": str(e)}})
            return FAILURE_TEXT

        if result.usage:
            self._log(
                logging.INFO,
                "Token usage",
                log_ctx,
                prompt_tokens=result.usage.prompt_tokens,
                completion_tokens=result.usage.completion_tokens,
                total_tokens=result.usage.total_tokens,
            )
        content = result.first_content
        if content is None:
            self._log(logging.WARNING, "Response has no choices[0].message.content", log_ctx)
        self._log(
            logging.INFO,
            "Completed chat",
            log_ctx,
            elapsed_seconds=round(time.time() - start_time, 2),
        )
        return content

    @staticmethod
    def _log(level: int, msg: str, ctx: Dict[str, Any], **fields: Any) -> None:
        logger.log(level, msg, extra={"extra": {**ctx, **fields}})
