"""OpenAI chat/completions Provider 适配器。

- URL: {base_url}/chat/completions
- 认证: Authorization: Bearer <api_key>

请求体只包含 model 与 messages 两个字段，保证相同输入得到逐字节相同的请求。
每次调用只发起一次请求，不重试。
"""

from typing import Any, Dict, List, Optional

import httpx

from code_chat.config.settings import settings
from code_chat.domain.exceptions import ApiError, NetworkError, ValidationError
from code_chat.domain.models import ChatChoice, ChatMessage, ChatRequest, ChatResult, ChatUsage
from code_chat.providers.registry import OPENAI_CONFIG


class OpenAIClient:
    """OpenAI Provider 客户端实现。"""

    name = "openai"

    def __init__(self, cfg=settings):
        self._settings = cfg

    def chat(self, req: ChatRequest) -> ChatResult:
        api_key = getattr(self._settings, "openai_api_key", None)
        if not api_key:
            raise ValidationError(code="MISSING_API_KEY", message="OPENAI_API_KEY not set")
        payload = self._build_payload(req)
        base = getattr(self._settings, "openai_base_url", None) or OPENAI_CONFIG.base_url
        try:
            with httpx.Client(timeout=getattr(self._settings, "http_timeout", None), trust_env=False) as client:
                resp = client.post(
                    f"{base.rstrip('/')}/chat/completions",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e))
        try:
            data = resp.json()
        except ValueError as e:
            raise ApiError(
                code="INVALID_JSON",
                message=f"Response is not valid JSON: {e}",
                http_status=resp.status_code,
            )
        if not isinstance(data, dict):
            raise ApiError(code="INVALID_RESPONSE", message="Response is not a JSON object", http_status=resp.status_code)
        if data.get("error"):
            raise ApiError(
                code="API_ERROR",
                message=self._error_message(data["error"]),
                http_status=resp.status_code,
                error=data["error"],
            )
        if resp.status_code >= 400:
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code)
        return self._parse_response(data, req)

    # ---- 辅助方法 ----

    def _build_payload(self, req: ChatRequest) -> Dict[str, Any]:
        model_cfg = OPENAI_CONFIG.models.get(req.model)
        return {
            "model": model_cfg.provider_model if model_cfg else req.model,
            "messages": [m.to_payload() for m in req.messages],
        }

    def _parse_response(self, data: Dict[str, Any], req: ChatRequest) -> ChatResult:
        choices: List[ChatChoice] = []
        raw_choices = data.get("choices")
        for i, ch in enumerate(raw_choices if isinstance(raw_choices, list) else []):
            # 非法条目保留占位，choices[0] 始终对应响应中的第一个候选
            if not isinstance(ch, dict):
                choices.append(ChatChoice(index=i, message=None))
                continue
            choices.append(
                ChatChoice(
                    index=ch.get("index", i),
                    message=self._build_chat_message(ch.get("message")),
                    finish_reason=ch.get("finish_reason"),
                )
            )
        usage_raw = data.get("usage") or {}
        usage = None
        if isinstance(usage_raw, dict) and usage_raw:
            usage = ChatUsage(
                prompt_tokens=usage_raw.get("prompt_tokens", 0),
                completion_tokens=usage_raw.get("completion_tokens", 0),
                total_tokens=usage_raw.get("total_tokens", 0),
            )
        return ChatResult(provider=self.name, model=req.model, choices=choices, usage=usage, raw=data)

    @staticmethod
    def _build_chat_message(payload: Any) -> Optional[ChatMessage]:
        """content 缺失或不是字符串时返回 None，由上层决定如何处理。"""

        if not isinstance(payload, dict) or not isinstance(payload.get("content"), str):
            return None
        return ChatMessage(role=payload.get("role") or "assistant", content=payload["content"])

    @staticmethod
    def _error_message(error: Any) -> str:
        if isinstance(error, dict):
            return str(error.get("message") or error.get("code") or error)
        return str(error)
