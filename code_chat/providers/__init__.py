"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 提供具体实现 (openai_client)。
"""

from typing import Optional

from code_chat.config.settings import settings
from code_chat.domain.exceptions import ValidationError
from code_chat.providers.base import ProviderClient
from code_chat.providers.openai_client import OpenAIClient
from code_chat.providers.registry import get_provider_config


def create_provider(name: Optional[str] = None) -> ProviderClient:
    """根据名称创建 Provider 实例，默认取配置中的 provider。"""

    provider_name = name or getattr(settings, "default_provider", "openai")
    try:
        get_provider_config(provider_name)
    except KeyError:
        raise ValidationError(code="UNKNOWN_PROVIDER", message=f"Unknown provider: {provider_name}")
    return OpenAIClient(settings)
