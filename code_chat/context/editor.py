"""当前编辑器上下文。

宿主环境通过 EditorState 暴露“当前活动文档”，本模块把它转换为
发给模型的上下文文本，并按文件后缀选择语言参考文档。
两个函数都是当前编辑器状态的纯函数，没有副作用。
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Protocol

from code_chat.prompts import LANGUAGE_DOCS, LANGUAGE_SUFFIXES


# 没有打开文件时发给模型的上下文，属于正常上下文而不是错误
NO_EDITOR_CONTEXT = "Here is the context of the current file: There is no file editor open"


@dataclass(frozen=True)
class ActiveDocument:
    """活动文档快照：文件路径与完整文本。"""

    file_name: str
    text: str

    @classmethod
    def from_path(cls, path: str | Path) -> "ActiveDocument":
        p = Path(path)
        return cls(file_name=str(p), text=p.read_text(encoding="utf-8", errors="replace"))


class EditorState(Protocol):
    """宿主编辑器状态协议。"""

    def active_document(self) -> Optional[ActiveDocument]:
        ...


class StaticEditorState:
    """持有一个可替换活动文档的 EditorState 实现，供控制台与测试使用。"""

    def __init__(self, document: Optional[ActiveDocument] = None):
        self._document = document

    def active_document(self) -> Optional[ActiveDocument]:
        return self._document

    def open(self, document: Optional[ActiveDocument]) -> None:
        self._document = document


def get_current_editor_code(document: Optional[ActiveDocument]) -> str:
    if document is None:
        return NO_EDITOR_CONTEXT
    return document.text


def get_current_editor_language_docs(
    document: Optional[ActiveDocument],
    docs: Mapping[str, str] = LANGUAGE_DOCS,
) -> Optional[str]:
    """按后缀分组顺序匹配文件名，返回对应语言文档；无匹配返回 None。"""

    if document is None:
        return None
    for language, suffixes in LANGUAGE_SUFFIXES:
        if document.file_name.endswith(suffixes):
            return docs.get(language)
    return None
