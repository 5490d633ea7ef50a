"""编辑器上下文提取与语言文档选择。"""

from code_chat.context.editor import (
    NO_EDITOR_CONTEXT,
    ActiveDocument,
    EditorState,
    StaticEditorState,
    get_current_editor_code,
    get_current_editor_language_docs,
)

__all__ = [
    "NO_EDITOR_CONTEXT",
    "ActiveDocument",
    "EditorState",
    "StaticEditorState",
    "get_current_editor_code",
    "get_current_editor_language_docs",
]
