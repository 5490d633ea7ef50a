"""系统提示词与语言参考文档。

语言参考文档以纯文本形式随包发布在 prompts/lang_docs 目录，
导入时一次性读入并构造成只读映射，之后不再修改。
"""

from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


PROMPTS_DIR = Path(__file__).resolve().parent
LANG_DOCS_DIR = PROMPTS_DIR / "lang_docs"

SYSTEM_PREAMBLE = "You are a helpful assistant."

# 有序的后缀分组：先匹配者优先，各组互不重叠
LANGUAGE_SUFFIXES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("typescript", (".ts", ".tsx")),
    ("javascript", (".js", ".jsx")),
    ("python", (".py",)),
)


def load_language_docs(root: Optional[Path] = None) -> Mapping[str, str]:
    """读取各语言的参考文档，返回只读映射 {language: text}。"""

    base = root or LANG_DOCS_DIR
    docs = {
        language: (base / f"{language}.md").read_text(encoding="utf-8")
        for language, _ in LANGUAGE_SUFFIXES
    }
    return MappingProxyType(docs)


LANGUAGE_DOCS: Mapping[str, str] = load_language_docs()
