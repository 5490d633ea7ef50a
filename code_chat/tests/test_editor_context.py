from types import MappingProxyType

import pytest

from code_chat.context.editor import (
    NO_EDITOR_CONTEXT,
    ActiveDocument,
    StaticEditorState,
    get_current_editor_code,
    get_current_editor_language_docs,
)
from code_chat.prompts import LANGUAGE_DOCS, load_language_docs


def test_editor_code_returns_document_text():
    doc = ActiveDocument(file_name="/tmp/foo.py", text="x=1")
    assert get_current_editor_code(doc) == "x=1"


def test_editor_code_without_document_is_sentinel():
    assert get_current_editor_code(None) == NO_EDITOR_CONTEXT
    assert NO_EDITOR_CONTEXT == "Here is the context of the current file: There is no file editor open"


@pytest.mark.parametrize(
    "file_name, language",
    [
        ("src/app.ts", "typescript"),
        ("src/App.tsx", "typescript"),
        ("lib/index.js", "javascript"),
        ("lib/Button.jsx", "javascript"),
        ("main.py", "python"),
    ],
)
def test_language_docs_selected_by_suffix(file_name, language):
    doc = ActiveDocument(file_name=file_name, text="")
    assert get_current_editor_language_docs(doc) == LANGUAGE_DOCS[language]


@pytest.mark.parametrize("file_name", ["README.md", "main.go", "script.pyc", "Makefile", "MAIN.PY"])
def test_language_docs_none_for_other_files(file_name):
    doc = ActiveDocument(file_name=file_name, text="")
    assert get_current_editor_language_docs(doc) is None


def test_language_docs_none_without_document():
    assert get_current_editor_language_docs(None) is None


def test_language_docs_table_is_read_only():
    assert isinstance(LANGUAGE_DOCS, MappingProxyType)
    assert set(LANGUAGE_DOCS) == {"typescript", "javascript", "python"}
    assert all(text.strip() for text in LANGUAGE_DOCS.values())
    with pytest.raises(TypeError):
        LANGUAGE_DOCS["python"] = "changed"  # type: ignore[index]


def test_load_language_docs_from_custom_dir(tmp_path):
    for name in ("typescript", "javascript", "python"):
        (tmp_path / f"{name}.md").write_text(f"{name} docs", encoding="utf-8")
    docs = load_language_docs(tmp_path)
    doc = ActiveDocument(file_name="a.py", text="")
    assert get_current_editor_language_docs(doc, docs) == "python docs"


def test_active_document_from_path(tmp_path):
    p = tmp_path / "demo.py"
    p.write_text("print('hi')\n", encoding="utf-8")
    doc = ActiveDocument.from_path(p)
    assert doc.file_name.endswith("demo.py")
    assert doc.text == "print('hi')\n"


def test_static_editor_state_open_and_close():
    editor = StaticEditorState()
    assert editor.active_document() is None
    doc = ActiveDocument(file_name="a.js", text="let a = 1;")
    editor.open(doc)
    assert editor.active_document() is doc
    editor.open(None)
    assert editor.active_document() is None
