import tkinter as tk
from pathlib import Path
from tkinter import filedialog, scrolledtext
from typing import Any, Callable, Dict, List, Optional

from code_chat.context.editor import ActiveDocument, StaticEditorState
from code_chat.extension import activate
from code_chat.panel.host import ChatPanelHost
from code_chat.panel.protocol import ASSISTANT_MESSAGE_COMMAND, HUMAN_MESSAGE_COMMAND


class ConsoleTransport:
    """把 tkinter 窗口当作面板：出站消息切回 UI 线程处理。"""

    def __init__(self, root: tk.Tk, on_reply: Callable[[Dict[str, Any]], None]):
        self.root = root
        self.html = ""
        self.enable_scripts = False
        self._on_reply = on_reply
        self._handler: Optional[Callable[[Any], None]] = None

    def as_webview_uri(self, path: Path) -> str:
        return path.resolve().as_uri()

    def on_inbound_message(self, handler: Callable[[Any], None]) -> None:
        self._handler = handler

    def post_outbound_message(self, payload: Dict[str, Any]) -> None:
        self.root.after(0, lambda: self._on_reply(payload))

    def send(self, payload: Dict[str, Any]) -> None:
        if self._handler is not None:
            self._handler(payload)


class App:
    def __init__(self, root):
        self.root = root
        self.root.title("Code Chat Console")
        self.editor = StaticEditorState()
        self.history: List[Dict[str, str]] = []
        self.pending_prompt: Optional[str] = None
        self.transport = ConsoleTransport(root, self.on_reply)
        self.host: ChatPanelHost = activate(lambda view_id, host: None, editor=self.editor)
        self.host.resolve(self.transport)

        top = tk.Frame(root)
        top.pack(fill=tk.X)
        tk.Button(top, text="Open file", command=self.open_file).pack(side=tk.LEFT)
        tk.Button(top, text="Close file", command=self.close_file).pack(side=tk.LEFT)
        tk.Button(top, text="New chat", command=self.new_chat).pack(side=tk.LEFT)
        self.file_label = tk.Label(top, text="No file open")
        self.file_label.pack(side=tk.LEFT)

        self.chat = scrolledtext.ScrolledText(root, width=90, height=24)
        self.chat.pack(fill=tk.BOTH, expand=True)
        self.chat.tag_config("user", foreground="#1a73e8")
        self.chat.tag_config("assistant", foreground="#34a853")
        self.chat.tag_config("system", foreground="#5f6368")

        bottom = tk.Frame(root)
        bottom.pack(fill=tk.X)
        self.entry = tk.Entry(bottom)
        self.entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.entry.bind("<Return>", self.on_send_event)
        self.send_btn = tk.Button(bottom, text="Send", command=self.on_send)
        self.send_btn.pack(side=tk.LEFT)
        self.status = tk.Label(root, text="Ready")
        self.status.pack(fill=tk.X)

    def open_file(self):
        path = filedialog.askopenfilename()
        if not path:
            return
        self.editor.open(ActiveDocument.from_path(path))
        self.file_label.config(text=path)

    def close_file(self):
        self.editor.open(None)
        self.file_label.config(text="No file open")

    def new_chat(self):
        self.history = []
        self.chat.delete(1.0, tk.END)
        self.chat.insert(tk.END, "[system] new chat\n", "system")

    def on_send(self):
        if self.pending_prompt is not None:
            return
        text = self.entry.get().strip()
        if not text:
            return
        self.pending_prompt = text
        self.send_btn.config(state=tk.DISABLED)
        self.status.config(text="Sending...")
        self.chat.insert(tk.END, f"user: {text}\n", "user")
        self.entry.delete(0, tk.END)
        self.transport.send({
            "command": HUMAN_MESSAGE_COMMAND,
            "messages": list(self.history),
            "prompt": text,
        })

    def on_send_event(self, event):
        self.on_send()
        return "break"

    def on_reply(self, payload: Dict[str, Any]):
        if payload.get("command") != ASSISTANT_MESSAGE_COMMAND:
            return
        reply = payload.get("text")
        if self.pending_prompt is not None:
            self.history.append({"role": "user", "content": self.pending_prompt})
        if reply is None:
            self.chat.insert(tk.END, "[system] empty reply\n", "system")
        else:
            self.history.append({"role": "assistant", "content": reply})
            self.chat.insert(tk.END, f"assistant: {reply}\n", "assistant")
        self.chat.see(tk.END)
        self.pending_prompt = None
        self.send_btn.config(state=tk.NORMAL)
        self.status.config(text="Ready")


def main():
    root = tk.Tk()
    App(root)
    root.mainloop()


if __name__ == "__main__":
    main()
