"""Code Chat 顶层包。

该包提供编辑器聊天插件的核心实现：读取当前文件与语言参考文档，
组装对话请求，调用 chat/completions 接口，并通过面板宿主把回复
送回界面。
"""
