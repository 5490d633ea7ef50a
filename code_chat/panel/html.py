"""面板 HTML 文档模板。每次 resolve 都重新生成，不缓存。"""

from html import escape


PANEL_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <link rel="stylesheet" href="{style_uri}" />
</head>
<body>
    <noscript>You need to enable JavaScript to run this app.</noscript>
    <div id="root"></div>
    <script src="{script_uri}"></script>
</body>
</html>
"""


def render_panel_html(script_uri: str, style_uri: str) -> str:
    return PANEL_TEMPLATE.format(
        script_uri=escape(script_uri, quote=True),
        style_uri=escape(style_uri, quote=True),
    )
