"""HTML rendering for the explanation panel."""

import html

PANEL_TITLE: str = "💬 Code Explanation"

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{title}</title>
    <style>
        body {{
            font-family: monospace, sans-serif;
            padding: 15px;
            background: #1e1e1e;
            color: #dcdcdc;
        }}
        h2 {{
            color: #4fc3f7;
        }}
        .content {{
            max-height: 85vh;
            overflow-y: auto;
            border: 1px solid #444;
            padding: 12px;
            border-radius: 8px;
            background: #252526;
            white-space: pre-wrap;
            line-height: 1.5;
        }}
    </style>
</head>
<body>
    <h2>{title}</h2>
    {fragment}
</body>
</html>
"""


def render_fragment(explanation: str) -> str:
    """Return the escaped explanation wrapped in the content ``<div>``."""
    return f'<div class="content">{html.escape(explanation, quote=False)}</div>'


def render_html(explanation: str, *, title: str = PANEL_TITLE) -> str:
    """Return a standalone HTML page showing *explanation*."""
    return _PAGE_TEMPLATE.format(
        title=html.escape(title),
        fragment=render_fragment(explanation),
    )
