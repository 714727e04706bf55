"""
Standalone page assembly.
"""
from typing import Optional

from jinja2 import Template

from .config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_URL


PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
{%- if title %}
    <title>{{ title|e }}</title>
{%- endif %}
    <style>
        @import url('{{ font_url }}');
        body {
            font-family: {{ font_family }};
        }
{{ css }}
    </style>
</head>
<body>
{{ content }}
</body>
</html>
"""

_template = Template(PAGE_TEMPLATE, autoescape=False, keep_trailing_newline=True)


def wrap_page(
    fragment: str,
    stylesheet: str,
    font_url: str = DEFAULT_FONT_URL,
    font_family: str = DEFAULT_FONT_FAMILY,
    title: Optional[str] = None,
) -> str:
    """
    Embed a rendered fragment and stylesheet into a complete HTML page.

    The fragment is trusted HTML and is inserted verbatim.

    Args:
        fragment: Rendered HTML fragment
        stylesheet: Combined stylesheet text
        font_url: Web font stylesheet to @import
        font_family: CSS font-family value for body
        title: Optional document title

    Returns:
        Complete HTML document
    """
    return _template.render(
        title=title,
        font_url=font_url,
        font_family=font_family,
        css=stylesheet,
        content=fragment,
    )
