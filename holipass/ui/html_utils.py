"""Helpers for building HTML snippets rendered through st.markdown."""
import html
from textwrap import dedent


def html_block(template: str) -> str:
    """
    Flatten multi-line HTML so Streamlit's Markdown renderer keeps it as HTML.

    Lines indented by four or more spaces would otherwise become code blocks.
    """
    lines = dedent(template).splitlines()
    return "\n".join(line.lstrip() for line in lines).strip()


def escape(value: object) -> str:
    """Escape user-supplied text before embedding it in markup."""
    return html.escape("" if value is None else str(value), quote=True)
