"""
Markdown to HTML conversion for .md documents.
"""
import markdown

MARKDOWN_EXTENSIONS = ['fenced_code', 'tables', 'sane_lists']


def render_markdown(text: str) -> str:
    """Convert markdown source to an HTML fragment."""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
