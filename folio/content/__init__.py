"""
folio Content Generation

Deterministic serializer from containers and paragraphs to markdown.
"""

from folio.content.generator import generate_content, render_section

__all__ = ["generate_content", "render_section"]
