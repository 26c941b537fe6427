"""
content/generator.py - Markdown document generator

Turns containers and their paragraphs into one flat markdown document:

    ## <container name>

    <paragraph content, trimmed>

    <paragraph content, trimmed>

Containers are emitted in ascending order; containers without paragraphs
are skipped; paragraphs whose trimmed content is empty are skipped inside
a container. The whole result is trimmed.

Pure and deterministic: the same records always give the same document,
regardless of input list order.
"""

from typing import Any, List
import logging

from folio.queries.containers import paragraphs_by_container, sorted_containers
from folio.adapters.converters import normalize_paragraphs

logger = logging.getLogger(__name__)

HEADING_PREFIX = "## "


def render_section(name: str, contents: List[str]) -> str:
    """Render one container section (heading plus paragraph blocks)."""
    section = f"{HEADING_PREFIX}{name}\n\n"
    for content in contents:
        trimmed = content.strip()
        if trimmed:
            section += trimmed + "\n\n"
    return section


def generate_content(containers: Any, paragraphs: Any) -> str:
    """
    Generate the flat markdown document.

    Args:
        containers: Container records (or anything the adapters accept)
        paragraphs: Paragraph records (or anything the adapters accept)

    Returns:
        Trimmed markdown string; empty when no container has paragraphs.
    """
    paragraph_list = normalize_paragraphs(paragraphs)
    sections = []

    for container in sorted_containers(containers):
        members = paragraphs_by_container(container.id, paragraph_list)
        if not members:
            continue
        sections.append(render_section(container.name, [p.content for p in members]))

    document = "".join(sections).strip()
    logger.debug(f"Generated document: {len(sections)} sections, {len(document)} characters")
    return document
