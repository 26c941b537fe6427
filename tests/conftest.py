"""
folio Test Configuration and Fixtures

Shared record sets, a populated editor store and transfer function doubles.
"""

import asyncio
import pytest
from typing import List

from folio.core.records import Paragraph, Container
from folio.core.store import EditorStore
from folio.bootstrap.config import BridgeConfig


@pytest.fixture
def containers() -> List[Container]:
    """Two containers, deliberately listed out of order."""
    return [
        Container(id="c2", name="Body", order=1),
        Container(id="c1", name="Intro", order=0),
    ]


@pytest.fixture
def paragraphs() -> List[Paragraph]:
    """One paragraph per container, also listed out of order."""
    return [
        Paragraph(id="p2", content="World", container_id="c2", order=0),
        Paragraph(id="p1", content="Hello", container_id="c1", order=0),
    ]


@pytest.fixture
def ready_paragraphs() -> List[Paragraph]:
    """Enough content to pass validation with one unassigned paragraph."""
    return [
        Paragraph(id="p1", content="Opening paragraph text.", container_id="c1", order=0),
        Paragraph(id="p2", content="Second intro paragraph.", container_id="c1", order=1),
        Paragraph(id="p3", content="The body of the document.", container_id="c2", order=0),
        Paragraph(id="p4", content="A stray note", container_id=None, order=0),
    ]


@pytest.fixture
def store() -> EditorStore:
    """EditorStore with Intro/Body sections and three paragraphs."""
    store = EditorStore()
    intro, body = store.create_containers_from_sections(["Intro", "Body"])
    store.add_paragraph("Welcome to the document.", intro.id)
    store.add_paragraph("Some background first.", intro.id)
    store.add_paragraph("The main argument goes here.", body.id)
    return store


@pytest.fixture
def fast_config() -> BridgeConfig:
    """Config with short timers so auto-reset can be observed in tests."""
    return BridgeConfig(
        success_reset_ms=30,
        failure_reset_ms=50,
        refresh_debounce_ms=100,
        transfer_timeout_ms=200,
    )


@pytest.fixture
def recording_transfer():
    """Async transfer function that records every payload it receives."""
    received = []

    async def transfer(payload):
        received.append(payload)
        return {"accepted": True}

    transfer.received = received
    return transfer


@pytest.fixture
def gated_transfer():
    """Async transfer function that blocks until its gate is opened."""
    gate = asyncio.Event()

    async def transfer(payload):
        await gate.wait()
        return "done"

    transfer.gate = gate
    return transfer
