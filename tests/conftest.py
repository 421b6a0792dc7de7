"""Shared fixtures."""

from __future__ import annotations

import pytest
import pytest_asyncio

from tests.harness import ProcessorTestHarness


@pytest.fixture
def harness() -> ProcessorTestHarness:
    """Harness whose processor has not been activated yet."""
    return ProcessorTestHarness()


@pytest_asyncio.fixture
async def ready_harness() -> ProcessorTestHarness:
    """Harness whose processor is READY, with the activation joins cleared."""
    h = ProcessorTestHarness()
    await h.activate()
    h.clear()
    return h
