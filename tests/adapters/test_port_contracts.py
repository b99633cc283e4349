"""Adapter contract tests for the application ports.

Verify the shipped renderers, the stock Loggable and the standard library
logger keep satisfying the protocols in
``src/lib_struct_logger/application/ports.py``.
"""

from __future__ import annotations

import logging

import pytest

from lib_struct_logger.adapters.renderers import BlockRenderer, KeyValueRenderer, StructuredRenderer
from lib_struct_logger.application import ports
from lib_struct_logger.config import CallableContext
from lib_struct_logger.domain.fields import GenericLoggable
from lib_struct_logger.testing import FailingRenderer, RecordingBackend


@pytest.mark.parametrize("renderer", [KeyValueRenderer(), StructuredRenderer(), BlockRenderer(), FailingRenderer()])
def test_renderers_fulfil_renderer_protocol(renderer) -> None:
    assert isinstance(renderer, ports.Renderer)


@pytest.mark.parametrize("renderer", [KeyValueRenderer(), StructuredRenderer(), BlockRenderer()])
def test_renderer_lifecycle_produces_text(renderer) -> None:
    backend = RecordingBackend()
    state = renderer.start(backend)
    renderer.add_message(backend, state, "contract")
    renderer.add_field(backend, state, "key", "value")
    line = renderer.end(backend, state)
    assert isinstance(line, str)
    assert "contract" in line and "value" in line


def test_stdlib_logger_and_recording_backend_are_backends() -> None:
    assert isinstance(logging.getLogger("contract"), ports.Backend)
    assert isinstance(RecordingBackend(), ports.Backend)


def test_loggable_implementations() -> None:
    assert isinstance(GenericLoggable("a", 1), ports.Loggable)
    assert isinstance(CallableContext(dict), ports.Loggable)
    assert not isinstance({"a": 1}, ports.Loggable)
