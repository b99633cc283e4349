from __future__ import annotations

from typing import Iterator

import pytest

from lib_struct_logger.config import reset_settings
from lib_struct_logger.core import StructLogger
from lib_struct_logger.domain.levels import TRACE
from lib_struct_logger.testing import RecordingBackend


@pytest.fixture(autouse=True)
def _isolated_settings() -> Iterator[None]:
    """Every test starts and ends with default renderer, context and separator."""

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def backend() -> RecordingBackend:
    """In-memory backend accepting every level down to TRACE."""

    return RecordingBackend(level=TRACE)


@pytest.fixture
def log(backend: RecordingBackend) -> StructLogger:
    """Façade writing into :func:`backend`."""

    return StructLogger(backend)

