from __future__ import annotations

import io
from typing import Dict, List, Optional, Tuple

import pytest

from check_engine import Reporter
from resource_discovery import ResourceScanner
from verifier_config import VerifierConfig

from .fakes import FakeCloud, FakeSession, build_healthy_cloud


class RecordingProbe:
    """Health probe double returning canned status codes per URL."""

    def __init__(self, codes: Optional[Dict[str, Optional[int]]] = None, default: Optional[int] = 200):
        self.codes = codes or {}
        self.default = default
        self.calls: List[Tuple[str, float]] = []

    def __call__(self, url: str, timeout: float) -> Optional[int]:
        self.calls.append((url, timeout))
        return self.codes.get(url, self.default)


@pytest.fixture
def cloud() -> FakeCloud:
    return build_healthy_cloud()


@pytest.fixture
def scanner(cloud: FakeCloud) -> ResourceScanner:
    return ResourceScanner(FakeSession(cloud))


@pytest.fixture
def config() -> VerifierConfig:
    return VerifierConfig(max_workers=1)


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(stream: io.StringIO) -> Reporter:
    return Reporter(stream)


@pytest.fixture
def health_probe() -> RecordingProbe:
    return RecordingProbe()
