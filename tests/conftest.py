from __future__ import annotations

from pathlib import Path

import pytest

from litestar_inertia.config import InertiaConfig
from litestar_inertia.plugin import InertiaPlugin
from tests.helpers import RecordingTemplateEngine

here = Path(__file__).parent


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def template_dir() -> Path:
    return here / "templates"


@pytest.fixture
def template_engine() -> RecordingTemplateEngine:
    return RecordingTemplateEngine()


@pytest.fixture
def inertia_config(template_dir: Path) -> InertiaConfig:
    return InertiaConfig(root_template="index.html", template_dir=template_dir, version="1.0")


@pytest.fixture
def inertia_plugin(inertia_config: InertiaConfig) -> InertiaPlugin:
    return InertiaPlugin(config=inertia_config)
