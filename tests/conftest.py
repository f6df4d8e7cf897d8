"""Pytest configuration and shared fixtures for text-itemizer tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from text_itemizer import config as config_module
from text_itemizer.shaping.scripts import script_extensions

FONT_DIRS = [
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path("/System/Library/Fonts"),
    Path("/Library/Fonts"),
    Path.home() / ".fonts",
]


def _find_system_font() -> Path | None:
    for font_dir in FONT_DIRS:
        if not font_dir.exists():
            continue
        for pattern in ("*.ttf", "*.otf"):
            for path in sorted(font_dir.rglob(pattern)):
                return path
    return None


SYSTEM_FONT = _find_system_font()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's config file and environment out of tests."""
    monkeypatch.delenv(config_module.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")


@pytest.fixture
def fresh_script_cache() -> Generator[None, None, None]:
    """Clear the script lookup cache around tests that patch fontTools."""
    script_extensions.cache_clear()
    yield
    script_extensions.cache_clear()


@pytest.fixture
def system_font() -> Path:
    """Return any TrueType/OpenType font installed on the system."""
    if SYSTEM_FONT is None:
        pytest.skip("System fonts not available")
    return SYSTEM_FONT


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a YAML config file with non-default settings."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "log_level: info\n"
        "language: ar\n"
        "visual_order: false\n"
        "jobs: 2\n"
        "font_size: 24\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_lines() -> list[str]:
    """Return single-line texts covering Latin, RTL, mixed, CJK and astral input."""
    return [
        "Hello",
        "abcدef",
        "مرحبا بالعالم",
        "مرحبا 123",
        "שלום world",
        "cafe\u0301",
        "カーな",
        "a\U0001d400b",
        "Hello, world!",
        "Привет мир",
        "(abc) [דה] 42%",
        "日本語のテキスト",
        "x",
    ]


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
