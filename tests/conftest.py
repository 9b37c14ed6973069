"""Pytest configuration and fixtures for jsprobe tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from jsprobe.parser import JavaScriptParser


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch):
    """Point the config file at a temporary location so a user's
    ~/.jsprobe/config.toml never leaks into test results."""
    monkeypatch.setattr("jsprobe.config.CONFIG_FILE", tmp_path / "jsprobe-home" / "config.toml")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture(scope="session")
def js_parser() -> JavaScriptParser:
    """A strict parser shared by the whole session."""
    return JavaScriptParser()


@pytest.fixture
def parse_js(js_parser: JavaScriptParser) -> Callable[[str], object]:
    """Parse a snippet and fail loudly if it does not parse."""
    def _parse(source: str):
        root = js_parser.parse(source)
        assert root is not None, f"fixture source did not parse:\n{source}"
        return root
    return _parse


@pytest.fixture
def sample_app_path() -> Path:
    """Path to the sample exercise directory."""
    return Path(__file__).parent / "fixtures" / "sample_app"


@pytest.fixture
def sample_js_code() -> str:
    """Sample script touching every detector."""
    return '''// Entry point for the page.
function foo(items) {
  return items.length;
}

function bar(items) {
  console.log('bar called', items);
  return items.map((item) => item * 2);
}

const render = function () {
  // document.body.innerHTML = '';
  console.log('render');
};

window.addEventListener('load', render);
'''
