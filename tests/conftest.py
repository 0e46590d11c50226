"""Shared pytest configuration and fixtures for all tests."""

import zipfile
from pathlib import Path
from typing import Any

import pytest

from patchcheck.display.base import Display


def pytest_collection_modifyitems(config, items):
    """Automatically apply markers based on test file location."""
    for item in items:
        path_str = str(item.fspath)
        if "/unit/" in path_str:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in path_str:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    """Keep log files and CI overrides out of the real environment."""
    home = tmp_path_factory.mktemp("patchcheck_home")
    monkeypatch.setenv("PATCHCHECK_HOME", str(home))
    monkeypatch.delenv("PATCHCHECK_NON_INTERACTIVE", raising=False)
    return home


# =============================================================================
# Fakes
# =============================================================================


class RecordingDisplay(Display):
    """Display that records output and answers prompts from a script."""

    def __init__(self, answers: list[bool] | None = None):
        self.messages: list[tuple[str, str]] = []
        self.answers = list(answers or [])
        self.questions: list[str] = []
        self.spinners_open = 0

    def status(self, message: str, **kwargs) -> None:
        self.messages.append(("status", message))

    def success(self, message: str, **kwargs) -> None:
        self.messages.append(("success", message))

    def error(self, message: str, **kwargs) -> None:
        self.messages.append(("error", message))

    def warning(self, message: str, **kwargs) -> None:
        self.messages.append(("warning", message))

    def info(self, message: str, style: str | None = None, **kwargs) -> None:
        self.messages.append(("info", message))

    def confirm(self, question: str, default: bool = False) -> bool:
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {question}")
        return self.answers.pop(0)

    def spinner_start(self, description: str = "", **kwargs) -> Any:
        self.spinners_open += 1
        return description

    def spinner_finish(self, handle: Any, message: str = "", **kwargs) -> None:
        self.spinners_open -= 1

    def texts(self, kind: str) -> list[str]:
        return [text for k, text in self.messages if k == kind]


class FakeEnvironment:
    """Environment with a fixed project root and interactivity."""

    def __init__(self, root: Path | None, interactive: bool = False):
        self.root = root
        self.can_accept_user_input = interactive

    def project_root(self) -> Path | None:
        return self.root


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def project_root(tmp_path) -> Path:
    root = tmp_path / "app"
    root.mkdir()
    (root / "shorebird.yaml").write_text("app_id: test-app\n")
    return root


# =============================================================================
# Archive helpers
# =============================================================================


def make_archive(path: Path, members: dict[str, bytes | str]) -> Path:
    """Write a zip archive with the given members."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in members.items():
            data = content.encode("utf-8") if isinstance(content, str) else content
            zf.writestr(name, data)
    return path


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without real archives on disk")
    config.addinivalue_line("markers", "integration: tests that drive the CLI end to end")
