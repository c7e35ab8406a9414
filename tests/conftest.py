"""
Pytest configuration and shared fixtures.

The fake Xcode install is a directory tree with two /bin/sh scripts:
- bin/xcode-select      prints the developer root
- .../symbolicatecrash  echoes DEVELOPER_DIR and its arguments
"""

import sys
from types import SimpleNamespace

import pytest

from crash_assistant.config import AssistantSettings

from .helpers import FAKE_SYMBOLICATECRASH, FIND, TOOL_RELATIVE_PATH, write_script


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "posix: runs /bin/sh stand-ins for Xcode tools"
    )


def pytest_collection_modifyitems(config, items):
    if sys.platform != "win32":
        return
    skip = pytest.mark.skip(reason="needs /bin/sh and find")
    for item in items:
        if "posix" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def fake_xcode(tmp_path):
    """A developer root with symbolicatecrash next to it."""
    contents = tmp_path / "Xcode.app" / "Contents"
    developer = contents / "Developer"
    developer.mkdir(parents=True)
    tool = write_script(contents / TOOL_RELATIVE_PATH, FAKE_SYMBOLICATECRASH)
    xcode_select = write_script(tmp_path / "bin" / "xcode-select", f'echo "{developer}"\n')
    return SimpleNamespace(
        developer_root=str(developer),
        tool_path=str(tool),
        xcode_select=str(xcode_select),
    )


@pytest.fixture
def find_path():
    return FIND


@pytest.fixture
def settings(fake_xcode, find_path):
    return AssistantSettings(xcode_select_path=fake_xcode.xcode_select, find_path=find_path)


@pytest.fixture
def archive(tmp_path):
    """Archive.xcarchive with one Bar.app and one Bar.app.dSYM."""
    root = tmp_path / "drops" / "Archive.xcarchive"
    app = root / "Products" / "Applications" / "Bar.app"
    dsym = root / "dSYMs" / "Bar.app.dSYM"
    (app).mkdir(parents=True)
    (app / "Bar").write_text("binary")
    (dsym / "Contents" / "Resources" / "DWARF").mkdir(parents=True)
    return SimpleNamespace(path=str(root), app=str(app), dsym=str(dsym))


@pytest.fixture
def crash_point(tmp_path):
    """Point.xccrashpoint with one Foo.crash."""
    root = tmp_path / "drops" / "Point.xccrashpoint"
    logs = root / "DistributionInfos" / "all" / "Logs"
    logs.mkdir(parents=True)
    crash = logs / "Foo.crash"
    crash.write_text("Incident Identifier: 1\n")
    return SimpleNamespace(path=str(root), crash=str(crash))


@pytest.fixture
def crash_file(tmp_path):
    crash = tmp_path / "drops" / "Foo.crash"
    crash.parent.mkdir(parents=True, exist_ok=True)
    crash.write_text("Incident Identifier: 2\n")
    return str(crash)
