"""
Pytest configuration and shared fixtures for transcollect tests.

This module provides:
- write_file helper for building source trees in tmp_path
- project fixture: a small project with default scan roots and a catalog dir
"""

from pathlib import Path

import pytest

from transcollect.common.config import CollectorConfig


def write_file(path: Path, content, encoding: str = "utf-8") -> Path:
    """Write text or bytes to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding=encoding)
    return path


@pytest.fixture
def project(tmp_path) -> Path:
    """Project root with app/, resources/views/ and resources/lang/."""
    write_file(
        tmp_path / "app" / "Http" / "HomeController.php",
        "<?php\nreturn view('home', ['title' => trans('home.title')]);\n",
    )
    write_file(
        tmp_path / "resources" / "views" / "home.blade.php",
        "<h1>{{ trans('home.title') }}</h1>\n<p>{{ trans(\"home.intro\") }}</p>\n",
    )
    write_file(tmp_path / "resources" / "views" / "notes.txt", "trans('ignored.key')\n")
    (tmp_path / "resources" / "lang").mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def config(project) -> CollectorConfig:
    return CollectorConfig(project_root=project)
