"""Shared test fixtures."""

import os

import pytest

from tadatodo.models import SavedFile
from tadatodo.stores.fingerprint import generate_hash


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TADA_TODO_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("TADA_TODO_"):
            monkeypatch.delenv(key)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from inside a fresh project directory."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


def make_saved_file(name="TODO.md", directory=".", content="## March 1, 2024\n"):
    return SavedFile(
        name=name,
        dir_relative_to_conf=directory,
        content=content,
        hash=generate_hash(content),
    )
