"""Shared fixtures for the audioshelf test suite."""

import os
from pathlib import Path
from typing import Callable, Optional

import pytest

from audioshelf.models.core import FileRecord, MetadataRecord
from audioshelf.models.plan import RenamePlan
from audioshelf.utils import config as cfg

FileFactory = Callable[..., FileRecord]
PlanFactory = Callable[..., RenamePlan]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's environment and config file out of every test."""
    for name in list(os.environ):
        if name.startswith(cfg.ENV_PREFIX):
            monkeypatch.delenv(name)
    config_dir = tmp_path / "xdg" / "audioshelf"
    monkeypatch.setattr(cfg, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(cfg, "CONFIG_FILE", config_dir / "config.toml")
    return config_dir


@pytest.fixture
def make_file() -> FileFactory:
    """Factory for in-memory FileRecords under a fake library directory."""

    def _make(
        name: str,
        *,
        id: Optional[str] = None,
        size: int = 1024,
        directory: str = "/library",
        handle: object = None,
    ) -> FileRecord:
        stem, _, extension = name.rpartition(".")
        return FileRecord(
            id=id or name,
            name=name,
            extension=extension if stem else "",
            path=str(Path(directory, name)),
            size=size,
            handle=handle if handle is not None else name,
        )

    return _make


@pytest.fixture
def make_plan(make_file: FileFactory) -> PlanFactory:
    """Factory for RenamePlans renaming a file in place."""

    def _make(
        id: str,
        new_name: str,
        *,
        original_name: Optional[str] = None,
        size: int = 1024,
        directory: str = "/library",
        handle: object = None,
    ) -> RenamePlan:
        original = original_name or f"{id}.mp3"
        file = make_file(
            original, id=id, size=size, directory=directory, handle=handle
        )
        return RenamePlan(
            id=id,
            original_name=original,
            new_name=new_name,
            original_path=file.path,
            new_path=str(Path(directory, new_name)),
            extension=file.extension,
            metadata=MetadataRecord(title=id),
            file=file,
        )

    return _make
