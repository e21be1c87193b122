from __future__ import annotations

from pathlib import Path

import pytest

from intensity_segments import (
    ConfigurationError,
    StoreOptions,
    load_config_file,
    load_project_config,
    load_store_options,
)

from tests.conftest import write_pyproject


def test_load_project_config_reads_tool_table(tmp_path: Path) -> None:
    pyproject_path = write_pyproject(
        tmp_path,
        """
        [project]
        name = "demo"

        [tool.intensity_segments.store]
        cache_enabled = false

        [tool.intensity_segments.logging]
        level = "debug"
        """,
    )

    loaded = load_project_config(tmp_path)

    assert loaded is not None
    config, path = loaded
    assert path == pyproject_path.resolve()
    assert config == {
        "store": {"cache_enabled": False},
        "logging": {"level": "debug"},
    }


def test_load_project_config_accepts_pyproject_path(tmp_path: Path) -> None:
    pyproject_path = write_pyproject(
        tmp_path,
        """
        [tool.intensity_segments.store]
        thread_safe = true
        """,
    )

    loaded = load_project_config(pyproject_path)

    assert loaded is not None
    assert loaded[0] == {"store": {"thread_safe": True}}


def test_load_project_config_without_tool_table(tmp_path: Path) -> None:
    write_pyproject(
        tmp_path,
        """
        [tool.other]
        value = 1
        """,
    )

    assert load_project_config(tmp_path) is None


def test_load_project_config_missing_file(tmp_path: Path) -> None:
    assert load_project_config(tmp_path) is None
    assert load_project_config(tmp_path / "settings.toml") is None


def test_load_project_config_rejects_malformed_toml(tmp_path: Path) -> None:
    write_pyproject(tmp_path, "[tool.intensity_segments\n")

    with pytest.raises(ConfigurationError) as excinfo:
        load_project_config(tmp_path)

    assert excinfo.value.category == "config"
    assert excinfo.value.logged


def test_load_config_file(tmp_path: Path) -> None:
    target = tmp_path / "segments.toml"
    target.write_text('[store]\ncache_enabled = "no"\n', encoding="utf8")

    config = load_config_file(target)

    assert config == {"store": {"cache_enabled": "no"}}
    assert StoreOptions.from_config(config).cache_enabled is False
    assert load_config_file(tmp_path / "missing.toml") == {}


def test_load_store_options_from_project(tmp_path: Path) -> None:
    write_pyproject(
        tmp_path,
        """
        [tool.intensity_segments.store]
        cache_enabled = "off"
        thread_safe = "yes"
        """,
    )

    options = load_store_options(tmp_path)

    assert options == StoreOptions(cache_enabled=False, thread_safe=True)


def test_load_store_options_defaults_to_cwd(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert load_store_options() == StoreOptions()
