"""Unit tests for freeflow_src.util.config helper module."""

from pathlib import Path

from freeflow_src.util.config import get_key, is_verbose, load_config


def test_get_key():
    assert get_key("search.order") in ("bfs", "dfs"), (
        "Expected 'search.order' in config.yaml to name a known traversal order."
    )


def test_get_key_default():
    assert get_key("search.no_such_key", 7) == 7
    assert get_key("search.order.deeper", "x") == "x"
    assert get_key("search.max_expansions", 5) is None


def test_is_verbose_is_bool():
    assert isinstance(is_verbose(), bool)


def test_load_config(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("search:\n  order: dfs\n")
    assert load_config(path) == {"search": {"order": "dfs"}}
    assert load_config(tmp_path / "missing.yaml") == {}
    (tmp_path / "empty.yaml").write_text("")
    assert load_config(tmp_path / "empty.yaml") == {}
