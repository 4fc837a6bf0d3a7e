"""
Tests for IncludeLoader (include flattening and the include graph).
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from sfz_parser.errors import DirectiveError, IncludeError
from sfz_parser.pipeline.include_loader import IncludeLoader


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


@pytest.fixture
def loader():
    return IncludeLoader()


# ─────────────────────────────────────────────────────────────────────────────
# Flattening
# ─────────────────────────────────────────────────────────────────────────────


class TestFlattening:
    def test_file_without_includes(self, tmp_path, loader):
        root = _write(tmp_path / "a.sfz", "<region> sample=a.wav\n")
        assert loader.load(root) == "<region> sample=a.wav"

    def test_include_spliced_in_place(self, tmp_path, loader):
        _write(tmp_path / "env.sfz", "ampeg_release=0.5\n")
        root = _write(
            tmp_path / "main.sfz",
            """\
            <group>
            #include "env.sfz"
            <region> sample=a.wav
            """,
        )
        assert loader.load(root).splitlines() == [
            "<group>",
            "ampeg_release=0.5",
            "<region> sample=a.wav",
        ]

    def test_nested_includes_relative_to_includer(self, tmp_path, loader):
        _write(tmp_path / "sub" / "deep" / "c.sfz", "c=3\n")
        _write(tmp_path / "sub" / "b.sfz", '#include "deep/c.sfz"\nb=2\n')
        root = _write(tmp_path / "a.sfz", '#include "sub/b.sfz"\na=1\n')
        assert loader.load(root).splitlines() == ["c=3", "b=2", "a=1"]

    def test_backslash_separators(self, tmp_path, loader):
        _write(tmp_path / "sub" / "b.sfz", "b=2\n")
        root = _write(tmp_path / "a.sfz", '#include "sub\\b.sfz"\n')
        assert loader.load(root) == "b=2"

    def test_search_paths(self, tmp_path):
        _write(tmp_path / "shared" / "common.sfz", "volume=-3\n")
        root = _write(tmp_path / "inst" / "a.sfz", '#include "common.sfz"\n')
        flattened = IncludeLoader(search_paths=[tmp_path / "shared"]).load(root)
        assert flattened == "volume=-3"

    def test_variables_substituted_into_path(self, tmp_path, loader):
        _write(tmp_path / "kits" / "rock.sfz", "<region> sample=kick.wav\n")
        root = _write(
            tmp_path / "a.sfz",
            """\
            #define $KIT rock
            #include "kits/$KIT.sfz"
            """,
        )
        flattened = loader.load(root)
        assert flattened.splitlines() == ["#define $KIT rock", "<region> sample=kick.wav"]
        assert loader.variables == {"KIT": "rock"}

    def test_defines_from_included_file_visible_later(self, tmp_path, loader):
        _write(tmp_path / "defs.sfz", "#define $DIR drums\n")
        _write(tmp_path / "drums" / "kit.sfz", "k=1\n")
        root = _write(tmp_path / "a.sfz", '#include "defs.sfz"\n#include "$DIR/kit.sfz"\n')
        assert loader.load(root).splitlines()[-1] == "k=1"

    def test_commented_include_ignored(self, tmp_path, loader):
        root = _write(tmp_path / "a.sfz", '// #include "missing.sfz"\n/* #include "x.sfz" */\na=1\n')
        assert loader.load(root).splitlines()[-1] == "a=1"

    def test_diamond_allowed(self, tmp_path, loader):
        _write(tmp_path / "d.sfz", "d=4\n")
        _write(tmp_path / "b.sfz", '#include "d.sfz"\n')
        _write(tmp_path / "c.sfz", '#include "d.sfz"\n')
        root = _write(tmp_path / "a.sfz", '#include "b.sfz"\n#include "c.sfz"\n')
        assert loader.load(root).splitlines() == ["d=4", "d=4"]

    def test_load_text(self, tmp_path, loader):
        _write(tmp_path / "env.sfz", "ampeg_attack=0.1\n")
        flattened = loader.load_text('<group>\n#include "env.sfz"', base_dir=tmp_path)
        assert flattened.splitlines() == ["<group>", "ampeg_attack=0.1"]
        assert loader.include_graph.has_edge("<inline>", str((tmp_path / "env.sfz").resolve()))


# ─────────────────────────────────────────────────────────────────────────────
# Include graph
# ─────────────────────────────────────────────────────────────────────────────


class TestIncludeGraph:
    def test_edges_recorded(self, tmp_path, loader):
        _write(tmp_path / "b.sfz", "b=2\n")
        root = _write(tmp_path / "a.sfz", '#include "b.sfz"\n')
        loader.load(root)
        assert loader.include_graph.has_edge(
            str(root.resolve()), str((tmp_path / "b.sfz").resolve())
        )

    def test_all_includes_transitive(self, tmp_path, loader):
        _write(tmp_path / "c.sfz", "c=3\n")
        _write(tmp_path / "b.sfz", '#include "c.sfz"\n')
        root = _write(tmp_path / "a.sfz", '#include "b.sfz"\n')
        loader.load(root)
        names = {Path(p).name for p in loader.all_includes(root)}
        assert names == {"b.sfz", "c.sfz"}

    def test_all_includes_unknown_file(self, tmp_path, loader):
        assert loader.all_includes(tmp_path / "nothing.sfz") == set()


# ─────────────────────────────────────────────────────────────────────────────
# Failures
# ─────────────────────────────────────────────────────────────────────────────


class TestFailures:
    def test_missing_root(self, tmp_path, loader):
        with pytest.raises(IncludeError):
            loader.load(tmp_path / "absent.sfz")

    def test_missing_include(self, tmp_path, loader):
        root = _write(tmp_path / "a.sfz", 'a=1\n#include "absent.sfz"\n')
        with pytest.raises(IncludeError) as exc_info:
            loader.load(root)
        assert exc_info.value.line == 2
        assert "absent.sfz" in str(exc_info.value)

    def test_self_include_cycle(self, tmp_path, loader):
        root = _write(tmp_path / "a.sfz", '#include "a.sfz"\n')
        with pytest.raises(IncludeError, match="cycle"):
            loader.load(root)

    def test_two_file_cycle(self, tmp_path, loader):
        _write(tmp_path / "b.sfz", '#include "a.sfz"\n')
        root = _write(tmp_path / "a.sfz", '#include "b.sfz"\n')
        with pytest.raises(IncludeError) as exc_info:
            loader.load(root)
        assert "cycle" in str(exc_info.value)
        assert len(exc_info.value.chain) == 3
        assert exc_info.value.chain[0] == exc_info.value.chain[-1]

    def test_depth_limit(self, tmp_path):
        for i in range(5):
            _write(tmp_path / f"f{i}.sfz", f'#include "f{i + 1}.sfz"\n')
        _write(tmp_path / "f5.sfz", "end=1\n")
        with pytest.raises(IncludeError, match="depth"):
            IncludeLoader(max_depth=3).load(tmp_path / "f0.sfz")
        assert IncludeLoader(max_depth=5).load(tmp_path / "f0.sfz") == "end=1"

    def test_malformed_include_raises_directive_error(self, tmp_path, loader):
        root = _write(tmp_path / "a.sfz", "#include nope.sfz\n")
        with pytest.raises(DirectiveError):
            loader.load(root)
