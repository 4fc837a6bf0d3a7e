"""
End-to-end integration tests.

These tests run the full pipeline (IncludeLoader → passes → Tokenizer →
DocumentBuilder) against the fixture files, and drive the CLI.
"""
from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from sfz_parser import SfzAnalysis
from sfz_parser.cli import main
from sfz_parser.errors import IncludeError, StrictModeError, StructuralError
from sfz_parser.models import ScopeKind, WarningKind
from sfz_parser.passes.comments import StripCommentsPass

FIXTURES = Path(__file__).parent / "fixtures"
SHARED_DIR = str(FIXTURES / "shared")
PIANO = str(FIXTURES / "piano.sfz")


class TestEndToEnd:
    """Full pipeline integration tests using fixture files."""

    @pytest.fixture
    def analysis(self):
        return SfzAnalysis(include_paths=[SHARED_DIR])

    @pytest.fixture
    def piano(self, analysis):
        return analysis.parse_file(PIANO)

    # ------------------------------------------------------------------
    # piano.sfz
    # ------------------------------------------------------------------

    def test_piano_parses_cleanly(self, piano):
        assert piano.ok
        assert piano.source == PIANO

    def test_piano_structure(self, piano):
        doc = piano.document
        assert doc.has_global
        assert len(doc.masters) == 2
        assert len(doc.groups) == 2
        assert len(doc.regions) == 4
        assert [m.label for m in doc.masters] == ["Soft", "Hard"]
        assert len(doc.controls) == 1

    def test_piano_variables(self, piano):
        assert piano.document.variables == {"VEL_SPLIT": "64", "REL": "0.8"}

    def test_piano_include_flattened_into_global(self, piano):
        doc = piano.document
        assert doc.global_scope.opcodes["ampeg_sustain"].value == 90.0
        assert doc.includes == []

    def test_piano_resolution(self, piano):
        doc = piano.document
        soft_c4, soft_e4, hard_c4, hard_e4 = doc.regions
        assert doc.resolve(soft_c4, "volume").value == -3.0
        assert doc.resolve(hard_c4, "volume").value == -1.0
        assert doc.resolve(soft_c4, "amp_veltrack").value == 80.0
        assert doc.resolve(hard_c4, "amp_veltrack").value == 100.0
        assert doc.resolve(soft_c4, "hivel").value == 64
        assert doc.resolve(hard_c4, "hivel").value == 127
        assert doc.resolve(soft_c4, "ampeg_release").value == 0.8
        assert doc.resolve(soft_e4, "pitch_keycenter").value == 64
        assert doc.resolve(hard_e4, "pitch_keycenter").value == 64
        assert doc.resolve(hard_e4, "lokey").value == 62

    def test_piano_sample_paths(self, piano):
        doc = piano.document
        assert doc.base_dir == FIXTURES.resolve().as_posix()
        assert [Path(doc.sample_path(r)) for r in doc.regions] == [
            FIXTURES.resolve() / "samples" / "piano" / name
            for name in ("C4 soft.wav", "E4 soft.wav", "C4 hard.wav", "E4 hard.wav")
        ]

    def test_piano_json_round_trip(self, piano):
        payload = piano.to_dict()
        recovered = json.loads(json.dumps(payload))
        assert recovered == payload
        assert recovered["warnings"] == []

    def test_missing_include_without_search_path(self):
        with pytest.raises(IncludeError):
            SfzAnalysis().parse_file(PIANO)

    # ------------------------------------------------------------------
    # warnings.sfz
    # ------------------------------------------------------------------

    def test_warnings_collected(self, analysis):
        result = analysis.parse_file(str(FIXTURES / "warnings.sfz"))
        assert not result.ok
        assert [w.kind for w in result.warnings] == [
            WarningKind.UNKNOWN_OPCODE,
            WarningKind.OUT_OF_RANGE,
        ]
        assert [w.line for w in result.warnings] == [2, 3]
        assert all(w.scope is ScopeKind.REGION for w in result.warnings)

    def test_warnings_keep_document(self, analysis):
        result = analysis.parse_file(str(FIXTURES / "warnings.sfz"))
        first, second = result.document.regions
        assert first.opcodes["mystery_opcode"].value == "1"
        assert second.opcodes["ampeg_sustain"].value == "150"
        assert result.document.resolve(first, "amp_veltrack").value == 100.0

    def test_strict_mode_raises(self):
        with pytest.raises(StrictModeError) as exc_info:
            SfzAnalysis(strict=True).parse_file(str(FIXTURES / "warnings.sfz"))
        assert len(exc_info.value.warnings) == 2

    def test_strict_mode_passes_clean_input(self):
        result = SfzAnalysis(include_paths=[SHARED_DIR], strict=True).parse_file(PIANO)
        assert result.ok

    # ------------------------------------------------------------------
    # Failures
    # ------------------------------------------------------------------

    def test_unknown_header_is_fatal(self, analysis):
        with pytest.raises(StructuralError) as exc_info:
            analysis.parse_file(str(FIXTURES / "broken.sfz"))
        assert exc_info.value.line == 2

    def test_cycle_is_fatal(self, analysis):
        with pytest.raises(IncludeError, match="cycle"):
            analysis.parse_file(str(FIXTURES / "cycle.sfz"))


class TestParseText:
    def test_define_scenario(self):
        result = SfzAnalysis().parse_text("#define $VOL -6\nvolume=$VOL")
        volume = result.document.global_scope.opcodes["volume"]
        assert volume.kind.value == "float"
        assert volume.value == -6.0
        assert result.document.variables == {"VOL": "-6"}
        assert result.ok

    def test_include_reported_not_followed(self):
        result = SfzAnalysis().parse_text('#include "env.sfz"\n<region> sample=a.wav')
        assert [w.kind for w in result.warnings] == [WarningKind.UNRESOLVED_INCLUDE]
        assert result.document.includes[0].path == "env.sfz"

    def test_no_base_dir_for_text(self):
        result = SfzAnalysis().parse_text("<region> sample=a.wav")
        assert result.document.base_dir == ""
        assert result.document.sample_path(result.document.regions[0]) == "a.wav"

    def test_comments_stripped_once(self, monkeypatch):
        calls = []
        original = StripCommentsPass.run

        def counting(self, text):
            calls.append(text)
            return original(self, text)

        monkeypatch.setattr(StripCommentsPass, "run", counting)
        result = SfzAnalysis().parse_text("#define $V -6\n<region> volume=$V // vol")
        assert len(calls) == 1
        assert result.document.regions[0].opcodes["volume"].value == -6.0

    def test_source_name(self):
        result = SfzAnalysis().parse_text("<region>", source_name="inline.sfz")
        assert result.source == "inline.sfz"
        assert result.to_dict()["source"] == "inline.sfz"

    def test_realistic_instrument(self):
        text = textwrap.dedent("""\
            <control>
            set_cc1=0 label_cc1=Mod Wheel
            <global> loop_mode=one_shot
            <group> key=36 seq_length=2
            <region> seq_position=1 sample=kick_1.wav
            <region> seq_position=2 sample=kick_2.wav
            <curve> curve_index=17 v000=0 v127=1
            <effect> type=lofi bus=fx1 fx1tomain=50
        """)
        result = SfzAnalysis().parse_text(text)
        doc = result.document
        assert result.ok, [str(w) for w in result.warnings]
        assert doc.controls[0].opcodes["label_cc1"].value == "Mod Wheel"
        assert [doc.resolve(r, "key").value for r in doc.regions] == [36, 36]
        assert [doc.resolve(r, "loop_mode").value for r in doc.regions] == ["one_shot"] * 2
        assert doc.curves[0].opcodes["curve_index"].value == 17
        assert doc.effects[0].opcodes["fx1tomain"].value == 50.0


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────


class TestCli:
    def test_json_output(self, capsys):
        assert main([PIANO, "-I", SHARED_DIR]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["source"] == PIANO
        assert data["warnings"] == []
        assert data["document"]["global"]["opcodes"]["volume"] == -3.0

    def test_resolve_option(self, capsys):
        assert main([PIANO, "-I", SHARED_DIR, "-r", "volume", "-r", "hivel"]) == 0
        data = json.loads(capsys.readouterr().out)
        rows = data["resolved"]
        assert len(rows) == 4
        assert rows[0]["opcodes"] == {"volume": -3.0, "hivel": 64}
        assert rows[2]["opcodes"] == {"volume": -1.0, "hivel": 127}

    def test_text_output(self, capsys):
        assert main([PIANO, "-I", SHARED_DIR, "-f", "text", "-r", "sample"]) == 0
        out = capsys.readouterr().out
        assert "<global>" in out
        assert "<master> Soft" in out
        assert "RESOLVED OPCODES" in out
        assert "sample=C4 soft.wav" in out

    def test_output_file(self, tmp_path, capsys):
        target = tmp_path / "out.json"
        assert main([PIANO, "-I", SHARED_DIR, "-o", str(target)]) == 0
        assert json.loads(target.read_text(encoding="utf-8"))["source"] == PIANO
        assert "Output written" in capsys.readouterr().err

    def test_warnings_go_to_stderr(self, capsys):
        assert main([str(FIXTURES / "warnings.sfz")]) == 0
        captured = capsys.readouterr()
        assert "mystery_opcode" in captured.err
        assert json.loads(captured.out)["warnings"][0]["kind"] == "unknown_opcode"

    def test_strict_exit_code(self, capsys):
        assert main([str(FIXTURES / "warnings.sfz"), "--strict"]) == 1
        assert "strict mode: 2 warnings" in capsys.readouterr().err

    def test_fatal_error_exit_code(self, capsys):
        assert main([str(FIXTURES / "broken.sfz")]) == 1
        assert "unknown header" in capsys.readouterr().err

    def test_missing_source_exit_code(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.sfz")]) == 2
        assert "not found" in capsys.readouterr().err
