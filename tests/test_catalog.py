"""
Tests for the opcode catalog and value interpretation.
"""
from __future__ import annotations

import pytest

from sfz_parser.catalog.opcode_catalog import OpcodeCatalog, canonical_name, default_catalog
from sfz_parser.catalog.opcodes import STANDARD_OPCODES
from sfz_parser.models import OpcodeDescriptor, TypedValue, ValueKind, WarningKind
from sfz_parser.parser.value_parser import ValueParser, parse_note


@pytest.fixture(scope="module")
def catalog():
    return default_catalog()


@pytest.fixture
def parser():
    return ValueParser()


# ─────────────────────────────────────────────────────────────────────────────
# Name canonicalisation
# ─────────────────────────────────────────────────────────────────────────────


class TestCanonicalName:
    @pytest.mark.parametrize(
        "name, expected, params",
        [
            ("hicc64", "hiccN", [64]),
            ("eq2_freq", "eqN_freq", [2]),
            ("lfo1_eq2gain_oncc3", "lfoN_eqXgain_onccY", [1, 2, 3]),
            ("var01_oncc5", "varNN_onccX", [1, 5]),
            ("amp_velcurve_127", "amp_velcurve_N", [127]),
            ("v000", "vN", [0]),
            ("sample", "sample", []),
        ],
    )
    def test_parameters_replaced(self, name, expected, params):
        assert canonical_name(name) == (expected, params)

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("fil2_type", "fil2_type"),
            ("ampeg_vel2attack", "ampeg_vel2attack"),
            ("effect1", "effect1"),
            ("effect4", "effect4"),
            ("cutoff2", "cutoff2"),
            ("resonance2", "resonance2"),
            ("md5", "md5"),
            ("cutoff2_oncc74", "cutoff2_onccN"),
            ("eq1_vel2freq", "eqN_vel2freq"),
        ],
    )
    def test_name_digits_kept(self, name, expected):
        assert canonical_name(name)[0] == expected

    def test_upper_case_folded(self):
        assert canonical_name("HiCC64")[0] == "hiccN"


# ─────────────────────────────────────────────────────────────────────────────
# OpcodeCatalog
# ─────────────────────────────────────────────────────────────────────────────


class TestOpcodeCatalog:
    def test_default_catalog_is_shared(self):
        assert default_catalog() is default_catalog()

    def test_catalog_is_large(self, catalog):
        assert len(catalog) > 300

    def test_catalog_names_unique(self):
        names = [d.name for d in STANDARD_OPCODES]
        assert len(names) == len(set(names))

    def test_lookup_plain(self, catalog):
        d = catalog.lookup("volume")
        assert d.kind is ValueKind.FLOAT
        assert d.bounds == (-144, 6)
        assert d.default == "0"

    def test_lookup_parameterised(self, catalog):
        assert catalog.lookup("hicc64").name == "hiccN"
        assert catalog.lookup("eq3_gain").name == "eqN_gain"
        assert catalog.lookup("lfo2_pitch_oncc1").name == "lfoN_pitch_onccX"

    def test_lookup_case_insensitive(self, catalog):
        assert catalog.lookup("LoKey").name == "lokey"

    def test_lookup_unknown(self, catalog):
        assert catalog.lookup("totally_unknown_opcode") is None
        assert "totally_unknown_opcode" not in catalog

    def test_hint_prefix_family(self, catalog):
        d = catalog.lookup("hint_ram_based")
        assert d is not None
        assert d.kind is ValueKind.STRING

    def test_contains(self, catalog):
        assert "sample" in catalog
        assert "loccN" in catalog
        assert "locc1" in catalog
        assert 42 not in catalog

    def test_amp_veltrack_modulation(self, catalog):
        d = catalog.lookup("amp_veltrack_oncc1")
        assert d.name == "amp_veltrack_onccN"
        assert d.kind is ValueKind.PERCENTAGE
        assert catalog.lookup("amp_veltrack_curvecc1").name == "amp_veltrack_curveccN"

    @pytest.mark.parametrize(
        "name, kind",
        [
            ("amp_veltrack", ValueKind.PERCENTAGE),
            ("lokey", ValueKind.NOTE),
            ("pitch_keycenter", ValueKind.NOTE),
            ("lovel", ValueKind.INTEGER),
            ("sample", ValueKind.PATH),
            ("default_path", ValueKind.PATH),
            ("loop_mode", ValueKind.ENUM),
            ("fil_type", ValueKind.ENUM),
            ("trigger", ValueKind.ENUM),
            ("note_selfmask", ValueKind.BOOLEAN),
            ("label_cc7", ValueKind.STRING),
            ("type", ValueKind.STRING),
        ],
    )
    def test_kinds(self, catalog, name, kind):
        assert catalog.lookup(name).kind is kind

    def test_custom_catalog(self):
        custom = OpcodeCatalog([OpcodeDescriptor("foo_ccN", ValueKind.INTEGER)])
        assert custom.lookup("foo_cc9").name == "foo_ccN"
        assert custom.lookup("volume") is None
        assert len(custom) == 1

    def test_every_default_is_valid(self, catalog, parser):
        for descriptor in catalog:
            if descriptor.default is None:
                continue
            _, problem = parser.parse(descriptor, descriptor.default)
            assert problem is None, f"{descriptor.name}: {problem}"

    def test_every_enum_has_choices(self, catalog):
        for descriptor in catalog:
            if descriptor.kind is ValueKind.ENUM:
                assert descriptor.choices, descriptor.name


# ─────────────────────────────────────────────────────────────────────────────
# ValueParser
# ─────────────────────────────────────────────────────────────────────────────


class TestValueParser:
    def _parse(self, catalog, parser, name, raw):
        return parser.parse(catalog.lookup(name), raw)

    def test_float(self, catalog, parser):
        value, problem = self._parse(catalog, parser, "volume", "-6")
        assert value == TypedValue(ValueKind.FLOAT, -6.0, "-6")
        assert problem is None

    def test_integer_accepts_integral_float(self, catalog, parser):
        value, problem = self._parse(catalog, parser, "transpose", "12.0")
        assert value.value == 12
        assert isinstance(value.value, int)
        assert problem is None

    def test_integer_rejects_fraction(self, catalog, parser):
        value, problem = self._parse(catalog, parser, "transpose", "1.5")
        assert value == TypedValue(ValueKind.STRING, "1.5", "1.5")
        assert problem[0] is WarningKind.INVALID_VALUE

    def test_float_rejects_non_finite(self, catalog, parser):
        for raw in ("inf", "nan", "-infinity"):
            value, problem = self._parse(catalog, parser, "delay", raw)
            assert value.kind is ValueKind.STRING
            assert problem[0] is WarningKind.INVALID_VALUE

    def test_garbage_number(self, catalog, parser):
        value, problem = self._parse(catalog, parser, "volume", "loud")
        assert value.value == "loud"
        assert problem[0] is WarningKind.INVALID_VALUE

    def test_out_of_range_percentage(self, catalog, parser):
        value, problem = self._parse(catalog, parser, "ampeg_sustain", "150")
        assert value == TypedValue(ValueKind.STRING, "150", "150")
        assert problem[0] is WarningKind.OUT_OF_RANGE
        assert "ampeg_sustain" in problem[1]

    def test_bounds_are_inclusive(self, catalog, parser):
        for raw in ("0", "100"):
            _, problem = self._parse(catalog, parser, "ampeg_sustain", raw)
            assert problem is None

    def test_note_number(self, catalog, parser):
        value, _ = self._parse(catalog, parser, "lokey", "36")
        assert value == TypedValue(ValueKind.NOTE, 36, "36")

    def test_note_name(self, catalog, parser):
        value, problem = self._parse(catalog, parser, "pitch_keycenter", "c4")
        assert value.value == 60
        assert problem is None

    def test_note_out_of_range(self, catalog, parser):
        _, problem = self._parse(catalog, parser, "hikey", "128")
        assert problem[0] is WarningKind.OUT_OF_RANGE

    def test_boolean(self, catalog, parser):
        on, _ = self._parse(catalog, parser, "note_selfmask", "ON")
        off, _ = self._parse(catalog, parser, "note_selfmask", "off")
        assert on.value is True
        assert off.value is False

    def test_boolean_invalid(self, catalog, parser):
        _, problem = self._parse(catalog, parser, "note_selfmask", "yes")
        assert problem[0] is WarningKind.INVALID_VALUE

    def test_enum(self, catalog, parser):
        value, problem = self._parse(catalog, parser, "loop_mode", "loop_continuous")
        assert value == TypedValue(ValueKind.ENUM, "loop_continuous", "loop_continuous")
        assert problem is None

    def test_enum_case_folded(self, catalog, parser):
        value, _ = self._parse(catalog, parser, "trigger", "Release")
        assert value.value == "release"

    def test_enum_invalid(self, catalog, parser):
        value, problem = self._parse(catalog, parser, "fil_type", "lpf_9p")
        assert value.kind is ValueKind.STRING
        assert problem[0] is WarningKind.INVALID_VALUE

    def test_path_normalised(self, catalog, parser):
        value, _ = self._parse(catalog, parser, "sample", r"samples\piano\c4.wav")
        assert value.value == "samples/piano/c4.wav"
        assert value.raw == r"samples\piano\c4.wav"

    def test_string_verbatim(self, catalog, parser):
        value, _ = self._parse(catalog, parser, "label_cc1", "  Mod  Wheel ")
        assert value.value == "  Mod  Wheel "

    def test_default_value(self, catalog, parser):
        assert parser.default_value(catalog.lookup("amp_veltrack")) == TypedValue(
            ValueKind.PERCENTAGE, 100.0, "100"
        )
        assert parser.default_value(catalog.lookup("sample")) is None


class TestNoteNames:
    @pytest.mark.parametrize(
        "text, midi",
        [
            ("c4", 60),
            ("C4", 60),
            ("c#4", 61),
            ("db4", 61),
            ("a#3", 58),
            ("a4", 69),
            ("b3", 59),
            ("bb3", 58),
            ("C-1", 0),
            ("g9", 127),
            ("60", 60),
        ],
    )
    def test_parse_note(self, text, midi):
        assert parse_note(text) == midi

    @pytest.mark.parametrize("text", ["h4", "c", "c#", "middle-c", ""])
    def test_parse_note_invalid(self, text):
        with pytest.raises(ValueError):
            parse_note(text)
