"""
Standard SFZ opcode table.

Used by :class:`~sfz_parser.catalog.opcode_catalog.OpcodeCatalog` to validate
and type every opcode assignment.  Names are *canonical*: numeric parameters
embedded in real opcode names are written as ``N`` / ``X`` / ``Y`` (``NN``
for the ``var`` family), e.g. ``hiccN`` matches ``hicc64``.

Ranges and defaults follow sfzformat.com.  All units are real-world: seconds,
Hertz, cents, decibels and percent.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..models import OpcodeDescriptor, ValueKind

_INT = ValueKind.INTEGER
_FLOAT = ValueKind.FLOAT
_PCT = ValueKind.PERCENTAGE
_NOTE = ValueKind.NOTE
_BOOL = ValueKind.BOOLEAN
_ENUM = ValueKind.ENUM
_PATH = ValueKind.PATH
_STR = ValueKind.STRING

U32_MAX = 4_294_967_295

# Theoretical maximum sample rate, used as the upper bound of cutoff opcodes
MAX_SAMPLE_RATE = 384_000.0

FILTER_TYPES: Tuple[str, ...] = (
    "lpf_1p", "hpf_1p", "lpf_2p", "hpf_2p", "bpf_2p", "brf_2p",
    "bpf_1p", "brf_1p", "apf_1p",
    "lpf_2p_sv", "hpf_2p_sv", "bpf_2p_sv", "brf_2p_sv",
    "pkf_2p", "lpf_4p", "hpf_4p", "lpf_6p", "hpf_6p",
    "comb", "pink",
    "lsh", "hsh", "peq",
)

_EG_STAGES = ("attack", "decay", "delay", "hold", "release")


def _op(
    name: str,
    kind: ValueKind,
    lo: Optional[float] = None,
    hi: Optional[float] = None,
    default: Optional[str] = None,
    choices: Sequence[str] = (),
    version: str = "v1",
) -> OpcodeDescriptor:
    bounds = (lo, hi) if lo is not None and hi is not None else None
    return OpcodeDescriptor(
        name=name,
        kind=kind,
        bounds=bounds,
        default=default,
        choices=frozenset(choices),
        version=version,
    )


def _envelope(prefix: str, sustain_default: str) -> List[OpcodeDescriptor]:
    """The ADSR family shared by ``ampeg``, ``fileg`` and ``pitcheg``."""
    ops = [_op(f"{prefix}_{s}", _FLOAT, 0, 100, "0") for s in _EG_STAGES]
    ops += [_op(f"{prefix}_vel2{s}", _FLOAT, -100, 100, "0") for s in _EG_STAGES]
    ops += [
        _op(f"{prefix}_{s}_onccN", _FLOAT, -100, 100, "0", version="v2")
        for s in _EG_STAGES
    ]
    ops += [
        _op(f"{prefix}_sustain", _PCT, 0, 100, sustain_default),
        _op(f"{prefix}_vel2sustain", _PCT, -100, 100, "0"),
        _op(f"{prefix}_sustain_onccN", _PCT, -100, 100, "0", version="v2"),
        _op(f"{prefix}_start", _PCT, 0, 100, "0"),
        _op(f"{prefix}_start_onccN", _PCT, -100, 100, "0", version="v2"),
        # v2 curve shaping
        _op(f"{prefix}_attack_shape", _FLOAT, default="0", version="v2"),
        _op(f"{prefix}_decay_shape", _FLOAT, version="v2"),
        _op(f"{prefix}_release_shape", _FLOAT, version="v2"),
        _op(f"{prefix}_decay_zero", _INT, 0, 1, "1", version="v2"),
        _op(f"{prefix}_release_zero", _INT, 0, 1, "0", version="v2"),
        _op(f"{prefix}_dynamic", _INT, 0, 1, "0", version="v2"),
    ]
    if prefix != "ampeg":
        ops += [
            _op(f"{prefix}_depth", _INT, -12000, 12000, "0"),
            _op(f"{prefix}_vel2depth", _INT, -12000, 12000, "0"),
            _op(f"{prefix}_depth_onccN", _INT, -12000, 12000, "0", version="v2"),
        ]
    return ops


def _lfo(prefix: str, depth: float) -> List[OpcodeDescriptor]:
    """The v1 fixed LFOs: ``amplfo``, ``fillfo`` and ``pitchlfo``."""
    ops = [
        _op(f"{prefix}_delay", _FLOAT, 0, 100, "0"),
        _op(f"{prefix}_fade", _FLOAT, 0, 100, "0"),
        _op(f"{prefix}_freq", _FLOAT, 0, 20, "0"),
        _op(f"{prefix}_depth", _FLOAT, -depth, depth, "0"),
    ]
    for source in ("ccN", "chanaft", "polyaft"):
        ops.append(_op(f"{prefix}_depth{source}", _FLOAT, -depth, depth, "0"))
        ops.append(_op(f"{prefix}_freq{source}", _FLOAT, -200, 200, "0"))
    return ops


# ── Sample playback ──────────────────────────────────────────────────────
_SAMPLE_PLAYBACK = [
    _op("count", _INT, 0, U32_MAX, "0"),
    _op("delay", _FLOAT, 0, 100, "0"),
    _op("delay_ccN", _FLOAT, 0, 100, "0"),
    _op("delay_random", _FLOAT, 0, 100, "0"),
    _op("end", _INT, -1, U32_MAX),
    _op("loop_mode", _ENUM,
        choices=("no_loop", "one_shot", "loop_continuous", "loop_sustain")),
    _op("loopmode", _ENUM,
        choices=("no_loop", "one_shot", "loop_continuous", "loop_sustain")),
    _op("loop_start", _INT, 0, U32_MAX, "0"),
    _op("loop_end", _INT, 0, U32_MAX, "0"),
    _op("offset", _INT, 0, U32_MAX, "0"),
    _op("offset_ccN", _INT, 0, U32_MAX, "0"),
    _op("offset_onccN", _INT, 0, U32_MAX, "0", version="v2"),
    _op("offset_random", _INT, 0, U32_MAX, "0"),
    _op("sample", _PATH),
    _op("sync_beats", _FLOAT, 0, 32, "0"),
    _op("sync_offset", _FLOAT, 0, 32, "0"),
    # v2
    _op("delay_samples", _INT, 0, U32_MAX, version="v2"),
    _op("delay_samples_onccN", _INT, 0, U32_MAX, version="v2"),
    _op("delay_beats", _FLOAT, version="v2"),
    _op("stop_beats", _FLOAT, version="v2"),
    _op("direction", _ENUM, default="forward", choices=("forward", "reverse"),
        version="v2"),
    _op("loop_count", _INT, 0, U32_MAX, version="v2"),
    _op("loop_crossfade", _FLOAT, 0, 100, version="v2"),
    _op("loop_type", _ENUM, default="forward",
        choices=("forward", "backward", "alternate"), version="v2"),
    _op("md5", _STR, version="v2"),
    _op("reverse_loccN", _INT, 0, 127, version="v2"),
    _op("reverse_hiccN", _INT, 0, 127, version="v2"),
    _op("waveguide", _BOOL, version="v2"),
]

# ── Instrument settings ──────────────────────────────────────────────────
_INSTRUMENT_SETTINGS = [
    _op("group", _INT, 0, U32_MAX, "0"),
    _op("off_by", _INT, 0, U32_MAX, "0"),
    _op("off_mode", _ENUM, default="fast", choices=("fast", "normal", "time")),
    _op("output", _INT, 0, 1024, "0"),
    # v2
    _op("polyphony", _INT, 0, U32_MAX, version="v2"),
    _op("note_polyphony", _INT, 0, U32_MAX, version="v2"),
    _op("polyphony_group", _INT, 0, U32_MAX, "0", version="v2"),
    _op("note_selfmask", _BOOL, default="on", version="v2"),
    _op("rt_dead", _BOOL, default="off", version="v2"),
    _op("off_curve", _INT, -2, 10, "10", version="v2"),
    _op("off_shape", _FLOAT, default="-10.3616", version="v2"),
    _op("off_time", _FLOAT, 0, 100, "0.006", version="v2"),
    _op("global_label", _STR, version="v2"),
    _op("master_label", _STR, version="v2"),
    _op("group_label", _STR, version="v2"),
    _op("region_label", _STR, version="v2"),
    _op("sw_label", _STR, version="v2"),
]

# ── Control header ───────────────────────────────────────────────────────
_CONTROL = [
    _op("default_path", _PATH, version="v2"),
    _op("note_offset", _INT, -127, 127, "0", version="v2"),
    _op("octave_offset", _INT, -10, 10, "0", version="v2"),
    _op("set_ccN", _INT, 0, 127, version="v2"),
    _op("set_hdccN", _FLOAT, 0, 1, version="v2"),
    _op("label_ccN", _STR, version="v2"),
    _op("label_keyN", _STR, version="aria"),
    _op("sw_note_offset", _INT, -127, 127, "0", version="v2"),
    _op("sw_octave_offset", _INT, -10, 10, "0", version="v2"),
]

# ── Region logic: key / velocity / MIDI conditions ───────────────────────
_REGION_LOGIC = [
    _op("key", _NOTE, -1, 127),
    _op("lokey", _NOTE, -1, 127, "0"),
    _op("hikey", _NOTE, -1, 127, "127"),
    _op("lovel", _INT, 0, 127, "0"),
    _op("hivel", _INT, 0, 127, "127"),
    _op("lochan", _INT, 1, 16, "1"),
    _op("hichan", _INT, 1, 16, "16"),
    _op("loccN", _INT, 0, 127, "0"),
    _op("hiccN", _INT, 0, 127, "127"),
    _op("lohdccN", _FLOAT, 0, 1, "0", version="v2"),
    _op("hihdccN", _FLOAT, 0, 1, "1", version="v2"),
    _op("lobend", _INT, -8192, 8192, "-8192"),
    _op("hibend", _INT, -8192, 8192, "8192"),
    _op("sw_lokey", _NOTE, 0, 127, "0"),
    _op("sw_hikey", _NOTE, 0, 127, "127"),
    _op("sw_last", _NOTE, 0, 127, "0"),
    _op("sw_lolast", _NOTE, 0, 127, version="v2"),
    _op("sw_hilast", _NOTE, 0, 127, version="v2"),
    _op("sw_down", _NOTE, 0, 127, "0"),
    _op("sw_up", _NOTE, 0, 127, "0"),
    _op("sw_previous", _NOTE, 0, 127),
    _op("sw_default", _NOTE, 0, 127, version="v2"),
    _op("sw_vel", _ENUM, default="current", choices=("current", "previous")),
    _op("lobpm", _FLOAT, 0, 500, "0"),
    _op("hibpm", _FLOAT, 0, 500, "500"),
    _op("lochanaft", _INT, 0, 127, "0"),
    _op("hichanaft", _INT, 0, 127, "127"),
    _op("lopolyaft", _INT, 0, 127, "0"),
    _op("hipolyaft", _INT, 0, 127, "127"),
    _op("loprog", _INT, 0, 127, "0", version="v2"),
    _op("hiprog", _INT, 0, 127, "127", version="v2"),
    _op("lorand", _FLOAT, 0, 1, "0"),
    _op("hirand", _FLOAT, 0, 1, "1"),
    _op("lotimer", _FLOAT, 0, U32_MAX, version="v2"),
    _op("hitimer", _FLOAT, 0, U32_MAX, version="v2"),
    _op("seq_length", _INT, 1, 100, "1"),
    _op("seq_position", _INT, 1, 100, "1"),
    _op("trigger", _ENUM, default="attack",
        choices=("attack", "release", "first", "legato", "release_key")),
    _op("on_loccN", _INT, -1, 127, "-1"),
    _op("on_hiccN", _INT, -1, 127, "-1"),
    _op("on_lohdccN", _FLOAT, -1, 1, "-1", version="v2"),
    _op("on_hihdccN", _FLOAT, -1, 1, "-1", version="v2"),
    _op("start_loccN", _INT, -1, 127, "-1", version="v2"),
    _op("start_hiccN", _INT, -1, 127, "-1", version="v2"),
    _op("start_lohdccN", _FLOAT, -1, 1, "-1", version="v2"),
    _op("start_hihdccN", _FLOAT, -1, 1, "-1", version="v2"),
    _op("stop_loccN", _INT, -1, 127, "-1", version="v2"),
    _op("stop_hiccN", _INT, -1, 127, "-1", version="v2"),
    _op("stop_lohdccN", _FLOAT, -1, 1, "-1", version="v2"),
    _op("stop_hihdccN", _FLOAT, -1, 1, "-1", version="v2"),
    _op("sostenuto_sw", _BOOL, version="v2"),
    _op("sustain_sw", _BOOL, version="v2"),
    _op("sostenuto_cc", _INT, 0, 127, "66", version="v2"),
    _op("sostenuto_lo", _FLOAT, 0, 127, "0.5", version="v2"),
    _op("sustain_cc", _INT, 0, 127, "64", version="v2"),
    _op("sustain_lo", _FLOAT, 0, 127, "0.5", version="v2"),
]

# ── Amplifier ────────────────────────────────────────────────────────────
_AMPLIFIER = [
    _op("pan", _PCT, -100, 100, "0"),
    _op("pan_onccN", _PCT, -200, 200, "0", version="v2"),
    _op("position", _PCT, -100, 100, "0"),
    _op("position_onccN", _PCT, -200, 200, "0", version="v2"),
    _op("volume", _FLOAT, -144, 6, "0"),
    _op("volume_onccN", _FLOAT, -144, 48, "0", version="v2"),
    _op("gain_ccN", _FLOAT, -144, 48, "0"),
    _op("width", _PCT, -100, 100, "100"),
    _op("width_onccN", _PCT, -200, 200, "0", version="v2"),
    _op("amp_keycenter", _NOTE, 0, 127, "60"),
    _op("amp_keytrack", _FLOAT, -96, 12, "0"),
    _op("amp_veltrack", _PCT, -100, 100, "100"),
    _op("amp_veltrack_onccN", _PCT, -100, 100, "0", version="aria"),
    _op("amp_veltrack_curveccN", _INT, 0, 255, version="aria"),
    _op("amp_veltrack_smoothccN", _FLOAT, 0, 100_000, "0", version="aria"),
    _op("amp_velcurve_N", _FLOAT, 0, 1),
    _op("amp_random", _FLOAT, 0, 24, "0"),
    _op("rt_decay", _FLOAT, 0, 200, "0"),
    _op("xf_cccurve", _ENUM, default="power", choices=("gain", "power")),
    _op("xf_keycurve", _ENUM, default="power", choices=("gain", "power")),
    _op("xf_velcurve", _ENUM, default="power", choices=("gain", "power")),
    _op("xfin_loccN", _INT, 0, 127, "0"),
    _op("xfin_hiccN", _INT, 0, 127, "0"),
    _op("xfout_loccN", _INT, 0, 127, "0"),
    _op("xfout_hiccN", _INT, 0, 127, "0"),
    _op("xfin_lokey", _NOTE, 0, 127, "0"),
    _op("xfin_hikey", _NOTE, 0, 127, "0"),
    _op("xfout_lokey", _NOTE, 0, 127, "127"),
    _op("xfout_hikey", _NOTE, 0, 127, "127"),
    _op("xfin_lovel", _INT, 0, 127, "0"),
    _op("xfin_hivel", _INT, 0, 127, "0"),
    _op("xfout_lovel", _INT, 0, 127, "127"),
    _op("xfout_hivel", _INT, 0, 127, "127"),
    # v2
    _op("phase", _ENUM, default="normal", choices=("normal", "invert"), version="v2"),
    _op("pan_keycenter", _NOTE, 0, 127, "60", version="v2"),
    _op("pan_keytrack", _PCT, -100, 100, "0", version="v2"),
    _op("pan_veltrack", _PCT, -100, 100, "0", version="v2"),
    _op("pan_law", _ENUM, choices=("mma", "balance"), version="v2"),
    _op("amplitude", _PCT, 0, 100, "100", version="v2"),
    _op("amplitude_onccN", _PCT, 0, 100, version="v2"),
    _op("amplitude_curveccN", _INT, 0, 255, version="v2"),
    _op("amplitude_smoothccN", _FLOAT, 0, 100_000, "0", version="v2"),
    _op("global_amplitude", _PCT, 0, 100, "100", version="aria"),
    _op("master_amplitude", _PCT, 0, 100, "100", version="aria"),
    _op("group_amplitude", _PCT, 0, 100, "100", version="aria"),
    _op("global_volume", _FLOAT, -144, 6, "0", version="aria"),
    _op("master_volume", _FLOAT, -144, 6, "0", version="aria"),
    _op("group_volume", _FLOAT, -144, 6, "0", version="aria"),
]

# ── Equalizer ────────────────────────────────────────────────────────────
_EQUALIZER = [
    _op("eqN_bw", _FLOAT, 0.001, 4, "1"),
    _op("eqN_bwccX", _FLOAT, -4, 4, "0"),
    _op("eqN_freq", _FLOAT, 0, 30000),
    _op("eqN_freqccX", _FLOAT, -30000, 30000, "0"),
    _op("eqN_vel2freq", _FLOAT, -30000, 30000, "0"),
    _op("eqN_gain", _FLOAT, -96, 24, "0"),
    _op("eqN_gainccX", _FLOAT, -96, 24, "0"),
    _op("eqN_vel2gain", _FLOAT, -96, 24, "0"),
    _op("eqN_type", _ENUM, default="peak", choices=("peak", "lshelf", "hshelf"),
        version="v2"),
    _op("eqN_dynamic", _INT, 0, 1, "0", version="v2"),
]

# ── Filter ───────────────────────────────────────────────────────────────
_FILTER = [
    _op("cutoff", _FLOAT, 0, MAX_SAMPLE_RATE),
    _op("cutoff_ccN", _INT, -9600, 9600, "0"),
    _op("cutoff_onccN", _INT, -9600, 9600, "0", version="v2"),
    _op("cutoff_chanaft", _INT, -9600, 9600, "0"),
    _op("cutoff_polyaft", _INT, -9600, 9600, "0"),
    _op("fil_keytrack", _INT, 0, 1200, "0"),
    _op("fil_keycenter", _NOTE, 0, 127, "60"),
    _op("fil_random", _INT, 0, 9600, "0"),
    _op("fil_type", _ENUM, default="lpf_2p", choices=FILTER_TYPES),
    _op("fil_veltrack", _INT, -9600, 9600, "0"),
    _op("fil_gain", _FLOAT, -96, 96, "0", version="v2"),
    _op("resonance", _FLOAT, 0, 40, "0"),
    _op("resonance_onccN", _FLOAT, -40, 40, "0", version="v2"),
    # second filter (v2)
    _op("cutoff2", _FLOAT, 0, MAX_SAMPLE_RATE, version="v2"),
    _op("cutoff2_onccN", _INT, -9600, 9600, "0", version="v2"),
    _op("cutoff2_curveccN", _INT, 0, 255, version="v2"),
    _op("cutoff2_smoothccN", _FLOAT, 0, 100_000, "0", version="v2"),
    _op("cutoff2_stepccN", _INT, 0, U32_MAX, "0", version="v2"),
    _op("fil2_keycenter", _NOTE, 0, 127, "60", version="v2"),
    _op("fil2_keytrack", _INT, 0, 1200, "0", version="v2"),
    _op("fil2_type", _ENUM, default="lpf_2p", choices=FILTER_TYPES, version="v2"),
    _op("fil2_veltrack", _INT, -9600, 9600, "0", version="v2"),
    _op("fil2_gain", _FLOAT, -96, 96, "0", version="v2"),
    _op("resonance2", _FLOAT, 0, 40, "0", version="v2"),
    _op("resonance2_onccN", _FLOAT, -40, 40, "0", version="v2"),
    _op("resonance2_curveccN", _INT, 0, 255, version="v2"),
    _op("resonance2_smoothccN", _FLOAT, 0, 100_000, "0", version="v2"),
    _op("resonance2_stepccN", _INT, 0, U32_MAX, "0", version="v2"),
]

# ── Pitch ────────────────────────────────────────────────────────────────
_PITCH = [
    _op("bend_up", _INT, -9600, 9600, "200"),
    _op("bend_down", _INT, -9600, 9600, "-200"),
    _op("bend_step", _INT, 1, 1200, "1"),
    _op("bend_smooth", _FLOAT, 0, 100_000, "0", version="v2"),
    _op("bend_stepup", _INT, 1, 1200, "1", version="v2"),
    _op("bend_stepdown", _INT, 1, 1200, "1", version="v2"),
    _op("pitch_keycenter", _NOTE, 0, 127, "60"),
    _op("pitch_keytrack", _INT, -1200, 1200, "100"),
    _op("pitch_random", _INT, 0, 9600, "0"),
    _op("pitch_veltrack", _INT, -9600, 9600, "0"),
    _op("pitch_onccN", _INT, -9600, 9600, "0", version="v2"),
    _op("pitch", _INT, -9600, 9600, "0", version="v2"),
    _op("transpose", _INT, -127, 127, "0"),
    _op("tune", _INT, -100, 100, "0"),
    _op("tune_onccN", _INT, -9600, 9600, "0", version="v2"),
]

# ── Envelope generators & LFOs ───────────────────────────────────────────
_MODULATION = (
    _envelope("ampeg", "100")
    + [_op(f"ampeg_{s}ccN", _FLOAT, -100, 100, "0") for s in _EG_STAGES]
    + [
        _op("ampeg_sustainccN", _PCT, -100, 100, "0"),
        _op("ampeg_startccN", _PCT, -100, 100, "0"),
    ]
    + _envelope("fileg", "0")
    + _envelope("pitcheg", "0")
    + _lfo("amplfo", 10)
    + _lfo("fillfo", 1200)
    + _lfo("pitchlfo", 1200)
    + [
        # flex envelopes (v2)
        _op("egN_points", _INT, 0, 64, version="v2"),
        _op("egN_timeX", _FLOAT, 0, 100, version="v2"),
        _op("egN_timeX_onccY", _FLOAT, -100, 100, version="v2"),
        _op("egN_levelX", _FLOAT, -1, 1, "0", version="v2"),
        _op("egN_levelX_onccY", _FLOAT, -1, 1, "0", version="v2"),
        _op("egN_shapeX", _FLOAT, default="0", version="v2"),
        _op("egN_curveX", _INT, 0, 255, version="v2"),
        _op("egN_sustain", _INT, 0, 64, version="v2"),
        _op("egN_loop", _INT, 0, 64, version="v2"),
        _op("egN_loop_count", _INT, 0, U32_MAX, version="v2"),
        _op("egN_dynamic", _INT, 0, 1, "0", version="aria"),
        _op("egN_ampeg", _BOOL, version="aria"),
    ]
    + [
        _op(f"egN_{target}", _FLOAT, version="v2")
        for target in ("volume", "amplitude", "pan", "width", "pitch",
                       "cutoff", "cutoff2", "resonance", "resonance2")
    ]
    + [
        _op(f"egN_{target}_onccX", _FLOAT, version="v2")
        for target in ("volume", "amplitude", "pan", "width", "pitch",
                       "cutoff", "cutoff2", "resonance", "resonance2")
    ]
    + [
        # flex LFOs (v2)
        _op("lfoN_freq", _FLOAT, 0, 100, version="v2"),
        _op("lfoN_freq_onccX", _FLOAT, -100, 100, version="v2"),
        _op("lfoN_delay", _FLOAT, 0, 100, "0", version="v2"),
        _op("lfoN_delay_onccX", _FLOAT, -100, 100, version="v2"),
        _op("lfoN_fade", _FLOAT, 0, 100, version="v2"),
        _op("lfoN_fade_onccX", _FLOAT, -100, 100, version="v2"),
        _op("lfoN_phase", _FLOAT, 0, 1, "0", version="v2"),
        _op("lfoN_phase_onccX", _FLOAT, -1, 1, version="v2"),
        _op("lfoN_count", _INT, 0, U32_MAX, version="v2"),
        _op("lfoN_wave", _INT, 0, 255, "1", version="v2"),
        _op("lfoN_waveX", _INT, 0, 255, "1", version="v2"),
        _op("lfoN_steps", _INT, 0, 128, version="v2"),
        _op("lfoN_stepX", _PCT, -100, 100, version="v2"),
        _op("lfoN_smooth", _FLOAT, 0, 100_000, version="v2"),
        _op("lfoN_offset", _FLOAT, version="v2"),
        _op("lfoN_ratio", _FLOAT, version="v2"),
        _op("lfoN_scale", _FLOAT, version="v2"),
    ]
    + [
        _op(f"lfoN_{target}", _FLOAT, version="v2")
        for target in ("volume", "amplitude", "pan", "width", "pitch",
                       "cutoff", "cutoff2", "resonance", "resonance2")
    ]
    + [
        _op(f"lfoN_{target}_onccX", _FLOAT, version="v2")
        for target in ("volume", "amplitude", "pan", "width", "pitch",
                       "cutoff", "cutoff2", "resonance", "resonance2")
    ]
)

# ── Modulation variables (v2) ────────────────────────────────────────────
_VARIABLES = [
    _op("varNN_mod", _ENUM, choices=("mult", "add"), version="v2"),
    _op("varNN_onccX", _FLOAT, 0, 1, version="v2"),
    _op("varNN_curveccX", _INT, 0, 255, version="v2"),
    _op("varNN_target", _STR, version="v2"),
]

# ── Curve header ─────────────────────────────────────────────────────────
_CURVE = [
    _op("curve_index", _INT, 0, 255, version="v2"),
    _op("vN", _FLOAT, -1, 1, version="v2"),
]

# ── Effect header & bus routing ──────────────────────────────────────────
_EFFECTS = [
    _op("effect1", _PCT, 0, 100, "0"),
    _op("effect2", _PCT, 0, 100, "0"),
    _op("effect3", _PCT, 0, 100, "0", version="v2"),
    _op("effect4", _PCT, 0, 100, "0", version="v2"),
    _op("bus", _ENUM, default="main",
        choices=("main", "aux1", "aux2", "aux3", "aux4", "aux5", "aux6", "aux7",
                 "aux8", "fx1", "fx2", "fx3", "fx4", "midi"),
        version="v2"),
    _op("type", _STR, version="v2"),
    _op("dsp_order", _INT, 0, 1, version="v2"),
    _op("directtomain", _PCT, 0, 100, "100", version="v2"),
    _op("fxNtomain", _PCT, 0, 100, "0", version="v2"),
    _op("apan_depth", _PCT, 0, 100, version="v2"),
    _op("apan_dry", _PCT, 0, 100, version="v2"),
    _op("apan_wet", _PCT, 0, 100, version="v2"),
    _op("apan_freq", _FLOAT, 0, 100, version="v2"),
    _op("apan_phase", _FLOAT, 0, 180, version="v2"),
    _op("bitred", _PCT, 0, 100, version="v2"),
    _op("decim", _PCT, 0, 100, version="v2"),
    _op("comp_attack", _FLOAT, 0, 100, version="v2"),
    _op("comp_release", _FLOAT, 0, 100, version="v2"),
    _op("comp_ratio", _FLOAT, 0, 100, version="v2"),
    _op("comp_gain", _FLOAT, -96, 96, version="v2"),
    _op("comp_threshold", _FLOAT, -96, 0, version="v2"),
    _op("comp_stlink", _BOOL, version="v2"),
    _op("gate_attack", _FLOAT, 0, 100, version="v2"),
    _op("gate_release", _FLOAT, 0, 100, version="v2"),
    _op("gate_threshold", _FLOAT, -96, 0, version="v2"),
    _op("gate_stlink", _BOOL, version="v2"),
    _op("delay_mode", _ENUM,
        choices=("detune", "chorus", "cross", "flanger", "lrc", "mod", "multimod",
                 "panning", "ping", "rlc", "stereo", "tlcr"),
        version="v2"),
    _op("delay_dry", _PCT, 0, 100, version="v2"),
    _op("delay_wet", _PCT, 0, 100, version="v2"),
    _op("delay_input", _PCT, 0, 100, version="v2"),
    _op("delay_feedback", _PCT, 0, 100, version="v2"),
    _op("delay_cutoff", _FLOAT, 0, MAX_SAMPLE_RATE, version="v2"),
    _op("delay_lfofreq", _FLOAT, 0, 100, version="v2"),
    _op("delay_moddepth", _PCT, 0, 100, version="v2"),
    _op("delay_spread", _PCT, 0, 100, version="v2"),
    _op("disto_depth", _PCT, 0, 100, version="v2"),
    _op("disto_dry", _PCT, 0, 100, version="v2"),
    _op("disto_wet", _PCT, 0, 100, version="v2"),
    _op("disto_tone", _PCT, 0, 100, version="v2"),
    _op("disto_stages", _INT, 1, 8, version="v2"),
    _op("eq_bw", _FLOAT, 0.001, 4, version="v2"),
    _op("eq_freq", _FLOAT, 0, 30000, version="v2"),
    _op("eq_gain", _FLOAT, -96, 24, version="v2"),
    _op("eq_type", _STR, version="v2"),
    _op("filter_cutoff", _FLOAT, 0, MAX_SAMPLE_RATE, version="v2"),
    _op("filter_resonance", _FLOAT, 0, 40, version="v2"),
    _op("filter_type", _STR, version="v2"),
    _op("phaser_depth", _PCT, 0, 100, version="v2"),
    _op("phaser_feedback", _PCT, 0, 100, version="v2"),
    _op("phaser_freq", _FLOAT, 0, 100, version="v2"),
    _op("phaser_stages", _INT, 1, 64, version="v2"),
    _op("phaser_wet", _PCT, 0, 100, version="v2"),
    _op("reverb_type", _ENUM,
        choices=("chamber", "large_hall", "large_room", "mid_hall", "mid_room",
                 "small_hall", "small_room"),
        version="v2"),
    _op("reverb_damp", _PCT, 0, 100, version="v2"),
    _op("reverb_dry", _PCT, 0, 100, version="v2"),
    _op("reverb_input", _PCT, 0, 100, version="v2"),
    _op("reverb_predelay", _FLOAT, 0, 10, version="v2"),
    _op("reverb_size", _PCT, 0, 100, version="v2"),
    _op("reverb_tone", _PCT, 0, 100, version="v2"),
    _op("reverb_wet", _PCT, 0, 100, version="v2"),
    _op("static_level", _PCT, 0, 100, version="v2"),
    _op("static_filter", _STR, version="v2"),
    _op("tdfir_impulse", _PATH, version="v2"),
    _op("tdfir_dry", _PCT, 0, 100, version="v2"),
    _op("tdfir_wet", _PCT, 0, 100, version="v2"),
]

# ── Loading, oscillators and noise (v2 / Cakewalk) ───────────────────────
_GENERATORS = [
    _op("load_mode", _INT, 0, 1, version="cakewalk"),
    _op("load_start", _INT, 0, U32_MAX, version="cakewalk"),
    _op("load_end", _INT, 0, U32_MAX, version="cakewalk"),
    _op("sample_quality", _INT, 1, 10, version="v2"),
    _op("image", _PATH, version="cakewalk"),
    _op("oscillator", _BOOL, version="v2"),
    _op("oscillator_mode", _INT, 0, 2, "0", version="v2"),
    _op("oscillator_multi", _INT, 1, 9, "1", version="v2"),
    _op("oscillator_phase", _FLOAT, -1, 360, version="v2"),
    _op("oscillator_quality", _INT, 0, 3, version="v2"),
    _op("oscillator_detune", _FLOAT, -9600, 9600, version="v2"),
    _op("oscillator_detune_onccN", _FLOAT, -9600, 9600, version="v2"),
    _op("oscillator_mod_depth", _PCT, 0, 10000, version="v2"),
    _op("oscillator_mod_depth_onccN", _PCT, -10000, 10000, version="v2"),
    _op("noise_filter", _STR, version="cakewalk"),
    _op("noise_stereo", _BOOL, version="cakewalk"),
    _op("noise_level", _FLOAT, -96, 24, version="cakewalk"),
    _op("noise_level_onccN", _FLOAT, -96, 24, version="cakewalk"),
    _op("noise_step", _INT, 0, 100, version="cakewalk"),
    _op("noise_tone", _INT, 0, 100, version="cakewalk"),
    _op("vendor_specific", _STR, version="v2"),
]

STANDARD_OPCODES: Tuple[OpcodeDescriptor, ...] = tuple(
    _SAMPLE_PLAYBACK
    + _INSTRUMENT_SETTINGS
    + _CONTROL
    + _REGION_LOGIC
    + _AMPLIFIER
    + _EQUALIZER
    + _FILTER
    + _PITCH
    + _MODULATION
    + _VARIABLES
    + _CURVE
    + _EFFECTS
    + _GENERATORS
)

# Opcode *families* matched by prefix rather than by canonical name
PREFIX_OPCODES: Tuple[OpcodeDescriptor, ...] = (
    _op("hint_", _STR, version="v2"),
)
