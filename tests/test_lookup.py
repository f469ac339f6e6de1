"""Tests for knob name and choice option lookups."""

from knobcompat.lookup import (
    filter_knob_choice_option_compat,
    filter_knob_name_compat,
    filter_name,
    filter_option,
)
from knobcompat.matching.strings import MatchStrategy, StringMatch
from knobcompat.matching.versions import UNKNOWN_VERSION, VersionRange, VersionTriple
from knobcompat.rules.model import NameAlternative, NameRule, OptionRule, Registry

OPENFX = "net.sf.openfx.Foo"
SHUFFLE = "net.sf.openfx.ShufflePlugin"
WRITER = "fr.inria.openfx.WriteOIIO"


def _alt(name, strategy=MatchStrategy.EQUALS):
    return NameAlternative(StringMatch(name, strategy))


def _mock_registry():
    return Registry(
        name_rules=(
            NameRule((_alt("old"),), "first"),
            NameRule((_alt("ol", MatchStrategy.STARTS_WITH),), "second"),
        ),
        option_rules=(
            OptionRule((_alt("mode"),), "one", options=(StringMatch("1"),)),
            OptionRule((_alt("mode"),), "two", options=(StringMatch("2"),)),
        ),
    )


# --- Names ---


def test_name_rewritten_at_upper_edge_of_host_gate():
    assert filter_name(OPENFX, 1, 0, 2, 2, 99, "r") == (True, "NatronOfxParamProcessR")


def test_name_not_rewritten_above_host_gate():
    assert filter_name(OPENFX, 1, 0, 2, 3, 0, "r") == (False, "r")


def test_roto_names():
    assert filter_name("fr.inria.built-in.Roto", 1, 0, 2, 0, 0, "doGreen") == (True, "NatronOfxParamProcessG")
    assert filter_name("fr.inria.built-in.Roto", 1, 0, 2, 1, 3, "doBlue") == (True, "NatronOfxParamProcessB")
    assert filter_name("fr.inria.built-in.Roto", 1, 0, 1, 0, 0, "a") == (True, "NatronOfxParamProcessA")


def test_name_requires_bundled_plugin():
    assert filter_name("com.example.Blur", 1, 0, 2, 0, 0, "r") == (False, "r")


def test_name_match_is_case_sensitive():
    assert filter_name(OPENFX, 1, 0, 2, 0, 0, "R") == (False, "R")
    assert filter_name(OPENFX, 1, 0, 2, 0, 0, "dored") == (False, "dored")


def test_unknown_host_version_never_gates():
    assert filter_name(OPENFX, -1, -1, -1, -1, -1, "r") == (True, "NatronOfxParamProcessR")
    assert filter_name(OPENFX, 1, 0, -1, 5, 5, "doAlpha") == (True, "NatronOfxParamProcessA")


def test_unmatched_name_is_untouched():
    assert filter_name(OPENFX, 1, 0, 2, 0, 0, "size") == (False, "size")


def test_first_name_rule_wins():
    registry = _mock_registry()
    assert filter_knob_name_compat("p", UNKNOWN_VERSION, UNKNOWN_VERSION, "old", registry) == (True, "first")
    assert filter_knob_name_compat("p", UNKNOWN_VERSION, UNKNOWN_VERSION, "olden", registry) == (True, "second")


def test_name_rule_host_gate_skips_to_next_rule():
    registry = Registry(
        name_rules=(
            NameRule((_alt("old"),), "modern", VersionRange(min=VersionTriple(3, -1, -1))),
            NameRule((_alt("old"),), "legacy", VersionRange(max=VersionTriple(2, -1, -1))),
        ),
    )
    assert filter_knob_name_compat("p", UNKNOWN_VERSION, VersionTriple(2, 1, 0), "old", registry) == (True, "legacy")
    assert filter_knob_name_compat("p", UNKNOWN_VERSION, VersionTriple(3, 0, 0), "old", registry) == (True, "modern")


def test_empty_registry_rewrites_nothing():
    assert filter_knob_name_compat(OPENFX, UNKNOWN_VERSION, UNKNOWN_VERSION, "r", Registry()) == (False, "r")


# --- Options ---


def test_output_channels_rgba_becomes_color_plane():
    assert filter_option(OPENFX, 1, 0, 2, 2, 99, "outputChannels", "RGBA") == (True, "Color")


def test_option_of_unrelated_param_is_untouched():
    assert filter_option(OPENFX, 1, 0, 2, 2, 99, "somethingElse", "RGBA") == (False, "RGBA")


def test_mask_channel_red():
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "maskChannel", "red") == (True, "Color.R")
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "maskChannelFoo", "red") == (True, "Color.R")


def test_channels_suffix_gate():
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "channels", "color.rgb") == (True, "Color")
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "inputchannels", "Alpha") == (True, "Color")


def test_option_scanning_continues_past_name_only_match():
    # outputChannels passes the gate of the Color and Backward rules first
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "outputChannels", "forward.motion") == (True, "Forward.Motion")
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "outputChannels", "DisparityRight.Disparity") == (
        True,
        "DisparityRight.Disparity",
    )
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "premultChannel", "a") == (True, "Color.A")
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "maskChannel", "B.a") == (True, "B.Color.A")


def test_option_scanning_in_mock_registry():
    registry = _mock_registry()
    args = ("p", UNKNOWN_VERSION, UNKNOWN_VERSION, "mode")
    assert filter_knob_choice_option_compat(*args, "2", registry) == (True, "two")
    assert filter_knob_choice_option_compat(*args, "3", registry) == (False, "3")


def test_input_channel_options():
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "maskChannel", "A.r") == (True, "A.Color.R")
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "maskChannel", "A.B") == (True, "A.Color.b")
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "maskChannel", "uv.g") == (True, "Color.G")


def test_uv_channels_limited_to_distort_plugins():
    assert filter_option("net.sf.openfx.STMap", 1, 0, 2, 0, 0, "channelU", "r") == (True, "Color.R")
    assert filter_option("net.sf.openfx.idistort", 1, 0, 2, 0, 0, "channelV", "g") == (True, "Color.G")
    assert filter_option(OPENFX, 1, 0, 2, 0, 0, "channelU", "r") == (False, "r")


def test_shuffle_outputs_need_plugin_version_2():
    assert filter_option(SHUFFLE, 2, 0, 2, 0, 0, "outputR", "red") == (True, "Color.R")
    assert filter_option(SHUFFLE, -1, -1, 2, 0, 0, "outputG", "green") == (True, "Color.G")
    assert filter_option(SHUFFLE, 1, 0, 2, 0, 0, "outputR", "red") == (False, "red")


def test_option_host_gate():
    assert filter_option(OPENFX, 1, 0, 2, 3, 0, "outputChannels", "RGBA") == (False, "RGBA")
    assert filter_option(OPENFX, 1, 0, -1, -1, -1, "outputChannels", "RGBA") == (True, "Color")


def test_writer_frame_range_only_for_host_1():
    assert filter_option(WRITER, 1, 0, 1, 4, 0, "frameRange", "timeline bounds") == (True, "project")
    assert filter_option(WRITER, 1, 0, 2, 0, 0, "frameRange", "Timeline bounds") == (False, "Timeline bounds")


def test_writer_bit_depth_has_no_host_gate():
    assert filter_option(WRITER, 1, 0, 3, 0, 0, "bitDepth", "8i") == (True, "8u")
    assert filter_option("fr.inria.built-in.Write", 1, 0, 2, 2, 0, "bitDepth", "16I") == (True, "16u")
    assert filter_option(OPENFX, 1, 0, 2, 2, 0, "bitDepth", "8i") == (False, "8i")


def test_option_rule_without_name_gate_covers_every_param():
    registry = Registry(option_rules=(OptionRule((), "new", options=(StringMatch("old"),)),))
    args = ("any.plugin", UNKNOWN_VERSION, UNKNOWN_VERSION)
    assert filter_knob_choice_option_compat(*args, "whatever", "old", registry) == (True, "new")
    assert filter_knob_choice_option_compat(*args, "whatever", "other", registry) == (False, "other")
