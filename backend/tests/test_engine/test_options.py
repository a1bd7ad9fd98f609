"""Tests for the option model."""

from pieceworks.engine.options import OptionSet, create_options

DEFAULTS = {"color": "#ff0000", "size": 50, "glow": True}


def test_every_default_present():
    opts = create_options(None, DEFAULTS)
    assert set(DEFAULTS) <= set(opts)
    assert opts == DEFAULTS


def test_override_wins():
    opts = create_options({"size": 80}, DEFAULTS)
    assert opts["size"] == 80
    assert opts["color"] == "#ff0000"


def test_unknown_keys_pass_through():
    opts = create_options({"extra": 1}, DEFAULTS)
    assert opts["extra"] == 1
    assert opts.unknown_keys() == ["extra"]
    assert not opts.is_known("extra")
    assert opts.is_known("glow")


def test_defaults_order_first():
    opts = create_options({"extra": 1, "size": 2}, DEFAULTS)
    assert list(opts) == ["color", "size", "glow", "extra"]


def test_merge_in_place():
    opts = create_options(None, DEFAULTS)
    same = opts.merge({"glow": False, "size": 10})
    assert same is opts
    assert opts["glow"] is False
    assert opts["size"] == 10


def test_point_set():
    opts = create_options(None, DEFAULTS)
    assert opts.set("color", "#00ff00") is opts
    assert opts["color"] == "#00ff00"


def test_delete_known_key_restores_default():
    opts = create_options({"size": 10, "extra": "x"}, DEFAULTS)
    del opts["size"]
    del opts["extra"]
    assert opts["size"] == 50
    assert "extra" not in opts


def test_defaults_not_mutated():
    defaults = dict(DEFAULTS)
    opts = OptionSet(defaults)
    opts["size"] = 1
    assert defaults["size"] == 50
    assert opts.defaults["size"] == 50
    assert opts.to_dict()["size"] == 1
