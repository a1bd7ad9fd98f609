"""Tests for the render engine, driven through a small two-primitive display."""

from pieceworks.engine.display import Display
from pieceworks.engine.registry import PrimitiveRegistry, PrimitiveSpec
from pieceworks.engine.scene import Surface, el
from pieceworks.engine.states import table


class Lamp(Display):
    kind = "lamp"
    DEFAULTS = {"color": "#ffcc00", "size": 40, "halo": False}
    STATE_TABLE = table("lit", {"on": ("bulb", "base"), "off": ("base",)}, default="on", fallback="off")
    STRUCTURAL_OPTIONS = frozenset({"halo"})

    @classmethod
    def build_registry(cls) -> PrimitiveRegistry:
        return PrimitiveRegistry(
            [
                PrimitiveSpec(
                    id="base",
                    shape=lambda o: el("rect", x=40, y=80, width=20, height=20),
                    classes=("base",),
                ),
                PrimitiveSpec(
                    id="bulb",
                    shape=lambda o: el("circle", cx=50, cy=40, r=30),
                    style=lambda o: {"": {"fill": o["color"]}},
                    classes=("bulb",),
                ),
                PrimitiveSpec(
                    id="halo",
                    shape=lambda o: el("circle", cx=50, cy=40, r=45, fill="none"),
                    when=lambda o, state: o["halo"],
                ),
            ]
        )


def test_render_mounts_in_registry_order():
    lamp = Lamp(Surface())
    assert lamp.scene.mounted_ids == ["base", "bulb"]
    assert lamp.scene.visible_ids == {"base", "bulb"}


def test_hidden_primitives_stay_mounted():
    lamp = Lamp(Surface(), state="off")
    bulb = lamp.scene.get("bulb")
    assert bulb is not None
    assert not bulb.visible
    assert bulb.node.attrs["display"] == "none"
    assert bulb.node.attrs["class"] == "bulb off"


def test_style_applied():
    lamp = Lamp(Surface(), {"color": "#00ff00"})
    assert lamp.scene.get("bulb").node.attrs["fill"] == "#00ff00"


def test_render_is_idempotent():
    lamp = Lamp(Surface())
    first = lamp.scene.snapshot()
    lamp.render()
    lamp.render()
    assert lamp.scene.snapshot() == first


def test_style_refresh_matches_fresh_render():
    lamp = Lamp(Surface())
    lamp.set_option("color", "#123456")
    fresh = Lamp(Surface(), {"color": "#123456"})
    assert lamp.scene.snapshot() == fresh.scene.snapshot()


def test_structural_option_rebuilds():
    lamp = Lamp(Surface())
    lamp.set_option("halo", True)
    assert lamp.scene.mounted_ids == ["base", "bulb", "halo"]
    lamp.set_option("halo", False)
    assert "halo" not in lamp.scene.mounted_ids


def test_state_toggle_updates_visibility():
    lamp = Lamp(Surface())
    lamp.set_state("off")
    assert lamp.scene.get("bulb").visible is False
    lamp.set_state("on")
    bulb = lamp.scene.get("bulb")
    assert bulb.visible
    assert "display" not in bulb.node.attrs


def test_root_size_from_viewbox():
    lamp = Lamp(Surface())
    assert (lamp.scene.width, lamp.scene.height) == (40.0, 40.0)
    assert lamp.scene.viewbox_text == "0 0 100 100"
