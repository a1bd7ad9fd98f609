"""Tests for the SVG serializer."""

import logging
import xml.etree.ElementTree as ET

from pieceworks.displays.seven_segment import SevenSegmentDisplay
from pieceworks.engine.scene import el
from pieceworks.svg.serializer import serialize_document, serialize_metadata, serialize_node

NS = "{http://www.w3.org/2000/svg}"


def test_document_layout():
    svg = serialize_document(
        {"width": 10, "height": 20, "viewBox": "0 0 10 20"},
        [el("rect", x=0, y=0, width=10, height=20)],
        defs=[el("linearGradient", id="g")],
        settings={"color": "#ff0000"},
        styles={".a": {"fill": "#ff0000"}},
        title="demo",
    )
    lines = svg.splitlines()
    assert lines[0] == '<?xml version="1.0" encoding="UTF-8"?>'
    root = ET.fromstring(svg)
    assert [child.tag.replace(NS, "") for child in root] == ["title", "defs", "rect", "metadata", "style"]
    assert root.get("height") == "20"


def test_attribute_and_text_escaping():
    svg = serialize_document(
        {"width": 1, "height": 1},
        [el("text", text="a < b & c", data_label='say "hi"')],
        settings={"note": "<b>&"},
    )
    root = ET.fromstring(svg)
    text = root.find(f"{NS}text")
    assert text.text == "a < b & c"
    assert text.get("data-label") == 'say "hi"'
    assert root.find(f"{NS}metadata/{NS}settings/{NS}note").text == "<b>&"


def test_metadata_skips_bad_tag_names(caplog):
    with caplog.at_level(logging.WARNING):
        lines = serialize_metadata({"ok": 1, "not valid": 2, "9lives": 3})
    body = "\n".join(lines)
    assert '<ok type="number">1</ok>' in body
    assert "not valid" not in body
    assert "9lives" not in body
    assert "Skipping setting" in caplog.text


def test_metadata_value_formatting():
    body = "\n".join(serialize_metadata({"flag": True, "ratio": 0.25, "size": 80.0, "label": "007"}))
    assert '<flag type="boolean">true</flag>' in body
    assert '<ratio type="number">0.25</ratio>' in body
    assert '<size type="number">80</size>' in body
    assert "<label>007</label>" in body


def test_nested_node_indentation():
    lines = serialize_node(el("g", children=[el("circle", r=1)]), depth=1)
    assert lines == ["  <g>", '    <circle r="1" />', "  </g>"]


def test_scene_export_includes_every_primitive(surface):
    display = SevenSegmentDisplay(surface, state="1")
    root = ET.fromstring(display.export_vector())
    ids = [child.get("id") for child in root if child.get("id")]
    assert ids == ["background", "a", "b", "c", "d", "e", "f", "g"]
    assert root.get("class") == "digit-1 glow-enabled"
    settings = root.find(f"{NS}metadata/{NS}settings")
    assert [child.tag.replace(NS, "") for child in settings][0] == "digit"
    assert "segment" in root.find(f"{NS}style").text
    # The live scene keeps its nodes id-free
    assert "id" not in display.scene.get("a").node.attrs
