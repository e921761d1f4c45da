import pytest

from adapters.easyeda.easyeda_footprint import EasyEDAFootprintParser
from converters.footprint_converter import center_footprint, convert_footprint, pin1_marker
from models.easyeda import (
    DecodedFootprint,
    FootprintCircle,
    FootprintInfo,
    FootprintPad,
    FootprintText,
    FootprintTrack,
)
from models.footprint import DrillShape, Model3D, PadShape, PadType, TextKind
from models.graphics import Circle, Line
from models.layer import KicadLayer

UNIT = 1 / 0.254  # one millimetre in source units


def _decoded(pads=(), texts=(), tracks=(), circles=()):
    return DecodedFootprint(
        info=FootprintInfo(name="TEST-FP"),
        pads=list(pads),
        texts=list(texts),
        tracks=list(tracks),
        circles=list(circles),
    )


def _pad(number="1", x=0.0, y=0.0, hole_radius=0.0, hole_length=0.0, **kwargs):
    values = dict(shape_code="RECT", center_x=x, center_y=y, width=1.2 * UNIT, height=0.6 * UNIT, layer_id=1)
    values.update(kwargs)
    return FootprintPad(number=number, hole_radius=hole_radius, hole_length=hole_length, **values)


def _graphics(footprint, kind):
    return [g for g in footprint.graphics if isinstance(g, kind)]


def test_single_smd_pad():
    footprint = convert_footprint(_decoded(pads=[_pad()]))

    assert len(footprint.pads) == 1
    pad = footprint.pads[0]
    assert pad.pad_type == PadType.SMD
    assert pad.shape == PadShape.RECTANGLE
    assert pad.layers == [KicadLayer.FRONT_COPPER, KicadLayer.FRONT_PASTE, KicadLayer.FRONT_MASK]
    assert pad.drill is None
    assert pad.width == pytest.approx(1.2)
    assert pad.height == pytest.approx(0.6)
    assert (pad.position.x, pad.position.y) == (0, 0)


def test_round_drill():
    pad = convert_footprint(_decoded(pads=[_pad(hole_radius=2.0)])).pads[0]

    assert pad.pad_type == PadType.THROUGH_HOLE
    assert pad.layers == [KicadLayer.ALL_COPPER, KicadLayer.ALL_MASK]
    assert pad.drill.shape == DrillShape.ROUND
    assert pad.drill.width == pytest.approx(4.0 * 0.254)
    assert pad.drill.height is None


def test_oval_drill():
    pad = convert_footprint(_decoded(pads=[_pad(hole_radius=2.0, hole_length=10.0)])).pads[0]

    assert pad.pad_type == PadType.THROUGH_HOLE
    assert pad.drill.shape == DrillShape.OVAL
    assert pad.drill.width == pytest.approx(4.0 * 0.254)
    assert pad.drill.height == pytest.approx(10.0 * 0.254)


def test_pad_rotation_is_negated_and_empty_number_uses_index():
    footprint = convert_footprint(
        _decoded(pads=[_pad(number="1", rotation=90), _pad(number=" ", x=10, rotation=0)])
    )
    assert footprint.pads[0].rotation == -90
    assert footprint.pads[1].number == "2"


def test_center_is_mean_of_pads():
    footprint = convert_footprint(
        _decoded(
            pads=[_pad("1", x=4000, y=3000), _pad("2", x=4000 + 4 * UNIT, y=3000)],
            texts=[FootprintText(type_code="N", center_x=9000, center_y=9000, layer_id=3)],
        )
    )
    assert footprint.pads[0].position.x == pytest.approx(-2)
    assert footprint.pads[1].position.x == pytest.approx(2)
    assert footprint.pads[0].position.y == pytest.approx(0)


def test_center_falls_back_to_texts():
    footprint = convert_footprint(
        _decoded(
            texts=[
                FootprintText(type_code="N", center_x=100, center_y=0, layer_id=3),
                FootprintText(type_code="L", center_x=100 + 2 * UNIT, center_y=0, layer_id=3, text="x"),
            ]
        )
    )
    assert [text.position.x for text in footprint.texts] == [pytest.approx(-1), pytest.approx(1)]


def test_no_y_inversion():
    footprint = convert_footprint(
        _decoded(pads=[_pad("1", x=0, y=0), _pad("2", x=0, y=2 * UNIT)])
    )
    assert footprint.pads[0].position.y == pytest.approx(-1)
    assert footprint.pads[1].position.y == pytest.approx(1)


def test_text_roles():
    footprint = convert_footprint(
        _decoded(
            texts=[
                FootprintText(type_code="P", text="ignored", layer_id=3, rotation=90),
                FootprintText(type_code="N", text="R1", layer_id=4),
                FootprintText(type_code="L", text="+", layer_id=4),
            ]
        )
    )
    value, reference, user = footprint.texts
    assert (value.kind, value.text, value.layer) == (TextKind.VALUE, "TEST-FP", KicadLayer.FRONT_FABRICATION)
    assert value.rotation == -90
    assert (reference.kind, reference.text, reference.layer) == (
        TextKind.REFERENCE,
        "REF**",
        KicadLayer.FRONT_SILKSCREEN,
    )
    assert (user.kind, user.text, user.layer) == (TextKind.USER, "+", KicadLayer.BACK_SILKSCREEN)


def test_tracks_become_lines_on_graphic_layers_only():
    footprint = convert_footprint(
        _decoded(
            tracks=[
                FootprintTrack(stroke_width=UNIT * 0.1, layer_id=3, points=[(0, 0), (UNIT, 0), (UNIT, UNIT)]),
                FootprintTrack(stroke_width=1, layer_id=1, points=[(0, 0), (UNIT, 0)]),
            ]
        )
    )
    lines = _graphics(footprint, Line)
    assert len(lines) == 2
    assert all(line.layer == KicadLayer.FRONT_SILKSCREEN for line in lines)
    assert lines[0].width == pytest.approx(0.1)
    assert (lines[1].end.x, lines[1].end.y) == (pytest.approx(1), pytest.approx(1))


def test_far_track_segments_are_dropped():
    footprint = convert_footprint(
        _decoded(
            tracks=[
                FootprintTrack(
                    layer_id=3,
                    points=[(0, 0), (10 * UNIT, 0), (200 * UNIT, 0), (10 * UNIT, 10 * UNIT)],
                )
            ]
        )
    )
    lines = _graphics(footprint, Line)
    assert len(lines) == 1
    assert lines[0].end.x == pytest.approx(10)


def test_circle_filters():
    footprint = convert_footprint(
        _decoded(
            circles=[
                FootprintCircle(layer_id=3, center_x=0, center_y=0, radius=UNIT),
                FootprintCircle(layer_id=1, center_x=0, center_y=0, radius=2 * UNIT),
                FootprintCircle(layer_id=13, center_x=0, center_y=0, radius=UNIT),
                FootprintCircle(layer_id=3, center_x=0, center_y=0, radius=60 * UNIT),
                FootprintCircle(layer_id=4, center_x=160 * UNIT, center_y=0, radius=UNIT),
            ]
        )
    )
    circles = _graphics(footprint, Circle)
    assert [c.radius for c in circles] == [pytest.approx(1), pytest.approx(2)]
    assert [c.layer for c in circles] == [KicadLayer.FRONT_SILKSCREEN, KicadLayer.FRONT_COPPER]


def test_pin1_marker():
    footprint = convert_footprint(
        _decoded(pads=[_pad("1", x=-2 * UNIT, y=0), _pad("2", x=2 * UNIT, y=0)])
    )
    markers = _graphics(footprint, Circle)
    assert len(markers) == 1
    marker = markers[0]
    assert marker.layer == KicadLayer.FRONT_SILKSCREEN
    assert marker.radius == pytest.approx(0.25)
    # left of pad 1 (x=-2, width 1.2) and above it since it sits on the x axis
    assert marker.center.x == pytest.approx(-2 - 0.6 - 0.5)
    assert marker.center.y == pytest.approx(-0.3 - 0.5)


def test_pin1_marker_points_away_from_center():
    footprint = convert_footprint(
        _decoded(pads=[_pad("A1", x=2 * UNIT, y=2 * UNIT), _pad("B2", x=-2 * UNIT, y=-2 * UNIT)])
    )
    marker = pin1_marker(footprint)
    assert marker.center.x == pytest.approx(2 + 0.6 + 0.5)
    assert marker.center.y == pytest.approx(2 + 0.3 + 0.5)


def test_no_marker_without_pad_one():
    footprint = convert_footprint(_decoded(pads=[_pad("3"), _pad("4", x=UNIT)]))
    assert footprint.graphics == []


def test_full_footprint(cad_data):
    footprint = convert_footprint(EasyEDAFootprintParser().parse_easyeda_json(cad_data))

    assert footprint.name == "R0603"
    assert [pad.number for pad in footprint.pads] == ["1", "2"]
    assert [pad.position.x for pad in footprint.pads] == [pytest.approx(-2.54), pytest.approx(2.54)]
    assert [text.kind for text in footprint.texts] == [TextKind.REFERENCE, TextKind.VALUE]
    # silkscreen track, silkscreen circle, pin-1 marker; the copper track is dropped
    assert len(_graphics(footprint, Line)) == 1
    assert len(_graphics(footprint, Circle)) == 2
    assert footprint.model_3d is None


def test_model_is_attached():
    model = Model3D(name="R0603", wrl_data="#VRML V2.0 utf8\n")
    footprint = convert_footprint(_decoded(pads=[_pad()]), model)
    assert footprint.model_3d is model


def test_centering_is_idempotent(cad_data):
    footprint = convert_footprint(EasyEDAFootprintParser().parse_easyeda_json(cad_data))
    again = center_footprint(footprint)

    for before, after in zip(footprint.pads, again.pads):
        assert after.position.x == pytest.approx(before.position.x)
        assert after.position.y == pytest.approx(before.position.y)
    for before, after in zip(footprint.texts, again.texts):
        assert after.position.x == pytest.approx(before.position.x)
    assert len(again.graphics) == len(footprint.graphics)
