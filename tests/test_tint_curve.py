import numpy as np
import pytest

from color_tint.rgb import Color, InvalidCountError, ParseError, parse_hex
from color_tint.tint_curve import (
    GenerationRequest,
    PaletteEntry,
    TintPalette,
    adjust_color,
    generate,
    tint_ratios,
)

BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


def request(base="000000", target="FFFFFF", n=3, **kw):
    return GenerationRequest(parse_hex(base), parse_hex(target), n, **kw)


@pytest.mark.parametrize("n", [2, 3, 5, 10, 37, 256])
def test_ratio_curve_shape(n):
    ratios = tint_ratios(n)
    assert len(ratios) == n
    assert ratios[0] == 0.0
    assert ratios[-1] == pytest.approx(0.95)
    assert np.all(np.diff(ratios) > 0)


def test_ratio_curve_is_front_loaded():
    steps = np.diff(tint_ratios(8))
    assert np.all(np.diff(steps) < 0)


def test_ratio_curve_residual():
    assert tint_ratios(4, residual=0.1)[-1] == pytest.approx(0.9)


@pytest.mark.parametrize("residual", [0.0, 1.0, -0.5, 2.0])
def test_ratio_curve_rejects_bad_residual(residual):
    with pytest.raises(ValueError):
        tint_ratios(4, residual=residual)


@pytest.mark.parametrize("n", [1, 0, -3])
def test_count_below_two_is_rejected(n):
    with pytest.raises(InvalidCountError):
        tint_ratios(n)
    with pytest.raises(InvalidCountError):
        request(n=n)


@pytest.mark.parametrize("n", ["3", 2.5, True, None])
def test_count_must_be_an_integer(n):
    with pytest.raises(InvalidCountError):
        request(n=n)


def test_numpy_integer_count_is_accepted():
    assert len(generate(request(n=np.int64(4)))) == 4


@pytest.mark.parametrize("n", [2, 3, 7, 64])
def test_generate_labels_and_order(n):
    palette = generate(request("336699", "ffcc00", n))
    assert len(palette) == n
    assert all(isinstance(e, PaletteEntry) for e in palette)
    assert palette[0].label == "0.00"
    assert palette[-1].label == "95.00"
    assert palette[0].color == parse_hex("336699")
    ratios = [e.ratio for e in palette]
    assert all(a < b for a, b in zip(ratios, ratios[1:]))


def test_generate_black_to_white_three_steps():
    palette = generate(request("000000", "FFFFFF", 3))
    assert [e.color for e in palette] == [
        Color(0, 0, 0),
        Color(198, 198, 198),
        Color(242, 242, 242),
    ]
    assert [e.label for e in palette] == ["0.00", "77.64", "95.00"]
    assert palette[1].ratio == pytest.approx(1 - 0.05**0.5)


def test_generate_toward_darker_target():
    palette = generate(request("ffffff", "000000", 3))
    assert [e.color for e in palette] == [
        Color(255, 255, 255),
        Color(57, 57, 57),
        Color(13, 13, 13),
    ]


def test_generate_is_idempotent():
    req = request("12ab34", "fe9870", 9)
    assert generate(req) == generate(req)


def test_from_strings():
    req = GenerationRequest.from_strings("000000", "FFFFFF", " 3 ")
    assert req == GenerationRequest(BLACK, WHITE, 3)


def test_from_strings_rejects_bad_count_text():
    with pytest.raises(InvalidCountError):
        GenerationRequest.from_strings("000000", "FFFFFF", "three")
    with pytest.raises(InvalidCountError):
        GenerationRequest.from_strings("000000", "FFFFFF", "1")


def test_from_strings_rejects_bad_colour_before_count():
    with pytest.raises(ParseError):
        GenerationRequest.from_strings("zz0000", "FFFFFF", "0")


def test_adjust_color_matches_palette_steps():
    base, target = parse_hex("204060"), parse_hex("e0c0a0")
    palette = TintPalette().generate(base, target, 6)
    steps = [adjust_color(base, target, i, 6) for i in range(6)]
    assert steps == [e.color for e in palette]


def test_adjust_color_residual_and_validation():
    grey = Color(100, 100, 100)
    assert adjust_color(BLACK, grey, 1, 2, residual=0.1) == Color(90, 90, 90)
    with pytest.raises(ValueError):
        adjust_color(BLACK, WHITE, -1, 4)
    with pytest.raises(InvalidCountError):
        adjust_color(BLACK, WHITE, 0, 1)


def test_entry_record_clamps_display_fields():
    entry = PaletteEntry(color=Color(300, 10, -4), ratio=1.5, label="150.00")
    record = entry.to_dict()
    assert record["rgb"] == [300, 10, -4]
    assert record["css"] == "rgb(255, 10, 0)"
    assert record["hex"] == "#ff0a00"
    assert record["label"] == "150.00"


@pytest.mark.parametrize("index", [4, 10, 1.5, True])
def test_adjust_color_rejects_index_off_the_curve(index):
    with pytest.raises(ValueError):
        adjust_color(BLACK, WHITE, index, 4)


def test_adjust_color_uses_the_palette_ratios():
    base, target = parse_hex("000000"), parse_hex("ffffff")
    for i in (1, 57, 123, 199):
        step = adjust_color(base, target, i, 200)
        assert step == TintPalette().generate(base, target, 200)[i].color
