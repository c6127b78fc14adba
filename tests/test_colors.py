import pytest

from loglog.colors import (
    BLACK,
    Color,
    Easle,
    color_gradient,
    hex_to_color,
    hex_to_srgb,
    hex_to_vec4,
)


def test_hex_to_srgb_extremes():
    assert hex_to_srgb("#000000") == (0.0, 0.0, 0.0)
    assert hex_to_srgb("#ffffff") == (1.0, 1.0, 1.0)


def test_leading_hashes_are_optional_and_repeatable():
    assert hex_to_srgb("c3a38a") == hex_to_srgb("#c3a38a")
    assert hex_to_srgb("##c3a38a") == hex_to_srgb("c3a38a")


def test_hex_digits_are_case_insensitive():
    assert hex_to_srgb("#C3A38A") == hex_to_srgb("#c3a38a")


def test_components_are_normalised():
    for value in hex_to_srgb("#c3a38a"):
        assert 0.0 <= value <= 1.0


@pytest.mark.parametrize("code", ["#fff", "#fffffff", "", "#"])
def test_bad_length_raises(code):
    with pytest.raises(ValueError, match="length"):
        hex_to_srgb(code)


@pytest.mark.parametrize(
    "code, component",
    [("#zz0000", "red"), ("#00zz00", "green"), ("#0000zz", "blue")],
)
def test_bad_component_raises(code, component):
    with pytest.raises(ValueError, match=component):
        hex_to_srgb(code)


def test_hex_to_color_falls_back_to_black():
    assert hex_to_color("not a colour") == BLACK
    assert hex_to_color("#ffffff") == Color(1.0, 1.0, 1.0, 1.0)


def test_hex_to_vec4():
    assert hex_to_vec4("bad") == (0.0, 0.0, 0.0, 0.0)
    r, g, b, a = hex_to_vec4("#c3a38a")
    assert (r, g, b) == hex_to_srgb("#c3a38a")
    assert a == 1.0


def test_parchment_colour():
    assert Easle.PARCHMENT.as_color() == hex_to_color("#c3a38a")


def test_mix_endpoints():
    white = hex_to_color("#ffffff")
    assert BLACK.mix(white, 0.0) == BLACK
    assert BLACK.mix(white, 1.0) == white


def test_to_rgba8_extremes_and_saturation():
    assert hex_to_color("#ffffff").to_rgba8() == (255, 255, 255, 255)
    assert Color(2.0, -1.0, 0.0, 1.0).to_rgba8() == (255, 0, 0, 255)


def test_gradient_dimensions_and_rows():
    image = color_gradient(["#000000", "#ffffff"], 4)
    assert image.width == 4
    assert image.height == 4
    assert len(image.data) == 4 * 4 * 4
    row = image.data[: 4 * 4]
    assert all(image.data[i * 16:(i + 1) * 16] == row for i in range(4))
    assert tuple(image.data[0:4]) == BLACK.to_rgba8()


def test_gradient_brightness_increases():
    image = color_gradient(["#000000", "#ffffff"], 8)
    reds = [image.data[i * 4] for i in range(8)]
    assert reds == sorted(reds)


def test_gradient_pads_with_last_colour():
    image = color_gradient(["#000000", "#ffffff", "#c3a38a"], 5)
    assert image.width == 5
    last_pixel = tuple(image.data[16:20])
    assert last_pixel == hex_to_color("#c3a38a").to_rgba8()


def test_gradient_needs_two_colours():
    with pytest.raises(ValueError):
        color_gradient(["#ffffff"], 4)
    with pytest.raises(ValueError):
        color_gradient([], 4)