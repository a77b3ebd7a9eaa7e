import math

import numpy as np
import pytest

from chunkworld import color_maps
from chunkworld.biomes import BIOME_TABLE, BIOME_ORDER, classify_noise
from chunkworld.objects import hsl


def test_parse_hex() -> None:
    assert color_maps.parse_color("#2d6a4f") == (45, 106, 79)
    assert color_maps.parse_color("  #FFFFFF ") == (255, 255, 255)


@pytest.mark.parametrize("text, expected", [
    ("hsl(0, 100%, 50%)", (255, 0, 0)),
    ("hsl(120.0, 100.0%, 50.0%)", (0, 255, 0)),
    ("hsl(480, 100%, 50%)", (0, 255, 0)),
    ("hsl(0, 0%, 100%)", (255, 255, 255)),
    ("hsl(0, 0%, 0%)", (0, 0, 0)),
])
def test_parse_hsl(text, expected) -> None:
    assert color_maps.parse_color(text) == expected


def test_generated_hsl_strings_parse() -> None:
    r, g, b = color_maps.parse_color(hsl(130, 47.3, 38.9))
    assert g > r and g > b


def test_hsl_keeps_full_precision() -> None:
    saturation = 40 + 0.123456789 * 20
    text = hsl(130, saturation, 30)
    assert repr(saturation) in text
    assert color_maps.parse_color(text) == color_maps.parse_color(f"hsl(130, {saturation!r}%, 30%)")


def test_hsl_with_exponent_components_parses() -> None:
    r, g, b = color_maps.parse_color(hsl(3e-06, 90, 65))
    assert r > g and r > b


@pytest.mark.parametrize("text", ["not-a-colour", "hsl(1, 2, 3)", "#12"])
def test_unrecognised_colours_raise_value_error(text) -> None:
    with pytest.raises(ValueError):
        color_maps.parse_color(text)


def test_to_hex_clamps() -> None:
    assert color_maps.to_hex((255, 0, 16)) == "#ff0010"
    assert color_maps.to_hex((300, -5, 15.6)) == "#ff000f"


def test_lerp_and_brightness() -> None:
    assert color_maps.lerp_color((0, 0, 0), (200, 100, 50), 0.5) == (100, 50, 25)
    assert color_maps.lerp_color((0, 0, 0), (200, 100, 50), 2.0) == (200, 100, 50)
    assert color_maps.scale_brightness((100, 200, 250), 0.5) == (50, 100, 125)
    assert color_maps.scale_brightness((100, 200, 250), 2.0) == (200, 255, 255)


def test_biome_lut_matches_the_biome_order() -> None:
    lut = color_maps.create_biome_color_lut()
    assert lut.shape == (len(BIOME_ORDER), 3)
    assert lut.dtype == np.uint8
    snow_id = color_maps.BIOME_IDS[BIOME_ORDER[0]]
    assert tuple(lut[snow_id]) == (224, 251, 252)


def test_vectorised_classification_matches_scalar() -> None:
    values = [2.0, 0.0, -3.0, float("nan")]
    for entry in BIOME_TABLE[:-1]:
        values += [entry.threshold, math.nextafter(entry.threshold, -math.inf),
                   math.nextafter(entry.threshold, math.inf)]
    field = np.array(values, dtype=np.float64).reshape(1, -1)

    ids = color_maps.calculate_biome_id_map(field)
    assert ids.shape == field.shape
    for value, biome_id in zip(values, ids.ravel()):
        assert biome_id == color_maps.BIOME_IDS[classify_noise(value).biome]


def test_color_array_has_rgb_channels() -> None:
    ids = np.array([[0, 1], [6, 7]], dtype=np.uint8)
    image = color_maps.get_biome_color_array(ids, color_maps.create_biome_color_lut())
    assert image.shape == (2, 2, 3)
