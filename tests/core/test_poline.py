"""core.poline（アンカー補間によるランダムパレット生成）のテスト。"""

from __future__ import annotations

import random

import numpy as np
import pytest

from artworks.core.color import Hsla, fract
from artworks.core.pacing import CustomPacing, Pacing, linear
from artworks.core.poline import (
    InvalidPaletteLength,
    hsl_to_point,
    point_to_hsl,
    random_color_palette,
    random_color_palette3,
    random_hsl_triple,
    triple_segment_sizes,
    vectors_on_line,
)


class _SequenceRandom:
    """決まった値を順に返す乱数源。"""

    def __init__(self, values: list[float]) -> None:
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls]
        self.calls += 1
        return value


def _hue_delta(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return (a - b + 180.0) % 360.0 - 180.0


def test_hsl_point_round_trip() -> None:
    hue, sat, light = np.meshgrid(
        np.linspace(0.0, 359.0, 13),
        np.linspace(0.0, 1.0, 5),
        np.linspace(0.05, 1.0, 5),
        indexing="ij",
    )
    hsl = np.stack([hue.ravel(), sat.ravel(), light.ravel()], axis=-1)

    out = point_to_hsl(hsl_to_point(hsl))

    np.testing.assert_allclose(_hue_delta(out[:, 0], hsl[:, 0]), 0.0, atol=1e-5)
    np.testing.assert_allclose(out[:, 1:], hsl[:, 1:], atol=1e-5)


def test_center_point_maps_to_zero_hue() -> None:
    p = hsl_to_point([123.0, 0.4, 0.0])
    np.testing.assert_array_equal(p, [0.5, 0.5, 0.4])

    hsl = point_to_hsl(p)
    assert hsl.tolist() == [0.0, 0.4, 0.0]


def test_vectors_on_line_endpoints_and_shape() -> None:
    p1 = np.array([0.0, 0.0, 0.0])
    p2 = np.array([1.0, 2.0, 3.0])
    pts = vectors_on_line(p1, p2, 5)

    assert pts.shape == (5, 3)
    np.testing.assert_array_equal(pts[0], p1)
    np.testing.assert_array_equal(pts[-1], p2)
    np.testing.assert_allclose(pts[2], [0.5, 1.0, 1.5])


def test_vectors_on_line_applies_pacing_per_axis() -> None:
    def square(t: float, reverse: bool) -> float:
        return t * t

    pts = vectors_on_line([0.0, 0.0, 0.0], [1.0, 1.0, 1.0], 3, fx=linear, fy=square, fz=linear)
    np.testing.assert_allclose(pts[1], [0.5, 0.25, 0.5])


@pytest.mark.parametrize("n", [0, 1, -3])
def test_vectors_on_line_rejects_short_lines(n: int) -> None:
    with pytest.raises(InvalidPaletteLength):
        vectors_on_line([0.0, 0.0, 0.0], [1.0, 1.0, 1.0], n)


@pytest.mark.parametrize("length", [2, 3, 7, 64])
def test_palette_has_requested_length(length: int) -> None:
    palette = random_color_palette(length, Pacing.SINUSOIDAL, rng=0)
    assert len(palette) == length
    assert all(isinstance(c, Hsla) for c in palette)
    assert all(c.alpha == 1.0 for c in palette)


@pytest.mark.parametrize("length", [0, 1])
def test_palette_rejects_short_length_without_drawing(length: int) -> None:
    src = _SequenceRandom([])
    with pytest.raises(InvalidPaletteLength) as exc_info:
        random_color_palette(length, rng=src)
    assert exc_info.value.length == length
    assert "invalid palette length" in str(exc_info.value)
    assert src.calls == 0


def test_palette_middle_matches_planar_midpoint_exactly() -> None:
    src = _SequenceRandom([0.0, 0.5, 0.5, 0.6, 0.7, 0.25])
    palette = random_color_palette(3, Pacing.LINEAR, rng=src)
    assert src.calls == 6

    c1 = np.array([0.0, 0.5, 0.75 + 0.6 * 0.2])
    c2 = np.array([(0.0 + 60.0 + 0.25 * 180.0) % 360.0, 0.5, 0.3 + 0.7 * 0.2])
    assert c2[0] == 105.0

    p1 = hsl_to_point(c1)
    p2 = hsl_to_point(c2)
    mid = (1.0 - 0.5) * p1 + 0.5 * p2
    hsl = point_to_hsl(np.stack([p1, mid, p2]))

    expected_mid = Hsla(
        hue=fract(float(hsl[1, 0]) / 360.0),
        saturation=float(hsl[1, 1]),
        lightness=float(hsl[1, 2]),
        alpha=1.0,
    )
    assert palette[1] == expected_mid

    assert palette[0].hue == 0.0
    assert palette[0].saturation == pytest.approx(0.5)
    assert palette[0].lightness == pytest.approx(0.87)
    assert palette[2].hue == pytest.approx(105.0 / 360.0)
    assert palette[2].lightness == pytest.approx(0.44)


def test_linear_palette_ends_are_anchor_colors() -> None:
    # hue0 = 300 deg は point_to_hsl で -60 deg になるが、turn-fraction では元に戻る。
    src = _SequenceRandom([300.0 / 360.0, 0.2, 0.9, 0.5, 0.5, 0.5])
    palette = random_color_palette(6, Pacing.LINEAR, rng=src)

    assert palette[0].hue == pytest.approx(300.0 / 360.0, abs=1e-9)
    assert palette[0].saturation == pytest.approx(0.2)
    assert palette[0].lightness == pytest.approx(0.85)

    assert palette[-1].hue == pytest.approx(((300.0 + 150.0) % 360.0) / 360.0, abs=1e-9)
    assert palette[-1].saturation == pytest.approx(0.9)
    assert palette[-1].lightness == pytest.approx(0.4)


@pytest.mark.parametrize("pacing", list(Pacing))
@pytest.mark.parametrize("seed", range(5))
def test_hues_are_normalized_to_turn_fraction(pacing: Pacing, seed: int) -> None:
    for reverse in (False, True):
        palette = random_color_palette(17, pacing, rng=seed, reverse=reverse)
        for color in palette:
            assert 0.0 <= color.hue < 1.0


def test_same_seed_gives_identical_palettes() -> None:
    a = random_color_palette(12, Pacing.ARC, rng=np.random.default_rng(42))
    b = random_color_palette(12, Pacing.ARC, rng=np.random.default_rng(42))
    assert a == b

    c = random_color_palette(12, "quadratic", rng=random.Random(7))
    d = random_color_palette(12, "quadratic", rng=random.Random(7))
    assert c == d


def test_custom_linear_matches_builtin_linear() -> None:
    custom = CustomPacing(fx=linear, fy=linear, fz=linear)
    a = random_color_palette(9, custom, rng=3)
    b = random_color_palette(9, Pacing.LINEAR, rng=3)
    assert a == b


def test_reverse_changes_interior_but_not_ends() -> None:
    forward = random_color_palette(5, Pacing.EXPONENTIAL, rng=11)
    backward = random_color_palette(5, Pacing.EXPONENTIAL, rng=11, reverse=True)
    assert forward[0] == backward[0]
    assert forward[-1] == backward[-1]
    assert forward[2] != backward[2]


def test_lightness_ranges_override() -> None:
    src = _SequenceRandom([0.0, 0.5, 0.5, 1.0, 0.0, 0.5])
    palette = random_color_palette(2, rng=src, lightness_ranges=((0.1, 0.1), (0.9, 0.5)))
    assert palette[0].lightness == pytest.approx(0.2)
    assert palette[-1].lightness == pytest.approx(0.9)


def test_triple_hues_step_from_previous_anchor() -> None:
    src = _SequenceRandom([0.0, 1.0])
    c1, c2, c3 = random_hsl_triple(10.0, (0.1, 0.2, 0.3), (0.4, 0.5, 0.6), rng=src)
    assert c1[0] == 10.0
    assert c2[0] == 70.0
    assert c3[0] == pytest.approx((70.0 + 240.0) % 360.0)


@pytest.mark.parametrize(
    ("length", "expected"),
    [(3, (2, 1)), (4, (2, 2)), (5, (3, 2)), (10, (5, 5)), (11, (6, 5))],
)
def test_triple_segment_sizes(length: int, expected: tuple[int, int]) -> None:
    assert triple_segment_sizes(length) == expected
    assert sum(expected) == length


def test_triple_palette_includes_middle_anchor_once() -> None:
    src = _SequenceRandom([0.0, 0.3, 0.6, 0.9, 0.5, 0.5, 0.5, 0.0, 0.0])
    palette = random_color_palette3(7, Pacing.LINEAR, rng=src)
    assert src.calls == 9
    assert len(palette) == 7

    # hue: 0 -> 60 -> 120 deg。1 区間目は 4 点（両端込み）、2 区間目は 3 点。
    assert palette[0].hue == pytest.approx(0.0, abs=1e-9)
    assert palette[3].hue == pytest.approx(60.0 / 360.0)
    assert palette[3].saturation == pytest.approx(0.6)
    assert palette[-1].hue == pytest.approx(120.0 / 360.0)
    assert palette[-1].saturation == pytest.approx(0.9)
    assert sum(1 for c in palette if c.saturation == pytest.approx(0.6)) == 1


def test_triple_palette_of_three_is_just_anchors() -> None:
    palette = random_color_palette3(3, rng=5)
    rebuilt = random_color_palette3(3, rng=5)
    assert palette == rebuilt
    assert len(palette) == 3


@pytest.mark.parametrize("length", [0, 1, 2])
def test_triple_palette_rejects_short_length(length: int) -> None:
    src = _SequenceRandom([])
    with pytest.raises(InvalidPaletteLength) as exc_info:
        random_color_palette3(length, rng=src)
    assert exc_info.value.minimum == 3
    assert src.calls == 0


def test_poline_core_does_not_import_config_layer() -> None:
    import inspect

    import artworks.core.poline as poline_module
    from artworks.core import color

    assert poline_module.LightnessRange is color.LightnessRange
    assert "artworks.core.runtime_config" not in inspect.getsource(poline_module)
