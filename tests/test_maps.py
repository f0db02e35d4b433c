from __future__ import annotations

import math

import numpy as np
import pytest

from liquidglass.maps.displacement import NEUTRAL_FILL, compute_displacement_field
from liquidglass.maps.specular import SPECULAR_THICKNESS, compute_specular_field
from liquidglass.optics.profiles import SURFACE_PROFILES
from liquidglass.optics.refraction import compute_refraction_table, max_abs_displacement


def _squircle_table():
    return compute_refraction_table(80.0, 16.0, SURFACE_PROFILES["convex_squircle"], 1.45)


def _corner_distance_sq(x1: int, y1: int, width: int, height: int, radius: float) -> float:
    if x1 < radius:
        x = x1 - radius
    elif x1 >= width - radius:
        x = x1 - radius - (width - 2 * radius)
    else:
        x = 0.0
    if y1 < radius:
        y = y1 - radius
    elif y1 >= height - radius:
        y = y1 - radius - (height - 2 * radius)
    else:
        y = 0.0
    return x * x + y * y


def test_end_to_end_centre_pixel_is_neutral() -> None:
    table = _squircle_table()
    field = compute_displacement_field(90, 60, 90, 60, 30, 16, max_abs_displacement(table), table)

    assert field.shape == (60, 90, 4)
    assert field.dtype == np.uint8
    assert tuple(field[30, 45]) == NEUTRAL_FILL


def test_pixels_outside_the_outer_band_keep_neutral_fill() -> None:
    table = _squircle_table()
    radius = 30.0
    field = compute_displacement_field(
        140, 100, 120, 80, radius, 16, max_abs_displacement(table), table
    )
    origin_x, origin_y = 10, 10

    assert (field[:origin_y] == NEUTRAL_FILL).all()
    assert (field[:, :origin_x] == NEUTRAL_FILL).all()
    for y1 in range(80):
        for x1 in range(120):
            if _corner_distance_sq(x1, y1, 120, 80, radius) > (radius + 1) ** 2:
                assert tuple(field[origin_y + y1, origin_x + x1]) == NEUTRAL_FILL


def test_left_bezel_pushes_content_outwards() -> None:
    table = _squircle_table()
    field = compute_displacement_field(90, 60, 90, 60, 30, 16, max_abs_displacement(table), table)
    left_bezel = field[30, 5]

    assert left_bezel[0] > 128
    assert left_bezel[1] == 128
    assert left_bezel[2] == 0
    assert left_bezel[3] == 255
    assert field[0, 45][1] > 128


def test_corner_fade_ring_scales_displacement_by_coverage() -> None:
    table = _squircle_table()
    field = compute_displacement_field(90, 60, 90, 60, 30, 16, max_abs_displacement(table), table)

    # d = 30.59 and 30.81, just outside r = 30: coverage 0.41 and 0.19
    assert tuple(field[0, 24]) == (138, 179, 0, 255)
    assert tuple(field[0, 23]) == (134, 152, 0, 255)
    assert field[0, 23, 1] < field[0, 24, 1] < field[0, 45, 1]


def test_degenerate_inputs_stay_well_defined() -> None:
    table = _squircle_table()

    empty_object = compute_displacement_field(40, 30, 0, 0, 10, 5, 1.0, table)
    assert (empty_object == NEUTRAL_FILL).all()

    unit_scaled = compute_displacement_field(90, 60, 90, 60, 30, 16, 1.0, table)
    for maximum in (0.0, -4.0, math.nan, math.inf):
        field = compute_displacement_field(90, 60, 90, 60, 30, 16, maximum, table)
        assert np.array_equal(field, unit_scaled)

    wide_bezel = compute_displacement_field(90, 60, 90, 60, 10, 40, 12.0, table)
    assert wide_bezel.shape == (60, 90, 4)

    no_table = compute_displacement_field(90, 60, 90, 60, 30, 16, 1.0, table[:0])
    assert (no_table == NEUTRAL_FILL).all()


def test_object_larger_than_canvas_is_cropped() -> None:
    table = _squircle_table()
    field = compute_displacement_field(50, 40, 90, 60, 30, 16, max_abs_displacement(table), table)

    assert field.shape == (40, 50, 4)


def test_specular_alpha_is_zero_inside_the_rim() -> None:
    radius = 40.0
    field = compute_specular_field(160, 100, radius, 20)
    inner_sq = (radius - SPECULAR_THICKNESS) ** 2

    assert field.shape == (100, 160, 4)
    for y1 in range(100):
        for x1 in range(160):
            if _corner_distance_sq(x1, y1, 160, 100, radius) < inner_sq:
                assert field[y1, x1, 3] == 0


def test_specular_brightness_follows_light_direction() -> None:
    field = compute_specular_field(200, 140, 70, 30)

    assert tuple(field[1, 100]) == (208, 208, 208, 170)
    assert tuple(field[70, 1]) == (120, 120, 120, 57)
    assert tuple(field[2, 100]) == (0, 0, 0, 0)


def test_specular_light_angle_and_bezel_width() -> None:
    side_lit = compute_specular_field(200, 140, 70, 30, light_angle=0.0)

    assert side_lit[1, 100, 3] == 0
    assert side_lit[70, 1, 0] == 240
    assert np.array_equal(
        compute_specular_field(200, 140, 70, 10),
        compute_specular_field(200, 140, 70, 40),
    )


def test_fields_are_read_only_snapshots() -> None:
    table = _squircle_table()
    field = compute_displacement_field(90, 60, 90, 60, 30, 16, 1.0, table)
    specular = compute_specular_field(90, 60, 30, 16)

    with pytest.raises(ValueError):
        field[0, 0, 0] = 0
    with pytest.raises(ValueError):
        specular[0, 0, 0] = 0


def test_specular_fade_ring_is_transparent() -> None:
    radius = 30.0
    field = compute_specular_field(90, 60, radius, 16)

    ring = 0
    for y1 in range(60):
        for x1 in range(90):
            distance_sq = _corner_distance_sq(x1, y1, 90, 60, radius)
            if radius**2 < distance_sq <= (radius + 1) ** 2:
                ring += 1
                assert tuple(field[y1, x1]) == (0, 0, 0, 0)
    assert ring > 0
    assert field[0, 24, 3] == 0
    assert field[1, 24, 3] > 0
