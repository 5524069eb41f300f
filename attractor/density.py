import logging
import math
from dataclasses import replace

import numpy as np
from numba import njit

from attractor.camera import round_half_away

OUT_OF_BOUNDS_POLICIES = ("discard", "clamp")
FIT_MODES = ("orbit", "extent", "analytic")

_round_half_away = njit(round_half_away)


@njit
def _accumulate(points, density, real_width, real_height, clamp):
    """Add one count per point to density, using the same arithmetic as Camera.to_screen."""
    screen_h, screen_w = density.shape
    dropped = 0

    for i in range(points.shape[0]):
        column = int(_round_half_away(points[i, 0] * screen_w / real_width)) + screen_w // 2
        row = screen_h - (int(_round_half_away(points[i, 1] * screen_h / real_height)) + screen_h // 2)

        if column < 0 or column >= screen_w or row < 0 or row >= screen_h:
            if not clamp:
                dropped += 1
                continue
            column = min(max(column, 0), screen_w - 1)
            row = min(max(row, 0), screen_h - 1)

        density[row, column] += 1

    return dropped


def empty_density(camera):
    screen_w, screen_h = camera.screen_size
    return np.zeros((screen_h, screen_w), dtype=np.int64)


def accumulate_density(points, camera, policy="discard", density=None):
    """
    Count how many points land on each pixel of the camera's screen.

    points is an (n, 2) array of real-plane coordinates. Samples falling outside the
    screen are dropped or clamped onto the border depending on policy. When density is
    given, counts are added to it in place.

    Returns the density grid (rows top to bottom) and the number of dropped samples.
    """
    if policy not in OUT_OF_BOUNDS_POLICIES:
        raise ValueError(f"Unknown out-of-bounds policy {policy!r}, expected one of {OUT_OF_BOUNDS_POLICIES}")

    if density is None:
        density = empty_density(camera)
    elif density.shape != (camera.screen_size[1], camera.screen_size[0]):
        raise ValueError(f"Density grid of shape {density.shape} does not match screen size {camera.screen_size}")

    points = np.ascontiguousarray(points, dtype=np.float64).reshape(-1, 2)
    dropped = _accumulate(points, density, float(camera.width), float(camera.height), policy == "clamp")
    return density, dropped


def _with_height(camera, height):
    if not math.isfinite(height) or height <= 0:
        raise ValueError(f"Cannot frame the orbit, computed camera height is {height}")
    logging.info(f"Camera height set to {height:.4f} (width {height * camera.screen_size[0] / camera.screen_size[1]:.4f})")
    return replace(camera, height=height)


def fit_height(camera, points, margin=2.0):
    """Fit the vertical extent to the highest point of the orbit. Horizontal extent follows the aspect ratio."""
    if len(points) == 0:
        raise ValueError("Cannot frame an empty orbit")
    return _with_height(camera, 2.0 * float(np.max(points[:, 1])) + margin)


def fit_extent(camera, points, margin=2.0):
    """Fit the camera so the widest excursion on either axis stays on screen."""
    if len(points) == 0:
        raise ValueError("Cannot frame an empty orbit")
    x_bound = float(np.max(np.abs(points[:, 0])))
    y_bound = float(np.max(np.abs(points[:, 1])))
    return _fit_bounds(camera, x_bound, y_bound, margin)


def fit_analytic(camera, attractor, margin=2.0):
    """Fit the camera to the attractor's coefficient bounds, no orbit needed."""
    x_bound, y_bound = attractor.bounds()
    return _fit_bounds(camera, x_bound, y_bound, margin)


def _fit_bounds(camera, x_bound, y_bound, margin):
    screen_w, screen_h = camera.screen_size
    height = max(2.0 * y_bound, 2.0 * x_bound * screen_h / screen_w) + margin
    return _with_height(camera, height)
