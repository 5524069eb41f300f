import numpy as np
from matplotlib import colormaps

GRADIENT_SIZE = 256


def rgba_to_rgb(color):
    return tuple(int(c * 255) for c in color[:3])


def mix(a, b, t):
    """Blend two colors channel by channel, truncating towards zero."""
    if not 0.0 <= t <= 1.0:
        raise ValueError(f"Interpolation fraction must lie in [0, 1], got {t}")
    return tuple(int(a[i] * (1.0 - t) + b[i] * t) for i in range(3))


def _check_stop(stop):
    if len(stop) != 3 or not all(0 <= channel <= 255 for channel in stop):
        raise ValueError(f"Gradient stop must be three channels in 0..255, got {stop}")
    return tuple(int(channel) for channel in stop)


def build_gradient(stops):
    """
    Build a 256-entry color ramp through the given stops.

    The stops are spread evenly over the ramp and neighbouring stops are blended linearly.
    No stops give an all black ramp, a single stop a constant one.
    """
    stops = [_check_stop(stop) for stop in stops]
    table = np.zeros((GRADIENT_SIZE, 3), dtype=np.uint8)

    if len(stops) == 1:
        table[:] = stops[0]
    elif len(stops) > 1:
        n_segments = len(stops) - 1
        last = GRADIENT_SIZE - 1
        segment = 0
        for i in range(GRADIENT_SIZE):
            # pos = i / last, compared in integers so t stays within [0, 1].
            # Only move on once pos is strictly past the segment's upper end
            while segment < n_segments - 1 and i * n_segments > (segment + 1) * last:
                segment += 1
            t = (i * n_segments - segment * last) / last
            table[i] = mix(stops[segment], stops[segment + 1], t)

    table.flags.writeable = False
    return table


def colormap_stops(name, count=5):
    """Sample a matplotlib colormap at count evenly spaced positions."""
    if name not in colormaps:
        raise ValueError(f"Unknown colormap: {name}")
    if count < 2:
        raise ValueError(f"Need at least two stops to sample a colormap, got {count}")

    colormap = colormaps[name]
    return [rgba_to_rgb(colormap(x)) for x in np.linspace(0.0, 1.0, count)]
