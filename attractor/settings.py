from dataclasses import dataclass, field

import yaml

from attractor.density import FIT_MODES, OUT_OF_BOUNDS_POLICIES


@dataclass
class AttractorSettings:
    coefficients: tuple  # (a, b, c, d)
    seed: tuple
    resolution: tuple  # (width, height) in pixels
    height: float  # initial vertical extent, replaced when the camera is fitted
    iterations: int
    fit: str
    margin: float
    out_of_bounds: str
    gradient: list = field(default_factory=list)
    colormap: str | None = None
    colormap_stops: int = 5
    center: tuple = (0.0, 0.0)
    batch_size: int = 1_000_000


default_settings = AttractorSettings(
    coefficients=(-1.5, 2.1, 1.1, -0.8),
    seed=(1.0, 1.0),
    resolution=(1080, 1080),
    height=5.0,
    iterations=20_000_000,
    fit="orbit",
    margin=2.0,
    out_of_bounds="discard",
    gradient=[
        (0, 0, 0),
        (58, 145, 112),
        (229, 214, 121),
        (232, 171, 46),
        (236, 49, 9),
    ],
)


def validate_settings(settings):
    width, height = settings.resolution
    if width <= 0 or height <= 0:
        raise ValueError(f"Resolution must be positive, got {settings.resolution}")
    if settings.iterations <= 0:
        raise ValueError(f"Iterations must be positive, got {settings.iterations}")
    if settings.batch_size <= 0:
        raise ValueError(f"Batch size must be positive, got {settings.batch_size}")
    if len(settings.coefficients) != 4:
        raise ValueError(f"Expected four coefficients (a, b, c, d), got {settings.coefficients}")
    if settings.fit not in FIT_MODES:
        raise ValueError(f"Unknown fit mode {settings.fit!r}, expected one of {FIT_MODES}")
    if settings.out_of_bounds not in OUT_OF_BOUNDS_POLICIES:
        raise ValueError(
            f"Unknown out-of-bounds policy {settings.out_of_bounds!r}, expected one of {OUT_OF_BOUNDS_POLICIES}"
        )
    return settings


def settings_to_dict(settings):
    """Convert AttractorSettings to a dictionary for YAML serialization."""
    a, b, c, d = settings.coefficients
    return {
        "attractor": {
            "coefficients": {"a": a, "b": b, "c": c, "d": d},
            "seed": {
                "x": settings.seed[0],
                "y": settings.seed[1],
            },
        },
        "camera": {
            "resolution": {
                "width": settings.resolution[0],
                "height": settings.resolution[1],
            },
            "center": {
                "x": settings.center[0],
                "y": settings.center[1],
            },
            "height": settings.height,
        },
        "computation": {
            "iterations": settings.iterations,
            "batch_size": settings.batch_size,
            "fit": settings.fit,
            "margin": settings.margin,
            "out_of_bounds": settings.out_of_bounds,
        },
        "presentation": {
            "gradient": [list(stop) for stop in settings.gradient],
            "colormap": settings.colormap,
            "colormap_stops": settings.colormap_stops,
        },
    }


def _merge(defaults, overrides):
    """Recursively lay overrides over defaults. Sections left out or set to null keep the defaults."""
    merged = dict(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(merged.get(key), dict) and (value is None or isinstance(value, dict)):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def dict_to_settings(settings_dict):
    """Convert a dictionary to an AttractorSettings object. Missing entries keep their defaults."""
    merged = _merge(settings_to_dict(default_settings), settings_dict)
    attractor = merged["attractor"]
    camera = merged["camera"]
    computation = merged["computation"]
    presentation = merged["presentation"]

    coefficients = attractor["coefficients"]
    return validate_settings(AttractorSettings(
        coefficients=(coefficients["a"], coefficients["b"], coefficients["c"], coefficients["d"]),
        seed=(attractor["seed"]["x"], attractor["seed"]["y"]),
        resolution=(camera["resolution"]["width"], camera["resolution"]["height"]),
        center=(camera["center"]["x"], camera["center"]["y"]),
        height=camera["height"],
        iterations=computation["iterations"],
        batch_size=computation["batch_size"],
        fit=computation["fit"],
        margin=computation["margin"],
        out_of_bounds=computation["out_of_bounds"],
        gradient=[tuple(stop) for stop in presentation["gradient"]],
        colormap=presentation["colormap"],
        colormap_stops=presentation["colormap_stops"],
    ))


def load_settings(path):
    with open(path, "r") as file:
        settings_dict = yaml.safe_load(file) or {}
    return dict_to_settings(settings_dict)


def save_settings(settings, path):
    with open(path, "w") as file:
        yaml.dump(settings_to_dict(settings), file, default_flow_style=False, sort_keys=False)
