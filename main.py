import sys
import logging
from dataclasses import replace
from time import time

from attractor.camera import Camera
from attractor.cli import parse_args
from attractor.density import accumulate_density, empty_density, fit_analytic, fit_extent, fit_height
from attractor.gradient import build_gradient, colormap_stops
from attractor.image import assemble_image, write_ppm
from attractor.orbit import Attractor
from attractor.settings import default_settings, load_settings, save_settings, validate_settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

_log_handlers = []


def setup_logging(verbose=False, log_file=None):
    """Log to stderr, stdout carries the image. Handlers from an earlier call are replaced."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger()
    logger.setLevel(level)

    while _log_handlers:
        handler = _log_handlers.pop()
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _log_handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        _log_handlers.append(file_handler)

    for handler in _log_handlers:
        logger.addHandler(handler)


def gradient_for(settings):
    if settings.colormap:
        logging.info(f"Using colormap: {settings.colormap}")
        return build_gradient(colormap_stops(settings.colormap, settings.colormap_stops))
    return build_gradient(settings.gradient)


def render(settings):
    """Run the attractor and return the colored image as a (height, width, 3) array."""
    settings = validate_settings(settings)
    attractor = Attractor(*settings.coefficients)
    camera = Camera(center=settings.center, height=settings.height, screen_size=tuple(settings.resolution))
    table = gradient_for(settings)

    logging.info(f"Rendering {settings.iterations} points of {attractor} at {camera.screen_size}...")
    start_time = time()

    if settings.fit == "analytic":
        camera = fit_analytic(camera, attractor, settings.margin)
        density = empty_density(camera)
        dropped = 0
        for points in attractor.batches(settings.seed, settings.iterations, settings.batch_size):
            _, batch_dropped = accumulate_density(points, camera, settings.out_of_bounds, density)
            dropped += batch_dropped
        orbit_time = density_time = time()
    else:
        points = attractor.take(settings.seed, settings.iterations)
        orbit_time = time()
        fit = fit_height if settings.fit == "orbit" else fit_extent
        camera = fit(camera, points, settings.margin)
        density, dropped = accumulate_density(points, camera, settings.out_of_bounds)
        density_time = time()

    if dropped:
        logging.warning(f"{dropped} of {settings.iterations} points fell outside the image and were discarded.")
    logging.debug(f"Densest pixel holds {density.max()} points.")

    image = assemble_image(density, table)
    end_time = time()
    logging.info(
        f"Rendering completed in {end_time - start_time:.2f} seconds. "
        f"{orbit_time - start_time:.2f} seconds for the orbit, {density_time - orbit_time:.2f} seconds for the density."
    )
    return image


def apply_overrides(settings, args):
    overrides = {}
    if args.iterations is not None:
        overrides["iterations"] = args.iterations
    if args.size is not None:
        overrides["resolution"] = tuple(args.size)
    if args.colormap is not None:
        overrides["colormap"] = args.colormap
    if args.fit is not None:
        overrides["fit"] = args.fit
    if args.out_of_bounds is not None:
        overrides["out_of_bounds"] = args.out_of_bounds
    return validate_settings(replace(settings, **overrides))


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    settings = load_settings(args.load) if args.load else default_settings
    if args.load:
        logging.info(f"Settings loaded from {args.load}")
    settings = apply_overrides(settings, args)

    if args.save:
        save_settings(settings, args.save)
        logging.info(f"Settings saved to {args.save}")

    image = render(settings)

    if args.output:
        with open(args.output, "w") as file:
            write_ppm(image, settings.resolution, file)
        logging.info(f"Image written to {args.output}")
    else:
        write_ppm(image, settings.resolution, sys.stdout)
        sys.stdout.flush()


if __name__ == "__main__":
    main()
