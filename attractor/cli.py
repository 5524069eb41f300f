import argparse

from attractor.density import FIT_MODES, OUT_OF_BOUNDS_POLICIES


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Renders the density of a de Jong attractor orbit as a plain text PPM image.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--load", type=str, metavar="PATH", help="Path to save file. Built-in settings are used when omitted."
    )
    parser.add_argument("--save", type=str, metavar="PATH", help="Write the effective settings to this file.")
    parser.add_argument("--output", type=str, metavar="PATH", help="Write the image here instead of stdout.")
    parser.add_argument("--iterations", type=int, metavar="N", help="Number of orbit points to accumulate.")
    parser.add_argument("--size", type=int, nargs=2, metavar=("WIDTH", "HEIGHT"), help="Image size in pixels.")
    parser.add_argument("--colormap", type=str, metavar="NAME", help="Take gradient stops from a matplotlib colormap.")
    parser.add_argument("--fit", choices=FIT_MODES, help="How the camera is fitted to the orbit.")
    parser.add_argument(
        "--out-of-bounds", choices=OUT_OF_BOUNDS_POLICIES, help="What happens to samples that miss the screen."
    )
    parser.add_argument("--log-file", type=str, metavar="PATH", help="Also write the log to this file.")
    parser.add_argument("--verbose", action="store_true", help="Log debug output.")
    return parser.parse_args(argv)
