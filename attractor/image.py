import logging

import numpy as np

from attractor.gradient import GRADIENT_SIZE

PPM_MAX_VALUE = 255


def assemble_image(density, table):
    """Color every density count through the gradient table, saturating counts above the last entry."""
    table = np.asarray(table)
    if table.shape != (GRADIENT_SIZE, 3):
        raise ValueError(f"Gradient table must have shape ({GRADIENT_SIZE}, 3), got {table.shape}")

    indices = np.clip(density, 0, GRADIENT_SIZE - 1)
    return table[indices].astype(np.uint8)


def write_ppm(colors, size, stream):
    """
    Write colors as a plain text PPM (P3) image.
    colors holds width * height RGB triples in row-major order, top row first.
    """
    width, height = size
    pixels = np.asarray(colors, dtype=np.uint8).reshape(-1, 3)
    if len(pixels) != width * height:
        raise ValueError(f"Got {len(pixels)} pixels for a {width}x{height} image")

    stream.write("P3\n")
    stream.write(f"{width} {height}\n")
    stream.write(f"{PPM_MAX_VALUE}\n")
    np.savetxt(stream, pixels, fmt="%d", delimiter=" ")
    logging.info(f"Wrote {width}x{height} PPM image.")
