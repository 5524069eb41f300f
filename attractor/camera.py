import math
from dataclasses import dataclass
from numbers import Integral


def round_half_away(value):
    """Round to the nearest integer, ties away from zero."""
    rounded = math.floor(abs(value) + 0.5)
    return rounded if value >= 0 else -rounded


@dataclass(frozen=True)
class Camera:
    center: tuple  # carried along, the transform is always centered on the screen
    height: float  # visible vertical extent in the real plane
    screen_size: tuple  # (width, height) in pixels

    def __post_init__(self):
        screen_w, screen_h = self.screen_size
        if not (isinstance(screen_w, Integral) and isinstance(screen_h, Integral)) or screen_w <= 0 or screen_h <= 0:
            raise ValueError(f"Screen size must be two positive integers, got {self.screen_size}")
        if not math.isfinite(self.height) or self.height <= 0:
            raise ValueError(f"Camera height must be positive and finite, got {self.height}")

    @property
    def width(self):
        """Visible horizontal extent, keeping square pixels."""
        return self.height * self.screen_size[0] / self.screen_size[1]

    def to_screen(self, point):
        """
        Map a real-plane point to a (column, row) pixel.
        Rows grow downward, so the y axis is flipped. The result is not bounds checked.
        """
        # Mirrored by density._accumulate, keep both in step
        screen_w, screen_h = self.screen_size
        centered_x = int(round_half_away(point[0] * screen_w / self.width))
        centered_y = int(round_half_away(point[1] * screen_h / self.height))

        column = centered_x + screen_w // 2
        row = centered_y + screen_h // 2
        return column, screen_h - row

    def to_real(self, pixel):
        """Map a (column, row) pixel back to the real plane."""
        screen_w, screen_h = self.screen_size
        centered_x = pixel[0] - screen_w // 2
        centered_y = (screen_h - pixel[1]) - screen_h // 2

        return (
            centered_x * self.width / screen_w,
            centered_y * self.height / screen_h,
        )

    def contains(self, pixel):
        column, row = pixel
        return 0 <= column < self.screen_size[0] and 0 <= row < self.screen_size[1]
