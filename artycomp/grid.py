"""Map grid references, metre coordinates and bearings in mils."""

import math

MILS_PER_CIRCLE = 6400
MAX_GRID_DIGITS = 10


class GridError(ValueError):
    """Raised for a grid reference that cannot be read."""


def _round_half_away(value):
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def digits_to_int(text):
    """Read a string of decimal digits as an integer; the empty string is 0."""
    if not text:
        return 0
    if not (text.isascii() and text.isdigit()):
        raise GridError(f"not a string of digits: {text!r}")
    return int(text)


def grid_to_coordinates(grid):
    """Turn a grid reference into (x, y) in metres.

    An odd number of digits gets a leading zero. The first half of the
    digits is the easting, the second half the northing, each scaled so
    that its unit is the metre.
    """
    if len(grid) % 2:
        grid = "0" + grid
    if len(grid) > MAX_GRID_DIGITS:
        raise GridError("grid out of bounds, must be 10-digit or lower")
    middle = len(grid) // 2
    scale = 10 ** (5 - middle)
    return digits_to_int(grid[:middle]) * scale, digits_to_int(grid[middle:]) * scale


def dis_mills_to_coordinates(distance, direction, grid):
    """Return the coordinates reached by moving distance metres along direction mils from grid."""
    radians = direction * math.pi / (MILS_PER_CIRCLE / 2)
    x, y = grid_to_coordinates(grid)
    x += _round_half_away(math.cos(radians) * distance)
    y += _round_half_away(math.sin(radians) * distance)
    return x, y


def mills_from_coordinate(dx, dy):
    """Return the direction in mils of the offset (dx, dy)."""
    if dx == 0:
        if dy > 0:
            mills = MILS_PER_CIRCLE // 4
        elif dy < 0:
            mills = -(MILS_PER_CIRCLE // 4)
        else:
            mills = 0
    else:
        mills = int(math.atan(dy / dx) * MILS_PER_CIRCLE / (2 * math.pi))

    half = MILS_PER_CIRCLE // 2
    if dx < 0:
        mills += MILS_PER_CIRCLE if mills < 0 else half
    elif dx > 0:
        if mills < 0:
            mills += half
    elif mills < 0:
        mills += MILS_PER_CIRCLE
    return mills


def grids_to_dis_mills(grid_one, grid_two):
    """Return (distance in metres, direction in mils) between two grid references."""
    x_1, y_1 = grid_to_coordinates(grid_one)
    x_2, y_2 = grid_to_coordinates(grid_two)
    distance = int(math.hypot(x_1 - x_2, y_1 - y_2))
    return distance, mills_from_coordinate(x_1 - x_2, y_1 - y_2)