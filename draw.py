def _walk(start, end):
    # Bresenham from start to end inclusive
    x1, y1 = start
    x2, y2 = end

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    err = dx - dy

    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1

    while True:
        yield x1, y1
        if x1 == x2 and y1 == y2:
            break

        if err * 2 > -dy:
            err -= dy
            x1 += sx
        if err * 2 < dx:
            err += dx
            y1 += sy


def line(image, start, end, color):
    """
    Draw a one pixel wide line from start to end (inclusive) with Bresenham's algorithm.

    Points are not clipped: the first pixel outside the image raises
    OutOfBoundsError and the rest of the line is not drawn. The path is
    traced from the smaller endpoint so that swapping them touches the same
    pixels, but pixels are always written starting at start.
    """
    start, end = tuple(start), tuple(end)
    if start <= end:
        points = _walk(start, end)
    else:
        points = reversed(list(_walk(end, start)))

    for x, y in points:
        image.set_pixel(x, y, color)


def diagonals(image, color):
    # Both corner-to-corner lines
    width, height = image.dimension()
    line(image, (0, 0), (width - 1, height - 1), color)
    line(image, (width - 1, 0), (0, height - 1), color)
