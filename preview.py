import io

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def display(out, image):
    # One text line per stored row, starting from row 0 (the bottom of the picture)
    width, height = image.dimension()
    for y in range(height):
        for x in range(width):
            color = tuple(image.pixel(x, y))
            if color == BLACK:
                out.write("*")
            elif color == WHITE:
                out.write(" ")
            else:
                out.write("?")
            out.write(" ")
        out.write("\n")


def render(image) -> str:
    out = io.StringIO()
    display(out, image)
    return out.getvalue()
