"""Renderers for finished symbols.

None of them adds a quiet zone unless ``border`` (in modules) is given.
"""
import numpy
from PIL import Image


def _check_sizes(module_pixel_size, border):
    if module_pixel_size < 1:
        raise ValueError(f"module_pixel_size must be at least 1, not {module_pixel_size}")
    if border < 0:
        raise ValueError(f"border must not be negative, not {border}")


def _bordered(symbol, border):
    return numpy.pad(symbol.matrix, border, constant_values=False)


def to_text(symbol, dark="█", light=" ", border=0):
    _check_sizes(1, border)
    return "\n".join("".join(dark if module else light for module in row) for row in _bordered(symbol, border))


def _pixels(symbol, module_pixel_size, border):
    # one module_pixel_size x module_pixel_size block per module, 0 = dark, 255 = light
    _check_sizes(module_pixel_size, border)
    modules = _bordered(symbol, border)
    block = numpy.ones((module_pixel_size, module_pixel_size), dtype=numpy.uint8)
    return numpy.where(numpy.kron(modules.astype(numpy.uint8), block) == 1, 0, 255).astype(numpy.uint8)


def to_image(symbol, module_pixel_size=10, border=0):
    return Image.fromarray(_pixels(symbol, module_pixel_size, border)).convert("1", dither=Image.Dither.NONE)


def save_png(symbol, filename, module_pixel_size=10, border=0):
    to_image(symbol, module_pixel_size, border).save(filename, format="PNG")


def to_raw_pixels(symbol, module_pixel_size=10, border=0):
    """8-bit grayscale pixels, row-major, without any header."""
    return _pixels(symbol, module_pixel_size, border).tobytes()


def save_raw_pixels(symbol, filename, module_pixel_size=10, border=0):
    with open(filename, "wb") as f:
        f.write(to_raw_pixels(symbol, module_pixel_size, border))


def to_svg(symbol, module_pixel_size=10, border=0):
    _check_sizes(module_pixel_size, border)
    modules = _bordered(symbol, border)
    side = modules.shape[0] * module_pixel_size
    rects = []
    for y, row in enumerate(modules):
        x = 0
        # one rect per horizontal run of dark modules
        while x < len(row):
            if not row[x]:
                x += 1
                continue
            start = x
            while x < len(row) and row[x]:
                x += 1
            rects.append(
                f'<rect x="{start * module_pixel_size}" y="{y * module_pixel_size}" '
                f'width="{(x - start) * module_pixel_size}" height="{module_pixel_size}"/>'
            )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{side}" height="{side}" '
        f'viewBox="0 0 {side} {side}" shape-rendering="crispEdges">\n'
        f'<rect width="{side}" height="{side}" fill="#fff"/>\n'
        f'<g fill="#000">\n' + "\n".join(rects) + '\n</g>\n</svg>\n'
    )


def save_svg(symbol, filename, module_pixel_size=10, border=0):
    with open(filename, "w", encoding="utf-8") as f:
        f.write(to_svg(symbol, module_pixel_size, border))
