"""Convert raster images into colorized glyph grids.

Each pixel becomes one glyph picked from a caller-supplied ramp by its shaded
luminance, plus a saturation-boosted RGB color. A flood fill from the image
border removes the flat backdrop so sprites float over the scene.
"""

from typing import List, Tuple

from PIL import Image, ImageSequence, UnidentifiedImageError

from pokeball.models import AnimationSequence, GlyphImage

BG_THRESHOLD = 18
LIGHT_X = -0.6
LIGHT_Y = -0.4
EDGE_WEIGHT = 0.7
EDGE_DARKEN = 0.45
SATURATION = 1.15


class AssetError(RuntimeError):
    """Raised when an image asset cannot be opened or decoded."""


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def luminance(r: int, g: int, b: int) -> float:
    return (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255.0


def glyph_index(shaded_lum: float, ramp_len: int) -> int:
    """Map shaded luminance to a ramp index; brighter picks a lower index."""
    idx = int(round((1.0 - _clamp(shaded_lum, 0.0, 1.0)) * (ramp_len - 1)))
    return max(0, min(ramp_len - 1, idx))


def apply_color_boost(r: int, g: int, b: int, shade: float) -> Tuple[int, int, int]:
    rf = r / 255.0
    gf = g / 255.0
    bf = b / 255.0
    lum = 0.2126 * rf + 0.7152 * gf + 0.0722 * bf
    out = []
    for channel in (rf, gf, bf):
        value = (lum + (channel - lum) * SATURATION) * shade
        out.append(int(_clamp(value * 255.0, 0.0, 255.0)))
    return out[0], out[1], out[2]


def background_mask(pixels: List[Tuple[int, int, int]], width: int, height: int) -> List[bool]:
    """Flood-fill the backdrop from the border.

    The reference color is the mean of the four corners; only cells within the
    threshold that connect to the border through other such cells are masked.
    """
    corners = (
        pixels[0],
        pixels[width - 1],
        pixels[(height - 1) * width],
        pixels[(height - 1) * width + width - 1],
    )
    bg_r = sum(c[0] for c in corners) // 4
    bg_g = sum(c[1] for c in corners) // 4
    bg_b = sum(c[2] for c in corners) // 4

    mask = [False] * (width * height)
    stack = []
    for x in range(width):
        stack.append((x, 0))
        stack.append((x, height - 1))
    for y in range(height):
        stack.append((0, y))
        stack.append((width - 1, y))

    while stack:
        x, y = stack.pop()
        idx = x + y * width
        if mask[idx]:
            continue
        r, g, b = pixels[idx]
        if (
            abs(r - bg_r) <= BG_THRESHOLD
            and abs(g - bg_g) <= BG_THRESHOLD
            and abs(b - bg_b) <= BG_THRESHOLD
        ):
            mask[idx] = True
            if x > 0:
                stack.append((x - 1, y))
            if x + 1 < width:
                stack.append((x + 1, y))
            if y > 0:
                stack.append((x, y - 1))
            if y + 1 < height:
                stack.append((x, y + 1))
    return mask


def glyph_image_from_rgb(image: Image.Image, charset: str) -> GlyphImage:
    if len(charset) < 2:
        raise ValueError("charset needs at least two glyphs")
    rgb = image.convert("RGB")
    width, height = rgb.size
    px = rgb.load()
    pixels = [px[x, y] for y in range(height) for x in range(width)]
    lums = [luminance(*p) for p in pixels]
    mask = background_mask(pixels, width, height)

    chars = []
    colors = []
    for y in range(height):
        for x in range(width):
            idx = x + y * width
            if mask[idx]:
                chars.append(" ")
                colors.append((0, 0, 0))
                continue
            lum = lums[idx]
            left = lums[idx - 1] if x > 0 else lum
            right = lums[idx + 1] if x + 1 < width else lum
            up = lums[idx - width] if y > 0 else lum
            down = lums[idx + width] if y + 1 < height else lum
            edge = (abs(right - left) + abs(down - up)) * EDGE_WEIGHT

            nx = x / (width - 1) if width > 1 else 0.0
            ny = y / (height - 1) if height > 1 else 0.0
            light = _clamp(nx * LIGHT_X + ny * LIGHT_Y + 1.0, 0.4, 1.2)

            shaded_lum = _clamp(lum * light - edge * EDGE_DARKEN, 0.0, 1.0)
            shade = _clamp(0.55 + shaded_lum * 0.7, 0.35, 1.15)
            r, g, b = pixels[idx]
            colors.append(apply_color_boost(r, g, b, shade))
            chars.append(charset[glyph_index(shaded_lum, len(charset))])

    return GlyphImage(width=width, height=height, chars=tuple(chars), colors=tuple(colors))


def load_glyph_image(path: str, width: int, height: int, charset: str) -> GlyphImage:
    try:
        with Image.open(path) as img:
            resized = img.convert("RGB").resize((width, height), Image.Resampling.NEAREST)
    except (OSError, UnidentifiedImageError) as exc:
        raise AssetError(f"failed to load image: {path}") from exc
    return glyph_image_from_rgb(resized, charset)


def load_glyph_animation(path: str, width: int, height: int, charset: str) -> AnimationSequence:
    frames = []
    try:
        with Image.open(path) as img:
            for frame in ImageSequence.Iterator(img):
                rgb = frame.convert("RGBA").convert("RGB")
                frames.append(rgb.resize((width, height), Image.Resampling.NEAREST))
    except (OSError, UnidentifiedImageError) as exc:
        raise AssetError(f"failed to load animation: {path}") from exc
    if not frames:
        raise AssetError(f"animation has no frames: {path}")
    return tuple(glyph_image_from_rgb(frame, charset) for frame in frames)
