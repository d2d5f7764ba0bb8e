"""
Color palette classification and rendering.

Quantized swatches are sorted into six named buckets by HSL targets
(vibrant/muted x normal/light/dark), in the manner of the Vibrant palette
generator. Missing variants are derived from the ones that were found.
"""

import colorsys
import io
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from image_toolkit.core.exceptions import NoColorsExtractedError
from utils.draw_utils import load_font
from utils.image_utils import open_image

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

# Containers the quantizer reads directly; anything else is transcoded to PNG
QUANTIZABLE_FORMATS = ("PNG", "JPEG", "GIF", "BMP")

TARGET_DARK_LUMA = 0.26
MAX_DARK_LUMA = 0.45
MIN_LIGHT_LUMA = 0.55
TARGET_LIGHT_LUMA = 0.74
MIN_NORMAL_LUMA = 0.3
TARGET_NORMAL_LUMA = 0.5
MAX_NORMAL_LUMA = 0.7
TARGET_MUTED_SATURATION = 0.3
MAX_MUTED_SATURATION = 0.4
TARGET_VIBRANT_SATURATION = 1.0
MIN_VIBRANT_SATURATION = 0.35

WEIGHT_SATURATION = 3.0
WEIGHT_LUMA = 6.5
WEIGHT_POPULATION = 0.5

# key, display name, (target luma, min luma, max luma, target sat, min sat, max sat)
# in selection order
BUCKET_TARGETS = (
    ("vibrant", "Vibrant", (TARGET_NORMAL_LUMA, MIN_NORMAL_LUMA, MAX_NORMAL_LUMA,
                            TARGET_VIBRANT_SATURATION, MIN_VIBRANT_SATURATION, 1.0)),
    ("light_vibrant", "Light Vibrant", (TARGET_LIGHT_LUMA, MIN_LIGHT_LUMA, 1.0,
                                        TARGET_VIBRANT_SATURATION, MIN_VIBRANT_SATURATION, 1.0)),
    ("dark_vibrant", "Dark Vibrant", (TARGET_DARK_LUMA, 0.0, MAX_DARK_LUMA,
                                      TARGET_VIBRANT_SATURATION, MIN_VIBRANT_SATURATION, 1.0)),
    ("muted", "Muted", (TARGET_NORMAL_LUMA, MIN_NORMAL_LUMA, MAX_NORMAL_LUMA,
                        TARGET_MUTED_SATURATION, 0.0, MAX_MUTED_SATURATION)),
    ("light_muted", "Light Muted", (TARGET_LIGHT_LUMA, MIN_LIGHT_LUMA, 1.0,
                                    TARGET_MUTED_SATURATION, 0.0, MAX_MUTED_SATURATION)),
    ("dark_muted", "Dark Muted", (TARGET_DARK_LUMA, 0.0, MAX_DARK_LUMA,
                                  TARGET_MUTED_SATURATION, 0.0, MAX_MUTED_SATURATION)),
)

BUCKET_NAMES = {key: name for key, name, _ in BUCKET_TARGETS}

# Dominant pick and listing order
DISPLAY_ORDER = ("vibrant", "muted", "dark_vibrant", "light_vibrant", "dark_muted", "light_muted")


def normalize_rgb(rgb: Sequence[float]) -> RGB:
    return tuple(int(round(max(0, min(255, c)))) for c in rgb[:3])  # type: ignore[return-value]


def rgb_to_hex(rgb: Sequence[float]) -> str:
    r, g, b = normalize_rgb(rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def rgb_to_string(rgb: Sequence[float]) -> str:
    r, g, b = normalize_rgb(rgb)
    return f"rgb({r}, {g}, {b})"


@dataclass(frozen=True, slots=True)
class Swatch:
    rgb: RGB
    population: int

    @property
    def hsl(self) -> Tuple[float, float, float]:
        r, g, b = (c / 255 for c in self.rgb)
        h, l, s = colorsys.rgb_to_hls(r, g, b)
        return h, s, l


def swatch_from_hsl(h: float, s: float, l: float) -> Swatch:
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return Swatch(normalize_rgb((r * 255, g * 255, b * 255)), 0)


@dataclass(frozen=True, slots=True)
class PaletteEntry:
    name: str
    rgb: RGB

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.rgb)

    @property
    def rgb_string(self) -> str:
        return rgb_to_string(self.rgb)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "rgb": self.rgb_string,
            "hex": self.hex,
            "rgb_array": list(self.rgb),
        }


@dataclass(frozen=True, slots=True)
class PaletteResult:
    dominant: PaletteEntry
    buckets: Dict[str, PaletteEntry] = field(default_factory=dict)
    all_colors: List[PaletteEntry] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "dominant": self.dominant.to_dict(),
            "palette": {key: entry.to_dict() for key, entry in self.buckets.items()},
            "all_colors": [entry.to_dict() for entry in self.all_colors],
        }


def ensure_quantizable(data: bytes) -> bytes:
    """Transcode containers the quantizer cannot read (WEBP, AVIF, ...) to PNG."""
    with open_image(data) as img:
        if img.format in QUANTIZABLE_FORMATS:
            return data
        logger.debug("Transcoding %s to PNG for quantization", img.format)
        img.load()
        mode = "RGBA" if "A" in img.getbands() or "transparency" in img.info else "RGB"
        buffer = io.BytesIO()
        img.convert(mode).save(buffer, format="PNG")
        return buffer.getvalue()


def _invert_diff(value: float, target: float) -> float:
    return 1 - abs(value - target)


def _score(sat: float, target_sat: float, luma: float, target_luma: float,
           population: int, max_population: int) -> float:
    values = (
        (_invert_diff(sat, target_sat), WEIGHT_SATURATION),
        (_invert_diff(luma, target_luma), WEIGHT_LUMA),
        (population / max_population if max_population else 0, WEIGHT_POPULATION),
    )
    total_weight = sum(w for _, w in values)
    return sum(v * w for v, w in values) / total_weight


def classify_swatches(swatches: Sequence[Swatch]) -> Dict[str, Optional[Swatch]]:
    """Pick one swatch per bucket; a swatch is used at most once."""
    max_population = max((s.population for s in swatches), default=0)
    selected: Dict[str, Optional[Swatch]] = {}
    used: List[Swatch] = []

    for key, _, targets in BUCKET_TARGETS:
        target_luma, min_luma, max_luma, target_sat, min_sat, max_sat = targets
        best, best_score = None, None
        for swatch in swatches:
            _, sat, luma = swatch.hsl
            if not (min_sat <= sat <= max_sat and min_luma <= luma <= max_luma):
                continue
            if any(swatch is u for u in used):
                continue
            score = _score(sat, target_sat, luma, target_luma,
                           swatch.population, max_population)
            if best_score is None or score > best_score:
                best, best_score = swatch, score
        selected[key] = best
        if best is not None:
            used.append(best)

    _fill_missing(selected)
    return selected


def _derive(source: Swatch, *, luma: Optional[float] = None,
            sat: Optional[float] = None) -> Swatch:
    h, s, l = source.hsl
    return swatch_from_hsl(h, s if sat is None else sat, l if luma is None else luma)


def _fill_missing(p: Dict[str, Optional[Swatch]]) -> None:
    if p["vibrant"] is None and p["dark_vibrant"] is None and p["light_vibrant"] is None:
        if p["dark_muted"] is not None:
            p["dark_vibrant"] = _derive(p["dark_muted"], luma=TARGET_DARK_LUMA)
        if p["light_muted"] is not None:
            p["light_vibrant"] = _derive(p["light_muted"], luma=TARGET_LIGHT_LUMA)

    if p["vibrant"] is None:
        if p["dark_vibrant"] is not None:
            p["vibrant"] = _derive(p["dark_vibrant"], luma=TARGET_NORMAL_LUMA)
        elif p["light_vibrant"] is not None:
            p["vibrant"] = _derive(p["light_vibrant"], luma=TARGET_NORMAL_LUMA)

    if p["vibrant"] is not None:
        if p["dark_vibrant"] is None:
            p["dark_vibrant"] = _derive(p["vibrant"], luma=TARGET_DARK_LUMA)
        if p["light_vibrant"] is None:
            p["light_vibrant"] = _derive(p["vibrant"], luma=TARGET_LIGHT_LUMA)
        if p["muted"] is None:
            p["muted"] = _derive(p["vibrant"], sat=TARGET_MUTED_SATURATION)

    if p["dark_muted"] is None and p["dark_vibrant"] is not None:
        p["dark_muted"] = _derive(p["dark_vibrant"], sat=TARGET_MUTED_SATURATION)
    if p["light_muted"] is None and p["light_vibrant"] is not None:
        p["light_muted"] = _derive(p["light_vibrant"], sat=TARGET_MUTED_SATURATION)


def build_palette(swatches: Sequence[Swatch]) -> PaletteResult:
    """Classify quantizer swatches into a PaletteResult.

    Raises:
        NoColorsExtractedError: when no bucket could be filled
    """
    selected = classify_swatches(swatches)
    buckets: Dict[str, PaletteEntry] = {}
    for key in DISPLAY_ORDER:
        swatch = selected.get(key)
        if swatch is not None:
            buckets[key] = PaletteEntry(BUCKET_NAMES[key], normalize_rgb(swatch.rgb))
    if not buckets:
        raise NoColorsExtractedError()

    all_colors = list(buckets.values())
    dominant = PaletteEntry("Dominant", all_colors[0].rgb)
    return PaletteResult(dominant=dominant, buckets=buckets, all_colors=all_colors)


# Palette image layout
SWATCH_WIDTH = 200
SWATCH_HEIGHT = 80
ROW_HEIGHT = 100
PADDING = 20
ITEM_SPACING = 20
NUMBER_WIDTH = 40
HEX_WIDTH = 150
HEADER_HEIGHT = 50
TEXT_COLOR = "#333333"
SWATCH_OUTLINE = "#dddddd"


def palette_image_size(color_count: int) -> Tuple[int, int]:
    """
    Examples:
        >>> palette_image_size(7)
        (490, 790)
    """
    width = NUMBER_WIDTH + HEX_WIDTH + SWATCH_WIDTH + ITEM_SPACING * 3 + PADDING * 2
    height = ROW_HEIGHT * color_count + PADDING * 2 + HEADER_HEIGHT
    return width, height


def palette_rows(result: PaletteResult) -> List[PaletteEntry]:
    """Dominant first, then every bucket color."""
    return [result.dominant] + list(result.all_colors)


def render_palette_image(result: PaletteResult) -> Image.Image:
    rows = palette_rows(result)
    width, height = palette_image_size(len(rows))
    img = Image.new("RGB", (width, height), "#ffffff")
    draw = ImageDraw.Draw(img)

    draw.text((width / 2, 35), "Color Palette", font=load_font(24), fill=TEXT_COLOR, anchor="ms")
    number_font = load_font(20)
    hex_font = load_font(22)
    for index, entry in enumerate(rows):
        x = PADDING
        y = 60 + index * ROW_HEIGHT
        middle = y + SWATCH_HEIGHT / 2
        draw.text((x, middle), str(index + 1), font=number_font, fill=TEXT_COLOR, anchor="lm")
        draw.text((x + NUMBER_WIDTH + ITEM_SPACING, middle), entry.hex,
                  font=hex_font, fill=TEXT_COLOR, anchor="lm")
        swatch_x = x + NUMBER_WIDTH + HEX_WIDTH + ITEM_SPACING * 2
        draw.rounded_rectangle(
            (swatch_x, y, swatch_x + SWATCH_WIDTH, y + SWATCH_HEIGHT),
            radius=6,
            fill=entry.rgb,
            outline=SWATCH_OUTLINE,
            width=2,
        )
    return img


def format_palette_text(result: PaletteResult) -> str:
    """Plain text summary, one numbered line per color."""
    lines = [f"1. Dominant: {result.dominant.hex} ({result.dominant.rgb_string})"]
    for index, entry in enumerate(result.all_colors, start=2):
        lines.append(f"{index}. {entry.name}: {entry.hex} ({entry.rgb_string})")
    return "\n".join(lines)
