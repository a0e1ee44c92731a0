"""
Share Card Renderer.
Lays out and composites the trip share card (1:1 or 9:16) as a PNG with Pillow.

Every render call owns a fresh CardSurface; text is measured with the same
ImageDraw and fonts that draw it.
"""
import asyncio
import io
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

from ..config import settings
from ..models.card_labels import CardLabels, get_card_labels
from ..models.trip import MAX_HIGHLIGHTS, AspectRatio, TripSummary
from .inline_formatter import strip_markdown
from .qr_client import QRClient, get_qr_client

logger = logging.getLogger(__name__)


# Palette
BG_DARK = "#0f172a"
BG_MID = "#1e293b"
ACCENT = "#3b82f6"
TEXT_TITLE = "#0f172a"
TEXT_MUTED = "#64748b"
TEXT_FAINT = "#94a3b8"
TEXT_BODY = "#334155"
TILE_BG = "#f1f5f9"
CHIP_BG = "#e0f2fe"
CHIP_TEXT = "#0369a1"
QR_PLACEHOLDER_BG = "#e2e8f0"

# Card geometry
CARD_MARGIN = 40
CARD_PADDING = 60
CARD_RADIUS = 40
GRID_STEP = 40

BRAND_TEXT = "TRIP OS"
BRAND_SIZE = 28
SUBTITLE_SIZE = 24

TITLE_SIZE = 72
TITLE_LINE_HEIGHT = 85
TITLE_MAX_LINES = 2

BADGE_WIDTH, BADGE_HEIGHT, BADGE_RADIUS = 200, 60, 30
BADGE_TEXT_SIZE = 32

TILE_HEIGHT, TILE_RADIUS, TILE_GAP = 100, 20, 20
TILE_ICON_SIZE, TILE_LABEL_SIZE = 40, 28
TILE_LABEL_INSET = 70
TILE_LABEL_RESERVE = 80

CHIP_HEIGHT, CHIP_PADDING, CHIP_GAP, CHIP_RADIUS = 50, 24, 16, 25
CHIP_TEXT_SIZE = 26
CHIP_MAX_CHARS = 49
HIGHLIGHTS_HEADER_SIZE = 28

QR_TILE_INSET, QR_TILE_RADIUS = 20, 20
QR_PLACEHOLDER_TEXT = "QR Code"
CAPTION_SIZE, FOOTER_SIZE = 24, 22

ELLIPSIS = "..."
DEFAULT_EMOJI = "✈️"

# Evaluated top to bottom, first substring hit wins. Cities and landmarks
# come before their countries; short codes that occur inside longer names
# ("usa" in "Busan", "uk" in "Milwaukee") come last.
DESTINATION_EMOJI: list[tuple[str, str]] = [
    ("new york", "🗽"), ("紐約", "🗽"),
    ("tokyo", "🗼"), ("東京", "🗼"), ("东京", "🗼"),
    ("kyoto", "⛩️"), ("京都", "⛩️"),
    ("osaka", "🏯"), ("大阪", "🏯"),
    ("fukuoka", "🍜"), ("福岡", "🍜"),
    ("sapporo", "❄️"), ("札幌", "❄️"),
    ("okinawa", "🏝️"), ("沖繩", "🏝️"), ("冲绳", "🏝️"),
    ("paris", "🗼"), ("巴黎", "🗼"),
    ("rome", "🏛️"), ("羅馬", "🏛️"),
    ("seoul", "🇰🇷"), ("首爾", "🇰🇷"), ("busan", "🇰🇷"), ("釜山", "🇰🇷"),
    ("taipei", "🇹🇼"), ("台北", "🇹🇼"),
    ("bangkok", "🇹🇭"), ("曼谷", "🇹🇭"),
    ("beijing", "🇨🇳"), ("北京", "🇨🇳"), ("shanghai", "🇨🇳"), ("上海", "🇨🇳"),
    ("hong kong", "🇭🇰"), ("香港", "🇭🇰"),
    ("barcelona", "🇪🇸"),
    ("london", "🇬🇧"), ("倫敦", "🇬🇧"),
    ("sydney", "🇦🇺"),
    ("dubai", "🏙️"), ("杜拜", "🏙️"), ("迪拜", "🏙️"),
    ("bali", "🏝️"), ("峇里島", "🏝️"), ("巴厘岛", "🏝️"),
    ("maldives", "🏝️"), ("馬爾代夫", "🏝️"), ("马尔代夫", "🏝️"),
    ("hawaii", "🌺"), ("夏威夷", "🌺"),
    ("japan", "🗾"), ("日本", "🗾"),
    ("korea", "🇰🇷"), ("韓國", "🇰🇷"), ("韩国", "🇰🇷"),
    ("taiwan", "🇹🇼"), ("台灣", "🇹🇼"), ("台湾", "🇹🇼"),
    ("thailand", "🇹🇭"), ("泰國", "🇹🇭"), ("泰国", "🇹🇭"),
    ("vietnam", "🇻🇳"), ("越南", "🇻🇳"),
    ("singapore", "🇸🇬"), ("新加坡", "🇸🇬"),
    ("china", "🇨🇳"), ("中國", "🇨🇳"), ("中国", "🇨🇳"),
    ("america", "🇺🇸"), ("美國", "🇺🇸"), ("美国", "🇺🇸"),
    ("france", "🇫🇷"), ("法國", "🇫🇷"), ("法国", "🇫🇷"),
    ("italy", "🇮🇹"), ("義大利", "🇮🇹"), ("意大利", "🇮🇹"),
    ("spain", "🇪🇸"), ("西班牙", "🇪🇸"),
    ("england", "🇬🇧"), ("英國", "🇬🇧"), ("英国", "🇬🇧"),
    ("germany", "🇩🇪"), ("德國", "🇩🇪"), ("德国", "🇩🇪"),
    ("australia", "🇦🇺"), ("澳洲", "🇦🇺"),
    ("usa", "🇺🇸"),
    ("uk", "🇬🇧"),
]


def destination_emoji(destination: str) -> str:
    """Pick the title emoji for a destination."""
    dest = destination.lower()
    for pattern, symbol in DESTINATION_EMOJI:
        if pattern in dest:
            return symbol
    return DEFAULT_EMOJI


def card_filename(destination: str, ratio: AspectRatio) -> str:
    """Download name, e.g. 'TripOS-New-York-9x16.png'."""
    return f"TripOS-{re.sub(r'[^A-Za-z0-9]', '-', destination)}-{ratio.tag}.png"


def wrap_characters(
    text: str,
    max_width: float,
    measure: Callable[[str], float],
    max_lines: int = TITLE_MAX_LINES
) -> list[str]:
    """
    Wrap text one character at a time.

    Works for scripts without spaces between words. Lines beyond
    `max_lines` are dropped.
    """
    lines = []
    current = ""
    for char in text:
        candidate = current + char
        if measure(candidate) > max_width and current:
            lines.append(current)
            current = char
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines[:max_lines]


def truncate_text(text: str, max_width: float, measure: Callable[[str], float]) -> str:
    """Longest prefix that still fits with an ellipsis appended."""
    if measure(text) <= max_width:
        return text
    truncated = text
    while truncated and measure(truncated + ELLIPSIS) > max_width:
        truncated = truncated[:-1]
    return truncated + ELLIPSIS


def card_highlights(summary: TripSummary) -> list[str]:
    """Highlights as drawn on the card: capped, stripped of markdown."""
    cleaned = [strip_markdown(h) for h in summary.highlights[:MAX_HIGHLIGHTS]]
    return [h for h in cleaned if 0 < len(h) <= CHIP_MAX_CHARS]


@dataclass
class Box:
    x: int
    y: int
    width: int
    height: int

    def xy(self, inset: int = 0) -> tuple[int, int, int, int]:
        return (
            self.x - inset,
            self.y - inset,
            self.x + self.width + inset,
            self.y + self.height + inset,
        )


@dataclass
class Tile:
    box: Box
    icon: str
    label: str


@dataclass
class Chip:
    box: Box
    text: str


@dataclass
class TextLine:
    text: str
    y: int


@dataclass
class CardLayout:
    """Positions of everything placed on the card; text y values are baselines."""
    width: int
    height: int
    content_x: int
    content_width: int
    brand_y: int
    subtitle_x: int
    title_lines: list[TextLine] = field(default_factory=list)
    duration_badge: Optional[Box] = None
    duration_text: str = ""
    tiles: list[Tile] = field(default_factory=list)
    highlights_header_y: Optional[int] = None
    chips: list[Chip] = field(default_factory=list)
    content_bottom: int = 0
    qr_box: Optional[Box] = None
    caption_y: int = 0
    footer_y: int = 0
    qr_placeholder: bool = False

    @property
    def overlaps_qr(self) -> bool:
        """True when flowing content runs into the bottom-anchored QR tile."""
        return self.content_bottom > self.qr_box.y - QR_TILE_INSET


@dataclass
class RenderedCard:
    """A finished share card."""
    filename: str
    png: bytes
    width: int
    height: int
    layout: CardLayout


class CardSurface:
    """Drawing surface owned by exactly one render call."""

    def __init__(
        self,
        width: int,
        height: int,
        font_path: Optional[str] = None,
        bold_font_path: Optional[str] = None
    ):
        self.width = width
        self.height = height
        self.image = Image.new("RGBA", (width, height), BG_DARK)
        self.draw = ImageDraw.Draw(self.image)
        self._font_paths = {False: font_path, True: bold_font_path or font_path}
        self._fonts: dict[tuple[int, bool], ImageFont.FreeTypeFont] = {}

    def font(self, size: int, bold: bool = False) -> ImageFont.FreeTypeFont:
        key = (size, bold)
        if key not in self._fonts:
            path = self._font_paths[bold]
            font = None
            if path:
                try:
                    font = ImageFont.truetype(path, size)
                except OSError as e:
                    logger.warning(f"Card font {path} unavailable, using default: {e}")
            self._fonts[key] = font or ImageFont.load_default(size=size)
        return self._fonts[key]

    def measure(self, text: str, size: int, bold: bool = False) -> float:
        return self.draw.textlength(text, font=self.font(size, bold))

    def measurer(self, size: int, bold: bool = False) -> Callable[[str], float]:
        return lambda text: self.measure(text, size, bold)

    def text(self, xy, text: str, size: int, fill, bold: bool = False, anchor: str = "ls"):
        self.draw.text(xy, text, font=self.font(size, bold), fill=fill, anchor=anchor)

    def layer(self) -> tuple[Image.Image, ImageDraw.ImageDraw]:
        layer = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
        return layer, ImageDraw.Draw(layer)

    def composite(self, layer: Image.Image):
        self.image.alpha_composite(layer)
        self.draw = ImageDraw.Draw(self.image)

    def to_png(self) -> bytes:
        buffer = io.BytesIO()
        self.image.convert("RGB").save(buffer, format="PNG")
        return buffer.getvalue()


def _rgba(color: str, alpha: float) -> tuple[int, int, int, int]:
    r, g, b = ImageColor.getrgb(color)[:3]
    return (r, g, b, round(255 * alpha))


def _interpolate(stops: list[tuple[float, tuple]], t: float) -> tuple:
    for (t0, c0), (t1, c1) in zip(stops, stops[1:]):
        if t <= t1:
            f = (t - t0) / (t1 - t0)
            return tuple(round(a + (b - a) * f) for a, b in zip(c0, c1))
    return stops[-1][1]


def _diagonal_gradient(width: int, height: int) -> Image.Image:
    """Top-left to bottom-right gradient, computed small and upscaled."""
    stops = [
        (0.0, ImageColor.getrgb(BG_DARK)),
        (0.5, ImageColor.getrgb(BG_MID)),
        (1.0, ImageColor.getrgb(BG_DARK)),
    ]
    small_w = 64
    small_h = max(1, round(small_w * height / width))
    norm = small_w * small_w + small_h * small_h
    pixels = [
        _interpolate(stops, (x * small_w + y * small_h) / norm)
        for y in range(small_h)
        for x in range(small_w)
    ]
    small = Image.new("RGB", (small_w, small_h))
    small.putdata(pixels)
    return small.resize((width, height), Image.Resampling.BILINEAR).convert("RGBA")


class CardLayoutEngine:
    """Builds the share card image for a trip summary."""

    def __init__(self, font_path: Optional[str] = None, bold_font_path: Optional[str] = None):
        self.font_path = font_path or settings.card_font_path
        self.bold_font_path = bold_font_path or settings.card_font_bold_path

    def render(
        self,
        summary: TripSummary,
        ratio: AspectRatio,
        qr_image: Optional[Image.Image] = None,
        labels: Optional[CardLabels] = None
    ) -> RenderedCard:
        """
        Lay out and rasterise the card.

        Args:
            summary: Trip data to display
            ratio: Canvas target
            qr_image: Pre-fetched QR raster; None draws the placeholder
            labels: Card strings, English by default

        Returns:
            RenderedCard with PNG bytes and the computed layout
        """
        labels = labels or get_card_labels("en")
        surface = CardSurface(ratio.width, ratio.height, self.font_path, self.bold_font_path)

        layout = self.layout(surface, summary, ratio, labels)
        layout.qr_placeholder = qr_image is None

        self._paint_background(surface)
        self._paint_content(surface, layout, labels)
        self._paint_qr(surface, layout, qr_image)

        png = surface.to_png()
        filename = card_filename(summary.destination, ratio)
        logger.info(f"Rendered share card {filename} ({len(png)} bytes)")
        return RenderedCard(
            filename=filename,
            png=png,
            width=ratio.width,
            height=ratio.height,
            layout=layout,
        )

    async def export(
        self,
        summary: TripSummary,
        ratio: AspectRatio,
        labels: Optional[CardLabels] = None,
        qr_client: Optional[QRClient] = None
    ) -> RenderedCard:
        """
        Fetch the QR asset for the share URL, then render.

        Rendering runs in a worker thread so the event loop keeps serving
        other requests while Pillow composites and encodes.
        """
        client = qr_client or get_qr_client()
        qr_image = await client.fetch(summary.share_url, ratio.qr_size)
        if qr_image is None:
            logger.warning("QR asset unavailable, drawing placeholder")
        return await asyncio.to_thread(self.render, summary, ratio, qr_image, labels)

    def layout(
        self,
        surface: CardSurface,
        summary: TripSummary,
        ratio: AspectRatio,
        labels: CardLabels
    ) -> CardLayout:
        """Place every element top to bottom; measurement only, no drawing."""
        width, height = ratio.width, ratio.height
        card_width = width - CARD_MARGIN * 2
        card_height = height - CARD_MARGIN * 2
        content_x = CARD_MARGIN + CARD_PADDING
        content_width = card_width - CARD_PADDING * 2
        y = CARD_MARGIN + CARD_PADDING

        layout = CardLayout(
            width=width,
            height=height,
            content_x=content_x,
            content_width=content_width,
            brand_y=y,
            subtitle_x=content_x + math.ceil(surface.measure(BRAND_TEXT, BRAND_SIZE, bold=True)),
        )
        y += 80

        # Title
        title = f"{destination_emoji(summary.destination)} {summary.destination}"
        for line in wrap_characters(title, content_width, surface.measurer(TITLE_SIZE, bold=True)):
            layout.title_lines.append(TextLine(line, y))
            y += TITLE_LINE_HEIGHT
        y += 20

        # Duration badge
        if summary.duration_label:
            layout.duration_badge = Box(content_x, y, BADGE_WIDTH, BADGE_HEIGHT)
            layout.duration_text = f"📅 {summary.duration_label}"
            y += 100

        # Info tiles
        items = [
            ("👥", summary.travelers),
            ("💰", summary.budget),
            (summary.pace_icon, summary.pace_label),
        ]
        items = [(icon, label) for icon, label in items if label and label != "-"]
        if items:
            tile_width = content_width // len(items) - TILE_GAP
            measure = surface.measurer(TILE_LABEL_SIZE)
            for index, (icon, label) in enumerate(items):
                x = content_x + (tile_width + TILE_GAP) * index
                layout.tiles.append(Tile(
                    box=Box(x, y, tile_width, TILE_HEIGHT),
                    icon=icon,
                    label=truncate_text(label, tile_width - TILE_LABEL_RESERVE, measure),
                ))
            y += 140

        # Highlight chips
        highlights = card_highlights(summary)
        if highlights:
            layout.highlights_header_y = y
            y += 50
            chip_x, chip_y = content_x, y
            for text in highlights:
                chip_width = math.ceil(surface.measure(text, CHIP_TEXT_SIZE)) + CHIP_PADDING * 2
                if chip_x + chip_width > content_x + content_width and chip_x > content_x:
                    chip_x = content_x
                    chip_y += CHIP_HEIGHT + CHIP_GAP
                layout.chips.append(Chip(Box(chip_x, chip_y, chip_width, CHIP_HEIGHT), text))
                chip_x += chip_width + CHIP_GAP
            y = chip_y + CHIP_HEIGHT + 60
        layout.content_bottom = y

        # QR block is anchored to the card bottom, not to the content above
        qr_size = ratio.qr_size
        qr_y = CARD_MARGIN + card_height - CARD_PADDING - qr_size - ratio.qr_bottom_gap
        layout.qr_box = Box((width - qr_size) // 2, qr_y, qr_size, qr_size)
        layout.caption_y = qr_y + qr_size + 50
        layout.footer_y = CARD_MARGIN + card_height - 40
        return layout

    def _paint_background(self, surface: CardSurface):
        width, height = surface.width, surface.height
        surface.composite(_diagonal_gradient(width, height))

        grid, draw = surface.layer()
        grid_color = _rgba(ACCENT, 0.1)
        for x in range(0, width, GRID_STEP):
            draw.line([(x, 0), (x, height)], fill=grid_color, width=1)
        for y in range(0, height, GRID_STEP):
            draw.line([(0, y), (width, y)], fill=grid_color, width=1)
        surface.composite(grid)

        circles, draw = surface.layer()
        circle_color = _rgba(ACCENT, 0.05)
        for cx, cy, r in ((width * 0.8, height * 0.2, 300), (width * 0.2, height * 0.8, 250)):
            draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=circle_color)
        surface.composite(circles)

        card = Box(CARD_MARGIN, CARD_MARGIN, width - CARD_MARGIN * 2, height - CARD_MARGIN * 2)
        shadow, draw = surface.layer()
        x0, y0, x1, y1 = card.xy()
        draw.rounded_rectangle((x0, y0 + 10, x1, y1 + 10), radius=CARD_RADIUS, fill=(0, 0, 0, 77))
        surface.composite(shadow.filter(ImageFilter.GaussianBlur(20)))

        face, draw = surface.layer()
        draw.rounded_rectangle(card.xy(), radius=CARD_RADIUS, fill=_rgba("#ffffff", 0.95))
        surface.composite(face)

    def _paint_content(self, surface: CardSurface, layout: CardLayout, labels: CardLabels):
        x = layout.content_x
        surface.text((x, layout.brand_y), BRAND_TEXT, BRAND_SIZE, TEXT_MUTED, bold=True)
        surface.text((layout.subtitle_x, layout.brand_y), f" • {labels.subtitle}", SUBTITLE_SIZE, TEXT_FAINT)

        for line in layout.title_lines:
            surface.text((x, line.y), line.text, TITLE_SIZE, TEXT_TITLE, bold=True)

        badge = layout.duration_badge
        if badge is not None:
            surface.draw.rounded_rectangle(badge.xy(), radius=BADGE_RADIUS, fill=ACCENT)
            surface.text(
                (badge.x + badge.width // 2, badge.y + 42),
                layout.duration_text, BADGE_TEXT_SIZE, "#ffffff", bold=True, anchor="ms"
            )

        for tile in layout.tiles:
            box = tile.box
            surface.draw.rounded_rectangle(box.xy(), radius=TILE_RADIUS, fill=TILE_BG)
            surface.text((box.x + 20, box.y + 55), tile.icon, TILE_ICON_SIZE, TEXT_BODY)
            surface.text((box.x + TILE_LABEL_INSET, box.y + 60), tile.label, TILE_LABEL_SIZE, TEXT_BODY)

        if layout.highlights_header_y is not None:
            surface.text(
                (x, layout.highlights_header_y), f"✨ {labels.highlights}",
                HIGHLIGHTS_HEADER_SIZE, TEXT_MUTED, bold=True
            )
        for chip in layout.chips:
            box = chip.box
            surface.draw.rounded_rectangle(box.xy(), radius=CHIP_RADIUS, fill=CHIP_BG)
            surface.text((box.x + CHIP_PADDING, box.y + 34), chip.text, CHIP_TEXT_SIZE, CHIP_TEXT)

        center = layout.width // 2
        surface.text((center, layout.caption_y), labels.scan_to_view, CAPTION_SIZE, TEXT_MUTED, anchor="ms")
        surface.text((center, layout.footer_y), labels.powered_by, FOOTER_SIZE, TEXT_FAINT, anchor="ms")

    def _paint_qr(self, surface: CardSurface, layout: CardLayout, qr_image: Optional[Image.Image]):
        box = layout.qr_box

        shadow, draw = surface.layer()
        draw.rounded_rectangle(box.xy(QR_TILE_INSET), radius=QR_TILE_RADIUS, fill=(0, 0, 0, 26))
        surface.composite(shadow.filter(ImageFilter.GaussianBlur(10)))
        surface.draw.rounded_rectangle(box.xy(QR_TILE_INSET), radius=QR_TILE_RADIUS, fill="#ffffff")

        if qr_image is None:
            surface.draw.rectangle(box.xy(), fill=QR_PLACEHOLDER_BG)
            surface.text(
                (box.x + box.width // 2, box.y + box.height // 2),
                QR_PLACEHOLDER_TEXT, CAPTION_SIZE, TEXT_FAINT, anchor="mm"
            )
            return

        qr = qr_image.convert("RGBA").resize((box.width, box.height), Image.Resampling.NEAREST)
        surface.image.alpha_composite(qr, dest=(box.x, box.y))
        surface.draw = ImageDraw.Draw(surface.image)


# Global engine instance
card_engine: Optional[CardLayoutEngine] = None


def get_card_engine() -> CardLayoutEngine:
    """Get or create the global card engine."""
    global card_engine
    if card_engine is None:
        card_engine = CardLayoutEngine()
    return card_engine
