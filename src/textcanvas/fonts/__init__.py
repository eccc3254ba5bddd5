"""Font selection for the Pillow and ReportLab surfaces."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from PIL import ImageFont
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from textcanvas.config import TextStyle

logger = logging.getLogger(__name__)

# Font path registry: maps registered font names to their file paths
# Pillow needs the file, ReportLab only the registered name
_FONT_PATHS: dict[str, Path] = {}

# Generic CSS families -> PDF built-in fonts as (regular, bold, italic, bold italic)
PDF_BUILTIN_FAMILIES: dict[str, tuple[str, str, str, str]] = {
    "sans-serif": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "serif": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "monospace": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
}
PDF_BUILTIN_FAMILIES["helvetica"] = PDF_BUILTIN_FAMILIES["sans-serif"]
PDF_BUILTIN_FAMILIES["times"] = PDF_BUILTIN_FAMILIES["serif"]
PDF_BUILTIN_FAMILIES["courier"] = PDF_BUILTIN_FAMILIES["monospace"]

# Generic CSS families -> commonly installed TrueType files, same order
IMAGE_FONT_FILES: dict[str, tuple[str, str, str, str]] = {
    "sans-serif": ("DejaVuSans.ttf", "DejaVuSans-Bold.ttf", "DejaVuSans-Oblique.ttf", "DejaVuSans-BoldOblique.ttf"),
    "serif": ("DejaVuSerif.ttf", "DejaVuSerif-Bold.ttf", "DejaVuSerif-Italic.ttf", "DejaVuSerif-BoldItalic.ttf"),
    "monospace": (
        "DejaVuSansMono.ttf",
        "DejaVuSansMono-Bold.ttf",
        "DejaVuSansMono-Oblique.ttf",
        "DejaVuSansMono-BoldOblique.ttf",
    ),
}

_SUFFIXES = ("Regular", "Bold", "Italic", "BoldItalic")


def _normalize_font_name(name: str) -> str:
    """
    Normalize a font name to TitleCase convention.

    Examples:
        "iosevka-regular" → "Iosevka-Regular"
        "Open Sans" → "OpenSans"
    """
    parts = name.replace(" ", "").split("-")
    return "-".join(part[:1].upper() + part[1:] for part in parts)


def is_bold(weight: str | int) -> bool:
    """True for "bold", "bolder" and numeric weights of 600 and above."""
    text = str(weight).strip().lower()
    if text in ("bold", "bolder"):
        return True
    return text.isdigit() and int(text) >= 600


def is_italic(font_style: str) -> bool:
    return font_style in ("italic", "oblique")


def _variant_index(style: TextStyle) -> int:
    return int(is_bold(style.font_weight)) + 2 * int(is_italic(style.font_style))


def register_fonts(fonts_dir: Path) -> int:
    """
    Register every TTF file in a directory.

    Each font is registered with ReportLab under a TitleCase name based on its
    filename, and its path is remembered for the Pillow surface.

    Examples:
        - open-sans-bold.ttf → registered as "Open-Sans-Bold"
        - Lora-Italic.ttf → registered as "Lora-Italic"

    Args:
        fonts_dir: Directory to scan (not recursive).

    Returns:
        Number of fonts registered.
    """
    ttf_files = sorted(fonts_dir.glob("*.ttf"))
    if not ttf_files:
        logger.warning(f"No TTF font files found in {fonts_dir}")
        return 0

    registered_count = 0
    for font_path in ttf_files:
        font_name = _normalize_font_name(font_path.stem)
        try:
            pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
        except Exception as e:
            logger.warning(f"Failed to register font {font_name} from {font_path.name}: {e}. Skipping this font.")
            continue
        _FONT_PATHS[font_name] = font_path
        logger.info(f"Registered font: {font_name} from {font_path.name}")
        registered_count += 1

    if registered_count:
        _load_truetype.cache_clear()
    return registered_count


def get_font_path(font_name: str) -> Optional[Path]:
    """
    Get the file path for a registered font.

    Returns:
        Path to the font file, or None for PDF built-ins and unknown names.
    """
    return _FONT_PATHS.get(_normalize_font_name(font_name))


def _candidate_names(family: str, variant: int) -> list[str]:
    """Registered-name candidates for a family, most specific first."""
    base = _normalize_font_name(family)
    suffix = _SUFFIXES[variant]
    if variant == 0:
        return [base, f"{base}-{suffix}"]
    return [f"{base}-{suffix}"]


def _is_registered(font_name: str) -> bool:
    try:
        pdfmetrics.getFont(font_name)
        return True
    except Exception:
        return False


def resolve_pdf_font(style: TextStyle) -> str:
    """
    Pick the ReportLab font name for a style.

    Resolution priority:
    1. Generic families and Helvetica/Times/Courier map to PDF built-ins
    2. Registered fonts named "<Family>" or "<Family>-<Bold|Italic|BoldItalic>"
    3. Helvetica in the matching weight/style

    Args:
        style: Resolved text style.

    Returns:
        Registered ReportLab font name.
    """
    variant = _variant_index(style)
    family = style.font_family.strip()

    builtin = PDF_BUILTIN_FAMILIES.get(family.lower())
    if builtin:
        return builtin[variant]

    for font_name in _candidate_names(family, variant):
        if _is_registered(font_name):
            logger.debug(f"Font '{font_name}' found in registry")
            return font_name

    fallback = PDF_BUILTIN_FAMILIES["sans-serif"][variant]
    logger.warning(f"Font family '{family}' is not registered, using '{fallback}'")
    return fallback


@lru_cache(maxsize=64)
def _load_truetype(family: str, variant: int, size: float) -> ImageFont.FreeTypeFont | None:
    candidates: list[str] = []
    for font_name in _candidate_names(family, variant):
        path = _FONT_PATHS.get(font_name)
        if path:
            candidates.append(str(path))

    generic = IMAGE_FONT_FILES.get(family.lower())
    if generic:
        candidates.append(generic[variant])
    else:
        # Let FreeType search the system font directories by file name
        candidates.extend(f"{name}.ttf" for name in _candidate_names(family, variant))

    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            logger.debug(f"Font file '{candidate}' not available")
    return None


def load_image_font(style: TextStyle, size: float) -> ImageFont.FreeTypeFont:
    """
    Load a Pillow font for a style.

    Tries registered fonts, then common system font files for the generic
    families, then Pillow's bundled default font at the requested size.

    Args:
        style: Resolved text style (family, weight and style are used).
        size: Font size in device pixels.

    Returns:
        FreeType font at the requested size.
    """
    family = style.font_family.strip()
    font = _load_truetype(family, _variant_index(style), size)
    if font is None:
        logger.warning(f"No TrueType file found for '{family}', using Pillow's default font")
        font = ImageFont.load_default(size=size)
    return font
