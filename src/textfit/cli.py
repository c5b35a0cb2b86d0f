"""
Command line interface for textfit
==================================

Inspect fonts, solve dynamic font sizes, compute vertical offsets and render
previews of configured text fields.
"""

import json
import logging
import sys
from pathlib import Path

import click

from .core.config import LayoutSettings
from .core.exceptions import TextfitError
from .core.models import (
    FitMode,
    FontSizeBounds,
    LayoutBox,
    TextFieldConfig,
    VerticalAlignment,
)
from .editing.session import EditingSession
from .fonts.cache import FontCache, resolve_font
from .fonts.models import FontDescriptor
from .fonts.repository import FontRepository
from .layout.solver import fit
from .layout.vertical import adjust
from .utils.text_rendering import render_preview

logger = logging.getLogger(__name__)


def _repository_from_options(font: Path | None, fonts_dir: Path | None) -> FontRepository:
    if fonts_dir is not None:
        repository = FontRepository.from_directory(fonts_dir)
    else:
        repository = FontRepository()
    if font is not None:
        repository.register(
            FontDescriptor(name=font.stem, data=font.read_bytes(), fallback=True, path=str(font))
        )
    if not len(repository):
        raise click.UsageError("Provide --font or --fonts-dir")
    return repository


def _echo_json(data: dict) -> None:
    click.echo(json.dumps(data, indent=2))


font_option = click.option(
    "--font",
    "-f",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Font file; becomes the default font",
)
fonts_dir_option = click.option(
    "--fonts-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory of .ttf/.otf fonts, named by file stem",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose):
    """Text field layout engine CLI."""
    settings = LayoutSettings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.argument("font_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--text", "-t", help="Report characters of TEXT the font has no glyph for")
def inspect(font_path, text):
    """Print the parsed metrics of a font file."""
    try:
        repository = _repository_from_options(font_path, None)
        descriptor = repository.get()
        parsed = resolve_font(None, FontCache(), repository)
    except TextfitError as e:
        logger.exception(f"Font inspection failed: {e}")
        sys.exit(1)

    info = {
        "name": parsed.name,
        "format": descriptor.extension,
        "family": parsed.family_name,
        "style": parsed.style_name,
        "units_per_em": parsed.units_per_em,
        "ascent": parsed.ascent,
        "descent": parsed.descent,
        "line_gap": parsed.line_gap,
        "glyphs": parsed.glyph_count,
        "checksum": parsed.checksum,
    }
    if text is not None:
        info["missing_glyphs"] = sorted(
            {char for char in text if not char.isspace() and not parsed.has_glyph(char)}
        )
    _echo_json(info)


@cli.command(name="fit")
@font_option
@click.option("--text", "-t", required=True, help="Text to fit")
@click.option("--width", type=float, required=True, help="Box width in points")
@click.option("--height", type=float, required=True, help="Box height in points")
@click.option("--min-size", type=float, required=True, help="Minimum font size")
@click.option("--max-size", type=float, required=True, help="Maximum font size")
@click.option("--line-height", type=float, help="Line height multiplier [default: from settings]")
@click.option("--character-spacing", type=float, help="Extra advance per character in points")
@click.option(
    "--fit-mode",
    type=click.Choice([m.value for m in FitMode]),
    default=FitMode.VERTICAL.value,
    show_default=True,
)
@click.option("--step", type=float, default=None, help="Size granularity")
def fit_command(
    font, text, width, height, min_size, max_size, line_height, character_spacing, fit_mode, step
):
    """Find the largest font size at which TEXT fits the box."""
    settings = LayoutSettings()
    try:
        repository = _repository_from_options(font, None)
        parsed = resolve_font(None, FontCache(), repository)
        result = fit(
            text.replace("\\n", "\n"),
            parsed,
            LayoutBox(
                width=width,
                height=height,
                line_height=settings.default_line_height if line_height is None else line_height,
                character_spacing=(
                    settings.default_character_spacing
                    if character_spacing is None
                    else character_spacing
                ),
            ),
            FontSizeBounds(min=min_size, max=max_size, fit=fit_mode),
            step=step or settings.size_step,
        )
    except TextfitError as e:
        logger.exception(f"Fitting failed: {e}")
        sys.exit(1)

    _echo_json(result.model_dump(mode="json"))


@cli.command(name="adjust")
@font_option
@click.option("--size", type=float, help="Font size in points [default: from settings]")
@click.option("--line-height", type=float, help="Line height multiplier [default: from settings]")
@click.option(
    "--vertical-alignment",
    type=click.Choice([a.value for a in VerticalAlignment]),
    default=VerticalAlignment.TOP.value,
    show_default=True,
)
@click.option("--pixels", is_flag=True, help="Report offsets in CSS pixels")
def adjust_command(font, size, line_height, vertical_alignment, pixels):
    """Compute preview offsets for a font size and alignment."""
    settings = LayoutSettings()
    size = settings.default_font_size if size is None else size
    line_height = settings.default_line_height if line_height is None else line_height
    try:
        repository = _repository_from_options(font, None)
        parsed = resolve_font(None, FontCache(), repository)
        adjustment = adjust(parsed, size, line_height, vertical_alignment, settings.calibration)
    except TextfitError as e:
        logger.exception(f"Adjustment failed: {e}")
        sys.exit(1)

    if pixels:
        adjustment = adjustment.to_pixels()
    _echo_json(adjustment.model_dump(mode="json"))


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to text field configuration YAML file",
)
@font_option
@fonts_dir_option
@click.option("--text", "-t", required=True, help="Field value")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a PNG preview of the field",
)
@click.option("--dpi", type=int, default=96, show_default=True)
def layout(config, font, fonts_dir, text, output, dpi):
    """Lay out a configured text field and optionally render a preview."""
    settings = LayoutSettings()
    try:
        field_config = TextFieldConfig.from_yaml(config).with_defaults(
            font_size=settings.default_font_size,
            line_height=settings.default_line_height,
            character_spacing=settings.default_character_spacing,
        )
        repository = _repository_from_options(font, fonts_dir)
        with EditingSession(repository, settings) as session:
            field_layout = session.layout("cli", field_config, text.replace("\\n", "\n"))
            if output is not None:
                descriptor = repository.get(field_config.font_name)
                image = render_preview(
                    text.replace("\\n", "\n"),
                    field_config,
                    field_layout,
                    session.resolve_font(field_config.font_name),
                    descriptor,
                    dpi=dpi,
                )
                image.save(output)
                logger.info(f"Preview written to {output}")
    except TextfitError as e:
        logger.exception(f"Layout failed: {e}")
        sys.exit(1)

    _echo_json(field_layout.model_dump(mode="json"))


if __name__ == "__main__":
    cli()
