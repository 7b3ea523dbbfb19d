from collections import Counter
from pathlib import Path
from typing import List, Optional

import typer

from .codec import OutputFormat, PillowCodec
from .config import Settings
from .errors import MetadataError
from .logging import get_logger
from .output.manifest import build_manifest, save_records, write_manifest_json
from .params import CutParameters
from .pipeline import cut_items
from .planning import Anchor, CropSpec, Direction, Operation, SliceSpec

app = typer.Typer(help="imagecutter – slice or crop images into deterministic regions", no_args_is_help=True)

_SETTINGS = Settings()

logger = get_logger(__name__)


def safe_echo(message: str) -> None:
    """Echo message with an ASCII fallback for consoles without Unicode support."""
    try:
        typer.echo(message)
    except UnicodeEncodeError:
        fallback_message = (
            message.replace("✅", "[OK]")
            .replace("❌", "[FAIL]")
            .replace("📁", "[DIR]")
            .replace("✂️", "[CUT]")
        )
        typer.echo(fallback_message.encode("ascii", "replace").decode("ascii"))


@app.command("slice")
def slice_command(
    images: List[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Images to slice"),
    slices: int = typer.Option(_SETTINGS.number_of_slices, "--slices", "-n", min=1, help="Number of slices"),
    direction: Direction = typer.Option(Direction.HORIZONTAL, help="Slice side by side (horizontal) or stacked (vertical)"),
    slice_width: Optional[int] = typer.Option(None, min=1, help="Fixed width per slice (default: derived from image)"),
    slice_height: Optional[int] = typer.Option(None, min=1, help="Fixed height per slice (default: derived from image)"),
    allow_remainder: bool = typer.Option(False, "--allow-remainder/--no-allow-remainder", help="Let the last slice absorb leftover pixels"),
    out: Path = typer.Option(_SETTINGS.output_dir, "--out", "-o", help="Output directory"),
    output_format: OutputFormat = typer.Option(OutputFormat(_SETTINGS.output_format), "--format", "-f", help="Output image format"),
    prefix: str = typer.Option(_SETTINGS.file_name_prefix, help="File name prefix"),
    start_index: int = typer.Option(_SETTINGS.start_index, min=0, help="Index of the first output file"),
    write_manifest: bool = typer.Option(_SETTINGS.write_manifest, "--manifest/--no-manifest", help="Write manifest.json per image"),
) -> None:
    """
    Slice images into equal parts along one axis.

    Each image writes its slices to OUT/<image name>/.
    """
    operation = SliceSpec(
        number_of_slices=slices,
        direction=direction,
        slice_width=slice_width,
        slice_height=slice_height,
        allow_remainder=allow_remainder,
    )
    _run(images, operation, out, output_format, prefix, start_index, write_manifest)


@app.command("crop")
def crop_command(
    images: List[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="Images to crop"),
    width: int = typer.Option(..., "--width", "-W", min=1, help="Crop width in pixels"),
    height: int = typer.Option(..., "--height", "-H", min=1, help="Crop height in pixels"),
    x: Optional[int] = typer.Option(None, "--x", min=0, help="Left edge (default: from anchor)"),
    y: Optional[int] = typer.Option(None, "--y", min=0, help="Top edge (default: from anchor)"),
    anchor: Anchor = typer.Option(Anchor.CENTER, help="Anchor used when --x or --y is omitted"),
    out: Path = typer.Option(_SETTINGS.output_dir, "--out", "-o", help="Output directory"),
    output_format: OutputFormat = typer.Option(OutputFormat(_SETTINGS.output_format), "--format", "-f", help="Output image format"),
    prefix: str = typer.Option(_SETTINGS.file_name_prefix, help="File name prefix"),
    start_index: int = typer.Option(_SETTINGS.start_index, min=0, help="Index of the output file"),
    write_manifest: bool = typer.Option(_SETTINGS.write_manifest, "--manifest/--no-manifest", help="Write manifest.json per image"),
) -> None:
    """
    Crop one rectangle out of each image.

    Each image writes its crop to OUT/<image name>/.
    """
    operation = CropSpec(width=width, height=height, x=x, y=y, anchor=anchor)
    _run(images, operation, out, output_format, prefix, start_index, write_manifest)


def _run(
    images: List[Path],
    operation: Operation,
    out: Path,
    output_format: OutputFormat,
    prefix: str,
    start_index: int,
    write_manifest: bool,
) -> None:
    # Output directories are keyed by stem
    stems = Counter(path.stem for path in images)
    shared = sorted(stem for stem, count in stems.items() if count > 1)
    if shared:
        raise typer.BadParameter(
            f"Images must have distinct names, these share an output directory: {', '.join(shared)}",
            param_hint="IMAGES",
        )

    params = CutParameters(
        operation=operation,
        output_format=output_format,
        file_name_prefix=prefix,
        start_index=start_index,
    )

    logger.info(f"Cutting {len(images)} image(s) into {out}")
    items = ((path.read_bytes(), params) for path in images)
    results = cut_items(items, PillowCodec())

    exit_code = 0
    for image_path, result in zip(images, results):
        if not result.ok:
            logger.error(f"Failed to cut {image_path}: {result.error}")
            safe_echo(f"❌ {image_path}: {result.error}")
            # Unreadable images outrank planning and codec failures
            exit_code = 2 if isinstance(result.error, MetadataError) else max(exit_code, 1)
            continue

        target_dir = out / image_path.stem
        try:
            paths = save_records(result.records, target_dir)
            if write_manifest:
                manifest = build_manifest(image_path, result.records, paths)
                write_manifest_json(manifest, target_dir)
        except OSError as exc:
            logger.error(f"Failed to save outputs for {image_path}: {exc}")
            safe_echo(f"❌ {image_path}: could not write {target_dir}: {exc}")
            exit_code = max(exit_code, 1)
            continue

        safe_echo(f"✅ {image_path}: {len(result.records)} file(s)")
        for record in result.records:
            safe_echo(f"   ✂️ {record.file_name} ({record.width}x{record.height})")
        safe_echo(f"📁 Output directory: {target_dir}")

    if exit_code:
        raise typer.Exit(code=exit_code)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
