"""Command line interface for modex_photo."""

from __future__ import annotations

import argparse
import sys
import warnings
from pathlib import Path
from typing import List, Tuple

from .compositor import Room
from .encode import encode_photo_file, encode_sprite_file
from .images import ModexPhotoError, read_obj_image, read_photo
from .preview import render_photo, render_room


def parse_placement(text: str) -> Tuple[Path, int, int]:
    """Parse ``SPRITE@X,Y`` into a path and an integer position."""

    path, sep, position = text.rpartition("@")
    if not sep or not path:
        raise ModexPhotoError(f"Object placement must look like SPRITE@X,Y: {text}")
    parts = position.split(",")
    if len(parts) != 2:
        raise ModexPhotoError(f"Object position must have two components: {text}")
    try:
        x, y = (int(part.strip()) for part in parts)
    except ValueError as exc:
        raise ModexPhotoError(f"Invalid object position: {position}") from exc
    return Path(path), x, y


def ensure_writable(target: Path, force: bool) -> None:
    if target.exists() and not force:
        raise ModexPhotoError(f"Output file already exists (use --force to overwrite): {target}")
    target.parent.mkdir(parents=True, exist_ok=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Convert RGB 5:6:5 room photos to 192-color paletted rasters and preview them.\n"
            "Photo colors occupy hardware indices 64-255; indices 0-63 are the fixed 2:2:2 "
            "system palette used by object images."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    encode_photo = sub.add_parser("encode-photo", help="Convert an image file to a photo file")
    encode_photo.add_argument("input", help="Source image (any format Pillow reads)")
    encode_photo.add_argument("-o", "--output", required=True, help="Destination photo file")
    encode_photo.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")

    encode_sprite = sub.add_parser(
        "encode-sprite", help="Convert an RGBA image to an object image file"
    )
    encode_sprite.add_argument("input", help="Source image; alpha below 128 becomes transparent")
    encode_sprite.add_argument("-o", "--output", required=True, help="Destination object image")
    encode_sprite.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")

    quantize = sub.add_parser("quantize", help="Quantize a photo file and report its palette")
    quantize.add_argument("photo", help="Photo file (RGB 5:6:5)")
    quantize.add_argument("--preview", help="Optional PNG to write with the quantized result")
    quantize.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")

    preview = sub.add_parser("preview", help="Compose a photo with objects into a PNG")
    preview.add_argument("photo", help="Photo file (RGB 5:6:5)")
    preview.add_argument("-o", "--output", required=True, help="Destination PNG")
    preview.add_argument(
        "--object",
        dest="objects",
        action="append",
        default=[],
        metavar="SPRITE@X,Y",
        help="Place an object image at map position X,Y (repeatable, drawn in order)",
    )
    preview.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")

    return parser


def run_encode(encoder, args: argparse.Namespace) -> None:
    target = Path(args.output)
    ensure_writable(target, args.force)
    target.write_bytes(encoder(args.input))
    print(f"wrote {target}")


def run_quantize(args: argparse.Namespace) -> None:
    photo = read_photo(args.photo)
    print(f"{args.photo}: {photo.width}x{photo.height}")
    print(f"  fine colors:   {len(photo.selected_ids)}")
    print(f"  coarse colors: {len(photo.coarse_ids)}")
    print(f"  palette slots: {len(photo.selected_ids) + len(photo.coarse_ids)} / {len(photo.palette)}")
    if args.preview:
        target = Path(args.preview)
        ensure_writable(target, args.force)
        render_photo(photo).save(target)
        print(f"wrote {target}")


def run_preview(args: argparse.Namespace) -> None:
    room = Room(read_photo(args.photo))
    placements: List[Tuple[Path, int, int]] = [parse_placement(text) for text in args.objects]
    for path, x, y in placements:
        room.place(read_obj_image(path), x, y)
    target = Path(args.output)
    ensure_writable(target, args.force)
    render_room(room).save(target)
    print(f"wrote {target}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            if args.command == "encode-photo":
                run_encode(encode_photo_file, args)
            elif args.command == "encode-sprite":
                run_encode(encode_sprite_file, args)
            elif args.command == "quantize":
                run_quantize(args)
            else:
                run_preview(args)
            for warning in caught:
                print(f"Warning: {warning.message}")
        return 0
    except ModexPhotoError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Failed to write output: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
