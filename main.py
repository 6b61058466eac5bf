# main.py
from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from config import FLAG_DEBUG
from errors import ManifestError
from manifest_pipeline import ManifestPipeline
from models import ExportedFile, ManifestLayout
from utils.file_chooser import FileChooser


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="romaneio",
        description="Build driver delivery manifests (romaneios) from carrier exports.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    m = sub.add_parser("manifest", help="Build a manifest from a carrier export")
    m.add_argument("input", nargs="?", type=Path, help="Carrier export (.xlsx/.xls); opens a file dialog if omitted")
    m.add_argument("--layout", required=True, choices=[layout.value for layout in ManifestLayout],
                   help="fixed-column: id in A, address in C from row 10; header-matched: TMS columns")
    m.add_argument("--driver", required=True, help="Driver name used in the output filename")
    m.add_argument("--flat", action="store_true", help="One row per service instead of one row per address")
    m.add_argument("--output-dir", type=Path, default=Path.cwd())
    m.add_argument("--timing", action="store_true", help="Print stage timings")
    m.add_argument("-v", "--verbose", action="store_true")

    g = sub.add_parser("merge", help="Merge every sheet of a workbook into one sheet")
    g.add_argument("input", nargs="?", type=Path, help="Workbook (.xls/.xlsx); opens a file dialog if omitted")
    g.add_argument("--output-dir", type=Path, default=Path.cwd())
    g.add_argument("-v", "--verbose", action="store_true")
    return p


def _resolve_input(path: Path | None, pick) -> Path:
    if path is not None:
        return path
    picked = pick()
    if picked is None:
        raise SystemExit("No workbook selected.")
    return picked


def _save(exported: ExportedFile, out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / exported.filename
    out_file.write_bytes(exported.content)
    return out_file


def run_manifest(args, pipeline: ManifestPipeline, chooser: FileChooser) -> Path:
    layout = ManifestLayout(args.layout)
    src = _resolve_input(args.input, lambda: chooser.pick_manifest_source(layout.value))
    print(f"📥 Loading {src.name} as {layout.value} export...")
    data = pipeline.loader.read_bytes(src)
    manifest = pipeline.process(data, layout, src.name)
    print(f"✅ {len(manifest.records)} service(s) to {len(manifest.groups)} address(es)")
    exported = pipeline.export(manifest, consolidate=not args.flat, driver_name=args.driver)
    out_file = _save(exported, args.output_dir)
    print(f"📁 Manifest saved to {out_file}")
    if args.timing:
        print(pipeline.timer.format_summary())
    return out_file


def run_merge(args, pipeline: ManifestPipeline, chooser: FileChooser) -> Path:
    src = _resolve_input(args.input, chooser.pick_workbook_to_merge)
    print(f"📥 Merging sheets of {src.name}...")
    data = pipeline.loader.read_bytes(src)
    exported = pipeline.merge_sheets(data, src.name)
    out_file = _save(exported, args.output_dir)
    print(f"📁 Merged workbook saved to {out_file}")
    return out_file


def main(argv=None, pipeline: ManifestPipeline | None = None, chooser: FileChooser | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or FLAG_DEBUG) else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    pipeline = pipeline or ManifestPipeline()
    chooser = chooser or FileChooser()
    try:
        if args.command == "manifest":
            run_manifest(args, pipeline, chooser)
        else:
            run_merge(args, pipeline, chooser)
    except (ManifestError, ValueError) as e:
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
