from __future__ import annotations
import argparse
import hashlib
import logging
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from libobj.errors import ObjError
from libobj.model import Alignment, BoundingBox, ConvertOptions, TransformConfig, UP_AXES
from libobj.pipeline import check_extension, convert_batch, convert_lines
from libobj.reader import read_obj_lines
from libobj.summary import summarize_obj
from libobj.writer import format_coordinate, join_lines

PROG = "objmassage"

console = Console()

def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )

def _fmt_vec3(v) -> str:
    return "(" + ", ".join(format_coordinate(c) for c in v[:3]) + ")"

def _bounds_text(b: BoundingBox | None) -> str:
    if b is None:
        return "-"
    return f"{_fmt_vec3(b.min)} .. {_fmt_vec3(b.max)}"

def _sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8", errors="surrogateescape")).hexdigest()

def _sha256_file(p: str) -> str:
    h = hashlib.sha256()
    with open(p, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()

def cmd_convert(args: argparse.Namespace) -> int:
    options = ConvertOptions(
        transform=TransformConfig(scale=args.scale, alignment=Alignment.parse(args.align), up_axis=args.up),
        in_place=args.inplace,
        output_dir=args.output,
        verbose=args.verbose,
        workers=args.jobs,
    )
    setup_logging(options.verbose)
    batch = convert_batch(args.files, options)

    t = Table(title=f"Converted (scale={format_coordinate(options.transform.scale)}, align={options.transform.alignment})")
    t.add_column("File", overflow="fold")
    t.add_column("Vertices", justify="right")
    t.add_column("Bounds", overflow="fold")
    t.add_column("Status")
    for r in batch.results:
        if r.ok:
            t.add_row(escape(r.source), str(r.vertex_count), _bounds_text(r.bounds), "[green]ok[/green]")
        else:
            t.add_row(escape(r.source), "-", "-", "[red]failed[/red]")
    console.print(t)

    for r in batch.failures:
        _print_error(r.error, prefix=f"[red]{escape(r.source)}:[/red] ")
    if not batch.ok:
        console.print(f"[red]{len(batch.failures)} of {len(batch.results)} file(s) failed.[/red]")
        return 1
    return 0

def cmd_summary(args: argparse.Namespace) -> int:
    s = summarize_obj(args.obj)
    console.print(f"[bold]File:[/bold] {escape(s.path)}")
    console.print(f"[bold]Size:[/bold] {s.file_size} bytes   [bold]Lines:[/bold] {s.line_count}")

    t = Table(title="Records")
    t.add_column("Kind")
    t.add_column("Count", justify="right")
    t.add_row("v (positions)", str(s.vertex_count))
    t.add_row("vn (normals)", str(s.normal_count))
    t.add_row("vt (texcoords)", str(s.texcoord_count))
    t.add_row("f (faces)", str(s.face_count))
    t.add_row("# (comments)", str(s.comment_count))
    console.print(t)

    if s.bounds is None:
        console.print("[bold]Bounds:[/bold] (no vertices)")
    else:
        b = s.bounds
        console.print(f"[bold]Bounds min:[/bold] {_fmt_vec3(b.min)}")
        console.print(f"[bold]Bounds max:[/bold] {_fmt_vec3(b.max)}")
        console.print(f"[bold]Extent:[/bold] {_fmt_vec3(b.size)}")
    return 0

def cmd_verify_roundtrip(args: argparse.Namespace) -> int:
    # Identity conversion twice, in memory. The second pass must not change anything.
    check_extension(args.obj)
    lines = read_obj_lines(args.obj)
    identity = TransformConfig()
    first, _, _ = convert_lines(lines, identity)
    second, _, _ = convert_lines(first, identity)

    a = _sha256_file(args.obj)
    b = _sha256_text(join_lines(first))
    c = _sha256_text(join_lines(second))
    console.print(f"IN    : {escape(args.obj)}\n        sha256={a}")
    console.print(f"PASS 1: sha256={b}" + ("  (identical to input)" if a == b else ""))
    console.print(f"PASS 2: sha256={c}")
    if b == c:
        console.print("[green]STABLE[/green]")
        return 0
    console.print("[red]DIFF[/red]")
    return 1

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=PROG, description="Optimizes model files for further processing")
    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("convert", help="Scale and align the vertices of OBJ files")
    c.add_argument("files", nargs="+", metavar="file")
    c.add_argument("-v", "--verbose", action="store_true", help="enable maximum verbosity")
    c.add_argument("--inplace", action="store_true", help="convert in place by overwriting the input file")
    c.add_argument("--scale", type=float, default=1.0, help="apply a scale factor [%(default)s]")
    c.add_argument("--align", default=str(Alignment.NONE),
                   help="origin alignment: " + ", ".join(a.value for a in Alignment) + " [%(default)s]")
    c.add_argument("--up", choices=UP_AXES, default="z", help="up axis used by alignment [%(default)s]")
    c.add_argument("-o", "--output", help="output path (ignored if using inplace conversion)")
    c.add_argument("-j", "--jobs", type=int, help="number of files converted at the same time")
    c.set_defaults(fn=cmd_convert)

    s = sub.add_parser("summary", help="Print info about an OBJ file")
    s.add_argument("obj")
    s.set_defaults(fn=cmd_summary)

    r = sub.add_parser("verify-roundtrip", help="Convert with an identity transform twice and compare")
    r.add_argument("obj")
    r.set_defaults(fn=cmd_verify_roundtrip)

    return p

def _print_error(ex: BaseException, prefix: str = "") -> None:
    console.print(prefix + escape(str(ex)), soft_wrap=True)
    cause = ex.__cause__
    if cause is not None:
        console.print("\t" + escape(str(cause)), soft_wrap=True)

def write_error(ex: BaseException) -> None:
    _print_error(ex)
    console.print(f"\nTry `{PROG} --help' for more information.")

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(False)
    try:
        return int(args.fn(args))
    except ObjError as ex:
        write_error(ex)
        return 1

if __name__ == "__main__":
    raise SystemExit(main())
