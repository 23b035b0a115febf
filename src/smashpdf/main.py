# main.py
import sys
import json
import logging
import argparse

from . import commands
from .backend import format_size, generate_output_path
from .constants import APP_NAME, APP_VERSION, PRESETS, PRESET_INFO, SPLIT_MODES, THUMBNAIL_DPI, LOG_FORMAT, SmashError
from .settings import load_settings, configure_logging

def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format=LOG_FORMAT,
        encoding='utf-8'
    )

def _verbose_requested(argv):
    # Logging has to be set up before the settings load can warn.
    pre = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    pre.add_argument("-v", "--verbose", action="store_true")
    known, _ = pre.parse_known_args(argv)
    return known.verbose

def _page_list(value):
    try:
        return [int(p) for p in value.split(',') if p.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a comma-separated list of page numbers: {value}")

def build_parser(settings):
    preset_help = ", ".join(f"{name} ({info['desc']})" for name, info in PRESET_INFO.items())
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Compress, merge, split and password-protect PDFs with Ghostscript and qpdf.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log external commands and tool output")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compress", help="Compress a PDF with a Ghostscript quality preset")
    p.add_argument("input", help="Input PDF path")
    p.add_argument("--output", "-o", help="Output PDF path (default: <name>-compressed.pdf)")
    p.add_argument("--preset", "-p", default=settings.compress.preset, choices=PRESETS, help=preset_help)

    p = sub.add_parser("merge", help="Merge two or more PDFs in order")
    p.add_argument("inputs", nargs="+", help="Input PDF paths (two or more)")
    p.add_argument("--output", "-o", help="Output PDF path (default: merged-<timestamp>.pdf)")

    p = sub.add_parser("split", help="Split a PDF by range, page list or every N pages")
    p.add_argument("input", help="Input PDF path")
    p.add_argument("--output-dir", "-d", default=".", help="Directory for the output files")
    p.add_argument("--mode", "-m", default=settings.split.mode, choices=SPLIT_MODES)
    p.add_argument("--start", type=int, help="First page for range mode")
    p.add_argument("--end", type=int, help="Last page for range mode")
    p.add_argument("--pages", type=_page_list, help="Comma-separated pages for extract mode, e.g. 1,3,5")
    p.add_argument("--every", "-n", type=int, default=settings.split.every_n, help="Pages per file for every-n mode")

    p = sub.add_parser("pages", help="Print the page count of a PDF")
    p.add_argument("input", help="Input PDF path")

    p = sub.add_parser("protect", help="Encrypt a PDF with AES-256")
    p.add_argument("input", help="Input PDF path")
    p.add_argument("--password", required=True, help="Password required to open the PDF")
    p.add_argument("--owner-password", help="Owner password (default: same as --password)")
    p.add_argument("--output", "-o", help="Output PDF path (default: <name>-protected.pdf)")

    p = sub.add_parser("unlock", help="Remove password protection from a PDF")
    p.add_argument("input", help="Input PDF path")
    p.add_argument("--password", required=True, help="Password of the PDF")
    p.add_argument("--output", "-o", help="Output PDF path (default: <name>-unlocked.pdf)")

    p = sub.add_parser("optimize", help="Linearize a PDF for fast web view")
    p.add_argument("input", help="Input PDF path")
    p.add_argument("--output", "-o", help="Output PDF path (default: <name>-optimized.pdf)")

    p = sub.add_parser("encrypted", help="Report whether a PDF is encrypted")
    p.add_argument("input", help="Input PDF path")

    p = sub.add_parser("thumbnail", help="Render the first page to a PNG")
    p.add_argument("input", help="Input PDF path")
    p.add_argument("--output", "-o", required=True, help="Output PNG path")
    p.add_argument("--dpi", type=int, default=THUMBNAIL_DPI)

    p = sub.add_parser("info", help="Show name, page count, size and encryption of PDFs")
    p.add_argument("inputs", nargs="+", help="Input PDF paths")

    sub.add_parser("check", help="Show where Ghostscript and qpdf were found and their versions")
    return parser

def _with_suffix(input_path, output, suffix):
    if output: return output
    return generate_output_path(input_path, suffix)

def run(args, settings):
    gs_path = settings.general.gs_path or None
    qpdf_path = settings.general.qpdf_path or None

    if args.command == "compress":
        output = _with_suffix(args.input, args.output, settings.compress.suffix)
        result = commands.compress_pdf(args.input, output, args.preset, gs_path=gs_path)
        text = (f"{result.output_path}: {format_size(result.original_size)} -> "
                f"{format_size(result.compressed_size)} ({result.savings_percent:.1f}% saved)")
        return result.to_dict(), text
    if args.command == "merge":
        result = commands.merge_pdfs(args.inputs, args.output, gs_path=gs_path)
        return result.to_dict(), f"{result.output_path} ({format_size(result.size)})"
    if args.command == "split":
        options = commands.SplitOptions(mode=args.mode, range_start=args.start, range_end=args.end,
                                        pages=args.pages, every_n=args.every)
        result = commands.split_pdf(args.input, args.output_dir, options, gs_path=gs_path)
        return result.to_dict(), "\n".join(result.output_paths)
    if args.command == "pages":
        count = commands.get_pdf_page_count(args.input, gs_path=gs_path)
        return {"input_path": args.input, "pages": count}, str(count)
    if args.command == "protect":
        output = _with_suffix(args.input, args.output, settings.password.protect_suffix)
        result = commands.protect_pdf(args.input, args.password, args.owner_password, output, qpdf_path=qpdf_path)
        return result.to_dict(), result.output_path
    if args.command == "unlock":
        output = _with_suffix(args.input, args.output, settings.password.unlock_suffix)
        result = commands.unlock_pdf(args.input, args.password, output, qpdf_path=qpdf_path)
        return result.to_dict(), result.output_path
    if args.command == "optimize":
        result = commands.optimize_pdf(args.input, args.output, qpdf_path=qpdf_path)
        return result.to_dict(), result.output_path
    if args.command == "encrypted":
        encrypted = commands.is_pdf_encrypted(args.input, qpdf_path=qpdf_path)
        return {"input_path": args.input, "encrypted": encrypted}, "encrypted" if encrypted else "not encrypted"
    if args.command == "thumbnail":
        output = commands.render_thumbnail(args.input, args.output, dpi=args.dpi, gs_path=gs_path)
        return {"output_path": output}, output
    if args.command == "info":
        infos = [commands.get_pdf_info(p) for p in args.inputs]
        lines = [f"{i['name']}: {i['pages']} pages, {i['size']}{', encrypted' if i['encrypted'] else ''}" for i in infos]
        return infos, "\n".join(lines)
    if args.command == "check":
        report, lines = {}, []
        tools = (("ghostscript", gs_path, commands.check_ghostscript, commands.get_ghostscript_version),
                 ("qpdf", qpdf_path, commands.check_qpdf, commands.get_qpdf_version))
        for name, override, check, version in tools:
            try:
                path = check(override)
            except SmashError as e:
                report[name] = {"available": False, "error": str(e)}
                lines.append(f"{name}: {e}")
                continue
            entry = {"available": True, "path": path, "version": None}
            try:
                entry["version"] = version(path)
            except SmashError as e:
                logging.warning(f"Could not read {name} version: {e}")
            report[name] = entry
            lines.append(f"{name}: {path} (version {entry['version'] or 'unknown'})")
        return report, "\n".join(lines)
    raise SmashError(f"Unknown command: {args.command}")

def main(argv=None):
    setup_logging(_verbose_requested(argv))
    settings = load_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    configure_logging(settings)

    try:
        data, text = run(args, settings)
    except SmashError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.critical("An unhandled exception occurred.", exc_info=True)
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        return 1

    print(json.dumps(data, indent=2) if args.json else text)
    return 0

if __name__ == "__main__":
    sys.exit(main())
