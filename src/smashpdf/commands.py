# commands.py
"""The callable PDF operations.

Each command validates its arguments before any external process is started,
runs Ghostscript or qpdf, and returns a small result record. Failures raise a
SmashError subclass whose message is meant to be shown to the user as-is.
"""
import logging
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .backend import (find_ghostscript, find_qpdf, validate_pdf, generate_output_path,
                      get_file_size, savings_percent, get_pdf_info as _get_pdf_info)
from .constants import (InvalidInputError, ProcessingError, PRESETS, DEFAULT_PRESET,
                        SPLIT_RANGE, SPLIT_EXTRACT, SPLIT_EVERY_N, SPLIT_MODES,
                        SUFFIX_COMPRESSED, SUFFIX_PROTECTED, SUFFIX_UNLOCKED, SUFFIX_OPTIMIZED,
                        MERGED_PREFIX, THUMBNAIL_DPI)
from .ghostscript import Ghostscript
from .qpdf import Qpdf


@dataclass
class CompressionResult:
    output_path: str
    original_size: int
    compressed_size: int
    savings_percent: float

    def to_dict(self):
        return asdict(self)


@dataclass
class FileResult:
    output_path: str
    size: int

    def to_dict(self):
        return asdict(self)


@dataclass
class SplitResult:
    output_paths: List[str] = field(default_factory=list)
    total_pages: int = 0

    def to_dict(self):
        return asdict(self)


@dataclass
class SplitOptions:
    mode: str
    range_start: Optional[int] = None
    range_end: Optional[int] = None
    pages: Optional[List[int]] = None
    every_n: Optional[int] = None


def _resolve_output(input_path, output_path, suffix):
    output = str(output_path) if output_path else generate_output_path(input_path, suffix)
    if Path(output).resolve() == Path(input_path).resolve():
        raise InvalidInputError(f"Output file would overwrite the input: {output}")
    return output


def _input_size(path):
    try:
        return get_file_size(path)
    except OSError as e:
        raise ProcessingError(f"Failed to read input file: {e}")


def _output_size(path):
    try:
        return get_file_size(path)
    except OSError as e:
        raise ProcessingError(f"Failed to read output file: {e}")


def compress_pdf(input_path, output_path=None, preset=DEFAULT_PRESET, gs_path=None) -> CompressionResult:
    validate_pdf(input_path)
    if preset not in PRESETS:
        raise InvalidInputError(f"Invalid preset '{preset}'. Valid options: {', '.join(PRESETS)}")

    output = _resolve_output(input_path, output_path, SUFFIX_COMPRESSED)
    original_size = _input_size(input_path)

    Ghostscript(gs_path).compress(input_path, output, preset)

    compressed_size = _output_size(output)
    saved = savings_percent(original_size, compressed_size)
    logging.info(f"Compressed {input_path} ({original_size} -> {compressed_size} bytes, {saved:.1f}%)")
    return CompressionResult(output, original_size, compressed_size, saved)


def merge_pdfs(input_paths, output_path=None, gs_path=None) -> FileResult:
    input_paths = [str(p) for p in input_paths]
    if len(input_paths) < 2:
        raise InvalidInputError("At least 2 PDF files are required for merging")
    for path in input_paths:
        validate_pdf(path)

    if output_path:
        output = str(output_path)
        output_dir = Path(output).parent
        if str(output_dir) and not output_dir.exists():
            raise InvalidInputError(f"Output directory does not exist: {output_dir}")
    else:
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        output = str(Path(input_paths[0]).parent / f"{MERGED_PREFIX}{stamp}.pdf")

    if any(Path(output).resolve() == Path(p).resolve() for p in input_paths):
        raise InvalidInputError(f"Output file would overwrite an input: {output}")

    Ghostscript(gs_path).merge(input_paths, output)
    return FileResult(output, _output_size(output))


def _extract_name(pages):
    if len(pages) <= 3:
        return "-".join(str(p) for p in pages)
    return f"{len(pages)}-pages"


def split_pdf(input_path, output_dir, options: SplitOptions, gs_path=None) -> SplitResult:
    validate_pdf(input_path)
    if options.mode not in SPLIT_MODES:
        raise InvalidInputError(f"Invalid split mode '{options.mode}'. Valid options: {', '.join(SPLIT_MODES)}")
    if options.mode == SPLIT_EXTRACT:
        if options.pages is None:
            raise InvalidInputError("Pages list required for extract mode")
        if not options.pages:
            raise InvalidInputError("No pages specified")
    if options.mode == SPLIT_EVERY_N and options.every_n is not None and options.every_n < 1:
        raise InvalidInputError("every_n must be at least 1")

    out_dir = Path(output_dir)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProcessingError(f"Failed to create output directory: {e}")

    gs = Ghostscript(gs_path)
    total_pages = gs.page_count(input_path)
    stem = Path(input_path).stem
    output_paths = []

    if options.mode == SPLIT_RANGE:
        start = options.range_start if options.range_start is not None else 1
        end = options.range_end if options.range_end is not None else total_pages
        if start > end or start < 1 or end > total_pages:
            raise InvalidInputError(f"Invalid page range {start}-{end}. PDF has {total_pages} pages.")
        output = str(out_dir / f"{stem}_pages_{start}-{end}.pdf")
        gs.extract_pages(input_path, output, start, end)
        output_paths.append(output)

    elif options.mode == SPLIT_EXTRACT:
        pages = list(options.pages)
        for page in pages:
            if page < 1 or page > total_pages:
                raise InvalidInputError(f"Invalid page number {page}. PDF has {total_pages} pages.")
        output = str(out_dir / f"{stem}_{_extract_name(pages)}.pdf")
        gs.extract_page_list(input_path, output, pages)
        output_paths.append(output)

    else:
        n = options.every_n if options.every_n is not None else 1
        part, start = 1, 1
        while start <= total_pages:
            end = min(start + n - 1, total_pages)
            output = str(out_dir / f"{stem}_part{part}.pdf")
            gs.extract_pages(input_path, output, start, end)
            output_paths.append(output)
            start = end + 1
            part += 1

    return SplitResult(output_paths, total_pages)


def get_pdf_page_count(input_path, gs_path=None) -> int:
    validate_pdf(input_path)
    return Ghostscript(gs_path).page_count(input_path)


def protect_pdf(input_path, user_password, owner_password=None, output_path=None, qpdf_path=None) -> FileResult:
    validate_pdf(input_path)
    if not user_password:
        raise InvalidInputError("Password cannot be empty")

    output = _resolve_output(input_path, output_path, SUFFIX_PROTECTED)
    owner = owner_password or user_password
    Qpdf(qpdf_path).encrypt(input_path, output, user_password, owner)
    return FileResult(output, _output_size(output))


def unlock_pdf(input_path, password, output_path=None, qpdf_path=None) -> FileResult:
    validate_pdf(input_path)
    output = _resolve_output(input_path, output_path, SUFFIX_UNLOCKED)
    Qpdf(qpdf_path).decrypt(input_path, output, password)
    return FileResult(output, _output_size(output))


def optimize_pdf(input_path, output_path=None, qpdf_path=None) -> CompressionResult:
    validate_pdf(input_path)
    output = _resolve_output(input_path, output_path, SUFFIX_OPTIMIZED)
    original_size = _input_size(input_path)
    Qpdf(qpdf_path).optimize(input_path, output)
    new_size = _output_size(output)
    return CompressionResult(output, original_size, new_size, savings_percent(original_size, new_size))


def is_pdf_encrypted(input_path, qpdf_path=None) -> bool:
    validate_pdf(input_path)
    return Qpdf(qpdf_path).is_encrypted(input_path)


def render_thumbnail(input_path, output_path=None, dpi=THUMBNAIL_DPI, gs_path=None):
    validate_pdf(input_path)
    if dpi < 1:
        raise InvalidInputError("DPI must be a positive number")
    image = Ghostscript(gs_path).render_page(input_path, dpi=dpi)
    if output_path is None:
        return image
    image.save(output_path, "PNG")
    return str(output_path)


def get_pdf_info(input_path):
    return _get_pdf_info(input_path)


def check_ghostscript(gs_path=None) -> str:
    return find_ghostscript(gs_path)


def get_ghostscript_version(gs_path=None) -> str:
    return Ghostscript(gs_path).version()


def check_qpdf(qpdf_path=None) -> str:
    return find_qpdf(qpdf_path)


def get_qpdf_version(qpdf_path=None) -> str:
    return Qpdf(qpdf_path).version()
