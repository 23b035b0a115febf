"""
smashpdf - compress, merge, split and password-protect PDFs by driving Ghostscript and qpdf.
"""

from .constants import APP_VERSION as __version__
from .commands import (compress_pdf, merge_pdfs, split_pdf, get_pdf_page_count, protect_pdf,
                       unlock_pdf, optimize_pdf, is_pdf_encrypted, render_thumbnail, get_pdf_info,
                       check_ghostscript, get_ghostscript_version, check_qpdf, get_qpdf_version,
                       CompressionResult, FileResult, SplitResult, SplitOptions)

__all__ = [
    "compress_pdf", "merge_pdfs", "split_pdf", "get_pdf_page_count", "protect_pdf",
    "unlock_pdf", "optimize_pdf", "is_pdf_encrypted", "render_thumbnail", "get_pdf_info",
    "check_ghostscript", "get_ghostscript_version", "check_qpdf", "get_qpdf_version",
    "CompressionResult", "FileResult", "SplitResult", "SplitOptions",
]
