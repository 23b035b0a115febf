# ghostscript.py
import logging
import shutil
import tempfile
from io import BytesIO
from pathlib import Path

from PIL import Image

from .backend import run_command, find_ghostscript
from .constants import ProcessingError, THUMBNAIL_DPI

def _ps_string(path):
    return str(path).replace('\\', '/').replace('(', '\\(').replace(')', '\\)')

def _parse_count(stdout):
    text = stdout.strip()
    lines = text.splitlines()
    last = lines[-1].strip() if lines else text
    try:
        return int(last)
    except ValueError:
        raise ProcessingError(f"Failed to parse page count: {text}")

class Ghostscript:
    """Argument templates for the Ghostscript operations this app needs.

    Every method runs one blocking gs process (extract_page_list runs several)
    and raises ProcessingError on a non-zero exit status.
    """

    def __init__(self, gs_path=None):
        self.gs_path = gs_path or find_ghostscript()

    def _run(self, args):
        return run_command([self.gs_path, *args], tool="Ghostscript")

    def version(self):
        result = self._run(["--version"])
        if result.returncode != 0:
            raise ProcessingError("Failed to get Ghostscript version")
        return result.stdout.strip()

    def compress(self, input_path, output_path, preset):
        result = self._run([
            "-sDEVICE=pdfwrite",
            "-dCompatibilityLevel=1.4",
            f"-dPDFSETTINGS=/{preset}",
            "-dNOPAUSE",
            "-dQUIET",
            "-dBATCH",
            "-dDetectDuplicateImages=true",
            "-dCompressFonts=true",
            "-dSubsetFonts=true",
            f"-sOutputFile={output_path}",
            str(input_path),
        ])
        if result.returncode != 0:
            raise ProcessingError(f"Ghostscript compression failed with exit code: {result.returncode}")

    def merge(self, input_paths, output_path):
        args = ["-sDEVICE=pdfwrite", "-dNOPAUSE", "-dQUIET", "-dBATCH", f"-sOutputFile={output_path}"]
        args.extend(str(p) for p in input_paths)
        result = self._run(args)
        if result.returncode != 0:
            raise ProcessingError(f"Ghostscript merge failed with exit code: {result.returncode}")

    def page_count(self, input_path):
        ps_code = f"({_ps_string(input_path)}) (r) file runpdfbegin pdfpagecount = quit"
        result = self._run(["-q", "-dNODISPLAY", "-dNOSAFER", "-c", ps_code])
        if result.returncode == 0:
            return _parse_count(result.stdout)

        logging.info("Page count query failed, retrying without -dNOSAFER")
        result = self._run(["-q", "-dNODISPLAY", "-dBATCH", "-dNOPAUSE", "-c", ps_code])
        if result.returncode != 0:
            raise ProcessingError(f"Failed to get page count: {result.stderr.strip()}")
        return _parse_count(result.stdout)

    def extract_pages(self, input_path, output_path, start, end):
        result = self._run([
            "-sDEVICE=pdfwrite",
            "-dNOPAUSE",
            "-dQUIET",
            "-dBATCH",
            f"-dFirstPage={start}",
            f"-dLastPage={end}",
            f"-sOutputFile={output_path}",
            str(input_path),
        ])
        if result.returncode != 0:
            raise ProcessingError(f"Failed to extract pages {start}-{end}")

    def extract_page_list(self, input_path, output_path, pages):
        # gs has no page-list selector, so pull each page out and merge them back in order
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_files = []
            for i, page in enumerate(pages):
                temp_path = Path(temp_dir) / f"page_{i + 1}_{page}.pdf"
                self.extract_pages(input_path, temp_path, page, page)
                temp_files.append(temp_path)

            if len(temp_files) == 1:
                shutil.copy(temp_files[0], output_path)
            else:
                self.merge(temp_files, output_path)

    def render_page(self, input_path, dpi=THUMBNAIL_DPI, page=1):
        with tempfile.TemporaryDirectory() as temp_dir:
            image_path = Path(temp_dir) / "preview.png"
            result = self._run([
                "-sDEVICE=png16m",
                f"-r{dpi}",
                f"-dFirstPage={page}",
                f"-dLastPage={page}",
                "-dNOPAUSE",
                "-dBATCH",
                "-dSAFER",
                f"-sOutputFile={image_path}",
                str(input_path),
            ])
            if result.returncode != 0:
                raise ProcessingError(f"Ghostscript render failed with exit code: {result.returncode}")
            if not image_path.exists() or image_path.stat().st_size == 0:
                raise ProcessingError("Preview image was not generated or is empty.")
            image_data = image_path.read_bytes()
        return Image.open(BytesIO(image_data))
