# backend.py
import sys
import subprocess
import logging
import shutil
from pathlib import Path

import pikepdf

from .constants import (GhostscriptNotFound, QpdfNotFound, ProcessingError, InvalidInputError,
                        GS_COMMANDS, QPDF_COMMANDS, GS_CANDIDATES, QPDF_CANDIDATES,
                        GS_INSTALL_HINTS, QPDF_INSTALL_HINTS)

def resource_path(relative_path):
    try:
        base_path = Path(sys._MEIPASS)
    except AttributeError:
        base_path = Path(__file__).parent
    return base_path / relative_path

def platform_key(platform=None):
    platform = platform or sys.platform
    if platform == "win32" or platform == "darwin":
        return platform
    if platform.startswith("linux"):
        return "linux"
    return platform

def install_hint(hints, platform=None):
    return hints.get(platform_key(platform), hints['default'])

def find_executable(commands, candidates, platform=None, override=None):
    """Locate a binary: explicit override, PATH, bundled bin/, then known install paths.

    Returns the path as a string, or None when nothing matches.
    """
    key = platform_key(platform)

    if override:
        if Path(override).exists():
            logging.info(f"Using configured executable: {override}")
            return str(override)
        logging.warning(f"Configured executable not found, falling back to discovery: {override}")

    names = commands.get(key, commands['default'])
    for name in names:
        found = shutil.which(name)
        if found:
            logging.info(f"Found {name} on PATH: {found}")
            return found

    for name in names:
        exe_name = f"{name}.exe" if key == "win32" else name
        local_bin_path = resource_path('bin') / exe_name
        if local_bin_path.exists():
            logging.info(f"Using bundled executable: {local_bin_path}")
            return str(local_bin_path)

    for candidate in candidates.get(key, []):
        logging.debug(f"Checking for executable at: {candidate}")
        if Path(candidate).exists():
            logging.info(f"Found executable at: {candidate}")
            return candidate

    logging.error(f"None of {names} found in any known location")
    return None

def find_ghostscript(override=None, platform=None):
    path = find_executable(GS_COMMANDS, GS_CANDIDATES, platform=platform, override=override)
    if path is None:
        raise GhostscriptNotFound(f"Ghostscript not found. {install_hint(GS_INSTALL_HINTS, platform)}")
    return path

def find_qpdf(override=None, platform=None):
    path = find_executable(QPDF_COMMANDS, QPDF_CANDIDATES, platform=platform, override=override)
    if path is None:
        raise QpdfNotFound(f"qpdf not found. {install_hint(QPDF_INSTALL_HINTS, platform)}")
    return path

def run_command(command, tool="command"):
    """Run an external tool to completion and return the CompletedProcess.

    A non-zero exit status is left for the caller to interpret; only a failure
    to launch the binary raises.
    """
    logging.info(f"Executing command: {command}")
    try:
        kwargs = { 'stdin': subprocess.DEVNULL, 'check': False, 'capture_output': True, 'text': True, 'encoding': 'utf-8', 'errors': 'ignore' }
        if sys.platform == "win32": kwargs['creationflags'] = subprocess.CREATE_NO_WINDOW
        result = subprocess.run(command, **kwargs)
    except OSError as e:
        logging.error(f"Failed to run {tool}: {e}")
        raise ProcessingError(f"Failed to run {tool}: {e}")

    if result.stderr:
        stderr_text = result.stderr.strip()
        if "wmic.exe" in stderr_text and "Failed to retrieve time" in stderr_text:
            pass
        elif "warning" not in stderr_text.lower():
            logging.warning(f"{tool} stderr: {stderr_text}")
    if result.returncode != 0:
        logging.error(f"{tool} exited with status {result.returncode}")
    return result

def validate_pdf(path):
    p = Path(path)
    if not p.exists():
        raise InvalidInputError(f"File not found: {p}")
    if p.suffix.lower() != ".pdf":
        raise InvalidInputError("File is not a PDF")

def generate_output_path(input_path, suffix):
    p = Path(input_path)
    return str(p.parent / f"{p.stem}{suffix}.pdf")

def get_file_size(path):
    return Path(path).stat().st_size

def savings_percent(original_size, new_size):
    if original_size <= 0:
        return 0.0
    return (original_size - new_size) / original_size * 100

def format_size(size_bytes):
    if abs(size_bytes) > 1024 * 1024:
        return f"{size_bytes / (1024*1024):.2f} MB"
    elif abs(size_bytes) > 1024:
        return f"{size_bytes / 1024:.2f} KB"
    return f"{size_bytes} B"

def get_pdf_info(file_path):
    p = Path(file_path)
    info = {'name': p.name, 'pages': 'N/A', 'size': 'N/A', 'size_bytes': 0, 'encrypted': False}
    try:
        info['size_bytes'] = p.stat().st_size
        info['size'] = format_size(info['size_bytes'])
        with pikepdf.open(p) as pdf:
            info['pages'] = len(pdf.pages)
            info['encrypted'] = pdf.is_encrypted
    except FileNotFoundError:
        pass
    except pikepdf.PasswordError:
        info['encrypted'] = True
    except Exception as e:
        logging.warning(f"Could not get metadata for {file_path}: {e}")
    return info
