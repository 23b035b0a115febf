# constants.py
APP_NAME = "smashpdf"
APP_VERSION = "0.2.0"

class SmashError(Exception): pass
class ToolNotFound(SmashError): pass
class GhostscriptNotFound(ToolNotFound): pass
class QpdfNotFound(ToolNotFound): pass
class ProcessingError(SmashError): pass
class InvalidInputError(SmashError): pass

PRESET_SCREEN = "screen"
PRESET_EBOOK = "ebook"
PRESET_PRINTER = "printer"
PRESET_PREPRESS = "prepress"
PRESETS = [PRESET_SCREEN, PRESET_EBOOK, PRESET_PRINTER, PRESET_PREPRESS]
DEFAULT_PRESET = PRESET_EBOOK

PRESET_INFO = {
    PRESET_SCREEN: {"label": "Screen", "desc": "Smallest (72 DPI)", "dpi": 72},
    PRESET_EBOOK: {"label": "Ebook", "desc": "Balanced (150 DPI)", "dpi": 150},
    PRESET_PRINTER: {"label": "Printer", "desc": "High quality (300 DPI)", "dpi": 300},
    PRESET_PREPRESS: {"label": "Prepress", "desc": "Maximum quality", "dpi": 300},
}

SPLIT_RANGE = "range"
SPLIT_EXTRACT = "extract"
SPLIT_EVERY_N = "every-n"
SPLIT_MODES = [SPLIT_RANGE, SPLIT_EXTRACT, SPLIT_EVERY_N]

SUFFIX_COMPRESSED = "-compressed"
SUFFIX_PROTECTED = "-protected"
SUFFIX_UNLOCKED = "-unlocked"
SUFFIX_OPTIMIZED = "-optimized"
MERGED_PREFIX = "merged-"

# qpdf --encrypt key length (AES-256)
ENCRYPTION_KEY_LENGTH = 256

# qpdf --is-encrypted exit statuses
QPDF_ENCRYPTED = 0
QPDF_NOT_ENCRYPTED = 2

THUMBNAIL_DPI = 72

GS_COMMANDS = {
    'win32': ["gswin64c", "gswin32c", "gs"],
    'default': ["gs"],
}
QPDF_COMMANDS = {
    'win32': ["qpdf"],
    'default': ["qpdf"],
}

GS_CANDIDATES = {
    'win32': [
        r"C:\Program Files\gs\gs10.05.1\bin\gswin64c.exe",
        r"C:\Program Files\gs\gs10.04.0\bin\gswin64c.exe",
        r"C:\Program Files\gs\gs10.03.0\bin\gswin64c.exe",
        r"C:\Program Files\gs\gs10.02.0\bin\gswin64c.exe",
        r"C:\Program Files\gs\gs10.01.0\bin\gswin64c.exe",
        r"C:\Program Files\gs\gs10.00.0\bin\gswin64c.exe",
        r"C:\Program Files\gs\gs9.56.1\bin\gswin64c.exe",
        r"C:\Program Files (x86)\gs\gs10.04.0\bin\gswin32c.exe",
    ],
    'darwin': [
        "/opt/homebrew/bin/gs",
        "/usr/local/bin/gs",
        "/opt/local/bin/gs",
    ],
    'linux': [
        "/usr/bin/gs",
        "/usr/local/bin/gs",
    ],
}
QPDF_CANDIDATES = {
    'win32': [
        r"C:\Program Files\qpdf\bin\qpdf.exe",
        r"C:\Program Files (x86)\qpdf\bin\qpdf.exe",
    ],
    'darwin': [
        "/opt/homebrew/bin/qpdf",
        "/usr/local/bin/qpdf",
        "/opt/local/bin/qpdf",
    ],
    'linux': [
        "/usr/bin/qpdf",
        "/usr/local/bin/qpdf",
    ],
}

GS_INSTALL_HINTS = {
    'darwin': "Install with: brew install ghostscript",
    'win32': "Download from: https://ghostscript.com/releases/gsdnld.html",
    'default': "Install with: sudo apt install ghostscript",
}
QPDF_INSTALL_HINTS = {
    'darwin': "Install with: brew install qpdf",
    'win32': "Download from: https://github.com/qpdf/qpdf/releases",
    'default': "Install with: sudo apt install qpdf",
}

LOG_FORMAT = '%(asctime)s - %(levelname)s - [%(module)s.%(funcName)s:%(lineno)d] - %(message)s'
