"""Shared pytest fixtures for smashpdf tests."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image

FAKE_GS = "/opt/fake/bin/gs"
FAKE_QPDF = "/opt/fake/bin/qpdf"


class FakeTools:
    """Stands in for subprocess.run, recording every command line.

    By default each call succeeds and writes the output file the command
    names, so callers that stat their output keep working.
    """

    def __init__(self):
        self.calls = []
        self.returncodes = []
        self.stdout = ""
        self.stderr = ""
        self.output_bytes = b"%PDF-1.4\n" + b"0" * 100

    def __call__(self, command, **kwargs):
        self.calls.append(list(command))
        returncode = self.returncodes.pop(0) if self.returncodes else 0
        if returncode == 0:
            self._write_output(command)
        return subprocess.CompletedProcess(command, returncode, self.stdout, self.stderr)

    def _write_output(self, command):
        for arg in command:
            if arg.startswith("-sOutputFile="):
                out = Path(arg[len("-sOutputFile="):])
                if "-sDEVICE=png16m" in command:
                    Image.new("RGB", (8, 10), "white").save(out, "PNG")
                else:
                    out.write_bytes(self.output_bytes)
                return
        if command[0] == FAKE_QPDF and command[1] not in ("--version", "--is-encrypted"):
            Path(command[-1]).write_bytes(self.output_bytes)


@pytest.fixture
def fake_tools():
    """Patch subprocess.run inside the backend with a FakeTools recorder."""
    tools = FakeTools()
    with patch("smashpdf.backend.subprocess.run", side_effect=tools) as mock_run:
        tools.mock = mock_run
        yield tools


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    """A file that passes path validation; its contents are never parsed."""
    pdf_path = tmp_path / "sample.pdf"
    pdf_path.write_bytes(b"%PDF-1.4\n" + b"x" * 1000)
    return pdf_path


@pytest.fixture
def second_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "second.pdf"
    pdf_path.write_bytes(b"%PDF-1.4\n" + b"y" * 500)
    return pdf_path


@pytest.fixture
def real_pdf(tmp_path: Path) -> Path:
    """A genuine three-page PDF written with pikepdf."""
    import pikepdf

    pdf_path = tmp_path / "real.pdf"
    with pikepdf.Pdf.new() as pdf:
        for _ in range(3):
            pdf.add_blank_page(page_size=(612, 792))
        pdf.save(pdf_path)
    return pdf_path


@pytest.fixture
def encrypted_pdf(tmp_path: Path) -> Path:
    import pikepdf

    pdf_path = tmp_path / "locked.pdf"
    with pikepdf.Pdf.new() as pdf:
        pdf.add_blank_page(page_size=(612, 792))
        pdf.save(pdf_path, encryption=pikepdf.Encryption(user="secret", owner="owner", R=6))
    return pdf_path
