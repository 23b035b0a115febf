# qpdf.py
from .backend import run_command, find_qpdf
from .constants import ProcessingError, ENCRYPTION_KEY_LENGTH, QPDF_ENCRYPTED, QPDF_NOT_ENCRYPTED

class Qpdf:
    def __init__(self, qpdf_path=None):
        self.qpdf_path = qpdf_path or find_qpdf()

    def _run(self, args):
        return run_command([self.qpdf_path, *args], tool="qpdf")

    def version(self):
        result = self._run(["--version"])
        if result.returncode != 0 or not result.stdout.strip():
            raise ProcessingError("Failed to get qpdf version")
        first_line = result.stdout.strip().splitlines()[0].strip()
        prefix = "qpdf version "
        return first_line[len(prefix):] if first_line.startswith(prefix) else first_line

    def encrypt(self, input_path, output_path, user_password, owner_password):
        result = self._run([
            "--encrypt",
            user_password,
            owner_password,
            str(ENCRYPTION_KEY_LENGTH),
            "--",
            str(input_path),
            str(output_path),
        ])
        if result.returncode != 0:
            raise ProcessingError(f"qpdf encryption failed with exit code: {result.returncode}")

    def decrypt(self, input_path, output_path, password):
        result = self._run(["--decrypt", f"--password={password}", str(input_path), str(output_path)])
        if result.returncode != 0:
            raise ProcessingError("Failed to decrypt PDF. Check if the password is correct.")

    def optimize(self, input_path, output_path):
        """Linearize for fast web view and regenerate compressed object streams."""
        result = self._run([
            "--linearize",
            "--compress-streams=y",
            "--object-streams=generate",
            str(input_path),
            str(output_path),
        ])
        if result.returncode != 0:
            raise ProcessingError(f"qpdf optimization failed with exit code: {result.returncode}")

    def is_encrypted(self, input_path):
        result = self._run(["--is-encrypted", str(input_path)])
        if result.returncode == QPDF_ENCRYPTED:
            return True
        if result.returncode == QPDF_NOT_ENCRYPTED:
            return False
        raise ProcessingError(f"qpdf encryption check failed with exit code: {result.returncode}")
