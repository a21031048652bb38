"""
Главный класс для сжатия и разжатия одного файла, строки или stdin.
"""

import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import Optional, BinaryIO, TextIO

from lz77_compressor import (
    LZ77Compressor, LZ77Config, TokenEncoder, CompressionStats, DEFAULT_CONFIG,
)
from format_lz77 import ContainerFormat


def _output_mode(path: str) -> int:
    if os.path.exists(path):
        return stat.S_IMODE(os.stat(path).st_mode)

    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class Archiver:
    def __init__(self, config: Optional[LZ77Config] = None,
                 use_header: bool = False,
                 verbose: bool = False,
                 stdin: Optional[BinaryIO] = None,
                 stdout: Optional[BinaryIO] = None,
                 log_file: Optional[TextIO] = None):
        self.config = config or DEFAULT_CONFIG
        self.use_header = use_header
        self.verbose = verbose
        self.compressor = LZ77Compressor(config=self.config)
        self._stdin = stdin
        self._stdout = stdout
        self._log_file = log_file

    @property
    def log_file(self) -> TextIO:
        # stdout may carry the payload, so messages always go to stderr
        return self._log_file or sys.stderr

    def _log(self, message: str, end: str = "\n"):
        print(message, end=end, file=self.log_file, flush=True)

    def read_input(self, path: Optional[str] = None, text: Optional[str] = None) -> bytes:
        if path is not None and text is not None:
            raise ValueError("cannot read from both a file and a string")

        if path is not None:
            with open(path, 'rb') as f:
                return f.read()

        if text is not None:
            return text.encode('utf-8')

        stdin = self._stdin or sys.stdin.buffer
        return stdin.read()

    def write_output(self, data: bytes, path: Optional[str] = None):
        if path is None:
            stdout = self._stdout or sys.stdout.buffer
            stdout.write(data)
            stdout.flush()
            return

        output_dir = os.path.dirname(os.path.abspath(path))
        fd, temp_path = tempfile.mkstemp(prefix='.lz77-', dir=output_dir)

        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
            # mkstemp creates the file as 0600
            os.chmod(temp_path, _output_mode(path))
            os.replace(temp_path, path)
        except BaseException:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

    def compress_bytes(self, data: bytes) -> bytes:
        tokens = self.compressor.compress(data)
        encoded = TokenEncoder.encode_tokens(tokens)

        if self.verbose:
            CompressionStats(tokens, len(data)).print_stats(self.log_file)

        if self.use_header:
            return ContainerFormat.wrap(self.config, encoded)
        return encoded

    def decompress_bytes(self, data: bytes) -> bytes:
        if ContainerFormat.has_header(data):
            tokens = ContainerFormat.read_tokens(data)
        else:
            tokens = TokenEncoder.decode_tokens(data)

        decompressed = self.compressor.decompress(tokens)

        if self.verbose:
            CompressionStats(tokens, len(decompressed)).print_stats(self.log_file)

        return decompressed

    def run(self, decompress: bool = False,
            path: Optional[str] = None,
            text: Optional[str] = None,
            output: Optional[str] = None) -> bytes:
        data = self.read_input(path, text)
        name = Path(path).name if path is not None else ('<string>' if text is not None else '<stdin>')

        if decompress:
            result = self.decompress_bytes(data)
        else:
            result = self.compress_bytes(data)

        self.write_output(result, output)

        if output is not None:
            action = "Decompressed" if decompress else "Compressed"
            ratio = (len(result) / len(data) * 100) if len(data) > 0 else 0
            self._log(f"{action} {name}: {len(data)} -> {len(result)} bytes ({ratio:.1f}%)")

        return result

    def compress_file(self, input_path: str, output_path: str) -> bytes:
        return self.run(decompress=False, path=input_path, output=output_path)

    def decompress_file(self, input_path: str, output_path: str) -> bytes:
        return self.run(decompress=True, path=input_path, output=output_path)
