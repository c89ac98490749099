#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Open named inputs as text streams.

``-`` names standard input. Compressed inputs (gzip, bzip2, xz) are
detected from their magic bytes and decompressed on the fly, so the engine
always sees decoded text lines.
"""

from __future__ import annotations

import bz2
import gzip
import io
import logging
import lzma
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterable, Iterator

from mlgrep.constants import (
    BZIP2_MAGIC,
    DEFAULT_ENCODING,
    DEFAULT_ENCODING_ERRORS,
    GZIP_MAGIC,
    STDIN_NAME,
    XZ_MAGIC,
)
from mlgrep.exceptions import DecompressionError, FileAccessError
from mlgrep.exceptions import FileNotFoundError as InputNotFoundError

logger = logging.getLogger(__name__)

_MAGIC_LENGTH = max(len(GZIP_MAGIC), len(BZIP2_MAGIC), len(XZ_MAGIC))


def detect_compression(head: bytes) -> str | None:
    """Return ``"gzip"``, ``"bzip2"`` or ``"xz"`` for compressed data, else None."""
    if head.startswith(GZIP_MAGIC):
        return "gzip"
    if head.startswith(BZIP2_MAGIC):
        return "bzip2"
    if head.startswith(XZ_MAGIC):
        return "xz"
    return None


def _peek(raw: IO[bytes]) -> bytes:
    peek = getattr(raw, "peek", None)
    if callable(peek):
        return bytes(peek(_MAGIC_LENGTH)[:_MAGIC_LENGTH])
    return b""


def _decompressing(raw: IO[bytes], compression: str | None) -> IO[bytes]:
    if compression == "gzip":
        return gzip.GzipFile(fileobj=raw, mode="rb")  # type: ignore[return-value]
    if compression == "bzip2":
        return bz2.BZ2File(raw, mode="rb")  # type: ignore[return-value]
    if compression == "xz":
        return lzma.LZMAFile(raw, mode="rb")  # type: ignore[return-value]
    return raw


class _CompressedLines:
    """Iterate a decompressed text stream, reporting corrupt data as ``DecompressionError``."""

    def __init__(self, text: IO[str], name: str) -> None:
        self._text = text
        self._name = name

    def __iter__(self) -> Iterator[str]:
        try:
            yield from self._text
        except (OSError, EOFError, lzma.LZMAError) as exc:
            raise DecompressionError(self._name, original_error=exc) from exc


def wrap_binary(
    raw: IO[bytes],
    name: str,
    *,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ENCODING_ERRORS,
) -> tuple[IO[str], bool]:
    """Wrap a binary stream as text, decompressing it when needed.

    Returns
    -------
    tuple[IO[str], bool]
        The text stream and whether it is decompressed

    """
    compression = detect_compression(_peek(raw))
    if compression:
        logger.debug("%s: reading %s-compressed input", name, compression)
    binary = _decompressing(raw, compression)
    text = io.TextIOWrapper(binary, encoding=encoding, errors=errors, newline=None)  # type: ignore[arg-type]
    return text, compression is not None


@contextmanager
def open_source(
    name: str,
    *,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ENCODING_ERRORS,
) -> Iterator[Iterable[str]]:
    """Open a named input for line iteration.

    Parameters
    ----------
    name : str
        A file path, or ``-`` for standard input
    encoding : str, default "utf-8"
        Text encoding of the input
    errors : str, default "replace"
        Decoding error policy

    Yields
    ------
    Iterable[str]
        Text lines of the (decompressed) input

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    FileAccessError
        If the file cannot be opened (permissions, directory)
    DecompressionError
        While iterating, if compressed data is corrupt

    """
    if name == STDIN_NAME:
        buffer = getattr(sys.stdin, "buffer", None)
        if buffer is None:
            yield sys.stdin
            return
        text, compressed = wrap_binary(buffer, "<stdin>", encoding=encoding, errors=errors)
        try:
            yield _CompressedLines(text, "<stdin>") if compressed else text
        finally:
            text.detach()
        return

    path = Path(name)
    try:
        raw = open(path, "rb")
    except FileNotFoundError as exc:
        raise InputNotFoundError(name, original_error=exc) from exc
    except (IsADirectoryError, PermissionError) as exc:
        raise FileAccessError(name, original_error=exc) from exc
    except OSError as exc:
        raise FileAccessError(name, message=f"Cannot open {name}: {exc.strerror or exc}", original_error=exc) from exc

    with raw:
        text, compressed = wrap_binary(raw, name, encoding=encoding, errors=errors)
        with text:
            yield _CompressedLines(text, name) if compressed else text
