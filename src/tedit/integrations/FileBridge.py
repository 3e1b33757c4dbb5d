# tedit/integrations/FileBridge.py
"""FileBridge.py
====================
Disk persistence for the tedit editor.

The editor core never opens files itself; it goes through the two functions
below. A missing file reads as a single empty line. Any other read failure
raises `FileReadError`, and the caller substitutes an empty buffer. Writing
raises `OSError`, and the caller decides how to report the failure.

Encoding is detected with `chardet` on a sample of the file. The detected
encoding is returned with the lines so a save can write the file back the
way it was read.

File format: ``\\n``-delimited text, trailing whitespace of each line dropped
on load, exactly one ``\\n`` written after every line on save.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Union

import chardet

from tedit.core.TextBuffer import TextBuffer

PathLike = Union[str, "os.PathLike[str]"]

ENCODING = "utf-8"
CHARDET_SAMPLE_SIZE = 1024 * 20
CHARDET_MIN_CONFIDENCE = 0.75


class FileReadError(OSError):
    """Raised when an existing path cannot be read as text."""


def _encodings_to_try(raw_sample: bytes) -> list[tuple[str, str]]:
    """Ordered, de-duplicated ``(encoding, errors)`` attempts for *raw_sample*."""
    result = chardet.detect(raw_sample)
    encoding_guess: Optional[str] = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    logging.debug(
        "chardet: detected encoding '%s' with confidence %.2f", encoding_guess, confidence
    )
    if encoding_guess and encoding_guess.lower() == "ascii":
        encoding_guess = ENCODING

    ordered: list[tuple[Optional[str], str]] = []
    if encoding_guess and confidence >= CHARDET_MIN_CONFIDENCE:
        ordered.append((encoding_guess, "strict"))
    ordered.append((ENCODING, "strict"))
    if encoding_guess:
        ordered.append((encoding_guess, "replace"))
    ordered.append((ENCODING, "replace"))

    attempts: list[tuple[str, str]] = []
    for enc, errors in ordered:
        if enc and (enc, errors) not in attempts:
            attempts.append((enc, errors))
    return attempts


def read_lines(path: PathLike) -> tuple[list[str], str]:
    """Read *path* into buffer lines.

    Returns:
        tuple[list[str], str]: The normalized lines and the encoding used to
        decode them. A missing file gives ``([""], "utf-8")``.

    Raises:
        FileReadError: If the path exists but cannot be read or decoded.
    """
    try:
        with open(path, "rb") as f_binary:
            raw_data = f_binary.read()
    except FileNotFoundError:
        logging.info("read_lines: '%s' does not exist, starting empty.", path)
        return [""], ENCODING
    except OSError as e:
        logging.warning("read_lines: could not read '%s': %s", path, e)
        raise FileReadError(e.errno, e.strerror or str(e), str(path)) from e

    if not raw_data:
        logging.debug("read_lines: '%s' is empty.", path)
        return [""], ENCODING

    for enc_attempt, error_policy in _encodings_to_try(raw_data[:CHARDET_SAMPLE_SIZE]):
        try:
            text = raw_data.decode(enc_attempt, errors=error_policy)
        except (UnicodeDecodeError, LookupError) as e_decode:
            logging.debug(
                "read_lines: '%s' is not %s (errors=%s): %s",
                path, enc_attempt, error_policy, e_decode,
            )
            continue
        lines = list(TextBuffer.from_text(text).lines)
        logging.debug(
            "read_lines: loaded %d line(s) from '%s' as %s (errors=%s)",
            len(lines), path, enc_attempt, error_policy,
        )
        return lines, enc_attempt

    logging.warning("read_lines: could not decode '%s'", path)
    raise FileReadError(f"could not decode '{path}'")


def write_lines(path: PathLike, lines: Iterable[str], encoding: str = ENCODING) -> str:
    """Write *lines* to *path*, each followed by ``\\n``.

    Text that *encoding* cannot represent is written as UTF-8 instead.

    Returns:
        str: The encoding actually written.

    Raises:
        OSError: If the file cannot be created or written.
    """
    content = TextBuffer.from_lines(lines).serialize()
    target = Path(path)
    try:
        data = content.encode(encoding)
    except (UnicodeEncodeError, LookupError) as e_encode:
        logging.warning(
            "write_lines: cannot encode '%s' as %s (%s), writing %s",
            target, encoding, e_encode, ENCODING,
        )
        encoding = ENCODING
        data = content.encode(encoding)

    logging.debug("write_lines: writing %d bytes to '%s' as %s", len(data), target, encoding)
    try:
        with open(target, "wb") as f:
            f.write(data)
    except OSError as e:
        logging.error("write_lines: failed to write '%s': %s", target, e, exc_info=True)
        raise
    return encoding
