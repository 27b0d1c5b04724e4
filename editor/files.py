"""Reading and atomically rewriting resource documents."""

import os
import shutil
import tempfile
from pathlib import Path

from model.errors import DocumentParseError, ScanError
from .document import ResourceDocument, parse_document
from .escapes import protect_escapes, restore_escapes

NEW_FILE_MODE = 0o644


def read_text(path: Path) -> str:
    """Read a file as UTF-8 without newline translation."""
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise DocumentParseError(path, str(e)) from e
    except OSError as e:
        raise ScanError(path, str(e)) from e


def write_text_atomic(path: Path, text: str) -> None:
    """
    Replace the contents of ``path`` in one step.
    
    The text goes to a temporary file next to the target which is then
    renamed over it, so readers never see a half written file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        # mkstemp creates 0600 files
        if path.exists():
            shutil.copymode(path, temp_name)
        else:
            os.chmod(temp_name, NEW_FILE_MODE)
        os.replace(temp_name, path)
    except BaseException:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise


def load_document(path: Path) -> ResourceDocument:
    return parse_document(protect_escapes(read_text(path)), path)


def save_document(document: ResourceDocument, path: Path) -> None:
    write_text_atomic(path, restore_escapes(document.serialize()))
