"""Delivery targets for rendered structure text.

The file sink raises ``SinkError``; clipboard and editor helpers report
failure through their return values so callers can show a message.

Rendered names may carry lone surrogates for bytes that were not valid in the
filesystem encoding. Both the file and clipboard sinks encode with
``surrogateescape`` so those names round-trip to their original bytes.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import stat
import subprocess
import sys
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"
NEW_FILE_MODE = 0o644


class SinkError(Exception):
    """Raised when rendered text could not be delivered."""


def save_to_file(base_dir: Path, content: str, file_name: str) -> Path:
    """Create or overwrite ``base_dir / file_name`` with ``content`` as UTF-8.

    The text is written to a temporary sibling and moved over the target, so a
    failed write leaves any previous file untouched.
    """
    target = base_dir / file_name
    try:
        data = content.encode(TEXT_ENCODING, errors=TEXT_ERRORS)
    except UnicodeError as exc:
        raise SinkError(f"Failed to encode structure for {target}: {exc}") from exc

    tmp_path: str | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        try:
            mode = stat.S_IMODE(os.stat(target).st_mode)
        except OSError:
            mode = NEW_FILE_MODE
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
        tmp_path = None
    except OSError as exc:
        raise SinkError(f"Failed to write {target}: {exc}") from exc
    finally:
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
    logger.debug("Wrote %d bytes to %s", len(data), target)
    return target


def _clipboard_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text_to_clipboard(text: str) -> bool:
    """Pipe ``text`` into the first clipboard tool that accepts it.

    Returns ``False`` when ``text`` is empty or no installed tool succeeds.
    """
    if not text:
        return False

    for command in _clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                input=text,
                text=True,
                encoding=TEXT_ENCODING,
                errors=TEXT_ERRORS,
                check=False,
            )
        except (OSError, UnicodeError) as exc:
            logger.debug("Clipboard command %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            return True
        logger.debug("Clipboard command %s exited with %d", command[0], proc.returncode)
    return False


def open_in_editor(target: Path) -> str | None:
    """Open ``target`` in ``$EDITOR``, returning an error message on failure."""
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        return "Cannot open: $EDITOR is not set."
    cmd = shlex.split(editor_env)
    if not cmd:
        return "Cannot open: $EDITOR is empty."

    try:
        subprocess.run([*cmd, str(target)], check=False)
    except Exception as exc:
        return f"Failed to launch editor: {exc}"
    return None
