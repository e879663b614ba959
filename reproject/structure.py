"""Generate a project structure listing and hand it to a sink.

Resolves the invocation target, runs one render session, prepends the root
row, and dispatches the text to the file, clipboard, or stdout sink.
Invocation and sink failures become one user-facing message; nothing retries.
"""

from __future__ import annotations

import enum
import logging
import stat
import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .cancellation import CancellationToken
from .config import ProjectConfig
from .file_tree_model import DirectoryReader
from .sinks import SinkError, copy_text_to_clipboard, open_in_editor, save_to_file
from .tree_render import RenderContext, render_tree

logger = logging.getLogger(__name__)

JOIN_POLL_SECONDS = 0.1


class InvocationError(Exception):
    """Raised when no usable target directory can be resolved."""


class RenderError(Exception):
    """Raised on the calling thread when the render worker failed."""


class OutputMode(str, enum.Enum):
    FILE = "file"
    CLIPBOARD = "clipboard"
    STDOUT = "stdout"


class GenerationStatus(str, enum.Enum):
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class GenerationResult:
    status: GenerationStatus
    message: str = ""
    output_path: Path | None = None


def resolve_target_directory(path: Path | None, fallback: Path | None = None) -> Path:
    """Return the directory to render for ``path``.

    Without ``path`` the ``fallback`` directory is used. A file resolves to
    its parent directory.
    """
    if path is None:
        if fallback is None:
            raise InvocationError("Open a folder or pass a directory path.")
        path = fallback

    try:
        mode = path.stat().st_mode
    except OSError as exc:
        raise InvocationError(f"Error: {exc}") from exc

    resolved = path.resolve()
    return resolved if stat.S_ISDIR(mode) else resolved.parent


def render_structure(
    target: Path,
    config: ProjectConfig,
    cancellation: Callable[[], bool] | None = None,
    reader: DirectoryReader | None = None,
) -> str | None:
    """Render ``target`` with its root row, or ``None`` when cancelled."""
    context = RenderContext.create(
        ignore_patterns=config.ignore_patterns,
        cancellation=cancellation,
        reader=reader,
    )
    tree = render_tree(target, "", context)
    if context.is_cancelled():
        return None
    return f"{target.name}/\n{tree}"


def run_render_in_background(
    target: Path,
    config: ProjectConfig,
    token: CancellationToken,
    reader: DirectoryReader | None = None,
) -> str | None:
    """Render on a worker thread so the calling thread can cancel with Ctrl-C.

    ``KeyboardInterrupt`` in the caller requests cancellation and waits for
    the worker to notice it before returning ``None``. An exception in the
    worker is re-raised here as ``RenderError``.
    """
    result: list[str | None] = [None]
    failure: list[Exception] = []

    def worker() -> None:
        try:
            result[0] = render_structure(target, config, token, reader)
        except Exception as exc:
            failure.append(exc)

    thread = threading.Thread(target=worker, name="reproject-render", daemon=True)
    thread.start()
    try:
        while thread.is_alive():
            thread.join(JOIN_POLL_SECONDS)
    except KeyboardInterrupt:
        logger.debug("Render of %s interrupted; cancelling", target)
        token.cancel()
        thread.join()
        return None
    if failure:
        raise RenderError(f"Failed to render {target}: {failure[0]!r}") from failure[0]
    if token.is_cancellation_requested:
        return None
    return result[0]


def deliver(
    output: str,
    target: Path,
    mode: OutputMode,
    config: ProjectConfig,
    open_editor: bool = False,
    stdout: TextIO | None = None,
) -> GenerationResult:
    """Send rendered ``output`` to the sink selected by ``mode``."""
    if mode is OutputMode.STDOUT:
        try:
            (stdout if stdout is not None else sys.stdout).write(output)
        except (OSError, UnicodeError) as exc:
            return GenerationResult(GenerationStatus.FAILED, f"Failed to print structure: {exc}")
        return GenerationResult(GenerationStatus.DONE)

    if mode is OutputMode.CLIPBOARD:
        if not copy_text_to_clipboard(output):
            return GenerationResult(GenerationStatus.FAILED, "Failed to copy structure to clipboard.")
        return GenerationResult(GenerationStatus.DONE, "Structure copied to clipboard!")

    try:
        written = save_to_file(target, output, config.output_file_name)
    except SinkError as exc:
        return GenerationResult(GenerationStatus.FAILED, f"Failed to write file: {exc}")

    message = f"Structure saved: {config.output_file_name}"
    if open_editor:
        editor_error = open_in_editor(written)
        if editor_error is not None:
            message = f"{message}\n{editor_error}"
    return GenerationResult(GenerationStatus.DONE, message, written)


def generate_structure(
    path: Path | None,
    mode: OutputMode,
    config: ProjectConfig,
    fallback: Path | None = None,
    token: CancellationToken | None = None,
    open_editor: bool = False,
    stdout: TextIO | None = None,
    reader: DirectoryReader | None = None,
) -> GenerationResult:
    """Resolve, render, and deliver one structure listing.

    Raises ``InvocationError`` when the target cannot be resolved; render and
    delivery failures are returned as a ``FAILED`` result.
    """
    target = resolve_target_directory(path, fallback)
    if token is None:
        token = CancellationToken()

    try:
        output = run_render_in_background(target, config, token, reader)
    except RenderError as exc:
        logger.debug("Render failed", exc_info=exc.__cause__)
        return GenerationResult(GenerationStatus.FAILED, str(exc))
    if output is None:
        return GenerationResult(GenerationStatus.CANCELLED, "Structure generation cancelled.")

    return deliver(output, target, mode, config, open_editor=open_editor, stdout=stdout)


__all__ = [
    "InvocationError",
    "RenderError",
    "OutputMode",
    "GenerationStatus",
    "GenerationResult",
    "resolve_target_directory",
    "render_structure",
    "run_render_in_background",
    "deliver",
    "generate_structure",
]
