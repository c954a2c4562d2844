"""
Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for package-manager
operations.  Logging and error capture are centralised here; callers
decide what a failure means.

No timeout is applied unless the caller asks for one: a hung package
manager hangs the operation.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)


def run_command(
    cmd: list[str],
    *,
    env_overrides: dict[str, str] | None = None,
    capture_output: bool = True,
    timeout: int | None = None,
) -> dict[str, Any]:
    """Run an external command.

    Args:
        cmd: Command list for ``subprocess.run()``.
        env_overrides: Extra env vars for this invocation only. The
            parent process environment is never modified.
        capture_output: Capture stdout/stderr instead of letting the
            tool write to the terminal. Query-style calls capture,
            install/refresh calls stream.
        timeout: Seconds before ``TimeoutExpired``; None waits forever.

    Returns:
        ``{"ok": True, "returncode": 0, "stdout": "...", "elapsed_ms": N}``
        on success, ``{"ok": False, "returncode": N, "error": "...", ...}``
        on failure.  ``returncode`` is None when the command never ran.
    """
    env = None
    if env_overrides:
        env = os.environ.copy()
        env.update(env_overrides)

    logger.debug("Executing: %s", " ".join(cmd))
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture_output,
            text=True,
            timeout=timeout,
            env=env,
            check=False,
        )
    except FileNotFoundError:
        return {
            "ok": False,
            "returncode": None,
            "error": f"Command not found: {cmd[0]}",
        }
    except subprocess.TimeoutExpired:
        return {
            "ok": False,
            "returncode": None,
            "error": f"Command timed out ({timeout}s)",
        }
    except OSError as e:
        logger.debug("Subprocess error: %s", cmd, exc_info=True)
        return {"ok": False, "returncode": None, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout[-2000:] if result.stdout else ""

    if result.returncode == 0:
        return {
            "ok": True,
            "returncode": 0,
            "stdout": stdout,
            "elapsed_ms": elapsed_ms,
        }

    return {
        "ok": False,
        "returncode": result.returncode,
        "error": f"Command failed (exit {result.returncode})",
        "stderr": result.stderr[-2000:] if result.stderr else "",
        "stdout": stdout,
        "elapsed_ms": elapsed_ms,
    }
