"""External process capability used to launch editors and installers."""

from __future__ import annotations

import subprocess

from loguru import logger

from navigator.editors import SHELL


class ProcessRunner:
    """Launch shell commands and run blocking installs."""

    def spawn(self, command: str) -> None:
        """Start ``command`` through the shell without waiting for it.

        Raises:
            OSError: If the shell cannot be started.
        """
        logger.debug(f"[DEBUG] Spawning: {SHELL} -c {command}")
        subprocess.Popen([SHELL, "-c", command])

    def run(self, args: list[str]) -> int:
        """Run ``args`` to completion and return its exit code.

        Raises:
            OSError: If the program cannot be started.
        """
        logger.debug(f"[DEBUG] Running: {' '.join(args)}")
        return subprocess.run(args, check=False).returncode
