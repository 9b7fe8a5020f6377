"""Known external editors and the commands that open a file at a line."""

from __future__ import annotations

import shlex
import shutil
from dataclasses import dataclass

SHELL = "bash"
TERMINAL_EMULATOR = "gnome-terminal"
INSTALL_COMMAND = ("sudo", "apt", "install")


@dataclass(frozen=True)
class Editor:
    """One editor choice shown by the dispatcher."""

    name: str
    executable: str
    # str.format template with ``path`` (shell-quoted) and ``line``
    goto_template: str
    in_terminal: bool = False
    package: str | None = None

    @property
    def auto_installable(self) -> bool:
        return self.package is not None

    @property
    def install_command(self) -> str | None:
        """Return the manual install command shown to the user."""
        if self.package is None:
            return None
        return " ".join((*INSTALL_COMMAND, self.package))

    @property
    def install_args(self) -> list[str]:
        """Return argv for an unattended install."""
        if self.package is None:
            raise ValueError(f"{self.name} has no package to install")
        return [*INSTALL_COMMAND, "-y", self.package]

    def open_command(self, file_path: str, line_number: int) -> str:
        """Return the shell command that opens ``file_path`` at ``line_number``."""
        return self.goto_template.format(path=shlex.quote(file_path), line=line_number)

    def terminal_command(self, file_path: str, line_number: int) -> str:
        """Wrap the open command in a new terminal window that stays open."""
        inner_command = f"{self.open_command(file_path, line_number)}; exec {SHELL}"
        return f"{TERMINAL_EMULATOR} -- {SHELL} -c {shlex.quote(inner_command)}"

    def launch_command(self, file_path: str, line_number: int) -> str:
        """Return the command actually launched for this editor."""
        if self.in_terminal:
            return self.terminal_command(file_path, line_number)
        return self.open_command(file_path, line_number)


VSCODE = Editor(name="VS Code", executable="code", goto_template="code --goto {path}:{line}")
VIM = Editor(
    name="Vim",
    executable="vim",
    goto_template="vim +{line} {path}",
    in_terminal=True,
    package="vim",
)
NANO = Editor(
    name="Nano",
    executable="nano",
    goto_template="nano +{line} {path}",
    in_terminal=True,
    package="nano",
)
GEDIT = Editor(name="Gedit", executable="gedit", goto_template="gedit +{line} {path}", package="gedit")

EDITORS: tuple[Editor, ...] = (VSCODE, VIM, NANO, GEDIT)

VSCODE_MANUAL_STEPS = (
    "Visit: https://code.visualstudio.com/",
    "Download the .deb package",
    "Install with: sudo dpkg -i <package>.deb",
    "If dependencies missing: sudo apt --fix-broken install",
)


def is_available(tool_name: str) -> bool:
    """Return True when an executable is found on the search path."""
    return shutil.which(tool_name) is not None
