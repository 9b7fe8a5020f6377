"""Editor dispatcher: choose an editor for a finding and open it.

The dispatcher is a small state machine::

    PROMPTING -> DISPATCHING -> LAUNCHING | INSTALL_PROMPT | LISTING | CANCELLED

``INSTALL_PROMPT`` may go back to ``PROMPTING`` when the user asks to choose
another editor. Editor availability is probed once, when the dispatcher is
created, and reused for every pass through the loop.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path

from loguru import logger

from models import Finding
from navigator.editors import EDITORS, NANO, VSCODE_MANUAL_STEPS, Editor, is_available
from navigator.processes import ProcessRunner
from navigator.prompts import Prompt, ask, confirm, parse_number

COPY_COMMANDS_OPTION = len(EDITORS) + 1
CANCEL_OPTION = len(EDITORS) + 2
RULE = "=" * 50


class DispatchState(Enum):
    PROMPTING = "prompting"
    DISPATCHING = "dispatching"
    LAUNCHING = "launching"
    INSTALL_PROMPT = "install_prompt"
    LISTING = "listing"
    CANCELLED = "cancelled"
    DONE = "done"


class DispatchOutcome(Enum):
    """How one dispatcher session ended."""

    LAUNCHED = "launched"
    LAUNCH_FAILED = "launch_failed"
    INSTALLED = "installed"
    INSTALL_FAILED = "install_failed"
    DECLINED = "declined"
    LISTED = "listed"
    CANCELLED = "cancelled"
    INVALID = "invalid"


class EditorDispatcher:
    """Offer the editor menu for one finding and carry out the choice."""

    def __init__(
        self,
        finding: Finding,
        *,
        probe: Callable[[str], bool] = is_available,
        runner: ProcessRunner | None = None,
        prompt: Prompt = input,
    ) -> None:
        self.finding = finding
        self.file_path = str(Path(finding.file_path).resolve())
        self.runner = runner or ProcessRunner()
        self.prompt = prompt
        self.availability = {editor.executable: probe(editor.executable) for editor in EDITORS}
        self.state = DispatchState.PROMPTING
        logger.debug(f"[DEBUG] Editor availability: {self.availability}")

    def _installed(self, editor: Editor) -> bool:
        return self.availability[editor.executable]

    def _show_options(self) -> None:
        line_number = self.finding.line_number
        logger.info("\nOPEN WITH:")
        for option, editor in enumerate(EDITORS, start=1):
            if self._installed(editor):
                label = f"{editor.name} (new window)" if editor.in_terminal else editor.name
                command = editor.open_command(self.file_path, line_number)
                logger.info(f"  {option}. {label} - {command}")
            else:
                logger.info(f"  {option}. {editor.name} - (Not installed)")
        logger.info(f"  {COPY_COMMANDS_OPTION}. Manual - Copy all commands")
        logger.info(f"  {CANCEL_OPTION}. Cancel - Back to list")

    def _read_choice(self) -> int | None:
        answer = ask(self.prompt, f"\nChoose editor (1-{CANCEL_OPTION}): ")
        choice = parse_number(answer)
        if choice is None:
            logger.error("Please enter a number")
            return None
        if not 1 <= choice <= CANCEL_OPTION:
            logger.error(f"Please enter 1-{CANCEL_OPTION}")
            return None
        return choice

    def run(self) -> DispatchOutcome:
        """Run the menu loop until a terminal state is reached."""
        self.state = DispatchState.PROMPTING
        while True:
            self._show_options()
            choice = self._read_choice()
            if choice is None:
                self.state = DispatchState.DONE
                return DispatchOutcome.INVALID

            self.state = DispatchState.DISPATCHING
            if choice == COPY_COMMANDS_OPTION:
                self.state = DispatchState.LISTING
                self.print_all_commands()
                return DispatchOutcome.LISTED
            if choice == CANCEL_OPTION:
                self.state = DispatchState.CANCELLED
                logger.info("Returning to list...")
                return DispatchOutcome.CANCELLED

            editor = EDITORS[choice - 1]
            if self._installed(editor):
                self.state = DispatchState.LAUNCHING
                return self.launch(editor)

            self.state = DispatchState.INSTALL_PROMPT
            outcome = self.install_prompt(editor)
            if outcome is not None:
                return outcome
            self.state = DispatchState.PROMPTING

    def launch(self, editor: Editor) -> DispatchOutcome:
        """Start an installed editor on the finding's file and line."""
        line_number = self.finding.line_number
        if editor.in_terminal:
            logger.info(f"\nOpening {editor.name} in NEW terminal window...")
        else:
            logger.info(f"\nOpening {editor.name}...")

        try:
            self.runner.spawn(editor.launch_command(self.file_path, line_number))
        except OSError as exc:
            logger.error(f"Failed to open {editor.name}: {exc}")
            if editor is NANO:
                logger.info("Try this instead:")
                logger.info(f"  {editor.open_command(self.file_path, line_number)}")
                logger.info("  (Then press Ctrl+X to exit)")
            return DispatchOutcome.LAUNCH_FAILED

        if editor.in_terminal:
            logger.info("New terminal window launched!")
        return DispatchOutcome.LAUNCHED

    def install_prompt(self, editor: Editor) -> DispatchOutcome | None:
        """Guide the user through installing a missing editor.

        Returns None when the user wants to choose another editor.
        """
        logger.info(f"\n{RULE}")
        logger.info(f"{editor.name} IS NOT INSTALLED")
        logger.info(RULE)

        if not editor.auto_installable:
            logger.info(f"\n{editor.name} needs to be downloaded separately:")
            for step, instruction in enumerate(VSCODE_MANUAL_STEPS, start=1):
                logger.info(f"  {step}. {instruction}")
            logger.info(f"\nPlease choose another editor or install {editor.name} first")
            return self._choose_another()

        logger.info(f"\nTo install {editor.name}:")
        logger.info(f"  {editor.install_command}")
        if confirm(self.prompt, "\nQuick install now? (y/n): "):
            return self._install(editor)

        logger.info(f"\nPlease choose another editor or install {editor.name} first")
        return self._choose_another()

    def _choose_another(self) -> DispatchOutcome | None:
        if confirm(self.prompt, "Choose another editor now? (y/n): "):
            return None
        self.state = DispatchState.DONE
        return DispatchOutcome.DECLINED

    def _install(self, editor: Editor) -> DispatchOutcome:
        logger.info(f"\nRunning: {editor.install_command}")
        logger.info("This may take a moment...")
        self.state = DispatchState.DONE
        try:
            return_code = self.runner.run(editor.install_args)
        except OSError as exc:
            logger.error(f"Need sudo privileges ({exc}). Run manually:")
            logger.error(f"  {editor.install_command}")
            return DispatchOutcome.INSTALL_FAILED

        if return_code != 0:
            logger.error(f"Failed to install {editor.name} (exit code {return_code})")
            return DispatchOutcome.INSTALL_FAILED

        logger.info(f"{editor.name} installed successfully!")
        logger.info(f"\nRun last-off again to use {editor.name}")
        return DispatchOutcome.INSTALLED

    def all_commands(self) -> list[tuple[str, list[str]]]:
        """Return every launch command per editor, installed or not."""
        line_number = self.finding.line_number
        commands: list[tuple[str, list[str]]] = []
        for editor in EDITORS:
            editor_commands = [editor.open_command(self.file_path, line_number)]
            if editor.in_terminal:
                editor_commands.append(editor.terminal_command(self.file_path, line_number))
            commands.append((editor.name, editor_commands))
        return commands

    def print_all_commands(self) -> None:
        logger.info("\nALL COMMANDS:")
        for name, commands in self.all_commands():
            logger.info(f"{name}:")
            for command in commands:
                logger.info(f"  {command}")
        logger.info("\nCopy any command above and paste in terminal")
