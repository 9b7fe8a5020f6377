"""Tests for the editor dispatcher menu and its install/launch branches."""

from pathlib import Path

import pytest

from models import Finding
from navigator.dispatcher import DispatchOutcome, DispatchState, EditorDispatcher


@pytest.fixture
def finding(tmp_path: Path) -> Finding:
    source = tmp_path / "chart.py"
    source.write_text("a\nb\n# TODO: mask ssn\n", encoding="utf-8")
    return Finding(id=1, file_path=str(source), line_number=3, tag="SSN", text="# TODO: mask ssn")


def test_missing_vim_declined_twice_launches_nothing(
    finding, scripted_prompt, fake_runner, fake_probe, log_messages
) -> None:
    """Verify declining install and another choice ends without any process."""
    runner = fake_runner()
    prompt = scripted_prompt("2", "n", "n")
    dispatcher = EditorDispatcher(finding, probe=fake_probe(), runner=runner, prompt=prompt)

    outcome = dispatcher.run()

    assert outcome is DispatchOutcome.DECLINED
    assert runner.spawned == []
    assert runner.ran == []
    assert "Vim IS NOT INSTALLED" in log_messages
    assert "  sudo apt install vim" in log_messages
    assert prompt.answers == []


def test_installed_gui_editor_is_launched_directly(
    finding, scripted_prompt, fake_runner, fake_probe
) -> None:
    """Verify Gedit is started with its goto command, no terminal wrapper."""
    runner = fake_runner()
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe("gedit"), runner=runner, prompt=scripted_prompt("4")
    )

    assert dispatcher.run() is DispatchOutcome.LAUNCHED
    assert runner.spawned == [f"gedit +3 {dispatcher.file_path}"]
    assert dispatcher.state is DispatchState.LAUNCHING


def test_vscode_command_uses_goto(finding, scripted_prompt, fake_runner, fake_probe) -> None:
    """Verify VS Code is opened with --goto path:line."""
    runner = fake_runner()
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe("code"), runner=runner, prompt=scripted_prompt("1")
    )

    dispatcher.run()

    assert runner.spawned == [f"code --goto {dispatcher.file_path}:3"]


def test_terminal_editor_opens_in_new_terminal_window(
    finding, scripted_prompt, fake_runner, fake_probe
) -> None:
    """Verify Vim is launched inside a terminal emulator that stays open."""
    runner = fake_runner()
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe("vim"), runner=runner, prompt=scripted_prompt("2")
    )

    assert dispatcher.run() is DispatchOutcome.LAUNCHED
    (command,) = runner.spawned
    assert command.startswith("gnome-terminal -- bash -c ")
    assert f"vim +3 {dispatcher.file_path}; exec bash" in command


def test_nano_launch_failure_prints_fallback_command(
    finding, scripted_prompt, fake_runner, fake_probe, log_messages
) -> None:
    """Verify a failed Nano launch is reported with a literal fallback."""
    runner = fake_runner(spawn_error=FileNotFoundError("gnome-terminal"))
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe("nano"), runner=runner, prompt=scripted_prompt("3")
    )

    assert dispatcher.run() is DispatchOutcome.LAUNCH_FAILED
    assert any(message.startswith("Failed to open Nano") for message in log_messages)
    assert f"  nano +3 {dispatcher.file_path}" in log_messages


def test_gedit_launch_failure_has_no_fallback(
    finding, scripted_prompt, fake_runner, fake_probe, log_messages
) -> None:
    """Verify other editors only report the failure."""
    runner = fake_runner(spawn_error=PermissionError("denied"))
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe("gedit"), runner=runner, prompt=scripted_prompt("4")
    )

    assert dispatcher.run() is DispatchOutcome.LAUNCH_FAILED
    assert "Try this instead:" not in log_messages


def test_quick_install_runs_package_manager(
    finding, scripted_prompt, fake_runner, fake_probe, log_messages
) -> None:
    """Verify confirming install runs apt and waits for the result."""
    runner = fake_runner()
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe(), runner=runner, prompt=scripted_prompt("3", "y")
    )

    assert dispatcher.run() is DispatchOutcome.INSTALLED
    assert runner.ran == [["sudo", "apt", "install", "-y", "nano"]]
    assert runner.spawned == []
    assert "Nano installed successfully!" in log_messages


def test_quick_install_reports_failed_exit_code(
    finding, scripted_prompt, fake_runner, fake_probe
) -> None:
    """Verify a non-zero installer exit is an install failure."""
    runner = fake_runner(return_code=100)
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe(), runner=runner, prompt=scripted_prompt("4", "Y")
    )

    assert dispatcher.run() is DispatchOutcome.INSTALL_FAILED
    assert runner.ran == [["sudo", "apt", "install", "-y", "gedit"]]


def test_quick_install_spawn_error_suggests_manual_command(
    finding, scripted_prompt, fake_runner, fake_probe, log_messages
) -> None:
    """Verify an installer that cannot start prints the manual command."""
    runner = fake_runner(run_error=FileNotFoundError("sudo"))
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe(), runner=runner, prompt=scripted_prompt("2", "y")
    )

    assert dispatcher.run() is DispatchOutcome.INSTALL_FAILED
    assert "  sudo apt install vim" in log_messages


def test_missing_vscode_offers_manual_steps_then_loops(
    finding, scripted_prompt, fake_runner, fake_probe, log_messages
) -> None:
    """Verify choosing another editor returns to the menu with the same snapshot."""
    probe = fake_probe("gedit")
    runner = fake_runner()
    prompt = scripted_prompt("1", "y", "4")
    dispatcher = EditorDispatcher(finding, probe=probe, runner=runner, prompt=prompt)

    assert dispatcher.run() is DispatchOutcome.LAUNCHED
    assert "  1. Visit: https://code.visualstudio.com/" in log_messages
    assert not any("Quick install" in question for question in prompt.questions)
    assert runner.spawned == [f"gedit +3 {dispatcher.file_path}"]
    assert probe.calls == ["code", "vim", "nano", "gedit"]


def test_missing_vscode_declined_ends(finding, scripted_prompt, fake_runner, fake_probe) -> None:
    """Verify declining another choice after VS Code instructions ends the loop."""
    runner = fake_runner()
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe(), runner=runner, prompt=scripted_prompt("1", "n")
    )

    assert dispatcher.run() is DispatchOutcome.DECLINED
    assert runner.spawned == []


def test_repeated_retries_do_not_grow_the_stack(
    finding, scripted_prompt, fake_runner, fake_probe
) -> None:
    """Verify many "choose another" rounds are handled by the loop."""
    answers = ["2", "n", "y"] * 300 + ["6"]
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe(), runner=fake_runner(), prompt=scripted_prompt(*answers)
    )

    assert dispatcher.run() is DispatchOutcome.CANCELLED


def test_copy_all_commands_lists_every_editor(
    finding, scripted_prompt, fake_runner, fake_probe, log_messages
) -> None:
    """Verify literal commands are printed whether or not editors exist."""
    runner = fake_runner()
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe(), runner=runner, prompt=scripted_prompt("5")
    )

    assert dispatcher.run() is DispatchOutcome.LISTED
    path = dispatcher.file_path
    for command in (
        f"code --goto {path}:3",
        f"vim +3 {path}",
        f"nano +3 {path}",
        f"gedit +3 {path}",
    ):
        assert f"  {command}" in log_messages
    assert sum(message.startswith("  gnome-terminal") for message in log_messages) == 2
    assert runner.spawned == []


def test_cancel_returns_without_action(finding, scripted_prompt, fake_runner, fake_probe) -> None:
    """Verify cancel ends the dispatcher quietly."""
    runner = fake_runner()
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe("vim"), runner=runner, prompt=scripted_prompt("6")
    )

    assert dispatcher.run() is DispatchOutcome.CANCELLED
    assert runner.spawned == []


@pytest.mark.parametrize(
    ("answer", "message"),
    [
        ("vim", "Please enter a number"),
        ("0", "Please enter 1-6"),
        ("7", "Please enter 1-6"),
    ],
)
def test_invalid_choice_ends_without_reprompt(
    finding, scripted_prompt, fake_runner, fake_probe, log_messages, answer, message
) -> None:
    """Verify bad choices print an error and do not ask again."""
    prompt = scripted_prompt(answer, "1")
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe("code"), runner=fake_runner(), prompt=prompt
    )

    assert dispatcher.run() is DispatchOutcome.INVALID
    assert message in log_messages
    assert prompt.answers == ["1"]


def test_menu_marks_missing_editors(finding, scripted_prompt, fake_runner, fake_probe, log_messages) -> None:
    """Verify the menu shows every editor in fixed order with install state."""
    dispatcher = EditorDispatcher(
        finding, probe=fake_probe("nano"), runner=fake_runner(), prompt=scripted_prompt("6")
    )

    dispatcher.run()

    assert "  1. VS Code - (Not installed)" in log_messages
    assert "  2. Vim - (Not installed)" in log_messages
    assert f"  3. Nano (new window) - nano +3 {dispatcher.file_path}" in log_messages
    assert "  4. Gedit - (Not installed)" in log_messages
    assert "  5. Manual - Copy all commands" in log_messages
    assert "  6. Cancel - Back to list" in log_messages
