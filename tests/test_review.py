from __future__ import annotations

import io
from pathlib import Path

import pytest

from lintfix.display import make_console
from lintfix.errors import UserAbort
from lintfix.patch import PatchApplier
from lintfix.review import NOTHING_TO_DO, ReviewOptions, ReviewSession, handle_suggestions
from lintfix.suggestion import ReviewDecision

from conftest import span


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def console(out):
    return make_console(file=out, width=200)


@pytest.fixture
def three(make_suggestion):
    return [
        make_suggestion(f"s{i}", line_range=span(i, 1, i, 2), message=f"suggestion {i}")
        for i in (1, 2, 3)
    ]


def never_called(prompt: str) -> str:
    raise AssertionError("automatic mode must not read input")


def test_skip_accept_quit(three, console, scripted_input, recording_applier) -> None:
    read = scripted_input(["s", "r", "q"])
    applied = handle_suggestions(three, applier=recording_applier, console=console, read_input=read)

    assert recording_applier.calls == [[three[1]]]
    assert applied == 1
    assert read.calls == 3


def test_session_records_decisions(three, console, scripted_input) -> None:
    session = ReviewSession(three, console=console, read_input=scripted_input(["s", "r", "q"]))
    assert session.run() == [three[1]]
    assert session.decisions == [ReviewDecision.SKIP, ReviewDecision.ACCEPT, ReviewDecision.QUIT]


def test_accepted_set_is_in_acceptance_order(three, console, scripted_input) -> None:
    session = ReviewSession(three, console=console, read_input=scripted_input(["r", "s", "r"]))
    assert session.run() == [three[0], three[2]]


def test_abort_discards_accepted(three, console, scripted_input, recording_applier) -> None:
    read = scripted_input(["r", "r", "a"])
    with pytest.raises(UserAbort):
        handle_suggestions(three, applier=recording_applier, console=console, read_input=read)
    assert recording_applier.calls == []


def test_abort_writes_no_files(tmp_path: Path, make_suggestion, console, scripted_input) -> None:
    target = tmp_path / "main.rs"
    target.write_text("a\nb\n")
    suggestions = [
        make_suggestion("A", file_name=str(target), line_range=span(1, 1, 1, 2)),
        make_suggestion("B", file_name=str(target), line_range=span(2, 1, 2, 2)),
    ]
    with pytest.raises(UserAbort):
        handle_suggestions(
            suggestions,
            applier=PatchApplier(),
            console=console,
            read_input=scripted_input(["r", "a"]),
        )
    assert target.read_text() == "a\nb\n"


def test_invalid_input_repeats_the_same_suggestion(three, console, out, scripted_input) -> None:
    read = scripted_input(["x", "r", "s", "s"])
    session = ReviewSession(three, console=console, read_input=read)

    assert session.run() == [three[0]]
    assert read.calls == 4
    output = out.getvalue()
    assert "I didn't quite get that." in output
    assert output.count("suggestion 1") == 2
    assert output.count("suggestion 2") == 1


def test_invalid_input_does_not_accept(three, console, scripted_input) -> None:
    session = ReviewSession(three[:1], console=console, read_input=scripted_input(["x", "y", "s"]))
    assert session.run() == []
    assert session.accepted == []
    assert session.decisions == [ReviewDecision.SKIP]


def test_automatic_mode_accepts_everything_without_reading(three, console, out, recording_applier) -> None:
    applied = handle_suggestions(
        three,
        ReviewOptions(automatic=True),
        applier=recording_applier,
        console=console,
        read_input=never_called,
    )
    assert recording_applier.calls == [three]
    assert applied == 3
    assert out.getvalue().count("automatically applying suggestion (--yolo)") == 3


def test_empty_input_does_nothing(console, out, recording_applier) -> None:
    assert handle_suggestions([], applier=recording_applier, console=console, read_input=never_called) == 0
    assert NOTHING_TO_DO in out.getvalue()
    assert recording_applier.calls == []


def test_quit_before_accepting_skips_apply(three, console, scripted_input, recording_applier) -> None:
    handle_suggestions(three, applier=recording_applier, console=console, read_input=scripted_input(["q"]))
    assert recording_applier.calls == []


def test_end_of_input_aborts(three, console, scripted_input) -> None:
    session = ReviewSession(three, console=console, read_input=scripted_input(["r"]))
    with pytest.raises(UserAbort):
        session.run()
    assert session.accepted == []


def test_apply_reports_progress(three, console, out, scripted_input, recording_applier) -> None:
    handle_suggestions(three, applier=recording_applier, console=console, read_input=scripted_input(["r", "r", "r"]))
    output = out.getvalue()
    assert "Good work. Let me just apply these 3 changes!" in output
    assert "...\nDone." in output


def test_prompt_text_is_configurable(three, console, out, scripted_input) -> None:
    options = ReviewOptions(prompt_text="Pick [r] or [s]")
    ReviewSession(three[:1], options, console=console, read_input=scripted_input(["s"])).run()
    assert "Pick [r] or [s]" in out.getvalue()
