"""Tests for PasteOrchestrator and PasteTUI.

The TUI writes to a Console backed by StringIO; operator answers are
supplied by patching prompt_remediation or Prompt.ask.
"""

from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from explorer_core.models import CollisionPolicy, ErrorSolution, PasteSummary
from explorer_core.operations import TransferBatch
from explorer_core.orchestration import PasteOrchestrator
from explorer_core.ui import PasteTUI


@pytest.fixture
def output() -> StringIO:
    return StringIO()


@pytest.fixture
def tui(output: StringIO) -> PasteTUI:
    return PasteTUI(Console(file=output, width=120))


@pytest.mark.unit
class TestPasteOrchestrator:
    """Tests for the execute/review loop."""

    def test_single_pass_when_not_interactive(self, paste_scenario, tui: PasteTUI):
        batch = TransferBatch([paste_scenario["a"], paste_scenario["dir"]], paste_scenario["dst"])

        with patch.object(tui, "review_failed_items") as review:
            summary = PasteOrchestrator(batch, tui=tui, interactive=False).run()

        review.assert_not_called()
        assert summary.items_failed == 1
        assert summary.files_copied == 1
        assert not summary.done

    def test_review_until_done(self, paste_scenario, tui: PasteTUI):
        batch = TransferBatch([paste_scenario["a"], paste_scenario["dir"]], paste_scenario["dst"])

        with patch.object(
            tui,
            "prompt_remediation",
            return_value=(ErrorSolution.RETRY, CollisionPolicy.CREATE_SIBLING),
        ) as prompt:
            summary = PasteOrchestrator(batch, tui=tui).run()

        prompt.assert_called_once()
        assert summary.done
        assert summary.siblings_created == 1
        assert (paste_scenario["dst"] / "a_copy0.txt").read_text() == "source a"

    def test_skip_answer(self, paste_scenario, tui: PasteTUI):
        batch = TransferBatch([paste_scenario["a"]], paste_scenario["dst"])

        with patch.object(tui, "prompt_remediation", return_value=(ErrorSolution.SKIP, None)):
            summary = PasteOrchestrator(batch, tui=tui).run()

        assert summary.done
        assert summary.items_skipped == 1

    def test_cancel_answer(self, paste_scenario, tui: PasteTUI, output: StringIO):
        batch = TransferBatch([paste_scenario["a"]], paste_scenario["dst"])

        with patch.object(tui, "prompt_remediation", return_value=(ErrorSolution.CANCEL, None)):
            summary = PasteOrchestrator(batch, tui=tui).run()

        assert summary.cancelled
        assert not summary.done
        assert "Paste Cancelled" in output.getvalue()

    def test_keyboard_interrupt_cancels(self, paste_scenario, tui: PasteTUI):
        batch = TransferBatch([paste_scenario["a"]], paste_scenario["dst"])

        with patch.object(tui, "prompt_remediation", side_effect=KeyboardInterrupt):
            summary = PasteOrchestrator(batch, tui=tui).run()

        assert batch.is_cancelled
        assert summary.cancelled

    def test_progress_callback_detached_after_run(self, paste_scenario, tui: PasteTUI):
        batch = TransferBatch([paste_scenario["dir"]], paste_scenario["dst"])

        PasteOrchestrator(batch, tui=tui).run()

        assert batch.progress_callback is None

    def test_log_file(self, paste_scenario, tui: PasteTUI, temp_dir: Path):
        log_path = temp_dir / "paste.log"
        batch = TransferBatch([paste_scenario["a"]], paste_scenario["dst"])

        with patch.object(tui, "prompt_remediation", return_value=(ErrorSolution.SKIP, None)):
            PasteOrchestrator(batch, tui=tui, log_file_path=log_path).run()

        content = log_path.read_text(encoding="utf-8")
        assert "Pass 1" in content
        assert "Pass 2" in content
        assert "SKIPPED" in content

    def test_unwritable_log_location_warns(self, paste_scenario, tui: PasteTUI, temp_dir, capsys):
        batch = TransferBatch([paste_scenario["dir"]], paste_scenario["dst"])

        summary = PasteOrchestrator(
            batch, tui=tui, log_file_path=temp_dir / "missing" / "paste.log"
        ).run()

        assert summary.done
        assert "Could not create log file" in capsys.readouterr().err


@pytest.mark.unit
class TestPasteTUI:
    """Tests for PasteTUI prompts and displays."""

    def test_collision_offers_policies(self, paste_scenario, tui: PasteTUI):
        batch = TransferBatch([paste_scenario["a"]], paste_scenario["dst"])
        batch.execute()
        item = batch.items[0]

        with patch("explorer_core.ui.paste_tui.Prompt.ask", return_value="m") as ask:
            solution, policy = tui.prompt_remediation(item)

        assert solution is ErrorSolution.RETRY
        assert policy is CollisionPolicy.MARK_RESOLVED
        assert ask.call_args.kwargs["choices"] == ["r", "s", "c", "m", "q"]

    def test_other_errors_offer_basic_choices(self, paste_scenario, tui: PasteTUI):
        batch = TransferBatch([paste_scenario["a"]], paste_scenario["dst"])
        paste_scenario["a"].unlink()
        batch.execute()

        with patch("explorer_core.ui.paste_tui.Prompt.ask", return_value="s") as ask:
            solution, policy = tui.prompt_remediation(batch.items[0])

        assert solution is ErrorSolution.SKIP
        assert policy is None
        assert ask.call_args.kwargs["choices"] == ["r", "s", "q"]

    def test_review_stops_at_cancel(self, paste_scenario, tui: PasteTUI):
        extra = paste_scenario["src"] / "b.txt"
        extra.write_text("b")
        (paste_scenario["dst"] / "b.txt").write_text("existing b")
        batch = TransferBatch([paste_scenario["a"], extra], paste_scenario["dst"])
        batch.execute()

        with patch("explorer_core.ui.paste_tui.Prompt.ask", return_value="q") as ask:
            tui.review_failed_items(batch.get_failed_items())

        ask.assert_called_once()
        assert batch.items[0].error_solution is ErrorSolution.CANCEL
        assert batch.items[1].error_solution is ErrorSolution.NONE

    def test_display_plan(self, paste_scenario, tui: PasteTUI, output: StringIO):
        batch = TransferBatch(
            [paste_scenario["a"]], paste_scenario["dst"], delete_sources_on_success=True
        )

        tui.display_paste_plan(batch)

        text = output.getvalue()
        assert "MOVE" in text
        assert "a.txt" in text

    def test_display_summary_with_errors(self, tui: PasteTUI, output: StringIO):
        summary = PasteSummary(
            total_items=12, items_failed=12, errors=[f"error {i}" for i in range(12)]
        )

        tui.display_paste_summary(summary)

        text = output.getvalue()
        assert "Paste Incomplete" in text
        assert "Errors (12)" in text
        assert "and 2 more errors" in text

    def test_format_duration(self, tui: PasteTUI):
        assert tui._format_duration(323) == "5m 23s"
        assert tui._format_duration(-1) == "0m 0s"

    def test_truncate_name(self, tui: PasteTUI):
        assert tui._truncate_name("short") == "short"
        assert tui._truncate_name("x" * 70, max_length=10) == "xxxxxxx..."
