"""
Unit tests for the command line entry point.

Tests argument validation and the certify report.
"""
import pytest

import main


# ============================================================================
# Argument Validation Tests
# ============================================================================

class TestArgumentValidation:
    """Bad arguments exit with a usage error instead of a traceback."""

    @pytest.mark.parametrize(
        "argv",
        [
            ["certify", "--boards", "0"],
            ["certify", "--mines", "81"],
            ["generate", "--mines", "-1"],
            ["generate", "--width", "0"],
            ["generate", "--max-attempts", "0"],
        ],
    )
    def test_invalid_arguments_exit(self, argv, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            main.main(argv)
        assert exc.value.code == 2
        assert "error:" in capsys.readouterr().err


# ============================================================================
# Command Tests
# ============================================================================

class TestCommands:
    """Test command output."""

    def test_certify_reports_rate(self, capsys) -> None:
        main.main(["certify", "--boards", "3", "--seed", "1"])
        out = capsys.readouterr().out
        assert "No-guess solvable:" in out
        assert "/3 " in out

    def test_generate_prints_safe_start(self, capsys) -> None:
        main.main(["generate", "--seed", "2"])
        assert "Safe start: (" in capsys.readouterr().out
