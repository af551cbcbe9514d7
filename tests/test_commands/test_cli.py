"""Tests for the smallsh command line."""

import pytest

from smallsh.__main__ import build_parser, main


class TestArguments:
    """Test argument parsing."""

    def test_script_and_positional_args(self):
        options = build_parser().parse_args(["run.sh", "a", "b"])
        assert options.script == "run.sh"
        assert options.args == ["a", "b"]

    def test_no_script(self):
        options = build_parser().parse_args([])
        assert options.script is None
        assert options.args == []


class TestMain:
    """Test running scripts through main()."""

    @pytest.fixture(autouse=True)
    def _restore_signals(self):
        import signal

        saved = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGQUIT)}
        yield
        for sig, handler in saved.items():
            signal.signal(sig, handler)

    def test_script_status(self, tmp_path):
        script = tmp_path / "s.sh"
        script.write_text("true\nfalse\n")
        assert main([str(script)]) == 1

    def test_exit_status(self, tmp_path):
        script = tmp_path / "s.sh"
        script.write_text("exit $1\n")
        assert main([str(script), "9"]) == 9

    def test_unterminated_if(self, tmp_path, capsys):
        script = tmp_path / "s.sh"
        script.write_text("if true\nthen\n")
        assert main([str(script)]) == 2
        assert "unexpected end of file" in capsys.readouterr().err

    def test_missing_script(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.sh")]) == 1
        assert "nope.sh" in capsys.readouterr().err

    def test_positional_parameters(self, tmp_path):
        script = tmp_path / "s.sh"
        script.write_text("if test $1 = $2\nthen\nexit 0\nelse\nexit 4\nfi\n")
        assert main([str(script), "x", "y"]) == 4
        assert main([str(script), "x", "x"]) == 0

    def test_script_with_undecodable_bytes(self, tmp_path):
        script = tmp_path / "s.sh"
        script.write_bytes(b"A=caf\xe9\nexit 3\n")
        assert main([str(script)]) == 3
