"""Tests for opening the Minecraft launcher."""

from unittest.mock import patch

from packsync.launcher import open_launcher

POPEN = "packsync.launcher.subprocess.Popen"


class TestOpenLauncher:
    def test_spawns_without_waiting(self, sink_lines, sink):
        with patch(POPEN) as popen:
            assert open_launcher("/opt/minecraft/launcher", sink=sink)

        popen.assert_called_once()
        assert popen.call_args.args[0] == ["/opt/minecraft/launcher"]
        popen.return_value.wait.assert_not_called()
        assert any("/opt/minecraft/launcher" in line for line in sink_lines)

    def test_spawn_failure_is_reported_not_raised(self, sink_lines, sink):
        with patch(POPEN, side_effect=FileNotFoundError("no such file")):
            assert open_launcher("/missing/launcher", sink=sink) is False

        assert any("no such file" in line for line in sink_lines)
