"""Tests for PackSyncOrchestrator."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from conftest import FakeManifestClient
from packsync.exceptions import ConfigValidationError, ProfileWriteError
from packsync.models import (
    InstallResult,
    InstallState,
    ModLoader,
    PackSyncConfig,
    SyncStatus,
)
from packsync.orchestrator import PackSyncOrchestrator
from packsync.profile import PROFILE_KEY, ProfileWriter


def _config(tmp_path: Path, **remote) -> PackSyncConfig:
    data = {
        "remote": {
            "endpoint_url": "https://r2.example.com",
            "access_key": "ak",
            "secret_key": "sk",
            **remote,
        },
        "minecraft": {
            "version": "1.20.1",
            "loader": "fabric",
            "loader_version": "1.0.1",
            "directory": str(tmp_path / ".minecraft"),
            "game_directory": str(tmp_path / "instance"),
        },
        "targets": [{"bucket": "mods", "directory": "mods"}],
    }
    return PackSyncConfig.from_dict(data, env={})


def _installer(state: InstallState = InstallState.SUCCEEDED):
    installer = MagicMock()

    async def install(request):
        return InstallResult(
            request=request,
            state=state,
            version_tag="fabric-loader-0.16.10-1.20.1",
        )

    installer.install = AsyncMock(side_effect=install)
    installer.close = AsyncMock()
    return installer


class TestRun:
    @pytest.mark.asyncio
    async def test_full_pipeline(self, tmp_path: Path, fake_client: FakeManifestClient, sink):
        fake_client.put("mods", "a.jar", b"aaa")
        installer = _installer()
        orchestrator = PackSyncOrchestrator(
            _config(tmp_path), sink=sink, client=fake_client, installer=installer
        )

        report = await orchestrator.run()

        assert report.ok
        assert report.sync[0].status is SyncStatus.SYNCED
        assert (tmp_path / "instance" / "mods" / "a.jar").read_bytes() == b"aaa"
        assert fake_client.closed
        installer.close.assert_awaited_once()

        request = installer.install.await_args.args[0]
        assert request.loader is ModLoader.FABRIC
        assert request.minecraft_directory == str(tmp_path / ".minecraft")

        document = json.loads((tmp_path / ".minecraft" / "launcher_profiles.json").read_text())
        entry = document["profiles"][PROFILE_KEY]
        assert entry["lastVersionId"] == "fabric-loader-0.16.10-1.20.1"
        assert entry["gameDir"] == str(tmp_path / "instance")

    @pytest.mark.asyncio
    async def test_validation_fails_before_any_io(self, tmp_path: Path, fake_client, sink):
        installer = _installer()
        orchestrator = PackSyncOrchestrator(
            _config(tmp_path, secret_key=""),
            sink=sink,
            client=fake_client,
            installer=installer,
        )

        with pytest.raises(ConfigValidationError):
            await orchestrator.run()

        assert fake_client.list_calls == []
        installer.install.assert_not_awaited()
        assert not (tmp_path / "instance").exists()

    @pytest.mark.asyncio
    async def test_skip_install_uses_computed_tag(self, tmp_path: Path, fake_client, sink):
        fake_client.put("mods", "a.jar", b"aaa")
        installer = _installer()
        orchestrator = PackSyncOrchestrator(
            _config(tmp_path), sink=sink, client=fake_client, installer=installer
        )

        report = await orchestrator.run(skip_install=True)

        installer.install.assert_not_awaited()
        assert report.install is None
        assert report.profile.version_id == "fabric-loader-0.16.10-1.20.1"

    @pytest.mark.asyncio
    async def test_skip_profile(self, tmp_path: Path, fake_client, sink):
        fake_client.put("mods", "a.jar", b"aaa")
        orchestrator = PackSyncOrchestrator(
            _config(tmp_path), sink=sink, client=fake_client, installer=_installer()
        )

        report = await orchestrator.run(skip_profile=True)

        assert report.profile is None
        assert not (tmp_path / ".minecraft" / "launcher_profiles.json").exists()

    @pytest.mark.asyncio
    async def test_failed_install_still_writes_profile(self, tmp_path: Path, fake_client, sink):
        fake_client.put("mods", "a.jar", b"aaa")
        orchestrator = PackSyncOrchestrator(
            _config(tmp_path),
            sink=sink,
            client=fake_client,
            installer=_installer(InstallState.FAILED),
        )

        report = await orchestrator.run()

        assert not report.ok
        assert report.install.state is InstallState.FAILED
        assert report.profile is not None

    @pytest.mark.asyncio
    async def test_empty_bucket_is_reported_not_fatal(self, tmp_path: Path, fake_client, sink):
        orchestrator = PackSyncOrchestrator(
            _config(tmp_path), sink=sink, client=fake_client, installer=_installer()
        )

        report = await orchestrator.run()

        assert report.sync[0].status is SyncStatus.SKIPPED_EMPTY
        assert report.ok

    @pytest.mark.asyncio
    async def test_profile_error_is_captured(
        self, tmp_path: Path, fake_client, sink, sink_lines
    ):
        fake_client.put("mods", "a.jar", b"aaa")
        writer = MagicMock(spec=ProfileWriter)
        writer.write = AsyncMock(side_effect=ProfileWriteError("disk full"))
        orchestrator = PackSyncOrchestrator(
            _config(tmp_path),
            sink=sink,
            client=fake_client,
            installer=_installer(),
            profile_writer=writer,
        )

        report = await orchestrator.run()

        assert isinstance(report.profile_error, ProfileWriteError)
        assert not report.ok
        assert any("disk full" in line for line in sink_lines)


class TestLaunch:
    @pytest.mark.asyncio
    async def test_launch_opens_configured_launcher(self, tmp_path: Path, fake_client, sink):
        fake_client.put("mods", "a.jar", b"aaa")
        config = _config(tmp_path)
        config.minecraft.launcher = "/opt/minecraft/launcher"
        orchestrator = PackSyncOrchestrator(
            config, sink=sink, client=fake_client, installer=_installer()
        )

        with patch("packsync.orchestrator.open_launcher", return_value=True) as launch:
            report = await orchestrator.run(launch=True)

        launch.assert_called_once_with("/opt/minecraft/launcher", sink=sink)
        assert report.launched is True

    @pytest.mark.asyncio
    async def test_launch_failure_does_not_fail_run(self, tmp_path: Path, fake_client, sink):
        fake_client.put("mods", "a.jar", b"aaa")
        orchestrator = PackSyncOrchestrator(
            _config(tmp_path), sink=sink, client=fake_client, installer=_installer()
        )

        with patch("packsync.launcher.subprocess.Popen", side_effect=OSError("denied")):
            report = await orchestrator.run(launch=True)

        assert report.launched is False
        assert report.ok

    @pytest.mark.asyncio
    async def test_no_launch_by_default(self, tmp_path: Path, fake_client, sink):
        fake_client.put("mods", "a.jar", b"aaa")
        orchestrator = PackSyncOrchestrator(
            _config(tmp_path), sink=sink, client=fake_client, installer=_installer()
        )

        with patch("packsync.orchestrator.open_launcher") as launch:
            report = await orchestrator.run()

        launch.assert_not_called()
        assert report.launched is None
