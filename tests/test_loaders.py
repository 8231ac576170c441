"""Tests for loader definitions."""

from packsync.installer import (
    FABRIC_PINNED_VERSION,
    FabricLoader,
    ForgeLoader,
    get_loader,
    version_tag,
)
from packsync.models import LoaderInstallRequest, ModLoader


def _request(loader: ModLoader, mc: str = "1.20.1", lv: str = "47.2.0") -> LoaderInstallRequest:
    return LoaderInstallRequest(
        loader=loader,
        minecraft_version=mc,
        loader_version=lv,
        minecraft_directory="/games/.minecraft",
    )


class TestLoaderDispatch:
    def test_each_loader_maps_to_one_class(self):
        assert isinstance(get_loader(ModLoader.FORGE), ForgeLoader)
        assert isinstance(get_loader(ModLoader.FABRIC), FabricLoader)


class TestForge:
    def test_version_tag(self):
        assert version_tag(_request(ModLoader.FORGE)) == "1.20.1-forge-47.2.0"

    def test_installer_url_repeats_full_version(self):
        url = ForgeLoader().installer_url(_request(ModLoader.FORGE))
        assert url == (
            "https://maven.minecraftforge.net/net/minecraftforge/forge/"
            "1.20.1-47.2.0/forge-1.20.1-47.2.0-installer.jar"
        )

    def test_installer_args(self):
        args = ForgeLoader().installer_args("/tmp/i.jar", _request(ModLoader.FORGE))
        assert args == ["-jar", "/tmp/i.jar", "--installClient", "/games/.minecraft"]


class TestFabric:
    def test_version_tag_uses_pinned_version_not_loader_version(self):
        tag = version_tag(_request(ModLoader.FABRIC, lv="1.0.1"))
        assert tag == f"fabric-loader-{FABRIC_PINNED_VERSION}-1.20.1"
        assert tag == "fabric-loader-0.16.10-1.20.1"
        assert version_tag(_request(ModLoader.FABRIC, lv="0.11.2")) == tag

    def test_installer_url_uses_loader_version(self):
        url = FabricLoader().installer_url(_request(ModLoader.FABRIC, lv="1.0.1"))
        assert url == (
            "https://maven.fabricmc.net/net/fabricmc/fabric-installer/"
            "1.0.1/fabric-installer-1.0.1.jar"
        )

    def test_installer_args(self):
        args = FabricLoader().installer_args("/tmp/i.jar", _request(ModLoader.FABRIC))
        assert args == [
            "-jar",
            "/tmp/i.jar",
            "client",
            "-dir",
            "/games/.minecraft",
            "-mcversion",
            "1.20.1",
        ]


def test_version_tag_is_deterministic():
    for loader in ModLoader:
        assert version_tag(_request(loader)) == version_tag(_request(loader))
