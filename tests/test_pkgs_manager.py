import subprocess
import pytest
from unittest.mock import MagicMock, patch
from pinas.errors import PackageError
from pinas.pkgs.base import PackageManager
from pinas.pkgs.debian import DebianPackageManager
from pinas.pkgs.manager import NAS_PACKAGES, get_package_manager, install_packages
from pinas.system.mutator import DryRunMutator


@pytest.mark.parametrize("os_info", [
    {"id": "raspbian", "id_like": "debian"},
    {"id": "debian"},
    {"id": "linuxmint", "id_like": "ubuntu debian"},
])
@patch('pinas.pkgs.manager.get_os_info')
def test_debian_family_gets_apt(mock_os_info, os_info):
    mock_os_info.return_value = os_info
    assert isinstance(get_package_manager(DryRunMutator()), DebianPackageManager)


@patch('pinas.pkgs.manager.get_os_info', return_value={"id": "arch"})
def test_unsupported_distribution(mock_os_info):
    with pytest.raises(PackageError, match="Unsupported distribution: arch"):
        get_package_manager()


def test_install_packages_updates_then_installs():
    mutator = DryRunMutator()
    install_packages(DebianPackageManager(mutator), NAS_PACKAGES)

    assert mutator.actions == [
        ("run", "apt-get update"),
        ("run", "apt-get install -y usbutils exfat-fuse exfatprogs ntfs-3g samba avahi-daemon"),
    ]


def test_install_failure_becomes_package_error():
    pm = MagicMock(spec=PackageManager)
    pm.install.side_effect = subprocess.CalledProcessError(100, ["apt-get"], stderr="E: Unable to locate package samba")
    with pytest.raises(PackageError, match="Unable to locate package"):
        install_packages(pm, ["samba"])

