from unittest.mock import MagicMock, patch
from click.testing import CliRunner
from pinas.cli import main


@patch('pinas.storage.fstab.psutil.disk_partitions')
def test_list_mounts(mock_partitions, tmp_path):
    fstab = tmp_path / "fstab"
    fstab.write_text(
        "proc  /proc  proc  defaults  0  0\n"
        "UUID=ABCD-1234  /mnt/usb1  exfat  defaults,uid=1000,gid=1000,umask=000  0  0\n"
        "UUID=5E1F-22AA  /mnt/usb2  ext4  defaults  0  0\n"
    )
    mock_partitions.return_value = [MagicMock(mountpoint="/mnt/usb1")]

    result = CliRunner().invoke(main, ['mounts', 'list', '--fstab', str(fstab)])

    assert result.exit_code == 0
    assert "UUID=ABCD-1234 -> /mnt/usb1 (exfat, defaults,uid=1000,gid=1000,umask=000) [mounted]" in result.output
    assert "UUID=5E1F-22AA -> /mnt/usb2 (ext4, defaults) [not mounted]" in result.output


def test_list_mounts_empty(tmp_path):
    result = CliRunner().invoke(main, ['mounts', 'list', '--fstab', str(tmp_path / "fstab")])
    assert "No UUID entries found." in result.output
