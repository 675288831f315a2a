import subprocess
import pytest
from unittest.mock import MagicMock, patch
from pinas.errors import ServiceError
from pinas.system.mutator import DryRunMutator, SystemMutator
from pinas.systemd.manager import SystemdManager


def load_states(states):
    """subprocess.run stand-in for 'systemctl show -p LoadState UNIT'."""
    def run(cmd, **kwargs):
        result = MagicMock()
        result.stdout = f"LoadState={states.get(cmd[-1], 'not-found')}\n"
        return result
    return run


@patch('pinas.systemd.manager.subprocess.run')
def test_resolves_first_loaded_candidate(mock_run):
    mock_run.side_effect = load_states({"smb.service": "loaded"})
    assert SystemdManager(DryRunMutator()).unit_for("smb") == "smb.service"


@patch('pinas.systemd.manager.subprocess.run')
def test_falls_back_to_first_candidate(mock_run):
    mock_run.side_effect = load_states({})
    assert SystemdManager(DryRunMutator()).unit_for("avahi") == "avahi-daemon.service"


@patch('pinas.systemd.manager.subprocess.run')
def test_manage_service_goes_through_mutator(mock_run):
    mock_run.side_effect = load_states({"smbd.service": "loaded"})
    mutator = DryRunMutator()

    SystemdManager(mutator).manage_service("smb", "reload")

    assert mutator.actions == [("run", "systemctl reload smbd.service")]


def test_invalid_action():
    with pytest.raises(ValueError, match="Invalid action"):
        SystemdManager(DryRunMutator()).manage_service("smb", "explode")


def test_unknown_service():
    with pytest.raises(ValueError, match="Unknown service"):
        SystemdManager(DryRunMutator()).manage_service("nginx", "start")


@patch('pinas.systemd.manager.subprocess.run')
def test_systemctl_failure_raises_service_error(mock_run):
    mock_run.side_effect = load_states({"avahi-daemon.service": "loaded"})
    mutator = MagicMock(spec=SystemMutator)
    mutator.run.side_effect = subprocess.CalledProcessError(
        1, ["systemctl", "start", "avahi-daemon.service"], stderr="Job failed"
    )

    with pytest.raises(ServiceError, match="Job failed"):
        SystemdManager(mutator).manage_service("avahi", "start")


@patch('pinas.systemd.manager.subprocess.run')
def test_get_service_status(mock_run):
    def run(cmd, **kwargs):
        result = MagicMock()
        if "LoadState" in cmd and len(cmd) == 5:
            result.stdout = "LoadState=loaded\n"
        else:
            result.stdout = (
                "LoadState=loaded\nActiveState=active\nSubState=running\n"
                "UnitFileState=enabled\nDescription=Samba SMB Daemon\nMainPID=812\n"
                "ActiveEnterTimestamp=Mon 2026-10-19 08:00:00 UTC\n"
            )
        return result
    mock_run.side_effect = run

    status = SystemdManager(DryRunMutator()).get_service_status("smb")

    assert status.unit == "smbd.service"
    assert status.active_state == "active"
    assert status.unit_file_state == "enabled"
    assert status.main_pid == 812


@patch('pinas.systemd.manager.subprocess.run')
def test_status_of_missing_service_is_a_stub(mock_run):
    mock_run.side_effect = load_states({})
    status = SystemdManager(DryRunMutator()).get_service_status("jellyfin")
    assert status.load_state == "not-found"
    assert status.active_state == "inactive"
