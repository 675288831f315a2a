from unittest.mock import patch
from click.testing import CliRunner
from pinas.cli import main
from pinas.setup.models import SetupReport, SetupState
from pinas.setup.orchestrator import Orchestrator
from pinas.system.mutator import DryRunMutator, HostMutator


def test_main_help():
    runner = CliRunner()
    result = runner.invoke(main, ['--help'])
    assert result.exit_code == 0
    assert "turn a Raspberry Pi and two USB drives into a NAS" in result.output


def test_setup_success_exits_zero():
    report = SetupReport(hostname="raspberrypi", state=SetupState.DONE)
    with patch('pinas.config.settings.find_config_file', return_value=None), \
         patch.object(Orchestrator, 'run', autospec=True, return_value=report) as mock_run:
        result = CliRunner().invoke(main, ['setup'])

    assert result.exit_code == 0
    assert "setup complete" in result.output
    assert "Done." in result.output
    orchestrator = mock_run.call_args[0][0]
    assert isinstance(orchestrator.mutator, HostMutator)
    assert orchestrator.check_privileges is True


def test_setup_failure_exits_non_zero():
    report = SetupReport(
        hostname="raspberrypi",
        state=SetupState.FAILED,
        error_kind="PrecondFailed",
        reason="User 'dan' not found.",
    )
    with patch('pinas.config.settings.find_config_file', return_value=None), \
         patch.object(Orchestrator, 'run', autospec=True, return_value=report):
        result = CliRunner().invoke(main, ['setup'])

    assert result.exit_code == 1
    assert "PrecondFailed" in result.output
    assert "User 'dan' not found." in result.output


def test_setup_dry_run_uses_simulated_mutator():
    report = SetupReport(hostname="raspberrypi", state=SetupState.DONE)
    with patch('pinas.config.settings.find_config_file', return_value=None), \
         patch.object(Orchestrator, 'run', autospec=True, return_value=report) as mock_run:
        result = CliRunner().invoke(main, ['setup', '--dry-run'])

    assert result.exit_code == 0
    orchestrator = mock_run.call_args[0][0]
    assert isinstance(orchestrator.mutator, DryRunMutator)
    assert orchestrator.check_privileges is False


def test_setup_with_unreadable_config(tmp_path):
    result = CliRunner().invoke(main, ['setup', '--config', str(tmp_path / "nope.yaml")])
    assert result.exit_code == 1
    assert "Could not load configuration" in result.output


def test_setup_with_malformed_config(tmp_path):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("devices: [unclosed\n")
    result = CliRunner().invoke(main, ['setup', '--config', str(config_file), '--dry-run'])
    assert result.exit_code == 1
    assert "Could not load configuration" in result.output
    assert "not valid YAML" in result.output


def test_version():
    with patch('pinas.version.__version__', "1.2.3"):
        result = CliRunner().invoke(main, ['version'])
    assert result.exit_code == 0
    assert "1.2.3" in result.output
