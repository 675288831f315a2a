from unittest.mock import call, patch
from pinas.client.windows import DriveMapping, build_commands, default_mappings, map_drives, render_batch

MAPPINGS = [DriveMapping(letter="Z", share="USB1"), DriveMapping(letter="y:", share="USB2")]


def test_drive_letter_is_normalised():
    assert MAPPINGS[0].drive == "Z:"
    assert MAPPINGS[1].drive == "Y:"


def test_default_mappings_pair_letters_with_shares():
    mappings = default_mappings(["Z", "Y"], ["USB1", "USB2"])
    assert [(m.drive, m.share) for m in mappings] == [("Z:", "USB1"), ("Y:", "USB2")]


def test_build_commands_delete_then_map():
    commands = build_commands("raspberrypi", "dan", MAPPINGS)

    assert commands == [
        ["net", "use", "Z:", "/delete", "/y"],
        ["net", "use", "Z:", "\\\\raspberrypi\\USB1", "/user:dan", "*", "/persistent:yes"],
        ["net", "use", "Y:", "/delete", "/y"],
        ["net", "use", "Y:", "\\\\raspberrypi\\USB2", "/user:dan", "*", "/persistent:yes"],
    ]


def test_render_batch():
    script = render_batch("raspberrypi", "dan", MAPPINGS)
    lines = script.split("\r\n")

    assert lines[0] == "@echo off"
    assert "net use Z: /delete /y >nul 2>&1" in lines
    assert "net use Y: \\\\raspberrypi\\USB2 /user:dan * /persistent:yes" in lines
    assert script.endswith("pause\r\n")


@patch("pinas.client.windows.subprocess.run")
def test_map_drives_runs_every_command_once(mock_run):
    map_drives("raspberrypi", "dan", MAPPINGS)

    assert mock_run.call_count == 4
    assert mock_run.call_args_list[0] == call(["net", "use", "Z:", "/delete", "/y"], check=False)
