"""Drive-letter mapping for Windows clients.

Produces the ``net use`` commands that drop any existing mapping for each
letter and map it again, persistently, to a share on the NAS. The password is
left to ``net use`` to prompt for.
"""
import logging
import subprocess
from typing import List
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class DriveMapping(BaseModel):
    letter: str
    share: str

    @property
    def drive(self) -> str:
        return self.letter.rstrip(":").upper() + ":"


def default_mappings(letters: List[str], shares: List[str]) -> List[DriveMapping]:
    return [DriveMapping(letter=letter, share=share) for letter, share in zip(letters, shares)]


def build_commands(host: str, account: str, mappings: List[DriveMapping]) -> List[List[str]]:
    commands = []
    for m in mappings:
        commands.append(["net", "use", m.drive, "/delete", "/y"])
        commands.append([
            "net", "use", m.drive, f"\\\\{host}\\{m.share}",
            f"/user:{account}", "*", "/persistent:yes",
        ])
    return commands


def render_batch(host: str, account: str, mappings: List[DriveMapping]) -> str:
    lines = [
        "@echo off",
        f"REM Map pinas shares on {host} as network drives",
    ]
    for cmd in build_commands(host, account, mappings):
        line = " ".join(cmd)
        if "/delete" in cmd:
            line += " >nul 2>&1"
        lines.append(line)
    lines.append("echo Done.")
    lines.append("pause")
    return "\r\n".join(lines) + "\r\n"


def map_drives(host: str, account: str, mappings: List[DriveMapping]):
    """Run the mapping once. Exit codes are not checked."""
    for cmd in build_commands(host, account, mappings):
        logger.info(" ".join(cmd))
        subprocess.run(cmd, check=False)
