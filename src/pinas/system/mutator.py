import logging
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import List, Tuple
from pinas.errors import FileWriteError

logger = logging.getLogger(__name__)


class SystemMutator(ABC):
    """Every change pinas makes to the host goes through one of these."""

    simulated = False

    @abstractmethod
    def run(self, cmd: List[str], check: bool = True) -> subprocess.CompletedProcess:
        pass

    @abstractmethod
    def append_text(self, path: str, text: str):
        pass

    @abstractmethod
    def write_text(self, path: str, text: str):
        pass

    @abstractmethod
    def copy_file(self, src: str, dst: str):
        pass

    @abstractmethod
    def makedirs(self, path: str):
        pass


class HostMutator(SystemMutator):
    def run(self, cmd, check=True):
        logger.debug(f"Running: {' '.join(cmd)}")
        return subprocess.run(cmd, check=check, capture_output=True, text=True)

    def append_text(self, path, text):
        try:
            with open(path, "a") as f:
                f.write(text)
        except OSError as e:
            raise FileWriteError(path, e.strerror or str(e)) from e

    def write_text(self, path, text):
        try:
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            with open(path, "w") as f:
                f.write(text)
        except OSError as e:
            raise FileWriteError(path, e.strerror or str(e)) from e

    def copy_file(self, src, dst):
        try:
            shutil.copy2(src, dst)
        except OSError as e:
            raise FileWriteError(dst, e.strerror or str(e)) from e

    def makedirs(self, path):
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise FileWriteError(path, e.strerror or str(e)) from e


class DryRunMutator(SystemMutator):
    """Records what would be done and touches nothing."""

    simulated = True

    def __init__(self):
        self.actions: List[Tuple[str, ...]] = []

    def run(self, cmd, check=True):
        logger.info(f"[dry-run] would run: {' '.join(cmd)}")
        self.actions.append(("run", " ".join(cmd)))
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    def append_text(self, path, text):
        logger.info(f"[dry-run] would append {len(text)} bytes to {path}")
        self.actions.append(("append", path, text))

    def write_text(self, path, text):
        logger.info(f"[dry-run] would write {len(text)} bytes to {path}")
        self.actions.append(("write", path, text))

    def copy_file(self, src, dst):
        logger.info(f"[dry-run] would copy {src} to {dst}")
        self.actions.append(("copy", src, dst))

    def makedirs(self, path):
        logger.info(f"[dry-run] would create directory {path}")
        self.actions.append(("makedirs", path))
