from abc import ABC, abstractmethod
from typing import Optional
from pinas.system.mutator import HostMutator, SystemMutator


class PackageManager(ABC):
    def __init__(self, mutator: Optional[SystemMutator] = None):
        self.mutator = mutator or HostMutator()

    @abstractmethod
    def update(self):
        pass

    @abstractmethod
    def install(self, *packages: str):
        pass
