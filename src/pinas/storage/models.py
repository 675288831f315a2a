from enum import Enum
from typing import List, Optional
from pydantic import BaseModel


class ReconcileResult(str, Enum):
    ADDED = "added"
    ALREADY_PRESENT = "already_present"


class DeviceSpec(BaseModel):
    path: str
    mount_point: str
    share_name: str


class ResolvedDevice(BaseModel):
    path: str
    uuid: str
    fstype: str


class MountEntry(BaseModel):
    identifier: str  # bare filesystem UUID
    mount_point: str
    fstype: str
    options: str = "defaults"
    dump: int = 0
    passno: int = 0

    @property
    def spec(self) -> str:
        return f"UUID={self.identifier}"

    def to_line(self) -> str:
        return f"{self.spec}  {self.mount_point}  {self.fstype}  {self.options}  {self.dump}  {self.passno}"


class Partition(BaseModel):
    name: str
    path: str
    size: int
    fstype: Optional[str] = None
    uuid: Optional[str] = None
    mountpoint: Optional[str] = None


class Disk(BaseModel):
    name: str
    path: str
    size: int
    model: Optional[str] = None
    serial: Optional[str] = None
    rotational: bool  # True if HDD, False if SSD/flash
    removable: bool = False
    fstype: Optional[str] = None
    uuid: Optional[str] = None
    mountpoint: Optional[str] = None
    partitions: List[Partition] = []
    is_system: bool = False  # True if contains root filesystem or boot
