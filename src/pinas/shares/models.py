from typing import Optional
from pydantic import BaseModel

# Fixed access policy for every share pinas creates: open to anyone on the LAN,
# files owned by the configured account.
SHARE_POLICY = [
    ("browseable", "yes"),
    ("writeable", "yes"),
    ("public", "yes"),
    ("guest ok", "yes"),
    ("create mask", "0777"),
    ("directory mask", "0777"),
]


class SMBShare(BaseModel):
    name: str
    path: str
    comment: Optional[str] = None
    read_only: bool = False
    browsable: bool = True
    guest_ok: bool = False


class ShareEntry(BaseModel):
    name: str
    path: str
    owner: str

    def render(self) -> str:
        lines = ["", f"[{self.name}]", f"   path = {self.path}"]
        lines += [f"   {key} = {value}" for key, value in SHARE_POLICY]
        lines.append(f"   force user = {self.owner}")
        return "\n".join(lines) + "\n"
