from pydantic import Field

from .types import MonitorConfig


class FilesystemsConfig(MonitorConfig):
    host_fs_path: str = Field(default="", alias="hostFSPath")
    fs_types: list[str] = Field(default_factory=list, alias="fsTypes")
    mount_points: list[str] = Field(default_factory=list)
    send_mode_dimension: bool = False
    include_logical: bool = False
