from typing import Annotated

from pydantic import Field

from .types import REQUIRED, MonitorConfig


class NagiosConfig(MonitorConfig):
    """Config for the nagios monitor, which runs a check command locally.

    It has no host or port, so an endpoint cannot be used with it.
    """

    command: Annotated[str, REQUIRED] = ""
    service: Annotated[str, REQUIRED] = ""
    timeout: int = 9
    ignore_std_err: bool = Field(default=False, alias="ignoreStdErr")
