from pydantic import (
    BaseModel,
    ConfigDict,
    FilePath,
)


class LoaderSettings(BaseModel):
    """Settings for one config check run, assembled from CLI args and environment.

    Settings are immutable per runtime.
    """

    model_config = ConfigDict(frozen=True)

    # Required settings
    config_file: FilePath

    # Optional settings with defaults
    validate_receivers: bool = True
    receiver_names: list[str] = []
