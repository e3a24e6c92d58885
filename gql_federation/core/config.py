"""Generation settings shared by the CLI and the library entry points."""

from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict


class FederationConfig(BaseModel):
    """Settings for one generation run.

    Example config file:
        {"federation": true, "include_directives": true}
    """

    model_config = ConfigDict(extra="forbid")

    federation: bool = False
    include_directives: bool = False
    # Signature a generator uses for a resolver's parent argument
    parent_type_signature: str = "ParentType"


def load_config(path: Union[str, Path]) -> FederationConfig:
    """Read a FederationConfig from a JSON file.

    Raises:
        pydantic.ValidationError: If the file does not describe a valid config
    """
    return FederationConfig.model_validate_json(Path(path).read_text())
