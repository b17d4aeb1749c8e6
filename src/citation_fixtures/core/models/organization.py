"""Organization data model for corporate authors."""

from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, BeforeValidator, Field

from .validators import to_str, empty_to_none, normalize


class Organization(BaseModel):
    """A corporate author, publisher body or any other named group."""

    name: Optional[
        Annotated[
            str,
            BeforeValidator(to_str),
            AfterValidator(empty_to_none),
            AfterValidator(normalize),
        ]
    ] = Field(None, description="Contains an organizational name.")

    def display_name(self) -> str:
        return self.name or ""
