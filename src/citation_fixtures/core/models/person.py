"""Person data model for citation processing."""

from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, BeforeValidator, Field

from .validators import to_str, empty_to_none, normalize


class Person(BaseModel):
    """A personal name split into the parts citation formats care about.

    ``family`` and ``given`` map directly onto the CSL name variables of the
    same name; ``particle`` holds connecting words such as 'van der'.
    """

    given: Optional[
        Annotated[
            str,
            BeforeValidator(to_str),
            AfterValidator(empty_to_none),
            AfterValidator(normalize),
        ]
    ] = Field(None, description="Given names or initials.")

    family: Optional[
        Annotated[
            str,
            BeforeValidator(to_str),
            AfterValidator(empty_to_none),
            AfterValidator(normalize),
        ]
    ] = Field(None, description="Family (inherited) name.")

    particle: Optional[
        Annotated[
            str,
            BeforeValidator(to_str),
            AfterValidator(empty_to_none),
            AfterValidator(normalize),
        ]
    ] = Field(
        None,
        description="Connecting phrase used within a name, such as 'van der' or 'de'.",
    )

    @classmethod
    def from_string(cls, name: str) -> "Person":
        """Split ``'Family, Given'`` or ``'Given Family'`` into a Person.

        A single word is treated as a family name.
        """
        name = " ".join(str(name).split())
        if "," in name:
            family, given = name.split(",", 1)
            return cls(family=family, given=given)
        parts = name.split(" ")
        if len(parts) < 2:
            return cls(family=name)
        return cls(family=parts[-1], given=" ".join(parts[:-1]))

    def display_name(self) -> str:
        """Render as ``'Family, Given'`` with single-letter initials dotted."""
        family = " ".join(p for p in (self.particle, self.family) if p)
        if not self.given:
            return family
        given = " ".join(
            f"{part}." if len(part) == 1 and part.isalpha() else part
            for part in self.given.split()
        )
        if not family:
            return given
        return f"{family}, {given}"
