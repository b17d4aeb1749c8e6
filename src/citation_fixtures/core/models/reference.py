"""Reference data model for parsed citations."""

from typing import Annotated, Dict, List, Optional
from pydantic import AfterValidator, BaseModel, BeforeValidator, Field

from .person import Person
from .organization import Organization
from .validators import to_str, to_list, empty_to_none, normalize, remove_empty_models

Text = Annotated[
    str,
    BeforeValidator(to_str),
    AfterValidator(empty_to_none),
    AfterValidator(normalize),
]

Names = Annotated[
    List[Person | Organization],
    BeforeValidator(to_list),
    AfterValidator(remove_empty_models),
    AfterValidator(empty_to_none),
]

NAME_FIELDS = ("author", "editor", "translator")


class Reference(BaseModel):
    """A single parsed reference.

    Field names follow the CSL variables produced by AnyStyle, with
    underscores in place of hyphens (``container_title`` for
    ``container-title``).
    """

    type: Optional[Text] = Field(None, description="CSL item type, e.g. 'book' or 'article-journal'.")
    citation_number: Optional[Text] = Field(None, description="Leading label such as '[12]' or '3.'.")
    author: Optional[Names] = Field(None, description="Personal or corporate authors.")
    editor: Optional[Names] = Field(None, description="Editors, compilers and similar roles.")
    translator: Optional[Names] = Field(None, description="Translators of the work.")
    title: Optional[Text] = Field(None, description="Title of the cited item.")
    container_title: Optional[Text] = Field(
        None, description="Journal, book or proceedings the item appears in."
    )
    collection_title: Optional[Text] = Field(None, description="Series title.")
    collection_number: Optional[Text] = Field(None, description="Number within the series.")
    edition: Optional[Text] = None
    genre: Optional[Text] = Field(None, description="Kind of work, e.g. 'PhD thesis'.")
    date: Optional[
        Annotated[
            List[str],
            BeforeValidator(to_list),
            AfterValidator(remove_empty_models),
            AfterValidator(normalize),
            AfterValidator(empty_to_none),
        ]
    ] = Field(None, description="Date parts, usually just the year.")
    date_circa: bool = Field(False, description="The date is approximate ('ca. 1850').")
    volume: Optional[Text] = None
    issue: Optional[Text] = None
    pages: Optional[Text] = None
    publisher: Optional[Text] = None
    location: Optional[Text] = Field(None, description="Place of publication.")
    note: Optional[Text] = None
    doi: Optional[Text] = None
    url: Optional[Text] = None
    isbn: Optional[Text] = None
    issn: Optional[Text] = None

    def to_field_map(self) -> Dict[str, List[str]]:
        """Flatten into CSL-keyed string lists, the shape the formatters consume.

        Empty fields are left out; names render as ``'Family, Given'``.
        """
        fields: Dict[str, List[str]] = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value is None or value is False:
                continue
            key = name.replace("_", "-")
            if name in NAME_FIELDS:
                rendered = [n.display_name() for n in value]
                fields[key] = [n for n in rendered if n]
            elif name == "date_circa":
                fields[key] = ["true"]
            elif isinstance(value, list):
                fields[key] = list(value)
            else:
                fields[key] = [value]
        return {k: v for k, v in fields.items() if v}
