"""Tests for the CSL and BibTeX formatters."""

import pytest

from citation_fixtures.core.formats import Bibliography, ParseFormat, csl_name, render, to_bibtex, to_csl
from citation_fixtures.core.models import Organization, Person, Reference


@pytest.fixture
def perec():
    return Reference(
        type="book",
        author=[Person(family="Perec", given="Georges")],
        title="A Void",
        location="London",
        publisher="The Harvill Press",
        date=["1995"],
        pages="108",
    )


class TestCsl:
    """Test CSL-JSON conversion."""

    def test_minimal_reference(self):
        """Names are split and the date becomes 'issued'."""
        ref = Reference(author=[Person(family="Smith", given="J.")], title="A Study", date=["2020"])

        items = to_csl([ref])

        assert items == [{"author": [{"family": "Smith", "given": "J."}], "title": "A Study", "issued": "2020"}]
        assert list(items[0]) == ["author", "title", "issued"]

    def test_key_order_and_renames(self, perec):
        """Place and pages use their CSL names and the key order is fixed."""
        item = to_csl([perec])[0]

        assert list(item) == ["author", "title", "publisher", "type", "issued", "page", "publisher-place"]
        assert item["publisher-place"] == "London"
        assert item["page"] == "108"

    def test_mapping_input(self):
        """Plain mappings such as AnyStyle JSON entries are accepted."""
        entry = {
            "author": [{"family": "Turing", "given": "A. M."}],
            "title": "Computing machinery",
            "container-title": ["Mind."],
            "date": ["1950", "1951"],
            "location": ["Oxford"],
            "doi": ["10.1093/mind/LIX.236.433."],
        }

        item = to_csl([entry])[0]

        assert item["author"] == [{"family": "Turing", "given": "A. M."}]
        assert item["container-title"] == "Mind"
        assert item["issued"] == "1950/1951"
        assert item["publisher-place"] == "Oxford"
        assert item["DOI"] == "10.1093/mind/LIX.236.433"

    @pytest.mark.parametrize(
        "fields, issued",
        [
            ({"date": ["2020", "05", "01"]}, "2020-05-01"),
            ({"date": ["May", "2020"]}, "May-2020"),
            ({"date": ["1850"], "date-circa": [True]}, "1850~"),
        ],
    )
    def test_issued(self, fields, issued):
        """Test date rendering."""
        assert to_csl([fields])[0]["issued"] == issued

    def test_names(self):
        """Test conversion of rendered names into CSL name objects."""
        assert csl_name("Doe, Jane") == {"family": "Doe", "given": "Jane"}
        assert csl_name("Jane Doe") == {"family": "Doe", "given": "Jane"}
        assert csl_name("Plato") == {"literal": "Plato"}
        assert csl_name("Edited by Jane Doe") == {"literal": "Edited by Jane Doe"}

    def test_empty(self):
        """No references give no items."""
        assert to_csl([]) == []


class TestBibtex:
    """Test BibTeX conversion."""

    def test_book(self, perec):
        """Test a complete entry with the fixed field order."""
        assert str(to_bibtex([perec])) == (
            "@book{perec1995a,\n"
            "  author = {Perec, Georges},\n"
            "  title = {A Void},\n"
            "  publisher = {The Harvill Press},\n"
            "  date = {1995},\n"
            "  pages = {108},\n"
            "  address = {London}\n"
            "}\n"
        )

    def test_article_renames(self):
        """Journal articles use 'journal' and 'number'."""
        entry = {
            "type": ["article-journal"],
            "author": ["Smith, J.", "Doe, A."],
            "title": ["Deep results."],
            "container-title": ["Journal of Things"],
            "volume": ["12"],
            "issue": ["3"],
            "date": ["2020"],
        }

        text = str(to_bibtex([entry]))

        assert text.startswith("@article{smith2020a,\n")
        assert "  author = {Smith, J. and Doe, A.},\n" in text
        assert "  title = {Deep results},\n" in text
        assert "  journal = {Journal of Things},\n" in text
        assert "  number = {3},\n" in text
        assert "booktitle" not in text
        assert text.index("journal") < text.index("volume") < text.index("number") < text.index("date")

    @pytest.mark.parametrize(
        "csl_type, bibtex_type, field",
        [
            ("report", "techreport", "institution"),
            ("thesis", "thesis", "school"),
            ("chapter", "incollection", "publisher"),
            ("paper-conference", "inproceedings", "publisher"),
            ("manuscript", "unpublished", "publisher"),
        ],
    )
    def test_entry_types(self, csl_type, bibtex_type, field):
        """Test mapping of CSL types and type-specific publisher fields."""
        entry = to_bibtex([{"type": [csl_type], "title": ["T"], "publisher": ["Pub"]}])[0]

        assert entry.entry_type == bibtex_type
        assert (field, "Pub") in entry.fields

    def test_keys(self):
        """Repeated author-year keys get letter suffixes, incomplete ones a positional key."""
        refs = [
            {"author": ["Smith, J."], "date": ["2020"]},
            {"author": ["Smith, A."], "date": ["2020"]},
            {"title": ["Anonymous"], "date": ["2020"]},
            {"author": ["O'Neil, C."]},
        ]

        keys = [entry.key for entry in to_bibtex(refs)]

        assert keys == ["smith2020a", "smith2020b", "citeotter2", "citeotter3"]

    def test_circa_date_follows_author(self):
        """Approximate dates move up next to the title."""
        entry = to_bibtex([Reference(title="Letters", date=["1850"], date_circa=True, publisher="X")])[0]

        assert entry.fields[:2] == [("date", "1850~"), ("title", "Letters")]

    def test_organization_author(self):
        """Corporate authors keep their full name."""
        ref = Reference(author=[Organization(name="World Health Organization")], date=["2018"])

        entry = to_bibtex([ref])[0]

        assert entry.key == "world2018a"
        assert ("author", "World Health Organization") in entry.fields

    def test_empty(self):
        """An empty bibliography renders as a single newline."""
        bibliography = to_bibtex([])

        assert isinstance(bibliography, Bibliography)
        assert len(bibliography) == 0
        assert str(bibliography) == "\n"


class TestRender:
    """Test format dispatch."""

    def test_formats(self, perec):
        """Each format returns its own shape."""
        assert render([perec], "csl") == to_csl([perec])
        assert isinstance(render([perec], ParseFormat.BIBTEX), Bibliography)
        assert render([perec], "JSON")[0]["title"] == "A Void"

    def test_unknown_format(self, perec):
        """Unknown formats are rejected."""
        with pytest.raises(ValueError, match="Unsupported format"):
            render([perec], "ris")
