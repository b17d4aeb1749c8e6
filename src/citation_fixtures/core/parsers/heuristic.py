"""Rule-based reference parser.

Splits a reference string into segments at sentence boundaries and assigns
fields with regular expressions. Works well for APA, Chicago and MLA style
references and is the default when no external parsing library is present.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..formats import ParseFormat, render
from ..models import Reference
from ...utils.author_parser import has_role_marker, parse_names
from .base import ReferenceParser

_LOGGER = logging.getLogger(__name__)

CITATION_NUMBER_RE = re.compile(r"^\s*(\[\d+[a-z]?\]|\(\d{1,3}\)|\d{1,4}\.(?=\s))\s*")
DOI_RE = re.compile(r"(?:https?://(?:dx\.)?doi\.org/|\bdoi:?\s*)?(10\.\d{4,9}/\S+)", re.IGNORECASE)
URL_RE = re.compile(
    r"(?:(?:Retrieved|Available)\s+(?:from|at):?\s*|URL:?\s*)?<?(https?://[^\s>]+)>?", re.IGNORECASE
)
ISBN_RE = re.compile(r"\bISBN(?:-1[03])?:?\s*([\dXx][\dXx\- ]{8,16}[\dXx])")
ISSN_RE = re.compile(r"\bISSN:?\s*(\d{4}-?\d{3}[\dXx])")

# "Authors (2020)." or "Authors (ca. 1850a)."
APA_RE = re.compile(
    r"^(?P<authors>.+?)\s*\((?P<date>(?:(?:ca?\.|circa)\s*)?\d{4}[a-z]?(?:[/-]\d{2,4})?|n\.\s?d\.)\)[.,:]?\s*(?P<rest>.*)$"
)
# "Surname, I., Surname, I. & Surname, I." at the very start
INITIALS_AUTHORS_RE = re.compile(
    r"^(?:(?:[a-z]+\s+)*[A-Z][\w'\-]+(?:\s+[A-Z][\w'\-]+)?,\s*(?:[A-Z]\.\s?-?\s?)+"
    r"(?:,\s*(?:&|and)?\s*|\s*(?:&|and)\s+|\s*))+(?:et\s+al\.\s*)?"
)
YEAR_RE = re.compile(r"\(?\b(?P<circa>(?:ca?\.|circa)\s*)?(?P<year>(?:1[5-9]|20)\d{2})[a-z]?\b\)?")
PAGES_RE = re.compile(r"\(?\bpp?\.\s*(?P<pages>\d+(?:\s*[-–]+\s*\d+)?)\)?")
QUOTED_TITLE_RE = re.compile(r'^["“](?P<title>.+?)[,.]?["”][,.]?\s*(?P<rest>.*)$')
IN_RE = re.compile(r"^In:?\s+(?P<rest>.+)$")
IN_EDITORS_RE = re.compile(r"^(?P<editors>.+?)\s*\((?:Eds?|eds?|Hrsg)\.?\)\s*,?\s*(?P<container>.*)$")
EDITED_BY_RE = re.compile(r"^(?:Edited|Ed\.|Eds\.)\s+by\s+(?P<names>.+)$", re.IGNORECASE)
TRANSLATED_BY_RE = re.compile(r"^(?:Translated|Trans\.|Tr\.)\s+by\s+(?P<names>.+)$", re.IGNORECASE)
THESIS_RE = re.compile(
    r"(?P<genre>(?:Ph\.?\s?D\.?|Doctoral|Master'?s?|M\.?A\.?|Bachelor'?s?)\s+(?:thesis|dissertation))",
    re.IGNORECASE,
)
REPORT_RE = re.compile(r"(?P<genre>\b(?:Technical|Tech\.)\s+(?:Report|Rep\.)|\bWorking\s+Paper|\bReport)\b")
EDITION_RE = re.compile(
    r"^(?P<edition>\d+(?:st|nd|rd|th)|[A-Z][a-z]+)\s+(?:ed\.|edn\.?|edition)$", re.IGNORECASE
)
SERIES_RE = re.compile(r"^(?P<title>.+?\bSeries)\s*(?P<number>\d+)?$")
VOLUME_RE = re.compile(
    r"^(?P<container>.*?[A-Za-z].*?)[,\s]+(?:vol\.\s*)?(?P<volume>\d+)"
    r"(?:\s*\((?P<issue>[^)]+)\)|,?\s*no\.\s*(?P<issue2>\d+))?"
    r"(?:\s*[,:]\s*(?P<pages>\d+(?:\s*[-–]+\s*\d+)?))?$"
)
PLACE_PUBLISHER_RE = re.compile(r"^(?P<place>[A-Z][^:]{1,60}):\s*(?P<publisher>.+)$")
CONFERENCE_RE = re.compile(r"\b(?:Proceedings|Proc\.|Conference|Symposium|Workshop)\b", re.IGNORECASE)

# Words after which a period does not end a segment.
ABBREVIATIONS = {
    "al", "ca", "cf", "ch", "chap", "co", "dr", "ed", "eds", "edn", "hrsg", "inc", "jr", "mr", "mrs",
    "no", "nos", "p", "pp", "proc", "rev", "sr", "st", "tr", "trans", "vol", "vols", "vs",
}


def split_segments(text: str) -> List[str]:
    """Split at ``. ``, ``? `` and ``! `` unless the period ends an initial or abbreviation."""
    segments = []
    start = 0
    for match in re.finditer(r"[.?!]\s+", text):
        before = text[start:match.start()]
        word = re.split(r"[\s(\[]", before)[-1] if before else ""
        if match.group(0)[0] == "." and (
            (len(word) == 1 and word.isalpha()) or word.lower() in ABBREVIATIONS
        ):
            continue
        end = match.start() + (0 if match.group(0)[0] == "." else 1)
        segments.append(text[start:end])
        start = match.end()
    segments.append(text[start:].rstrip(" ").removesuffix("."))
    return [s.strip(" ,;") for s in segments if s.strip(" ,;.")]


def _cut(text: str, match: re.Match) -> str:
    return _tidy(text[:match.start()] + " " + text[match.end():])


def _looks_like_names(text: str) -> bool:
    if "," in text or "&" in text or re.search(r"\band\b", text):
        return True
    words = text.split()
    return len(words) <= 4 and all(w[0].isupper() for w in words)


def _tidy(text: str) -> str:
    text = " ".join(text.split())
    text = re.sub(r"\s+([,.;:)])", r"\1", text)
    text = re.sub(r"\(\s*\)", "", text)
    text = re.sub(r"([,;:])\1+", r"\1", text)
    text = re.sub(r"[,;:]\s*\.", ".", text)
    return text.strip(" ,;:")


class HeuristicParser(ReferenceParser):
    """Parse references with regular expressions, no model or dictionary needed."""

    name = "heuristic"

    def parse(self, references: Sequence[str], format: ParseFormat | str = ParseFormat.JSON) -> Any:
        parsed = [self.parse_reference(reference) for reference in references]
        return render(parsed, format)

    def parse_reference(self, text: str) -> Reference:
        """Parse a single reference string into a `Reference`."""
        fields: Dict[str, Any] = {}
        rest = " ".join(str(text).split())

        match = CITATION_NUMBER_RE.match(rest)
        if match:
            fields["citation_number"] = match.group(1)
            rest = rest[match.end():]

        for key, pattern in (("doi", DOI_RE), ("url", URL_RE), ("isbn", ISBN_RE), ("issn", ISSN_RE)):
            match = pattern.search(rest)
            if match:
                fields[key] = match.group(1).rstrip(".,;")
                rest = _cut(rest, match)

        authors, body = self._split_authors(rest, fields)
        if authors:
            if has_role_marker(authors):
                fields["editor"] = parse_names(authors)
            else:
                fields["author"] = parse_names(authors)
        if "date" not in fields:
            body = self._split_leading_year(body, fields)

        title, segments = self._split_title(body)
        fields["title"] = title
        self._assign_segments(segments, fields)
        fields["type"] = fields.get("type") or self._infer_type(fields)

        reference = Reference(**fields)
        if reference == Reference():
            _LOGGER.warning(f"Nothing recognised in reference: {text!r}")
        return reference

    def _split_authors(self, rest: str, fields: Dict[str, Any]) -> Tuple[Optional[str], str]:
        match = APA_RE.match(rest)
        if match and match.group("authors").strip():
            self._set_date(fields, match.group("date"))
            return match.group("authors"), match.group("rest")

        match = INITIALS_AUTHORS_RE.match(rest)
        if match and match.end() < len(rest):
            return match.group(0), rest[match.end():]

        segments = split_segments(rest)
        if len(segments) > 1 and _looks_like_names(segments[0]):
            body = rest[rest.index(segments[0]) + len(segments[0]):].lstrip(" .")
            return segments[0], body
        return None, rest

    def _split_leading_year(self, body: str, fields: Dict[str, Any]) -> str:
        # Author-date styles: "Smith, J. 2020. Title."
        match = YEAR_RE.match(body)
        if match and body[match.end():match.end() + 1] in (".", ","):
            self._set_date(fields, match.group(0))
            return body[match.end() + 1:].lstrip()
        return body

    def _split_title(self, body: str) -> Tuple[Optional[str], List[str]]:
        match = QUOTED_TITLE_RE.match(body)
        if match:
            return match.group("title"), split_segments(match.group("rest"))
        segments = split_segments(body)
        if not segments:
            return None, []
        return segments[0], segments[1:]

    def _set_date(self, fields: Dict[str, Any], date: str):
        if re.match(r"n\.\s?d\.", date):
            return
        match = YEAR_RE.search(date)
        if match:
            fields["date"] = [match.group("year")]
            fields["date_circa"] = bool(match.group("circa"))

    def _assign_segments(self, segments: List[str], fields: Dict[str, Any]):
        notes = []
        for segment in segments:
            if "date" not in fields:
                match = YEAR_RE.search(segment)
                if match:
                    self._set_date(fields, match.group(0))
                    segment = _cut(segment, match)
            if "pages" not in fields:
                match = PAGES_RE.search(segment)
                if match:
                    fields["pages"] = match.group("pages").replace(" ", "")
                    segment = _cut(segment, match)
            segment = _tidy(segment)
            if not segment:
                continue
            if not self._assign_segment(segment, fields):
                notes.append(segment)

        if notes:
            if "container_title" not in fields and "publisher" not in fields:
                fields["container_title"] = notes.pop(0)
            if notes:
                fields["note"] = ". ".join(notes)

    def _assign_segment(self, segment: str, fields: Dict[str, Any]) -> bool:
        """Try each known segment shape; return False if none applies."""
        match = IN_RE.match(segment)
        if match:
            fields["type"] = "chapter"
            inner = match.group("rest")
            editors = IN_EDITORS_RE.match(inner)
            if editors:
                fields["editor"] = parse_names(editors.group("editors"))
                inner = editors.group("container")
            if inner:
                self._assign_container(inner, fields)
            return True

        for key, pattern in (("editor", EDITED_BY_RE), ("translator", TRANSLATED_BY_RE)):
            match = pattern.match(segment)
            if match:
                fields[key] = parse_names(match.group("names"))
                return True

        match = THESIS_RE.search(segment)
        if match:
            fields["type"] = "thesis"
            fields["genre"] = match.group("genre")
            school = _cut(segment, match)
            if school:
                fields["publisher"] = school
            return True

        match = REPORT_RE.search(segment)
        if match and "container_title" not in fields:
            fields["type"] = "report"
            fields["genre"] = match.group("genre")
            number = re.search(r"\b(?:No\.\s*)?([A-Z]*-?\d[\w\-/]*)$", _cut(segment, match))
            if number:
                fields["collection_number"] = number.group(1)
            return True

        match = EDITION_RE.match(segment)
        if match:
            fields["edition"] = match.group("edition")
            return True

        match = SERIES_RE.match(segment)
        if match:
            fields["collection_title"] = match.group("title")
            if match.group("number"):
                fields["collection_number"] = match.group("number")
            return True

        # "Journal 12(3): 45-67" before "Place: Publisher"
        if "container_title" not in fields and VOLUME_RE.match(segment):
            self._assign_container(segment, fields)
            return True

        match = PLACE_PUBLISHER_RE.match(segment)
        if match and "publisher" not in fields:
            fields["location"] = match.group("place")
            fields["publisher"] = match.group("publisher")
            return True

        return False

    def _assign_container(self, text: str, fields: Dict[str, Any]):
        match = VOLUME_RE.match(text)
        if match:
            fields["container_title"] = match.group("container").strip(" ,")
            fields["volume"] = match.group("volume")
            issue = match.group("issue") or match.group("issue2")
            if issue:
                fields["issue"] = issue
            if match.group("pages") and "pages" not in fields:
                fields["pages"] = match.group("pages").replace(" ", "")
            return
        fields["container_title"] = text

    def _infer_type(self, fields: Dict[str, Any]) -> Optional[str]:
        container = fields.get("container_title")
        if container and CONFERENCE_RE.search(container):
            return "paper-conference"
        if container and (fields.get("volume") or fields.get("issue")):
            return "article-journal"
        if container:
            return "chapter" if fields.get("publisher") else "article-journal"
        if fields.get("publisher") or fields.get("location") or fields.get("isbn"):
            return "book"
        return None
