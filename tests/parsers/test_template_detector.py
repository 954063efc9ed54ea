import pytest

from pdf_templates.models.template import PDFTemplate
from pdf_templates.parsers.template_detector import TemplateDetector

TEXT = "D&G DISTRIBUIDORA S.A.\nCUIT 30-12345678-9\nOrden No: 4512"


def template(name: str, keywords: list[str], active: bool = True) -> PDFTemplate:
    return PDFTemplate(id=name, name=name, detect_keywords=keywords, active=active)


@pytest.mark.parametrize(
    "keywords,expected",
    [
        (["d&g"], 1),
        (["D&G", "30-12345678-9"], 2),
        (["Fenix"], 0),
        ([], 0),
    ],
)
def test_count_keyword_hits(keywords, expected):
    assert TemplateDetector.count_keyword_hits(TEXT, keywords) == expected


def test_keywords_are_literal_text():
    assert TemplateDetector.count_keyword_hits("Total 1.00", ["1+00"]) == 0
    assert TemplateDetector.count_keyword_hits("S.A.", ["S.A."]) == 1


def test_most_keyword_hits_wins():
    generic = template("generic", ["Orden"])
    dg = template("dg", ["D&G", "Orden"])

    assert TemplateDetector.detect(TEXT, [generic, dg]) is dg


def test_tie_goes_to_first_template():
    first = template("first", ["D&G"])
    second = template("second", ["DISTRIBUIDORA"])

    assert TemplateDetector.detect(TEXT, [first, second]) is first


def test_inactive_templates_are_ignored():
    inactive = template("dg-old", ["D&G", "Orden"], active=False)
    active = template("dg", ["D&G"])

    assert TemplateDetector.detect(TEXT, [inactive, active]) is active


def test_no_match_returns_none():
    templates = [template("fenix", ["FENIX"]), template("empty", [])]

    assert TemplateDetector.detect(TEXT, templates) is None
    assert TemplateDetector.detect(TEXT, []) is None
