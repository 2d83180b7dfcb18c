# tests/unit/core/test_field_locator.py
# Tests for field edit command detection, field lookup & new value extraction

import pytest

from src.core.constants import NO_FIELD_REASON
from src.core.field_locator import (
    apply_field_match,
    detect_edit_command,
    extract_new_value,
    locate_field,
)


# * Email command against a document w/ a literal \email command
def test_change_email_replaces_only_the_literal_span(rsection_resume):
    lookup = locate_field(rsection_resume, "change my email to jane@doe.com")

    assert lookup.found is True
    match = lookup.match
    assert match.field == "email"
    assert match.old_value == "jane@old.com"
    assert match.new_value == "jane@doe.com"
    assert rsection_resume[match.position.start : match.position.end] == "jane@old.com"

    updated = apply_field_match(rsection_resume, match)
    assert "\\email{jane@doe.com}" in updated
    assert "jane@old.com" not in updated
    # everything outside the span is untouched
    assert updated.replace("jane@doe.com", "jane@old.com") == rsection_resume


@pytest.mark.parametrize(
    "instruction,field,old_value",
    [
        ("change my name to Janet Doe", "name", "Jane Doe"),
        ("update my address to 1 Elm St", "address", "123 Main St \\\\ Springfield, IL"),
        ("change my phone to 555-222-3333", "phone", "(555) 123-4567"),
        ("update linkedin to linkedin.com/in/jd", "linkedin", "linkedin.com/in/janedoe"),
    ],
)
def test_old_value_equals_literal_text_rsection(rsection_resume, instruction, field, old_value):
    lookup = locate_field(rsection_resume, instruction)

    assert lookup.found
    assert lookup.match.field == field
    assert lookup.match.old_value == old_value


@pytest.mark.parametrize(
    "instruction,field,old_value",
    [
        ("change my phone number to 555-333-4444", "phone", "555-010-0199"),
        ("set github to github.com/jd", "github", "github.com/janedoe"),
    ],
)
def test_old_value_equals_literal_text_section_commands(sections_resume, instruction, field, old_value):
    lookup = locate_field(sections_resume, instruction)

    assert lookup.found
    assert lookup.match.field == field
    assert lookup.match.old_value == old_value
    start, end = lookup.match.position.start, lookup.match.position.end
    assert sections_resume[start:end] == old_value


# * Numbers grouped outside the 3-3-4 layout are still found
@pytest.mark.parametrize(
    "number",
    ["+44 20 7946 0958", "+33 1 42 68 53 00", "+49 30 1234 5678"],
)
def test_international_phone_is_located(number):
    document = (
        "\\documentclass{resume}\n"
        "\\name{Ada Byron}\n"
        f"\\address{{London \\\\ {number} \\\\ ada@example.com}}\n"
        "\\begin{document}\n"
        "Analyst, 2019 - 2023\n"
        "\\end{document}\n"
    )

    lookup = locate_field(document, "change my phone to +44 20 0000 1111")

    assert lookup.found is True
    assert lookup.match.field == "phone"
    assert lookup.match.old_value == number
    assert lookup.match.new_value == "+44 20 0000 1111"


def test_no_field_keyword_returns_reason(rsection_resume):
    lookup = locate_field(rsection_resume, "make my experience section punchier")

    assert lookup.found is False
    assert lookup.match is None
    assert lookup.reason == NO_FIELD_REASON


def test_keyword_without_matching_syntax_is_not_found():
    document = "\\documentclass{article}\n\\begin{document}\nHello\n\\end{document}"
    lookup = locate_field(document, "change my github to github.com/x")

    assert lookup.found is False


def test_first_pattern_in_declaration_order_wins():
    # \email{...} is declared before the bare address pattern
    document = "contact: other@site.org\n\\email{primary@site.org}"
    lookup = locate_field(document, "update email to new@site.org")

    assert lookup.match.old_value == "primary@site.org"


def test_locate_does_not_mutate_document(rsection_resume):
    before = rsection_resume
    locate_field(rsection_resume, "change my email to jane@doe.com")
    assert rsection_resume == before


class TestExtractNewValue:
    def test_to_connector(self):
        assert extract_new_value("change my email to jane@doe.com", ("email",)) == "jane@doe.com"

    def test_trailing_period_is_dropped(self):
        assert extract_new_value("Update email to a@b.com.", ("email",)) == "a@b.com"

    def test_as_connector(self):
        assert extract_new_value("set my name as Jane Doe", ("name",)) == "Jane Doe"

    def test_fallback_after_keyword(self):
        assert extract_new_value("phone: 555-111-2222", ("phone",)) == "555-111-2222"

    def test_nothing_usable(self):
        assert extract_new_value("fix the email", ("email",)) == ""


class TestDetectEditCommand:
    @pytest.mark.parametrize(
        "instruction",
        ["Change my email", "update the summary", "my phone is wrong", "set name"],
    )
    def test_detects_verbs_and_field_names(self, instruction):
        assert detect_edit_command(instruction) is True

    def test_plain_question_is_not_an_edit(self):
        assert detect_edit_command("What do you think of my resume?") is False
