"""Unit tests for merging extracted fragments into profile records."""

import copy

import pytest

from autorriculum.contexts.intake.document_parser import parse_document_text
from autorriculum.contexts.profile.merge import (
    merge_keyed,
    merge_languages,
    merge_profile,
    merge_unique,
)
from autorriculum.contexts.profile.profile_data_structure import (
    ExtractedFragment,
    LanguageProficiency,
    ProfileRecord,
    TechnicalSkills,
)


@pytest.fixture
def record():
    return ProfileRecord(
        name="Alice Smith",
        contact=["https://github.com/alice"],
        facts=["Speaker at PyCon"],
        languages=[LanguageProficiency("Python", "advanced")],
        certifications={
            "aws_certified_cloud_practitioner": {
                "name": "AWS Certified Cloud Practitioner",
                "issued": "2023-05",
                "credential_id": "ABC-123",
            }
        },
        technical_skills=TechnicalSkills(
            programming_languages=["Python", "Rust"], tools_and_technologies=["Vim"]
        ),
    )


@pytest.mark.unit
class TestMergeProfile:
    def test_end_to_end_contact(self):
        """Extracted contacts are appended after existing ones, without duplicates."""
        current = ProfileRecord(contact=["https://github.com/alice"])
        fragment = parse_document_text("alice@example.com\ngithub.com/alice")

        merged = merge_profile(current, fragment)

        assert merged.contact == ["https://github.com/alice", "alice@example.com"]

    def test_existing_certification_not_overwritten(self, record):
        """An existing key keeps every hand-curated field."""
        fragment = ExtractedFragment(
            certifications={
                "aws_certified_cloud_practitioner": {
                    "name": "AWS Certified Cloud Practitioner",
                    "type": "course_completion",
                    "extracted_from_pdf": True,
                },
                "docker_101": {"name": "Docker 101", "type": "course_completion"},
            }
        )

        merged = merge_profile(record, fragment)

        assert merged.certifications["aws_certified_cloud_practitioner"] == {
            "name": "AWS Certified Cloud Practitioner",
            "issued": "2023-05",
            "credential_id": "ABC-123",
        }
        assert list(merged.certifications) == ["aws_certified_cloud_practitioner", "docker_101"]

    def test_idempotent(self, record):
        """Merging the same fragment twice equals merging it once."""
        fragment = parse_document_text(
            "Certifications\nDocker 101\nMicrosoft Azure\nfundamentals\n"
            "alice@example.com\nPython and Go developer\n"
            "Languages\nEnglish (Full Professional)"
        )

        once = merge_profile(record, fragment)
        twice = merge_profile(once, fragment)

        assert twice == once
        assert twice.to_dict() == once.to_dict()

    def test_inputs_not_mutated(self, record):
        before = copy.deepcopy(record)
        fragment = ExtractedFragment(contact=["new@example.com"], certifications={"x_y_z": {}})

        merge_profile(record, fragment)

        assert record == before
        assert fragment.certifications == {"x_y_z": {}}

    def test_empty_fragment_is_noop(self, record):
        assert merge_profile(record, ExtractedFragment()) == record

    def test_merge_into_empty_record(self):
        fragment = ExtractedFragment(
            contact=["alice@example.com"],
            superior_education={"computer_engineering_upe": {"degree": "Bachelor"}},
        )
        merged = merge_profile(ProfileRecord.empty(), fragment)

        assert merged.contact == ["alice@example.com"]
        assert merged.superior_education == {"computer_engineering_upe": {"degree": "Bachelor"}}

    def test_name_only_filled_when_absent(self, record):
        assert merge_profile(record, ExtractedFragment(name="A. Smith")).name == "Alice Smith"
        assert merge_profile(ProfileRecord(), ExtractedFragment(name="A. Smith")).name == "A. Smith"

    def test_languages_case_insensitive(self, record):
        """"python" does not duplicate "Python"; the stored proficiency is kept."""
        fragment = ExtractedFragment(
            languages=[
                LanguageProficiency("python", "intermediate", "Extracted from PDF"),
                LanguageProficiency("Go", "intermediate", "Extracted from PDF"),
            ]
        )

        merged = merge_profile(record, fragment)

        assert [(language.name, language.proficiency) for language in merged.languages] == [
            ("Python", "advanced"),
            ("Go", "intermediate"),
        ]

    def test_technical_skills_replace_present_sublists_only(self, record):
        fragment = ExtractedFragment(
            technical_skills=TechnicalSkills(tools_and_technologies=["Docker", "Kubernetes"])
        )

        merged = merge_profile(record, fragment)

        assert merged.technical_skills.tools_and_technologies == ["Docker", "Kubernetes"]
        assert merged.technical_skills.programming_languages == ["Python", "Rust"]
        assert merged.technical_skills.operating_systems is None

    def test_technical_skills_created_when_missing(self):
        fragment = ExtractedFragment(technical_skills=TechnicalSkills(tools_and_technologies=["Git"]))
        merged = merge_profile(ProfileRecord(), fragment)
        assert merged.technical_skills == TechnicalSkills(tools_and_technologies=["Git"])

    def test_github_stats_replaced(self, record):
        record.github_stats = {"total_stars": 1, "followers": 2}
        merged = merge_profile(record, ExtractedFragment(github_stats={"total_stars": 5}))
        assert merged.github_stats == {"total_stars": 5}


@pytest.mark.unit
def test_merge_unique_keeps_order():
    assert merge_unique(["a", "b"], ["b", "c", "a", "c"]) == ["a", "b", "c"]


@pytest.mark.unit
def test_merge_keyed_first_writer_wins():
    assert merge_keyed({"k": 1}, {"k": 2, "j": 3}) == {"k": 1, "j": 3}


@pytest.mark.unit
def test_merge_languages_dedups_incoming():
    merged = merge_languages([], [LanguageProficiency("Go", "x"), LanguageProficiency("GO", "y")])
    assert merged == [LanguageProficiency("Go", "x")]


@pytest.mark.unit
def test_merge_skips_sections_kept_verbatim():
    """A section stored with the wrong type is neither merged into nor replaced."""
    current = ProfileRecord.from_dict(
        {"name": "Alice", "contact": "alice@example.com", "facts": []}, keep_malformed=True
    )
    fragment = ExtractedFragment(contact=["bob@example.com"], facts=["Speaker at PyCon"])

    merged = merge_profile(current, fragment)

    assert merged.to_dict()["contact"] == "alice@example.com"
    assert merged.facts == ["Speaker at PyCon"]
