"""Unit tests for extraction vocabulary loading."""

import pytest

from autorriculum.contexts.intake import vocabulary as vocabulary_module
from autorriculum.contexts.intake.certification_extractor import extract_certifications
from autorriculum.contexts.intake.exceptions import InvalidVocabularyError
from autorriculum.contexts.intake.vocabulary import (
    DEFAULT_VOCABULARY,
    EducationRule,
    load_vocabulary,
    vocabulary_from_dict,
)


@pytest.mark.unit
def test_defaults_without_override(monkeypatch):
    monkeypatch.setattr(vocabulary_module, "EXTRACTION_VOCABULARY_PATH", None)
    assert load_vocabulary() is DEFAULT_VOCABULARY


@pytest.mark.unit
def test_yaml_override_replaces_only_given_keys(tmp_path):
    config = tmp_path / "vocabulary.yaml"
    config.write_text(
        "author_names:\n"
        "  - Jane Doe\n"
        "certification_providers: [alura, aws]\n"
        "continuation_max_length: 20\n",
        encoding="utf-8",
    )

    vocabulary = load_vocabulary(config)

    assert vocabulary.author_names == ("Jane Doe",)
    assert vocabulary.certification_providers == ("alura", "aws")
    assert vocabulary.continuation_max_length == 20
    assert vocabulary.programming_languages == DEFAULT_VOCABULARY.programming_languages


@pytest.mark.unit
def test_env_path_used_when_no_argument(tmp_path, monkeypatch):
    config = tmp_path / "vocabulary.yaml"
    config.write_text("tools: [Vim]\n", encoding="utf-8")
    monkeypatch.setattr(vocabulary_module, "EXTRACTION_VOCABULARY_PATH", str(config))

    assert load_vocabulary().tools == ("Vim",)


@pytest.mark.unit
def test_empty_file_gives_defaults(tmp_path):
    config = tmp_path / "vocabulary.yaml"
    config.write_text("", encoding="utf-8")
    assert load_vocabulary(config) == DEFAULT_VOCABULARY


@pytest.mark.unit
def test_override_changes_extraction():
    """A provider added by configuration produces certificates."""
    vocabulary = vocabulary_from_dict({"certification_providers": ["alura"]})
    text = "Alura Formação DevOps"

    assert extract_certifications(text) == {}
    assert list(extract_certifications(text, vocabulary)) == ["alura_formacao_devops"]


@pytest.mark.unit
def test_education_rules_override():
    vocabulary = vocabulary_from_dict(
        {
            "education_rules": [
                {
                    "key": "cs_ufpe",
                    "required_phrases": ["ciência da computação", "ufpe"],
                    "entry": {"institution": "UFPE"},
                }
            ]
        }
    )
    assert vocabulary.education_rules == (
        EducationRule(
            key="cs_ufpe",
            required_phrases=("ciência da computação", "ufpe"),
            entry={"institution": "UFPE"},
        ),
    )


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"unknown_list": ["x"]},
        {"tools": "Docker"},
        {"min_name_length": "three"},
        {"education_rules": [{"key": "missing_phrases"}]},
    ],
)
def test_invalid_overrides(overrides):
    with pytest.raises(InvalidVocabularyError):
        vocabulary_from_dict(overrides)


@pytest.mark.unit
def test_missing_file(tmp_path):
    with pytest.raises(InvalidVocabularyError):
        load_vocabulary(tmp_path / "absent.yaml")


@pytest.mark.unit
def test_non_mapping_file(tmp_path):
    config = tmp_path / "vocabulary.yaml"
    config.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(InvalidVocabularyError):
        load_vocabulary(config)
