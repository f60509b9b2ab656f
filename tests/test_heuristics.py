import re

import pytest

from bertqa.heuristics import (
    DATE_PATTERN,
    NAME_PATTERN,
    NUMBER_PATTERN,
    HeuristicExtractor,
    QuestionType,
    classify_question,
    extract_keywords,
    short_phrase,
    split_sentences,
)
from bertqa.samples import get_sample


@pytest.mark.parametrize(
    "question, expected",
    [
        ("Where is Apple headquartered?", QuestionType.WHERE),
        ("When was Apple founded?", QuestionType.WHEN),
        ("How many iPhones have been sold?", QuestionType.HOW_MANY),
        ("how much does it cost", QuestionType.HOW_MANY),
        ("What is Core ML?", QuestionType.WHAT),
        ("What's the capital?", QuestionType.WHAT),
        ("Who founded Apple?", QuestionType.WHO),
        ("  Which Apple products use Core ML?", QuestionType.WHICH),
        ("Is Swift open-source?", QuestionType.GENERIC),
        ("How does it work?", QuestionType.GENERIC),
        ("Whom did they hire?", QuestionType.GENERIC),
        ("", QuestionType.GENERIC),
    ],
)
def test_classify_question(question: str, expected: QuestionType) -> None:
    assert classify_question(question) == expected


def test_split_sentences() -> None:
    assert split_sentences("Hello world. How are you?  Fine!  ") == ["Hello world", "How are you", "Fine"]
    assert split_sentences("...") == []
    assert split_sentences("") == []


def test_extract_keywords() -> None:
    assert extract_keywords("What is the capital of France?") == ["capital", "france"]
    assert extract_keywords("Who is he?") == []


def test_short_phrase_keeps_fifteen_words() -> None:
    text = " ".join(str(i) for i in range(20))
    assert short_phrase(text) == " ".join(str(i) for i in range(15))
    assert short_phrase("a   b\nc") == "a b c"


def test_patterns_are_compiled_once() -> None:
    for pattern in (DATE_PATTERN, NAME_PATTERN, NUMBER_PATTERN):
        assert isinstance(pattern, re.Pattern)


def test_where_returns_location(extractor: HeuristicExtractor) -> None:
    answer = extractor.extract(
        "Where is Apple headquartered?",
        "Apple Inc. is headquartered in Cupertino, California.",
    )
    assert answer.startswith("Cupertino")
    assert answer == "Cupertino"


def test_where_keyword_at_sentence_end_falls_back(extractor: HeuristicExtractor) -> None:
    assert extractor.extract("Where is it?", "The company is based") == "The company is based"


def test_where_without_location_keyword(extractor: HeuristicExtractor) -> None:
    assert extractor.extract("Where is it?", "Sunny skies everywhere.") == "Sunny skies everywhere"


def test_when_returns_window_around_year(extractor: HeuristicExtractor) -> None:
    answer = extractor.extract("When was BERT published?", get_sample("BERT Model").context)
    assert "2018" in answer
    assert answer == "was published in 2018 by researchers at"


def test_when_with_month_name(extractor: HeuristicExtractor) -> None:
    answer = extractor.extract("When was Apple founded?", "Apple was founded on April 1, 1976 in a garage.")
    assert answer == "April 1, 1976"


def test_when_with_numeric_date(extractor: HeuristicExtractor) -> None:
    answer = extractor.extract("When is the meeting?", "The meeting is on 12/05/2021 at noon.")
    assert answer == "meeting is on 12/05/2021 at noon"


def test_when_without_date_uses_first_sentence(extractor: HeuristicExtractor) -> None:
    assert extractor.extract("When?", "Nothing here. Still nothing.") == "Nothing here"


def test_who_returns_proper_name(extractor: HeuristicExtractor) -> None:
    answer = extractor.extract("Who announced it?", "The phone was announced by Steve Jobs in California.")
    assert answer == "Steve Jobs"


@pytest.mark.parametrize(
    "context, expected",
    [
        ("The model has 340 million parameters.", "340 million"),
        ("Revenue reached 394 billion dollars.", "394 billion"),
        # sentences split at every ".", decimals included
        ("More than 2.3 billion iPhones have been sold.", "2"),
        ("Revenue was 1,234,567 dollars.", "1,234,567"),
        ("It ran on 16 Cloud TPUs.", "16"),
    ],
)
def test_how_many_returns_number(extractor: HeuristicExtractor, context: str, expected: str) -> None:
    assert extractor.extract("How many are there?", context) == expected


def test_which_returns_first_sentence(extractor: HeuristicExtractor) -> None:
    answer = extractor.extract("Which Apple products use Core ML?", get_sample("Core ML").context)
    assert answer == (
        "Core ML is Apple's machine learning framework used across its products, "
        "including Siri, Camera, and"
    )


def test_what_picks_sentence_with_most_keywords(extractor: HeuristicExtractor) -> None:
    answer = extractor.extract(
        "What frameworks are used for machine learning?",
        get_sample("Machine Learning").context,
    )
    assert answer == (
        "Machine learning algorithms are typically created using frameworks that accelerate "
        "solution development, such as TensorFlow"
    )


def test_what_ties_go_to_first_sentence(extractor: HeuristicExtractor) -> None:
    assert extractor.extract("What are cats?", "Cats are small. Cats are cute.") == "Cats are small"


def test_what_without_keyword_match_uses_first_sentence(extractor: HeuristicExtractor) -> None:
    assert extractor.extract("What is a zebra?", "Dogs bark. Birds sing.") == "Dogs bark"


def test_generic_question_uses_keyword_scoring(extractor: HeuristicExtractor) -> None:
    answer = extractor.extract("Describe frameworks please", "Paris is big. Frameworks are tools.")
    assert answer == "Frameworks are tools"


@pytest.mark.parametrize(
    "question, expected",
    [
        ("What is it?", "Answer not found in context"),
        ("When was it?", "Date not found in context"),
        ("Where is it?", "Location not found in context"),
        ("Who did it?", "Person not found in context"),
        ("How many are there?", "Number not found in context"),
        ("Which one?", "Answer not found in context"),
        ("Tell me more", "Answer not found in context"),
    ],
)
def test_context_without_sentences(extractor: HeuristicExtractor, question: str, expected: str) -> None:
    assert extractor.extract(question, " ... ") == expected


def test_strategy_override() -> None:
    extractor = HeuristicExtractor({QuestionType.WHICH: lambda question, sentences: "custom"})
    assert extractor.extract("Which one?", "A. B.") == "custom"


def test_every_sample_question_gets_an_answer(extractor: HeuristicExtractor) -> None:
    for title in ("Apple Inc.", "Machine Learning", "Core ML", "BERT Model", "iPhone", "Swift Programming"):
        sample = get_sample(title)
        for question in sample.questions:
            assert extractor.extract(question, sample.context).strip()
