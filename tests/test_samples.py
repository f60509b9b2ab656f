import pytest

from bertqa.samples import SAMPLES, get_sample, random_sample


def test_samples_are_complete() -> None:
    assert [s.title for s in SAMPLES] == [
        "Apple Inc.", "Machine Learning", "Core ML", "BERT Model", "iPhone", "Swift Programming",
    ]
    for sample in SAMPLES:
        assert sample.context
        assert len(sample.questions) == 4


def test_get_sample() -> None:
    assert get_sample("iPhone").questions[0] == "Who announced the first iPhone?"
    with pytest.raises(KeyError):
        get_sample("Nope")


def test_random_sample() -> None:
    assert random_sample() in SAMPLES
