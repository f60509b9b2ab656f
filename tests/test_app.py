import numpy as np
import pytest

import app as web
from bertqa.service import QAService
from bertqa.vocabulary import END_LOGITS_FIELD, START_LOGITS_FIELD


@pytest.fixture
def client():
    service = QAService()
    web.reset_qa_service(service)
    web.app.config["TESTING"] = True
    with web.app.test_client() as client:
        yield client
    web.reset_qa_service()
    service.close()


def use_service(service: QAService) -> None:
    web.reset_qa_service(service)


def test_index_lists_samples(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert b"Apple Inc." in response.data


def test_samples_endpoint(client) -> None:
    data = client.get("/api/samples").get_json()
    assert len(data) == 6
    assert data[0]["title"] == "Apple Inc."
    assert len(data[0]["questions"]) == 4


def test_status_endpoint(client) -> None:
    data = client.get("/api/status").get_json()
    assert data["mode"] == "demo"
    assert data["is_processing"] is False


def test_answer_endpoint(client) -> None:
    response = client.post(
        "/api/answer",
        json={
            "question": "Where is Apple headquartered?",
            "context": "Apple Inc. is headquartered in Cupertino, California.",
        },
    )
    assert response.status_code == 200
    data = response.get_json()
    assert data["answer"].startswith("Cupertino")
    assert data["mode"] == "demo"
    assert data["error"] is None


@pytest.mark.parametrize("payload", [{}, {"question": "Why?"}, {"question": " ", "context": "Text."}])
def test_answer_requires_question_and_context(client, payload) -> None:
    response = client.post("/api/answer", json=payload)
    assert response.status_code == 400
    assert response.get_json()["answer"] is None


def test_model_error_is_500(client) -> None:
    def broken(inputs):
        raise RuntimeError("boom")

    service = QAService(model=broken)
    use_service(service)
    try:
        response = client.post("/api/answer", json={"question": "Where?", "context": "Here."})
    finally:
        service.close()
    assert response.status_code == 500
    assert "predict failed" in response.get_json()["error"]


def test_no_answer_is_not_an_error(client) -> None:
    def model(inputs):
        length = inputs["wordIDs"].shape[1]
        return {START_LOGITS_FIELD: np.zeros(length), END_LOGITS_FIELD: np.zeros(length)}

    service = QAService(model=model, max_seq_length=6)
    use_service(service)
    try:
        response = client.post("/api/answer", json={"question": "Where is it?", "context": "Here."})
    finally:
        service.close()
    assert response.status_code == 200
    data = response.get_json()
    assert data["answer"] is None
    assert data["message"]


def test_random_sample_endpoint(client) -> None:
    data = client.get("/api/samples/random").get_json()
    assert data["title"] in {s["title"] for s in client.get("/api/samples").get_json()}
    assert data["context"]
    assert len(data["questions"]) == 4


@pytest.mark.parametrize(
    "payload",
    [
        ["Where?", "Here."],
        "Where is it?",
        {"question": 42, "context": "Here."},
        {"question": "Where?", "context": ["Here."]},
    ],
)
def test_malformed_payload_is_400(client, payload) -> None:
    response = client.post("/api/answer", json=payload)
    assert response.status_code == 400
    data = response.get_json()
    assert data["answer"] is None
    assert data["error"] == "Please enter both passage and question."
