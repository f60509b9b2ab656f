"""
Flask web app for extractive Question Answering.
Input: passage (context) + question → output: answer span (model) or best-guess phrase (demo mode).
"""
import threading

from flask import Flask, jsonify, render_template, request

from bertqa.errors import EmptyInputError, NoAnswerFoundError
from bertqa.logging_config import configure_logging
from bertqa.samples import SAMPLES, random_sample
from bertqa.service import QAService
from bertqa.settings import settings

configure_logging(settings.log_level)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 2 * 1024 * 1024  # 2 MB max context

# Lazy-load service (and model, if configured) on first request
_qa_service = None
_qa_service_lock = threading.Lock()


def get_qa_service() -> QAService:
    global _qa_service
    with _qa_service_lock:
        if _qa_service is None:
            _qa_service = QAService.from_settings(settings)
        return _qa_service


def reset_qa_service(service=None) -> None:
    """Replace the cached service (tests inject their own)."""
    global _qa_service
    with _qa_service_lock:
        _qa_service = service


@app.route("/")
def index():
    return render_template("index.html", samples=SAMPLES)


@app.route("/api/samples")
def samples():
    return jsonify([sample.to_dict() for sample in SAMPLES])


@app.route("/api/samples/random")
def sample_random():
    return jsonify(random_sample().to_dict())


@app.route("/api/status")
def status():
    service = get_qa_service()
    return jsonify({
        "mode": service.mode,
        "status": service.status,
        "is_processing": service.is_processing,
    })


def _text_field(data: dict, name: str) -> str:
    # non-string values count as missing
    value = data.get(name)
    return value.strip() if isinstance(value, str) else ""


@app.route("/api/answer", methods=["POST"])
def answer():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    context = _text_field(data, "context")
    question = _text_field(data, "question")
    service = get_qa_service()
    result = service.answer(question, context).result()

    if result.ok:
        return jsonify({"answer": result.answer, "score": result.score, "mode": result.mode, "error": None})
    if isinstance(result.error, EmptyInputError):
        return jsonify({"error": "Please enter both passage and question.", "answer": None, "mode": result.mode}), 400
    if isinstance(result.error, NoAnswerFoundError):
        return jsonify({"answer": None, "message": str(result.error), "mode": result.mode, "error": None})
    return jsonify({"error": str(result.error), "answer": None, "mode": result.mode}), 500


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
