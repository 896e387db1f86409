import json
from pathlib import Path

from prepal.core.errors import UpstreamFailure
from prepal.services import generation

from fakes import fake_pdf, SAMPLE_QUIZ


def test_cheatsheet_generation(test_client, fake_client, settings_env):
    fake_client.reply = "{Title}\n[Sub]\n- point"
    r = test_client.post("/upload-and-generate", files=fake_pdf(), data={"textPrompt": "focus on chapter 2"})
    assert r.status_code == 200, r.text
    assert r.json() == {"message": "Content generated successfully", "generatedText": "{Title}\n[Sub]\n- point"}

    assert fake_client.uploads == ["notes.pdf"]
    assert fake_client.file_refs[0].remoteUri == "file-1"
    assert "cheat sheet" in fake_client.prompts[0]
    assert "focus on chapter 2" in fake_client.prompts[0]
    # le PDF local est supprimé après génération
    assert list((settings_env / "uploads").iterdir()) == []


def test_cheatsheet_without_file_is_400(test_client, fake_client):
    r = test_client.post("/upload-and-generate", data={"textPrompt": "x"})
    assert r.status_code == 400
    assert r.json() == {"error": "No file uploaded"}
    assert fake_client.remote_calls == 0


def test_non_pdf_is_rejected(test_client):
    files = {"file": ("notes.txt", b"hello", "text/plain")}
    r = test_client.post("/upload-and-generate", files=files)
    assert r.status_code == 415
    assert "error" in r.json()


def test_too_large_upload_is_rejected(test_client):
    files = {"file": ("big.pdf", b"%PDF" + b"0" * (1024 * 1024 + 1), "application/pdf")}
    r = test_client.post("/upload-and-generate", files=files)
    assert r.status_code == 413


def test_upload_retries_then_succeeds(test_client, fake_client):
    fake_client.upload_failures = 2
    r = test_client.post("/upload-and-generate", files=fake_pdf())
    assert r.status_code == 200, r.text
    assert len(fake_client.uploads) == 3


def test_upload_exhaustion_is_500(test_client, fake_client, settings_env):
    fake_client.upload_failures = 3
    r = test_client.post("/upload-and-generate", files=fake_pdf())
    assert r.status_code == 500
    assert r.json() == {"error": "File upload failed"}
    assert fake_client.prompts == []
    assert list((settings_env / "uploads").iterdir()) == []


def test_generation_failure_is_500(test_client, fake_client):
    fake_client.generate_error = UpstreamFailure("Content generation failed")
    r = test_client.post("/upload-and-generate", files=fake_pdf())
    assert r.status_code == 500
    assert r.json() == {"error": "Content generation failed"}
    assert len(fake_client.prompts) == 1


def test_quiz_generation_writes_sidecar_and_keeps_upload(test_client, fake_client, settings_env, monkeypatch):
    monkeypatch.setattr(generation, "extract_text", lambda path: "Paris is the capital of France.")
    fake_client.reply = SAMPLE_QUIZ

    r = test_client.post("/upload-and-generate-quiz", files=fake_pdf("geo.pdf"))
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["message"] == "Quiz generated successfully"
    assert data["generatedQuiz"] == SAMPLE_QUIZ
    assert data["originalFileName"] == "geo.pdf"

    sidecar = Path(data["tempFilePath"])
    assert sidecar.parent == (settings_env / "temp").resolve()
    assert json.loads(sidecar.read_text()) == {
        "fileContent": "Paris is the capital of France.",
        "fileUri": "file-1",
    }
    assert (settings_env / "uploads" / "geo.pdf").exists()
    assert "Generate 5 multiple-choice questions" in fake_client.prompts[0]


def test_mnemonics_generation(test_client, fake_client):
    fake_client.reply = "{Planets}\n[Order]\n- **M**y *V*ery"
    r = test_client.post(
        "/upload-and-generate-mnemonics",
        files=fake_pdf(),
        data={"textPrompt": "Mnemonics for the planet order"},
    )
    assert r.status_code == 200, r.text
    assert r.json()["generatedMnemonics"] == "{Planets}\n[Order]\n- **M**y *V*ery"
    assert fake_client.prompts[0].startswith("Mnemonics for the planet order")


def test_mnemonics_requires_prompt(test_client, fake_client):
    r = test_client.post("/upload-and-generate-mnemonics", files=fake_pdf())
    assert r.status_code == 400
    assert r.json() == {"error": "Missing textPrompt"}
    assert fake_client.remote_calls == 0


def test_wrong_method_is_405(test_client):
    r = test_client.get("/upload-and-generate-quiz")
    assert r.status_code == 405
    assert "error" in r.json()


def test_quiz_upload_failure_removes_local_pdf(test_client, fake_client, settings_env):
    fake_client.upload_failures = 3
    r = test_client.post("/upload-and-generate-quiz", files=fake_pdf("geo.pdf"))
    assert r.status_code == 500
    assert list((settings_env / "uploads").iterdir()) == []
    assert list((settings_env / "temp").iterdir()) == []


def test_quiz_generation_failure_removes_local_pdf(test_client, fake_client, settings_env):
    fake_client.generate_error = UpstreamFailure("Content generation failed")
    r = test_client.post("/upload-and-generate-quiz", files=fake_pdf("geo.pdf"))
    assert r.status_code == 500
    assert list((settings_env / "uploads").iterdir()) == []
