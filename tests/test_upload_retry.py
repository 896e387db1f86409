import pytest

from prepal.core.errors import UploadFailed, UpstreamFailure
from prepal.services.upload_retry import upload_with_retry

from fakes import FakeGenAIClient


class _Sleeps:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


def test_success_on_first_attempt_does_not_wait(tmp_path):
    client = FakeGenAIClient()
    sleeps = _Sleeps()
    ref = upload_with_retry(client, tmp_path / "doc.pdf", display_name="doc.pdf", sleep=sleeps)
    assert ref.displayName == "doc.pdf"
    assert ref.mimeType == "application/pdf"
    assert len(client.uploads) == 1
    assert sleeps.calls == []


def test_succeeds_on_third_attempt_after_two_failures(tmp_path):
    client = FakeGenAIClient(upload_failures=2)
    sleeps = _Sleeps()
    ref = upload_with_retry(client, tmp_path / "doc.pdf", sleep=sleeps)
    assert ref.remoteUri == "file-3"
    assert len(client.uploads) == 3
    assert sleeps.calls == [2.0, 2.0]


def test_all_attempts_fail_propagates_last_error(tmp_path):
    client = FakeGenAIClient(upload_failures=3)
    sleeps = _Sleeps()
    with pytest.raises(UploadFailed) as exc_info:
        upload_with_retry(client, tmp_path / "doc.pdf", sleep=sleeps)

    err = exc_info.value
    assert isinstance(err, UpstreamFailure)
    assert isinstance(err.last_error, ConnectionError)
    assert err.__cause__ is err.last_error
    assert len(client.uploads) == 3
    # délai fixe, jamais après la dernière tentative
    assert sleeps.calls == [2.0, 2.0]


def test_custom_attempts_and_delay(tmp_path):
    client = FakeGenAIClient(upload_failures=10)
    sleeps = _Sleeps()
    with pytest.raises(UploadFailed):
        upload_with_retry(client, tmp_path / "doc.pdf", max_attempts=5, delay=0.5, sleep=sleeps)
    assert len(client.uploads) == 5
    assert sleeps.calls == [0.5] * 4


def test_display_name_defaults_to_file_name(tmp_path):
    client = FakeGenAIClient()
    ref = upload_with_retry(client, tmp_path / "chapter1.pdf", sleep=_Sleeps())
    assert ref.displayName == "chapter1.pdf"
