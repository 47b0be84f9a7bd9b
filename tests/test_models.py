"""
Request Model Tests
"""
import io

import pytest
from werkzeug.datastructures import FileStorage

from app.errors import ValidationError
from app.models import GradingRequest, UploadedFile
from app.utils.uploads import file_extension, require_supported, resolve_mime_type


class TestGradingRequest:
    """Test GradingRequest validation"""

    def test_defaults(self):
        req = GradingRequest.from_payload({"question": "Why?", "answer": "Because."})
        assert req.rubric == {}
        assert req.max_score == 10
        assert req.bloom_level == ""

    def test_full_payload(self):
        req = GradingRequest.from_payload({
            "question": "Why?",
            "answer": "Because.",
            "rubric": {"clarity": "c", "depth": "d"},
            "max_score": 20,
            "bloom_level": "Evaluate",
        })
        assert list(req.rubric) == ["clarity", "depth"]
        assert req.max_per_criterion == 10
        assert req.bloom_level == "Evaluate"

    @pytest.mark.parametrize("payload", [
        {},
        {"question": "Why?"},
        {"answer": "Because."},
        {"question": "", "answer": "Because."},
        None,
    ])
    def test_missing_fields(self, payload):
        with pytest.raises(ValidationError) as exc:
            GradingRequest.from_payload(payload)
        assert exc.value.status_code == 400

    @pytest.mark.parametrize("answer", ["   ", "\n\t", 42])
    def test_blank_answer(self, answer):
        with pytest.raises(ValidationError) as exc:
            GradingRequest.from_payload({"question": "Why?", "answer": answer})
        assert exc.value.message == "Answer cannot be empty."

    @pytest.mark.parametrize("extra", [
        {"rubric": ["clarity"]},
        {"max_score": "ten"},
        {"max_score": 0},
        {"max_score": True},
    ])
    def test_bad_optional_fields(self, extra):
        with pytest.raises(ValidationError):
            GradingRequest.from_payload(dict({"question": "q", "answer": "a"}, **extra))

    @pytest.mark.parametrize("keys,expected", [(0, 2.5), (1, 10.0), (2, 5.0), (4, 2.5), (5, 2.0)])
    def test_max_per_criterion(self, keys, expected):
        rubric = {f"c{i}": "" for i in range(keys)}
        req = GradingRequest(question="q", answer="a", rubric=rubric, max_score=10)
        assert req.criteria_count == (keys or 4)
        assert req.max_per_criterion == expected


class TestUploads:
    """Test the file type gate"""

    @pytest.mark.parametrize("name,ext", [
        ("scan.JPG", "jpg"),
        ("my.essay.pdf", "pdf"),
        ("photo.jpeg", "jpeg"),
        ("noextension", "noextension"),
        ("", ""),
    ])
    def test_file_extension(self, name, ext):
        assert file_extension(name) == ext

    @pytest.mark.parametrize("name", ["a.jpg", "a.JPEG", "a.png", "a.Pdf"])
    def test_supported(self, name):
        assert require_supported(name) == name.rsplit(".", 1)[1].lower()

    @pytest.mark.parametrize("name", ["a.gif", "a.tiff", "a.pdf.exe", "a."])
    def test_unsupported(self, name):
        with pytest.raises(ValidationError):
            require_supported(name)

    def test_resolve_mime_type(self):
        assert resolve_mime_type("a.png", "image/png") == "image/png"
        assert resolve_mime_type("a.jpg", "") == "image/jpeg"
        assert resolve_mime_type("a.pdf", "application/octet-stream") == "application/pdf"

    def test_uploaded_file_from_storage(self):
        storage = FileStorage(stream=io.BytesIO(b"data"), filename="scan.png", content_type="image/png")
        upload = UploadedFile.from_storage(storage)
        assert upload == UploadedFile(name="scan.png", mime_type="image/png", data=b"data")
