"""
Test Configuration and Fixtures
"""
import json

import pytest
from app import create_app
from tests.fakes import FakeChatClient, FakeOcrClient


@pytest.fixture(scope='function')
def app():
    """Create application for testing"""
    app = create_app('testing')
    app.config['TESTING'] = True
    yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def fake_ocr(app):
    """Replace the OCR client with a fake"""
    fake = FakeOcrClient()
    app.extensions['ocr_client'] = fake
    return fake


@pytest.fixture(scope='function')
def fake_chat(app):
    """Give the essay grader a fake chat client"""
    fake = FakeChatClient()
    app.extensions['essay_grader']._client = fake
    return fake


@pytest.fixture
def grading_reply():
    return json.dumps({
        "score": 10,
        "max_score": 10,
        "feedback": "Correct",
        "breakdown": {"accuracy": {"score": 10, "max": 10, "comment": "Correct"}},
    })
