import os
from pathlib import Path

import pytest

from app import create_app
from utils.config import Settings
from utils.services import Services, build_limiters
from utils.survey_log import SurveyLog


class FakeGenerator:
    def __init__(self, text="멋진 작품입니다.", error=None, watch_dir=None):
        self.text = text
        self.error = error
        self.watch_dir = watch_dir
        self.image_calls = []
        self.chat_calls = []
        self.files_during_call = None

    def critique_image(self, prompt, image_bytes, mime_type):
        if self.watch_dir is not None:
            self.files_during_call = sorted(os.listdir(self.watch_dir))
        self.image_calls.append((prompt, image_bytes, mime_type))
        if self.error is not None:
            raise self.error
        return self.text

    def reply(self, message, history):
        self.chat_calls.append((message, history))
        if self.error is not None:
            raise self.error
        return self.text


class FakeNotifier:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    def send(self, subject, html_body, sender_name):
        self.sent.append({"subject": subject, "html_body": html_body, "sender_name": sender_name})
        if self.error is not None:
            raise self.error


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path: Path, upload_dir: Path) -> Settings:
    return Settings(
        google_api_key="test-key",
        email_user="bot@artb.co.kr",
        email_pass="secret",
        recipient_email="team@artb.co.kr",
        upload_dir=str(upload_dir),
        survey_csv_path=str(tmp_path / "survey_results.csv"),
        ai_rate_limit_max=5,
        form_rate_limit_max=5,
    )


@pytest.fixture
def generator(upload_dir: Path) -> FakeGenerator:
    return FakeGenerator(watch_dir=str(upload_dir))


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def services(settings: Settings, generator: FakeGenerator, notifier: FakeNotifier) -> Services:
    return Services(
        survey_log=SurveyLog(settings.survey_csv_path),
        limiters=build_limiters(settings),
        generator=generator,
        notifier=notifier,
    )


@pytest.fixture
def app(settings: Settings, services: Services):
    app = create_app(settings=settings, services=services)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
