from types import SimpleNamespace

import pytest

from utils import gemini_client
from utils.gemini_client import GeminiFeedbackClient, extract_text
from utils.mailer import MailNotifier, single_line
from utils.prompts import CHAT_SYSTEM_PROMPT


class BlockedResponse:
    candidates = []

    @property
    def text(self):
        raise ValueError("response was blocked")


def _multi_part_response():
    parts = [SimpleNamespace(text="첫 문단"), SimpleNamespace(text="둘째 문단")]
    candidate = SimpleNamespace(content=SimpleNamespace(parts=parts))
    return SimpleNamespace(text="", candidates=[candidate])


def test_extract_text_prefers_response_text() -> None:
    assert extract_text(SimpleNamespace(text="평가 결과")) == "평가 결과"


def test_extract_text_falls_back_to_candidate_parts() -> None:
    assert extract_text(_multi_part_response()) == "첫 문단\n둘째 문단"


def test_extract_text_rejects_blocked_response() -> None:
    with pytest.raises(ValueError):
        extract_text(BlockedResponse())


class FakeModel:
    instances = []

    def __init__(self, model_name, system_instruction=None):
        self.model_name = model_name
        self.system_instruction = system_instruction
        self.contents = None
        self.history = None
        self.sent = None
        FakeModel.instances.append(self)

    def generate_content(self, contents):
        self.contents = contents
        return SimpleNamespace(text="총평: 훌륭합니다")

    def start_chat(self, history):
        self.history = history
        return self

    def send_message(self, message):
        self.sent = message
        return SimpleNamespace(text="답변")


@pytest.fixture
def fake_genai(monkeypatch):
    configured = {}
    FakeModel.instances = []
    monkeypatch.setattr(gemini_client.genai, "configure", lambda api_key: configured.update(api_key=api_key))
    monkeypatch.setattr(gemini_client.genai, "GenerativeModel", FakeModel)
    return configured


def test_gemini_client_sends_prompt_and_inline_image(fake_genai) -> None:
    client = GeminiFeedbackClient("key-123", "gemini-test")

    text = client.critique_image("평가하세요", b"\x89PNG", "image/png")

    assert text == "총평: 훌륭합니다"
    assert fake_genai == {"api_key": "key-123"}
    model = FakeModel.instances[0]
    assert model.model_name == "gemini-test"
    assert model.contents == ["평가하세요", {"mime_type": "image/png", "data": b"\x89PNG"}]


def test_gemini_client_chat_uses_curator_instruction(fake_genai) -> None:
    client = GeminiFeedbackClient("key-123", "gemini-test")
    history = [{"role": "user", "parts": ["안녕"]}]

    reply = client.reply("수채화 팁 알려줘", history)

    chat_model = FakeModel.instances[1]
    assert reply == "답변"
    assert chat_model.system_instruction == CHAT_SYSTEM_PROMPT
    assert chat_model.history == history
    assert chat_model.sent == "수채화 팁 알려줘"


class FakeSMTP:
    sessions = []

    def __init__(self, host, port, context=None):
        self.host = host
        self.port = port
        self.logins = []
        self.messages = []
        FakeSMTP.sessions.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def login(self, user, password):
        self.logins.append((user, password))

    def send_message(self, message):
        self.messages.append(message)


def test_mail_notifier_sends_html_message_once(monkeypatch) -> None:
    FakeSMTP.sessions = []
    monkeypatch.setattr("utils.mailer.smtplib.SMTP_SSL", FakeSMTP)
    notifier = MailNotifier("bot@artb.co.kr", "pw", "team@artb.co.kr", host="smtp.test", port=465)

    notifier.send("새 문의:\r\nBcc: evil@x.com", "<p>본문</p>", "Artb 문의")

    session = FakeSMTP.sessions[0]
    assert (session.host, session.port) == ("smtp.test", 465)
    assert session.logins == [("bot@artb.co.kr", "pw")]
    message = session.messages[0]
    assert message["To"] == "team@artb.co.kr"
    assert message["Subject"] == "새 문의: Bcc: evil@x.com"
    assert message["Bcc"] is None
    assert "bot@artb.co.kr" in message["From"]
    assert message.get_content_subtype() == "html"
    assert "<p>본문</p>" in message.get_content()


def test_single_line_collapses_whitespace() -> None:
    assert single_line("a\r\n  b\tc") == "a b c"
