import io

import pytest
import requests

from monitoring.errors import NotifyError
from monitoring.notifier import (
    LINE_NOTIFY_URL,
    ConsoleNotifier,
    EmailNotifier,
    LineNotifier,
    build_notifier,
)


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


class FakeSMTP:
    instances = []

    def __init__(self, host, port):
        self.host = host
        self.port = port
        self.sent = []
        self.logged_in = None
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, message, to_addrs=None):
        self.sent.append((message, to_addrs))


def test_console_notifier_writes_lines():
    stream = io.StringIO()
    notifier = ConsoleNotifier(stream)

    notifier.send("Audio was added")
    notifier.send("Source: https://example.com")

    assert stream.getvalue() == "Audio was added\nSource: https://example.com\n"


def test_line_notifier_posts_message_with_token():
    session = FakeSession()

    LineNotifier("secret", session=session).send("LAN was removed")

    url, kwargs = session.calls[0]
    assert url == LINE_NOTIFY_URL
    assert kwargs["data"] == {"message": "LAN was removed"}
    assert kwargs["headers"] == {"Authorization": "Bearer secret"}
    assert kwargs["timeout"] == 10


def test_line_notifier_raises_on_http_error():
    session = FakeSession(response=FakeResponse(401))

    with pytest.raises(NotifyError):
        LineNotifier("bad", session=session).send("hello")


def test_line_notifier_raises_on_connection_error():
    session = FakeSession(error=requests.ConnectionError("offline"))

    with pytest.raises(NotifyError):
        LineNotifier("secret", session=session).send("hello")


def test_email_notifier_sends_one_mail_per_message(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr("monitoring.notifier.smtplib.SMTP", FakeSMTP)
    notifier = EmailNotifier("smtp.example.com", 587, "bot@example.com", "pw",
                             ["a@example.com", "b@example.com"])

    notifier.send("Audio was added")

    server = FakeSMTP.instances[0]
    assert (server.host, server.port) == ("smtp.example.com", 587)
    assert server.logged_in == ("bot@example.com", "pw")
    message, to_addrs = server.sent[0]
    assert to_addrs == ["a@example.com", "b@example.com"]
    assert message["Subject"] == "Driver Update Monitor"
    assert message.get_payload(decode=True).decode("utf-8") == "Audio was added"


def test_email_notifier_wraps_smtp_errors(monkeypatch):
    def refuse(host, port):
        raise ConnectionRefusedError("no server")

    monkeypatch.setattr("monitoring.notifier.smtplib.SMTP", refuse)
    notifier = EmailNotifier("localhost", 25, "bot@example.com", "pw", ["a@example.com"])

    with pytest.raises(NotifyError):
        notifier.send("hello")


def test_build_notifier_selects_variant(settings):
    assert isinstance(build_notifier(settings), ConsoleNotifier)

    settings.notifier = "line"
    line = build_notifier(settings)
    assert isinstance(line, LineNotifier)
    assert line.token == "token"

    settings.notifier = "email"
    settings.receiver_emails = ["a@example.com"]
    assert isinstance(build_notifier(settings), EmailNotifier)
