"""In-memory channel adapters.

Each fake keeps what it delivered in a list (``emitted_events``,
``sent_messages``, ``sent_pushes``, ``sent_emails``) and can be switched
into failure mode with ``configure(should_succeed=False)``.
"""

from uuid import uuid4

from notifications.channel.ports import EmailPort, PushPort, RealtimePort, SMSPort
from notifications.document.port import RenderedDocument


class _RecordingAdapter:
    prefix = "msg"
    failure_message = "Delivery failed"

    def __init__(self):
        self.deliveries: list[dict] = []
        self.reset()

    def configure(self, should_succeed: bool = True, failure_reason: str | None = None):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason or self.failure_message

    def reset(self):
        self.deliveries.clear()
        self.configure()

    def _deliver(self, **record) -> dict:
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"{self.prefix}-{uuid4().hex[:12]}"
        self.deliveries.append({"message_id": message_id, **record})
        return {"message_id": message_id, "status": "sent"}


class FakeRealtimeAdapter(_RecordingAdapter, RealtimePort):
    prefix = "rt"
    failure_message = "Realtime delivery failed"

    @property
    def emitted_events(self) -> list[dict]:
        return self.deliveries

    def emit(self, event_name: str, payload: dict) -> dict:
        return self._deliver(event=event_name, payload=payload)


class FakeSMSAdapter(_RecordingAdapter, SMSPort):
    prefix = "sms"
    failure_message = "SMS delivery failed"

    @property
    def sent_messages(self) -> list[dict]:
        return self.deliveries

    def send(self, to: str, body: str, sender: str | None = None) -> dict:
        return self._deliver(to=to, body=body, **{"from": sender})


class FakePushAdapter(_RecordingAdapter, PushPort):
    prefix = "push"
    failure_message = "Push delivery failed"

    @property
    def sent_pushes(self) -> list[dict]:
        return self.deliveries

    def send(self, device_token: str, title: str, body: str, data: dict | None = None) -> dict:
        return self._deliver(device_token=device_token, title=title, body=body, data=data or {})


class FakeEmailAdapter(_RecordingAdapter, EmailPort):
    prefix = "email"
    failure_message = "Email delivery failed"

    @property
    def sent_emails(self) -> list[dict]:
        return self.deliveries

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
        attachments: list[RenderedDocument] | None = None,
        sender: str | None = None,
    ) -> dict:
        return self._deliver(
            to=to,
            subject=subject,
            body=body,
            html_body=html_body,
            attachments=list(attachments or []),
            **{"from": sender},
        )
