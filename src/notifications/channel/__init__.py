"""Channel registry.

One adapter instance per channel for the life of the process. Only the
in-memory fakes are registered; a deployment swaps in real gateways
(socket bus, SMS provider, FCM, SMTP) by extending ``_ADAPTERS``.
"""

from notifications.channel.fakes import FakeEmailAdapter, FakePushAdapter, FakeRealtimeAdapter, FakeSMSAdapter
from notifications.kinds import NotificationChannel

_ADAPTERS = {
    NotificationChannel.REALTIME.value: FakeRealtimeAdapter,
    NotificationChannel.SMS.value: FakeSMSAdapter,
    NotificationChannel.PUSH.value: FakePushAdapter,
    NotificationChannel.EMAIL.value: FakeEmailAdapter,
}

_channel_instances: dict[str, object] = {}


def get_channel(channel_type: str):
    """The adapter for ``channel_type``, a ``NotificationChannel`` value."""
    if channel_type not in _ADAPTERS:
        raise ValueError(f"Unknown channel type: {channel_type}")

    if channel_type not in _channel_instances:
        _channel_instances[channel_type] = _ADAPTERS[channel_type]()
    return _channel_instances[channel_type]


def reset_channels():
    _channel_instances.clear()
