import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from pivot_supertrend.schemas.signals import SignalOutput, SignalType, TrendDirection
from pivot_supertrend.services.base import NotificationDispatchError
from pivot_supertrend.services.notification import AlertMessage, EmailRelayNotifier, format_alert


def _long_output() -> SignalOutput:
    return SignalOutput(
        ticker="AAPL",
        signal=SignalType.LONG,
        trend=TrendDirection.BULLISH,
        supertrend_value=180.5,
        upper_band=190.0,
        lower_band=180.5,
        atr=2.25,
        ema_50=185.0,
        ema_200=175.0,
        current_price=188.0,
        stop_loss=179.0,
        volume_confirmed=True,
    )


def test_format_alert():
    message = format_alert(_long_output())

    assert message.subject == "Pivot SuperTrend LONG signal: AAPL"
    lines = message.body.splitlines()
    assert "Symbol: AAPL" in lines
    assert "Price: 188.0000" in lines
    assert "Stop Loss: 179.0000" in lines
    assert "ATR: 2.2500" in lines
    assert lines[-1] == "Volume Confirmed: Yes"


def _send(notifier: EmailRelayNotifier, target: str) -> None:
    async def run():
        try:
            await notifier.notify(target, AlertMessage(subject="s", body="b"))
        finally:
            await notifier.close()

    asyncio.run(run())


@pytest.mark.parametrize("target", ["not-an-address", "a@b", "two words@example.com"])
def test_malformed_target_rejected(target):
    notifier = EmailRelayNotifier(relay_url="http://127.0.0.1:9/send")
    with pytest.raises(NotificationDispatchError) as exc_info:
        _send(notifier, target)
    assert exc_info.value.target == target


def test_missing_relay_rejected():
    with pytest.raises(NotificationDispatchError, match="not configured"):
        _send(EmailRelayNotifier(relay_url=None), "trader@example.com")


def test_unreachable_relay_raises():
    notifier = EmailRelayNotifier(relay_url="http://127.0.0.1:9/send", timeout_seconds=2.0)
    with pytest.raises(NotificationDispatchError, match="unreachable"):
        _send(notifier, "trader@example.com")


def _relay_app(status: int, received: list) -> web.Application:
    async def send(request: web.Request) -> web.Response:
        received.append((request.headers.get("Authorization"), await request.json()))
        return web.json_response({"accepted": status < 300}, status=status)

    app = web.Application()
    app.router.add_post("/send", send)
    return app


def _send_to_relay(status: int, received: list) -> None:
    async def run():
        server = TestServer(_relay_app(status, received))
        await server.start_server()
        notifier = EmailRelayNotifier(
            relay_url=str(server.make_url("/send")),
            token="secret",
            sender="alerts@example.com",
        )
        try:
            await notifier.notify(
                "trader@example.com", AlertMessage(subject="Subject", body="Body")
            )
        finally:
            await notifier.close()
            await server.close()

    asyncio.run(run())


def test_relay_accepts_alert():
    received = []
    _send_to_relay(200, received)

    assert len(received) == 1
    authorization, payload = received[0]
    assert authorization == "Bearer secret"
    assert payload == {
        "from": "alerts@example.com",
        "to": "trader@example.com",
        "subject": "Subject",
        "body": "Body",
    }


def test_relay_error_status_raises():
    received = []
    with pytest.raises(NotificationDispatchError, match="500") as exc_info:
        _send_to_relay(500, received)

    assert exc_info.value.target == "trader@example.com"
    assert len(received) == 1
