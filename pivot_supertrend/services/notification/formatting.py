"""Alert text for non-Hold signals."""

from pivot_supertrend.schemas.signals import SignalOutput
from pivot_supertrend.services.notification.interface import AlertMessage


def format_alert(output: SignalOutput) -> AlertMessage:
    subject = f"Pivot SuperTrend {output.signal.value} signal: {output.ticker}"
    body = "\n".join(
        [
            f"Symbol: {output.ticker}",
            f"Signal: {output.signal.value}",
            f"Trend: {output.trend.value}",
            f"Price: {output.current_price:.4f}",
            f"SuperTrend: {output.supertrend_value:.4f}",
            f"Stop Loss: {output.stop_loss:.4f}",
            f"ATR: {output.atr:.4f}",
            f"EMA 50: {output.ema_50:.4f}",
            f"EMA 200: {output.ema_200:.4f}",
            f"Volume Confirmed: {'Yes' if output.volume_confirmed else 'No'}",
        ]
    )
    return AlertMessage(subject=subject, body=body)
