"""Display helpers for timers"""
from multitimer.models.timer import Timer


def format_time(seconds: int) -> str:
    """
    Format seconds as m:ss

    Minutes are not wrapped into hours, e.g. 3725 -> "62:05".
    """
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02}"


def progress(timer: Timer) -> float:
    """Fraction of the duration still remaining, in [0, 1]"""
    return timer.remaining / timer.duration


def progress_percent(timer: Timer) -> int:
    return round(progress(timer) * 100)
