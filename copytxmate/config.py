from __future__ import annotations

from dataclasses import dataclass

from copytxmate.env import env_bool, env_float

DEFAULT_POLL_INTERVAL_SECONDS = 0.5


@dataclass(frozen=True)
class WatcherConfig:
    # How often the clipboard is polled for new text.
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS

    # Write the formatted text back to the clipboard as soon as new text is copied.
    auto_format: bool = False

    def __post_init__(self) -> None:
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")

    @classmethod
    def from_env(cls) -> WatcherConfig:
        interval = env_float("COPYTXMATE_POLL_INTERVAL", DEFAULT_POLL_INTERVAL_SECONDS)
        if interval <= 0:
            interval = DEFAULT_POLL_INTERVAL_SECONDS
        return cls(
            poll_interval_seconds=interval,
            auto_format=env_bool("COPYTXMATE_AUTO_FORMAT", False),
        )
