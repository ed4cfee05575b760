import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .vectors import VECTOR_SIZE

PLACEHOLDER_API_KEY = "YOUR_API_KEY_HERE"


@dataclass
class SimulationConfig:
    """Configuration for the playback engine and the translation gateway.

    Timing values are milliseconds.
    """

    # Playback
    default_speed_ms: int = 1200
    min_speed_ms: int = 200
    max_speed_ms: int = 2000
    context_settle_ms: int = 500  # Context -> Decoding delay, independent of speed
    autoplay: bool = False  # Start playing as soon as Encoding begins

    # Vectors
    vector_size: int = VECTOR_SIZE
    seed: Optional[int] = None

    # Gateway
    api_key: Optional[str] = field(default=None, repr=False)
    model: str = "gemini-1.5-flash"
    api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout: float = 30.0

    def __post_init__(self):
        if self.min_speed_ms <= 0 or self.min_speed_ms > self.max_speed_ms:
            raise ValueError(
                f"Invalid speed bounds: [{self.min_speed_ms}, {self.max_speed_ms}]"
            )
        if self.context_settle_ms < 0:
            raise ValueError("context_settle_ms must be non-negative")
        self.default_speed_ms = self.clamp_speed(self.default_speed_ms)

    def clamp_speed(self, speed_ms: float) -> int:
        """Clamp an animation speed into [min_speed_ms, max_speed_ms]."""
        return int(min(max(speed_ms, self.min_speed_ms), self.max_speed_ms))

    @property
    def has_credential(self) -> bool:
        return not is_missing_credential(self.api_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "SimulationConfig":
        """Build a config from GEMINI_* environment variables plus explicit overrides."""
        env = os.environ if environ is None else environ
        values: dict = {"api_key": env.get("GEMINI_API_KEY")}
        if env.get("GEMINI_MODEL"):
            values["model"] = env["GEMINI_MODEL"]
        if env.get("GEMINI_API_BASE"):
            values["api_base"] = env["GEMINI_API_BASE"]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def is_missing_credential(credential: Optional[str]) -> bool:
    """Absent, blank and placeholder keys all count as missing."""
    return not credential or not credential.strip() or credential.strip() == PLACEHOLDER_API_KEY
