"""Seq2Seq Visualizer: animated Encoder-Decoder playback over a remote translator.

The engine replays encode -> context -> decode over tokenized text while the
actual translation is delegated to an external language-model API.
"""

__version__ = "0.1.0"

from .config import SimulationConfig
from .engine import SimulationEngine
from .errors import (
    EmptyResult,
    GatewayFailure,
    InvariantViolation,
    MalformedResponse,
    MissingCredential,
    ServiceError,
    SimulationError,
    TransportFailure,
    ValidationError,
)
from .gateway import GeminiGateway, TranslationGateway
from .languages import Language, LanguagePair
from .snapshot import Phase, SimulationSnapshot
from .tokenizer import tokenize
from .vectors import VectorGenerator, generate_vector

__all__ = [
    "EmptyResult",
    "GatewayFailure",
    "GeminiGateway",
    "InvariantViolation",
    "Language",
    "LanguagePair",
    "MalformedResponse",
    "MissingCredential",
    "Phase",
    "ServiceError",
    "SimulationConfig",
    "SimulationEngine",
    "SimulationError",
    "SimulationSnapshot",
    "TranslationGateway",
    "TransportFailure",
    "ValidationError",
    "VectorGenerator",
    "generate_vector",
    "tokenize",
]
