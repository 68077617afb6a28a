"""
Codecs package: decoders, encoders, and their registries for schema loading.
"""

from .decoders import DECODER_FACTORIES, DECODER_REGISTRY, Decoder, decode_json
from .encoders import ENCODER_FACTORIES, ENCODER_REGISTRY, Encoder
from .outcome import Cursor, DecodeOutcome, Failure, FailureKind, Success

__all__ = [
    "Cursor",
    "DECODER_FACTORIES",
    "DECODER_REGISTRY",
    "DecodeOutcome",
    "Decoder",
    "ENCODER_FACTORIES",
    "ENCODER_REGISTRY",
    "Encoder",
    "Failure",
    "FailureKind",
    "Success",
    "decode_json",
]
