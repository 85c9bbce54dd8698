"""Audio sample streams: format, channel and rate conversion, mixing, queuing and WAV decoding."""

__version__ = "0.1.0"

__all__ = [
    "buffer",
    "channels",
    "decoder",
    "dynamic_mixer",
    "queue",
    "sample",
    "sample_rate",
    "source",
    "wav",
]