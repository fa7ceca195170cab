"""Tremolo audio effect: LFO amplitude modulation, bypass crossfade, JSON state and WAV processing."""

__version__ = "1.0.0"

__all__ = [
    "bypass",
    "cli",
    "json_serializer",
    "layout",
    "lfo_visualizer",
    "look_and_feel",
    "parameters",
    "prime_search",
    "processor",
    "sample_fifo",
    "strided_queue",
    "tremolo",
]