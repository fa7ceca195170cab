"""Command line tool applying the tremolo to WAV files."""

from __future__ import annotations

import argparse
import sys
import wave
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

from tremolokit.json_serializer import PLUGIN_NAME
from tremolokit.processor import ChannelSet, PluginProcessor
from tremolokit.tremolo import LfoWaveform

PathLike = Union[str, Path]

DEFAULT_BLOCK_SIZE = 512


def read_wav(path: PathLike) -> tuple[np.ndarray, int]:
    """Read a PCM WAV file as float32 samples of shape (channels, frames)."""
    with wave.open(str(path), "rb") as reader:
        channels = reader.getnchannels()
        width = reader.getsampwidth()
        sample_rate = reader.getframerate()
        raw = reader.readframes(reader.getnframes())

    if width == 1:
        values = (np.frombuffer(raw, dtype=np.uint8).astype(np.float64) - 128.0) / 128.0
    elif width == 2:
        values = np.frombuffer(raw, dtype="<i2").astype(np.float64) / 32768.0
    elif width == 3:
        triples = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        ints = triples[:, 0] | (triples[:, 1] << 8) | (triples[:, 2] << 16)
        ints = np.where(ints & 0x800000, ints - 0x1000000, ints)
        values = ints.astype(np.float64) / 8388608.0
    elif width == 4:
        values = np.frombuffer(raw, dtype="<i4").astype(np.float64) / 2147483648.0
    else:
        raise ValueError(f"unsupported sample width of {width} bytes")

    samples = np.ascontiguousarray(values.reshape(-1, channels).T, dtype=np.float32)
    return samples, sample_rate


def write_wav(path: PathLike, samples: np.ndarray, sample_rate: int) -> None:
    """Write samples of shape (channels, frames), or mono frames, as 16-bit PCM."""
    if sample_rate <= 0:
        raise ValueError(f"sample rate must be positive, got {sample_rate}")
    data = np.asarray(samples, dtype=np.float64)
    if data.ndim == 1:
        data = data[np.newaxis, :]
    if data.ndim != 2 or data.shape[0] == 0:
        raise ValueError("samples must have shape (channels, frames)")
    ints = np.round(np.clip(data, -1.0, 1.0) * 32767.0).astype("<i2")
    with wave.open(str(path), "wb") as writer:
        writer.setnchannels(data.shape[0])
        writer.setsampwidth(2)
        writer.setframerate(int(sample_rate))
        writer.writeframes(ints.T.reshape(-1).tobytes())


def process_file(
    input_path: PathLike,
    output_path: PathLike,
    rate_hz: float = 5.0,
    waveform: str = "sine",
    bypassed: bool = False,
    block_size: int = DEFAULT_BLOCK_SIZE,
) -> int:
    """Apply the tremolo to a WAV file; returns the number of frames processed."""
    if block_size <= 0:
        raise ValueError(f"block size must be positive, got {block_size}")
    try:
        lfo_waveform = LfoWaveform[waveform.upper()]
    except KeyError:
        names = ", ".join(member.name.lower() for member in LfoWaveform)
        raise ValueError(f"unknown waveform {waveform!r}; choose from {names}") from None

    samples, sample_rate = read_wav(input_path)
    channels, frames = samples.shape
    try:
        channel_set = ChannelSet(channels)
    except ValueError:
        raise ValueError(f"{channels} channels are not supported") from None
    if not PluginProcessor.is_buses_layout_supported(channel_set, channel_set):
        raise ValueError(f"{channels} channels are not supported")

    processor = PluginProcessor()
    processor.prepare_to_play(sample_rate, block_size)
    parameters = processor.parameters
    parameters.rate.set(rate_hz)
    parameters.bypassed.set(bypassed)
    parameters.waveform.set_index(int(lfo_waveform))
    # reloading the state applies the settings at once, without ramps
    processor.set_state_information(processor.get_state_information())

    for start in range(0, frames, block_size):
        processor.process_block(samples[:, start : start + block_size])

    write_wav(output_path, samples, sample_rate)
    return frames


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tremolokit", description=f"{PLUGIN_NAME}: apply a tremolo to a WAV file."
    )
    parser.add_argument("input", help="input WAV file")
    parser.add_argument("output", help="output WAV file")
    parser.add_argument("--rate", type=float, default=5.0, help="modulation rate in Hz")
    parser.add_argument(
        "--waveform",
        choices=[member.name.lower() for member in LfoWaveform],
        default="sine",
        help="LFO waveform",
    )
    parser.add_argument("--bypass", action="store_true", help="pass the audio through")
    parser.add_argument(
        "--block-size", type=int, default=DEFAULT_BLOCK_SIZE, help="frames per block"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parser().parse_args(argv)
    try:
        frames = process_file(
            args.input,
            args.output,
            rate_hz=args.rate,
            waveform=args.waveform,
            bypassed=args.bypass,
            block_size=args.block_size,
        )
    except (OSError, EOFError, ValueError, wave.Error) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    print(f"processed {frames} frames")
    return 0


if __name__ == "__main__":
    sys.exit(main())