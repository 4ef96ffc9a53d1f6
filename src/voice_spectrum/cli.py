"""CLI: show the voice spectrum bars for a WAV file or live input."""

import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np

from voice_spectrum.audio import AudioConfig, iter_blocks, load_wav
from voice_spectrum.audio.config import REFERENCE_SAMPLE_RATE, AnalysisConfig
from voice_spectrum.errors import SpectrumError
from voice_spectrum.pipeline import StreamingConfig, StreamingSpectrumPipeline
from voice_spectrum.spectrum import SpectrumAnalyzer

BAR_CHARS = " ▁▂▃▄▅▆▇█"


def render_bars(amplitudes: np.ndarray) -> str:
    """One text line per frame; amplitude 1.0 is a full-height bar."""
    levels = np.clip(np.asarray(amplitudes), 0.0, 1.0) * (len(BAR_CHARS) - 1)
    return "".join(BAR_CHARS[int(round(v))] for v in levels)


def _build_parser() -> argparse.ArgumentParser:
    defaults = AnalysisConfig()
    parser = argparse.ArgumentParser(
        description="Voice spectrum analyzer (A-weighted log bands for a wave display)"
    )
    parser.add_argument(
        "wav",
        nargs="?",
        type=Path,
        default=None,
        help="WAV file to analyze (omit for live input)",
    )
    parser.add_argument(
        "--device",
        type=int,
        default=None,
        help="Input device index (list with --list-devices)",
    )
    parser.add_argument(
        "--list-devices",
        action="store_true",
        help="List available audio input devices and exit",
    )
    parser.add_argument("--sample-rate", type=int, default=AudioConfig().sample_rate,
                        help="Live capture sample rate in Hz (default: 44100)")
    parser.add_argument("--channels", type=int, default=1,
                        help="Live capture channels (default: 1)")
    parser.add_argument("--fft-size", type=int, default=defaults.fft_size,
                        help=f"Samples per transform, power of two (default: {defaults.fft_size})")
    parser.add_argument("--bands", type=int, default=defaults.band_count,
                        help=f"Number of bars (default: {defaults.band_count})")
    parser.add_argument("--start", type=float, default=defaults.start_frequency,
                        help=f"Lowest band frequency in Hz (default: {defaults.start_frequency:g})")
    parser.add_argument("--end", type=float, default=defaults.end_frequency,
                        help=f"Highest band frequency in Hz (default: {defaults.end_frequency:g})")
    parser.add_argument("--smoothing", type=float, default=defaults.temporal_smoothing,
                        help=f"Temporal smoothing in [0, 1] (default: {defaults.temporal_smoothing:g})")
    parser.add_argument(
        "--follow-sample-rate",
        action="store_true",
        help="Compute A-weighting at the input sample rate instead of 44.1 kHz",
    )
    parser.add_argument("--realtime", action="store_true",
                        help="Pace WAV playback at the file's sample rate")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _print_frame(bars: np.ndarray) -> None:
    line = " | ".join(render_bars(channel) for channel in bars)
    print(f"\r|{line}|", end="", flush=True)


def main() -> None:
    args = _build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_devices:
        try:
            import sounddevice as sd
            print(sd.query_devices())
        except ImportError:
            print("sounddevice not installed: pip install sounddevice", file=sys.stderr)
            sys.exit(1)
        return

    config = AnalysisConfig(
        fft_size=args.fft_size,
        band_count=args.bands,
        start_frequency=args.start,
        end_frequency=args.end,
        temporal_smoothing=args.smoothing,
        weighting_sample_rate=None if args.follow_sample_rate else REFERENCE_SAMPLE_RATE,
    )
    try:
        analyzer = SpectrumAnalyzer(config)
    except SpectrumError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        if args.wav is not None:
            _run_file(analyzer, args.wav, args.realtime)
        else:
            _run_live(analyzer, args)
    except KeyboardInterrupt:
        pass
    except SpectrumError as e:
        print(f"\nAnalysis failed: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        print()


def _run_file(analyzer: SpectrumAnalyzer, path: Path, realtime: bool) -> None:
    sample_rate, audio = load_wav(str(path))
    fft_size = analyzer.config.fft_size
    frame_sec = fft_size / sample_rate
    for block in iter_blocks(audio, fft_size):
        _print_frame(analyzer.analyze(block.T, sample_rate))
        if realtime:
            time.sleep(frame_sec)


def _run_live(analyzer: SpectrumAnalyzer, args: argparse.Namespace) -> None:
    pipeline = StreamingSpectrumPipeline(
        config=StreamingConfig(sample_rate=args.sample_rate, channels=args.channels),
        analyzer=analyzer,
        on_frame=_print_frame,
    )
    print(f"Listening at {args.sample_rate} Hz - press Ctrl+C to quit", file=sys.stderr)
    pipeline.run(device=args.device)


if __name__ == "__main__":
    main()
