#!/usr/bin/env python3
"""
Accuracy and Timing Check for the FFT Engine

For each transform size this measures:
  1. Round-trip error: max |inverse(forward(x)) - x|
  2. Reference error: max deviation from numpy.fft.fft(x, norm="ortho")
  3. Forward transform time (ms per call)

Usage:
    python -m webfft.benchmark [--config CONFIG_PATH] [--sizes 256 1024] [--repeats 100]
                              [--log-file LOG_FILE] [--log-level DEBUG]
"""

import argparse
import time
from pathlib import Path
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Sequence

import numpy as np
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import EngineConfig, load_yaml
from .engine import FFTEngine
from .utils.logging import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)

DEFAULT_SIZES = (64, 256, 1024, 4096)
DEFAULT_REPEATS = 100
DEFAULT_CONFIG = Path(__file__).parent / 'configs' / 'default.yaml'


@dataclass
class BenchmarkResult:
    """Measurements for a single transform size."""
    size: int
    roundtrip_error: float
    reference_error: float
    forward_time_ms: float
    forward_std_ms: float

    def to_dict(self) -> Dict:
        return asdict(self)


def random_signal(size: int, rng: np.random.Generator) -> np.ndarray:
    """Interleaved complex Gaussian noise."""
    return rng.standard_normal(2 * size).astype(np.float32)


def measure_size(size: int, repeats: int = DEFAULT_REPEATS, seed: int = 0) -> BenchmarkResult:
    """Measure accuracy and forward time of one engine size."""
    rng = np.random.default_rng(seed)
    x = random_signal(size, rng)

    with FFTEngine(size) as engine:
        spectrum = engine.forward(x)
        restored = engine.inverse(spectrum)

        reference = np.fft.fft(x[0::2] + 1j * x[1::2], norm='ortho')
        roundtrip_error = float(np.abs(restored - x).max())
        reference_error = float(max(
            np.abs(spectrum[0::2] - reference.real).max(),
            np.abs(spectrum[1::2] - reference.imag).max(),
        ))

        dst = np.empty_like(x)
        # Warm up
        engine.forward(x, dst)

        times = []
        for _ in range(repeats):
            start = time.perf_counter()
            engine.forward(x, dst)
            times.append((time.perf_counter() - start) * 1000)

    result = BenchmarkResult(
        size=size,
        roundtrip_error=roundtrip_error,
        reference_error=reference_error,
        forward_time_ms=float(np.mean(times)) if times else 0.0,
        forward_std_ms=float(np.std(times)) if times else 0.0,
    )
    logger.info(
        f"N={size}: roundtrip={roundtrip_error:.2e}, reference={reference_error:.2e}, "
        f"forward={result.forward_time_ms:.4f}ms"
    )
    return result


def run_benchmark(
    sizes: Sequence[int] = DEFAULT_SIZES,
    repeats: int = DEFAULT_REPEATS,
    seed: int = 0,
) -> List[BenchmarkResult]:
    return [measure_size(size, repeats=repeats, seed=seed) for size in sizes]


def display_results_table(results: List[BenchmarkResult]):
    """Display benchmark results."""
    table = Table(title="FFT Engine Benchmark", box=box.ROUNDED)
    table.add_column("N", style="bold", justify="right")
    table.add_column("Round-trip err", justify="right")
    table.add_column("vs numpy (ortho)", justify="right")
    table.add_column("Forward (ms)", justify="right")

    for r in results:
        table.add_row(
            str(r.size),
            f"{r.roundtrip_error:.2e}",
            f"{r.reference_error:.2e}",
            f"{r.forward_time_ms:.4f}±{r.forward_std_ms:.4f}",
        )

    console.print(table)


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description="FFT engine accuracy and timing check")
    parser.add_argument('--config', type=str, default=str(DEFAULT_CONFIG),
                        help='YAML file with "engine" and "benchmark" sections')
    parser.add_argument('--sizes', type=int, nargs='+', default=None,
                        help='Transform sizes (powers of two)')
    parser.add_argument('--repeats', type=int, default=None,
                        help='Timed forward transforms per size')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write engine logs to this file')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Overrides engine.log_level from the config')
    args = parser.parse_args(argv)

    yaml_config = load_yaml(args.config)
    engine_cfg = EngineConfig.from_dict(yaml_config.get('engine', {}) or {})
    if args.log_level:
        engine_cfg = EngineConfig(size=engine_cfg.size, log_level=args.log_level)
    setup_logging(args.log_file, level=engine_cfg.level)

    bench_cfg = yaml_config.get('benchmark', {}) or {}
    sizes = args.sizes or bench_cfg.get('sizes', DEFAULT_SIZES)
    repeats = args.repeats if args.repeats is not None else bench_cfg.get('repeats', DEFAULT_REPEATS)
    seed = bench_cfg.get('seed', 0)

    console.print(Panel.fit(
        "[bold blue]FFT Engine Benchmark[/bold blue]\n"
        f"Sizes: {', '.join(str(s) for s in sizes)} | Repeats: {repeats}",
        border_style="blue"
    ))

    results = run_benchmark(sizes, repeats=repeats, seed=seed)
    display_results_table(results)
    return results


if __name__ == '__main__':
    main()
