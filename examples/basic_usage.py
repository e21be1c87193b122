"""Example that layers additive and overwriting updates and samples the result."""

from __future__ import annotations

from intensity_segments import IntensitySegments, sample, setup_logging


def main() -> None:
    setup_logging({"logging": {"level": "debug", "format": "text"}})
    segments = IntensitySegments()
    segments.add(10, 30, 1)
    segments.add(20, 40, 1)
    print(segments)
    segments.set(15, 30, 5)
    print(segments)
    print(sample(segments, [5, 12, 15, 35, 45]))


if __name__ == "__main__":
    main()
