"""Line detectors."""

from scanner.detectors.basic import (
    classify,
    classify_lines,
    detect_file,
    read_text,
    split_lines,
)

__all__ = ["classify", "classify_lines", "detect_file", "read_text", "split_lines"]
