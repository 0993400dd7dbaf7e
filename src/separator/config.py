from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    output_dir: Path = Path("output")
    min_pixels: int = 150
    max_dimension: int = 2000
    threshold: int = 240
    workers: Optional[int] = None
    png_compression_level: int = 6
    write_manifest: bool = False

    def __post_init__(self) -> None:
        if self.min_pixels < 1:
            raise ValueError(f"min_pixels must be at least 1, got {self.min_pixels}")
        if self.max_dimension < 1:
            raise ValueError(f"max_dimension must be at least 1, got {self.max_dimension}")
        if not 0 <= self.threshold <= 255:
            raise ValueError(f"threshold must be within 0-255, got {self.threshold}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if not 0 <= self.png_compression_level <= 9:
            raise ValueError(
                f"png_compression_level must be within 0-9, got {self.png_compression_level}"
            )
