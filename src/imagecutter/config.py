from dataclasses import dataclass
from pathlib import Path


@dataclass
class Settings:
    output_dir: Path = Path("output")
    file_name_prefix: str = "image_"
    start_index: int = 1
    output_format: str = "png"
    number_of_slices: int = 4
    write_manifest: bool = True
