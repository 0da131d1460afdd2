from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class BulkLoadRequest:
    """Parameters of a single bulk load of a location file into a brand."""
    brand_key: str
    source: str  # Data source the locations are loaded for
    file_path: Union[str, Path]
    implicit_delete: bool = False  # Remove the locations of the source that are not in the file
    expected_record_count: int = 0
    success_email: Optional[str] = None  # Comma separated
    fail_email: Optional[str] = None  # Comma separated
    success_callback: Optional[str] = None
    fail_callback: Optional[str] = None
