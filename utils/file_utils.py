"""
File Utilities Module
Locating component files, naming conversion outputs and writing them safely.
"""

import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Tuple

# Rewritten output is JSX (`className={styles.x}` plus an ES import)
MARKUP_EXTENSIONS = {'.jsx', '.tsx'}

SKIPPED_DIRECTORIES = {'node_modules', 'dist', 'build'}

def is_hidden(path: Path) -> bool:
    return path.name.startswith('.')

def is_markup_file(path: str | Path) -> bool:
    return Path(path).suffix.lower() in MARKUP_EXTENSIONS

def get_all_files_by_extension(path: str | Path, extensions: Iterable[str]) -> List[Path]:
    """
    Walk `path` and return the files ending in one of `extensions`, sorted.

    Hidden entries and dependency/build directories (node_modules, dist,
    build) are not descended into.
    """
    suffixes = tuple(ext.lower() for ext in extensions)
    found = []
    for root, dirs, files in os.walk(Path(path).resolve()):
        dirs[:] = [d for d in dirs if d not in SKIPPED_DIRECTORIES and not is_hidden(Path(root) / d)]
        found.extend(Path(root) / name for name in files
                     if not name.startswith('.') and name.lower().endswith(suffixes))
    return sorted(found)

def output_paths(input_path: str | Path, output_dir: str | Path, stylesheet_suffix: str = '.module.css') -> Tuple[Path, Path]:
    """
    Name the generated files after the input's base name.

    `src/Button.tsx` -> (`<out>/Button.module.css`, `<out>/Button.tsx`)
    """
    input_path = Path(input_path)
    output_dir = Path(output_dir)
    return output_dir / f"{input_path.stem}{stylesheet_suffix}", output_dir / input_path.name

def ensure_directory(directory: Path) -> None:
    Path(directory).mkdir(parents=True, exist_ok=True)

def read_file_content(file_path: Path) -> str:
    """
    Decode a component file as UTF-8, dropping a leading byte order mark.

    Raises OSError when the file cannot be opened and UnicodeDecodeError when
    it is not UTF-8 text; both are left to the caller to report.
    """
    data = Path(file_path).read_bytes()
    return data.decode('utf-8-sig')

def write_file_atomic(file_path: Path, content: str) -> None:
    """
    Write content through a temporary file in the same directory, then move it
    into place, so a failed write never leaves a truncated file behind.
    """
    file_path = Path(file_path)
    fd, temp_name = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.name}.", suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        os.replace(temp_name, file_path)
    except BaseException:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise
