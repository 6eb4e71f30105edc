from pathlib import Path


def add_suffix_to_top_level(rel_path: Path, suffix: str) -> Path:
    """
    Add a suffix to the top-level directory name of a relative path.

    Example:
        'logs/2024/app.log' + '_compressed' -> 'logs_compressed/2024/app.log'
    """
    parts = list(rel_path.parts)
    if not parts:
        return Path()
    parts[0] = parts[0] + suffix
    return Path(*parts)


def suffix_filename(path: Path, suffix: str, extension: str | None = None) -> Path:
    """
    Add a suffix before the file extension, optionally appending a new extension.

    Example:
        app.log + '_compressed' + '.huf' -> app_compressed.log.huf
        README  + '_decoded'             -> README_decoded
    """
    if path.suffix:
        renamed = path.with_name(path.stem + suffix + path.suffix)
    else:
        renamed = path.with_name(path.name + suffix)
    if extension:
        renamed = renamed.with_name(renamed.name + extension)
    return renamed


def mirrored_path(out_root: Path, rel_root: Path, filename: str, suffix: str, extension: str | None = None) -> Path:
    """Place `filename` under `out_root`, mirroring `rel_root` with `suffix` on both the top dir and file."""
    rel_dir = add_suffix_to_top_level(rel_root, suffix)
    rel_file = suffix_filename(Path(filename), suffix, extension)
    return out_root / rel_dir / rel_file.name
