"""
Configuration, file records and ignore rules for folder scans.
"""

import fnmatch
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field
import yaml

from .exceptions import ConfigurationError


@dataclass
class ScannerConfig:
    """Configuration for scanning folders for TODO annotations."""
    ignore_patterns: List[str] = field(default_factory=lambda: [
        "*.pyc", "__pycache__", ".git", ".hg", ".svn", ".venv", "venv",
        "node_modules", ".idea", ".vscode", ".tox", ".mypy_cache",
        ".pytest_cache", "*.egg-info"
    ])
    max_file_size_mb: float = 10.0
    follow_symlinks: bool = False
    scanignore_filename: str = ".scanignore"  # Custom ignore file name
    extensions: Optional[List[str]] = None  # Only scan these extensions if set
    workers: int = 1
    prefilter: bool = True  # Skip comments without the TODO marker

    @classmethod
    def from_yaml(cls, config_path: Path) -> "ScannerConfig":
        """
        Load configuration from the ``scanner`` section of a YAML file.

        Missing keys keep their defaults and a missing file gives the
        default configuration.

        Raises:
            ConfigurationError: The file is not valid YAML or has the wrong shape
        """
        config_path = Path(config_path)
        if not config_path.exists():
            return cls()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {config_path}")
        scanner_config = config_data.get('scanner') or {}
        if not isinstance(scanner_config, dict):
            raise ConfigurationError(f"'scanner' in {config_path} must be a mapping")

        # Get default values from class
        default_config = cls()
        extensions = scanner_config.get('extensions', default_config.extensions)
        return cls(
            ignore_patterns=scanner_config.get('ignore_patterns', default_config.ignore_patterns),
            max_file_size_mb=float(scanner_config.get('max_file_size_mb', default_config.max_file_size_mb)),
            follow_symlinks=bool(scanner_config.get('follow_symlinks', default_config.follow_symlinks)),
            scanignore_filename=scanner_config.get('scanignore_filename', default_config.scanignore_filename),
            extensions=[ext.lower() for ext in extensions] if extensions else None,
            workers=int(scanner_config.get('workers', default_config.workers)),
            prefilter=bool(scanner_config.get('prefilter', default_config.prefilter))
        )

    def accepts_extension(self, extension: str) -> bool:
        """Check an extension against the allow list, if there is one."""
        if not self.extensions:
            return True
        return extension.lower() in self.extensions


@dataclass
class FileInfo:
    """Information about a scanned file."""
    path: Path
    relative_path: Path
    size_bytes: int
    extension: str

    @property
    def size_mb(self) -> float:
        """Get file size in megabytes."""
        return self.size_bytes / (1024 * 1024)


@dataclass
class IgnoreRules:
    """
    Exclusion rules for one folder scan.

    ``config_patterns`` come from ``ScannerConfig.ignore_patterns`` and match
    a file or directory name, or its path relative to the scan root.
    ``file_patterns`` come from the root's ignore file and follow a small
    gitignore subset: a trailing ``/`` matches directories only and a
    leading ``/`` anchors the pattern at the root.
    """
    config_patterns: List[str] = field(default_factory=list)
    file_patterns: List[str] = field(default_factory=list)

    @classmethod
    def load(cls, root_path: Path, config: ScannerConfig,
             ignore_file_path: Optional[Path] = None) -> "IgnoreRules":
        """
        Build the rules for a scan of ``root_path``.

        The ignore file defaults to ``config.scanignore_filename`` in the
        root. A missing file adds no patterns; a file that exists but cannot
        be read raises OSError.
        """
        ignore_file = Path(ignore_file_path) if ignore_file_path else root_path / config.scanignore_filename
        file_patterns: List[str] = []
        if ignore_file.is_file():
            with open(ignore_file, 'r', encoding='utf-8') as f:
                for line in f:
                    line = line.strip()
                    # Skip blanks and comments
                    if line and not line.startswith('#'):
                        file_patterns.append(line)
        return cls(list(config.ignore_patterns), file_patterns)

    def matches(self, relative_path: Path, is_dir: bool = False) -> bool:
        """Check a path, given relative to the scan root, against every rule."""
        rel = relative_path.as_posix()
        name = relative_path.name

        for pattern in self.config_patterns:
            if fnmatch.fnmatch(name, pattern) or fnmatch.fnmatch(rel, pattern):
                return True

        return any(self._matches_file_pattern(p, rel, name, is_dir) for p in self.file_patterns)

    @staticmethod
    def _matches_file_pattern(pattern: str, rel: str, name: str, is_dir: bool) -> bool:
        if pattern.endswith('/'):
            if not is_dir:
                return False
            pattern = pattern.rstrip('/')

        if pattern.startswith('/'):
            return fnmatch.fnmatch(rel, pattern.lstrip('/'))
        if '/' in pattern:
            return fnmatch.fnmatch(rel, pattern)
        return fnmatch.fnmatch(name, pattern)
