"""
Folder scanner implementation for traversing local directories and collecting TODOs.
"""

import logging
import os
from pathlib import Path
from typing import List, Dict, Optional, Iterator, Any

from ..assembler import TodoAssembler
from ..base import FileInfo, IgnoreRules, ScannerConfig
from ..models import Todo
from ...parsers.languages import LanguageRegistry


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = ".todoscan.yaml"


class FolderScanner:
    """
    Scanner for traversing local folders and collecting files to parse.

    Directories and files are visited in sorted order so repeated scans
    report TODOs in the same order. A .scanignore file in the root is
    respected if present.
    """

    def __init__(self, config: Optional[ScannerConfig] = None,
                 registry: Optional[LanguageRegistry] = None):
        self.config = config or ScannerConfig()
        self.assembler = TodoAssembler(registry, prefilter=self.config.prefilter)

    def _is_file_too_large(self, file_path: Path) -> bool:
        """Check if a file exceeds the maximum size limit."""
        try:
            size_mb = file_path.stat().st_size / (1024 * 1024)
            return size_mb > self.config.max_file_size_mb
        except OSError:
            return True

    def ignore_rules(self, root_path: Path, ignore_file_path: Optional[Path] = None) -> IgnoreRules:
        """Rules for a scan of root_path, from the config and the root's ignore file."""
        return IgnoreRules.load(root_path, self.config, ignore_file_path)

    def scan_iterator(self, target: Any, ignore_file_path: Optional[Path] = None) -> Iterator[FileInfo]:
        """
        Scan a directory and yield information about each file.

        Args:
            target: Root directory path to scan
            ignore_file_path: Optional custom path to ignore file

        Yields:
            FileInfo objects for each valid file found
        """
        root_path = Path(target).resolve()
        rules = self.ignore_rules(root_path, ignore_file_path)

        for dirpath, dirnames, filenames in os.walk(
            root_path,
            followlinks=self.config.follow_symlinks
        ):
            current_dir = Path(dirpath)
            relative_dir = current_dir.relative_to(root_path)

            dirnames[:] = sorted(
                d for d in dirnames
                if not rules.matches(relative_dir / d, is_dir=True)
            )

            for filename in sorted(filenames):
                file_path = current_dir / filename

                if rules.matches(relative_dir / filename):
                    continue
                if not self.config.accepts_extension(file_path.suffix):
                    continue
                if self._is_file_too_large(file_path):
                    logger.debug(f"Skipping {file_path}: larger than {self.config.max_file_size_mb} MB")
                    continue

                try:
                    stat = file_path.stat()
                except OSError:
                    # Vanished between listing and stat
                    continue

                yield FileInfo(
                    path=file_path,
                    relative_path=relative_dir / filename,
                    size_bytes=stat.st_size,
                    extension=file_path.suffix.lower()
                )

    def scan(self, target: Any, ignore_file_path: Optional[Path] = None) -> List[FileInfo]:
        """
        Scan a directory and return a list of all files.

        Args:
            target: Root directory path to scan
            ignore_file_path: Optional custom path to ignore file

        Returns:
            List of FileInfo objects
        """
        return list(self.scan_iterator(target, ignore_file_path))

    def scan_todos(self, target: Any, ignore_file_path: Optional[Path] = None) -> List[Todo]:
        """
        Scan a directory and parse every file found for TODO annotations.

        Args:
            target: Root directory path to scan
            ignore_file_path: Optional custom path to ignore file

        Returns:
            List of Todo objects, grouped by file in scan order. Locations
            are reported relative to ``target`` as it was given.
        """
        files = self.scan(target, ignore_file_path)
        return self.assembler.parse_files(
            [Path(target) / f.relative_path for f in files],
            workers=self.config.workers
        )

    def get_statistics(self, results: List[FileInfo]) -> Dict:
        """
        Get statistics about scanned files.

        Args:
            results: List of FileInfo objects

        Returns:
            Dictionary with statistics
        """
        extensions: Dict[str, Dict[str, int]] = {}
        for f in results:
            ext = f.extension or 'no_extension'
            if ext not in extensions:
                extensions[ext] = {'count': 0, 'size_bytes': 0}
            extensions[ext]['count'] += 1
            extensions[ext]['size_bytes'] += f.size_bytes

        return {
            'total_files': len(results),
            'total_size_bytes': sum(f.size_bytes for f in results),
            'extensions': extensions,
            'parsed_with_grammar': sum(1 for f in results if f.extension in self.assembler.registry),
            'scanner_type': self.__class__.__name__
        }


# Convenience function
def scan_folder(
    root_path: Path,
    config_path: Optional[Path] = None,
    ignore_file_path: Optional[Path] = None,
    registry: Optional[LanguageRegistry] = None
) -> List[Todo]:
    """
    Convenience function to collect TODOs from a local folder.

    Args:
        root_path: Root directory to scan
        config_path: Optional path to configuration file
        ignore_file_path: Optional custom path to ignore file
        registry: Optional extension -> grammar lookup

    Returns:
        List of Todo objects
    """
    if config_path is None:
        # Fall back to a config file in the scanned folder
        config_path = Path(root_path) / DEFAULT_CONFIG_FILENAME
    config = ScannerConfig.from_yaml(config_path)

    scanner = FolderScanner(config, registry)
    return scanner.scan_todos(Path(root_path), ignore_file_path)
