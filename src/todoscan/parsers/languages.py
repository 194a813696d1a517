"""
Mapping from file extensions to tree-sitter grammars.

A LanguageRegistry is passed to whatever needs to find comments in source
files. There is no module-level registry to mutate; ``default_registry()``
builds a fresh one each time it is called.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from ..core.exceptions import LanguageNotAvailableError


logger = logging.getLogger(__name__)


# Extension -> grammar name in tree-sitter-language-pack
DEFAULT_LANGUAGES: Dict[str, str] = {
    ".go": "go",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".rb": "ruby",
    ".py": "python",
    ".rs": "rust",
    ".html": "html",
    ".css": "css",
    ".sh": "bash",
    ".bash": "bash",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".dockerfile": "dockerfile",
    ".ex": "elixir",
    ".exs": "elixir",
    ".elm": "elm",
    ".tf": "hcl",
    ".hcl": "hcl",
    ".java": "java",
    ".kt": "kotlin",
    ".kts": "kotlin",
    ".lua": "lua",
    ".ml": "ocaml",
    ".mli": "ocaml_interface",
    ".php": "php",
    ".proto": "proto",
    ".scala": "scala",
    ".sc": "scala",
    ".sql": "sql",
    ".svelte": "svelte",
    ".swift": "swift",
    ".toml": "toml",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def load_language_pack_grammar(name: str) -> Any:
    """Load a grammar from tree-sitter-language-pack."""
    from tree_sitter_language_pack import get_language
    return get_language(name)


class LanguageRegistry:
    """
    Lookup from file extension to a tree-sitter Language.

    Grammars are loaded on first use and cached per registry.
    """

    def __init__(
        self,
        mapping: Optional[Dict[str, str]] = None,
        loader: Optional[Callable[[str], Any]] = None
    ):
        """
        Initialize the registry.

        Args:
            mapping: Extension -> grammar name. Empty if None.
            loader: Callable turning a grammar name into a Language.
                    Defaults to tree-sitter-language-pack.
        """
        self._languages: Dict[str, str] = {}
        self._cache: Dict[str, Any] = {}
        self._loader = loader or load_language_pack_grammar
        for extension, name in (mapping or {}).items():
            self.register(extension, name)

    @staticmethod
    def _normalize(extension: str) -> str:
        extension = extension.lower()
        if extension and not extension.startswith("."):
            extension = "." + extension
        return extension

    def register(self, extension: str, name: str) -> None:
        """Register a grammar name for an extension, replacing any previous one."""
        self._languages[self._normalize(extension)] = name

    def language_name(self, extension: str) -> Optional[str]:
        return self._languages.get(self._normalize(extension))

    def lookup(self, extension: str) -> Optional[Any]:
        """
        Get the Language for an extension.

        Returns:
            The Language, or None if the extension is not registered

        Raises:
            LanguageNotAvailableError: The extension is registered but its
                grammar could not be loaded
        """
        name = self.language_name(extension)
        if name is None:
            return None

        if name not in self._cache:
            try:
                self._cache[name] = self._loader(name)
            except Exception as e:
                # the grammar pack raises its own Error types for unknown
                # names and failed downloads
                raise LanguageNotAvailableError(extension, name, str(e)) from e
            logger.debug(f"Loaded grammar '{name}' for {extension}")

        return self._cache[name]

    def extensions(self) -> List[str]:
        """All registered extensions, sorted."""
        return sorted(self._languages)

    def __contains__(self, extension: str) -> bool:
        return self._normalize(extension) in self._languages

    def __len__(self) -> int:
        return len(self._languages)


def default_registry() -> LanguageRegistry:
    """Build a registry with the built-in extension table."""
    return LanguageRegistry(DEFAULT_LANGUAGES)
