"""Language table: how each language's function headers are found and read.

Each entry says which file extension the language uses, which ctags kind word
marks function rows (``function`` or ``method``), and which prefix keywords
are modifiers rather than return types.

The table is plain configuration passed to the aggregator and the ctags
supplier; nothing here is process-wide mutable state.

Adding a language:
  1. Add a LanguageSpec to BUILTIN_LANGUAGES and its aliases to _ALIASES.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..exceptions import UnsupportedLanguageError


@dataclass(frozen=True)
class LanguageSpec:
    """Everything extraction needs to know about a language."""

    name: str
    extension: str  # without the leading dot
    function_kind: str
    modifiers: frozenset[str] = field(default_factory=frozenset)


# ── Re-usable building blocks ──────────────────────────────────────

JAVA_MODIFIERS = frozenset(
    {
        "public",
        "private",
        "protected",
        "static",
        "final",
        "abstract",
        "synchronized",
        "native",
        "strictfp",
        "default",
        "transient",
        "volatile",
    }
)

_CSHARP_MODIFIERS = frozenset(
    {
        "public",
        "private",
        "protected",
        "internal",
        "static",
        "virtual",
        "override",
        "abstract",
        "sealed",
        "async",
        "extern",
        "unsafe",
        "new",
        "readonly",
        "partial",
    }
)

_C_MODIFIERS = frozenset({"static", "extern", "inline", "const", "volatile", "register"})

_CPP_MODIFIERS = _C_MODIFIERS | frozenset(
    {"virtual", "explicit", "constexpr", "friend", "public:", "private:", "protected:"}
)


# ── Language definitions ───────────────────────────────────────────

BUILTIN_LANGUAGES: dict[str, LanguageSpec] = {
    "c": LanguageSpec("c", "c", "function", _C_MODIFIERS),
    "cpp": LanguageSpec("cpp", "cpp", "function", _CPP_MODIFIERS),
    "cs": LanguageSpec("cs", "cs", "method", _CSHARP_MODIFIERS),
    "erlang": LanguageSpec("erlang", "erl", "function"),
    "java": LanguageSpec("java", "java", "method", JAVA_MODIFIERS),
    "javascript": LanguageSpec("javascript", "js", "function", frozenset({"async", "static"})),
    "lisp": LanguageSpec("lisp", "lsp", "function"),
    "lua": LanguageSpec("lua", "lua", "function", frozenset({"local"})),
    "python": LanguageSpec("python", "py", "function", frozenset({"async"})),
}

_ALIASES = {
    "c": "c",
    "c++": "cpp",
    "cpp": "cpp",
    "c#": "cs",
    "cs": "cs",
    "erlang": "erlang",
    "java": "java",
    "javascript": "javascript",
    "lisp": "lisp",
    "lua": "lua",
    "python": "python",
}


class LanguageTable:
    """Lookup of LanguageSpec by name/alias or by file extension."""

    def __init__(
        self,
        languages: Optional[Iterable[LanguageSpec]] = None,
        aliases: Optional[Mapping[str, str]] = None,
    ):
        specs = list(languages) if languages is not None else list(BUILTIN_LANGUAGES.values())
        self._by_name = {spec.name: spec for spec in specs}
        self._aliases = dict(aliases) if aliases is not None else dict(_ALIASES)
        for name in self._by_name:
            self._aliases.setdefault(name, name)
        self._by_extension = {spec.extension: spec for spec in specs}

    def __iter__(self):
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def supported(self) -> list[str]:
        return sorted(self._aliases)

    def get(self, language: str) -> LanguageSpec:
        """Resolve a language name or alias (case-insensitive)."""
        key = language.strip().lower()
        name = self._aliases.get(key)
        if name is None or name not in self._by_name:
            raise UnsupportedLanguageError(language, self.supported())
        return self._by_name[name]

    def for_path(self, path: str | Path) -> LanguageSpec:
        """Resolve a language from a file's extension."""
        suffix = Path(path).suffix.lstrip(".").lower()
        spec = self._by_extension.get(suffix)
        if spec is None:
            raise UnsupportedLanguageError(suffix or str(path), sorted(self._by_extension))
        return spec

    def resolve(self, path: str | Path, language: Optional[str] = None) -> LanguageSpec:
        """Explicit language wins; otherwise go by extension."""
        if language:
            return self.get(language)
        return self.for_path(path)


DEFAULT_LANGUAGES = LanguageTable()
