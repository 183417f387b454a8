"""Template loaders for the Monoview environment.

A loader turns a logical view name (``pages/home``, ``layouts/app``,
``components/card``) into the one text blob behind it:

    loader.get_source("pages/home") -> ("<h1>{{ title }}</h1>", "views/pages/home.html")

The second element names where the text came from and is only used in
diagnostics. A name with no backing text raises ``TemplateNotFoundError``;
the View and Component renderers turn that into an inline fragment.

Built-in Loaders:
- `FileSystemLoader`: ``<root>/<name>.html`` under one or more view roots
- `DictLoader`: names mapped to strings (tests, embedded views)
- `ChoiceLoader`: ordered fallback across loaders (theme overrides)
- `PrefixLoader`: first path segment picks the loader
- `FunctionLoader`: any callable ``name -> source | None``

Anything with ``get_source`` and ``list_templates`` works as a loader, for
example views stored in a database table.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol

from monoview.environment.exceptions import TemplateNotFoundError

SourceResult = tuple[str, str | None]


class Loader(Protocol):
    """Structural type for template loaders."""

    def get_source(self, name: str) -> SourceResult: ...

    def list_templates(self) -> list[str]: ...


class FileSystemLoader:
    """Read views from one or more root directories.

    ``pages/home`` resolves to ``<root>/pages/home.html``; roots are searched
    in the order given. A name that resolves outside its root
    (``../config``) never matches.

    Example:
            >>> loader = FileSystemLoader(["theme/views", "src/view/resources/views"])
            >>> loader.get_source("layouts/app")[1]
            'theme/views/layouts/app.html'

    """

    __slots__ = ("_encoding", "_roots", "_suffix")

    def __init__(
        self,
        paths: str | Path | Sequence[str | Path],
        suffix: str = ".html",
        encoding: str = "utf-8",
    ):
        roots = [paths] if isinstance(paths, (str, Path)) else list(paths)
        self._roots = [Path(root) for root in roots]
        self._suffix = suffix
        self._encoding = encoding

    def _candidate(self, root: Path, name: str) -> Path | None:
        path = root / (name + self._suffix)
        if not path.resolve().is_relative_to(root.resolve()):
            return None
        return path if path.is_file() else None

    def get_source(self, name: str) -> tuple[str, str]:
        for root in self._roots:
            path = self._candidate(root, name)
            if path is not None:
                try:
                    return path.read_text(encoding=self._encoding), str(path)
                except UnicodeDecodeError as exc:
                    raise TemplateNotFoundError(
                        f"Template '{name}' at {path} is not valid {self._encoding}: {exc.reason}"
                    ) from exc
        searched = ", ".join(str(root) for root in self._roots)
        raise TemplateNotFoundError(f"Template '{name}' not found in: {searched}")

    def list_templates(self) -> list[str]:
        names: set[str] = set()
        for root in self._roots:
            if not root.is_dir():
                continue
            for path in root.rglob("*" + self._suffix):
                names.add(path.relative_to(root).as_posix().removesuffix(self._suffix))
        return sorted(names)


class DictLoader:
    """Serve views from a name -> source mapping.

    Misses suggest the closest known name, which catches most typos in
    ``@component('...')`` and ``layout('...')`` calls.

    Example:
            >>> env = Environment(loader=DictLoader({"pages/home": "<h1>Hi</h1>"}))
            >>> str(env.render("pages/home"))
            '<h1>Hi</h1>'

    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = mapping

    def get_source(self, name: str) -> tuple[str, None]:
        try:
            return self._mapping[name], None
        except KeyError:
            raise TemplateNotFoundError(self._miss_message(name)) from None

    def _miss_message(self, name: str) -> str:
        known = sorted(self._mapping)
        message = f"Template '{name}' not found"
        guess = get_close_matches(name, known, n=1, cutoff=0.6)
        if guess:
            return f"{message}. Did you mean '{guess[0]}'?"
        if not known:
            return message
        shown = ", ".join(known[:10])
        more = f" ... ({len(known)} total)" if len(known) > 10 else ""
        return f"{message}. Available: {shown}{more}"

    def list_templates(self) -> list[str]:
        return sorted(self._mapping)


class ChoiceLoader:
    """Ask each loader in turn; the first one holding the name wins."""

    __slots__ = ("_loaders",)

    def __init__(self, loaders: Sequence[Loader]):
        self._loaders = tuple(loaders)

    def get_source(self, name: str) -> SourceResult:
        for loader in self._loaders:
            try:
                return loader.get_source(name)
            except TemplateNotFoundError:
                pass
        raise TemplateNotFoundError(
            f"Template '{name}' not found in any of {len(self._loaders)} loaders"
        )

    def list_templates(self) -> list[str]:
        return sorted({name for loader in self._loaders for name in loader.list_templates()})


class PrefixLoader:
    """Route ``<prefix>/<rest>`` to the loader registered for ``prefix``.

    Useful for keeping components in their own library:

            >>> loader = PrefixLoader({
            ...     "pages": FileSystemLoader("views/pages"),
            ...     "components": DictLoader({"card": "<div>{{ title }}</div>"}),
            ... })
            >>> loader.get_source("components/card")
            ('<div>{{ title }}</div>', None)

    """

    __slots__ = ("_delimiter", "_mapping")

    def __init__(self, mapping: Mapping[str, Loader], delimiter: str = "/"):
        self._mapping = mapping
        self._delimiter = delimiter

    def get_source(self, name: str) -> SourceResult:
        prefix, _, rest = name.partition(self._delimiter)
        loader = self._mapping.get(prefix)
        if loader is None:
            raise TemplateNotFoundError(
                f"Template '{name}': no loader for prefix '{prefix}'. "
                f"Available prefixes: {', '.join(sorted(self._mapping))}"
            )
        return loader.get_source(rest)

    def list_templates(self) -> list[str]:
        return sorted(
            f"{prefix}{self._delimiter}{name}"
            for prefix, loader in self._mapping.items()
            for name in loader.list_templates()
        )


class FunctionLoader:
    """Adapt a callable into a loader.

    The callable returns the source, a ``(source, origin)`` pair, or None
    for an unknown name. It cannot enumerate, so ``list_templates`` is empty.
    """

    __slots__ = ("_load",)

    def __init__(self, load: Callable[[str], str | SourceResult | None]):
        self._load = load

    def get_source(self, name: str) -> SourceResult:
        result = self._load(name)
        if result is None:
            raise TemplateNotFoundError(f"Template '{name}' not found")
        if isinstance(result, str):
            return result, "<function>"
        return result

    def list_templates(self) -> list[str]:
        return []
