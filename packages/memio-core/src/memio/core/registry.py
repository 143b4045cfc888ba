"""Process-wide table of codecs keyed by string names.

Every codec is registered once, at definition time, under one or more
keys.  The table is read-only once :meth:`Registry.freeze` has been
called.
"""

from __future__ import annotations

import inspect
import linecache
import logging
import posixpath
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from memio.core.errors import RegistrationError
from memio.core.util import underscore

logger = logging.getLogger(__name__)

# Builtin codecs are keyed relative to this package ("clang/c_str", not
# "memio/core/codecs/clang/c_str").
CODECS_PACKAGE = "memio.core.codecs"

_STRIPPED_MODULES = ("builtins",)

# "Parameters\n----------" and friends end the description part of a docstring.
_SECTION_UNDERLINE_RE = re.compile(r"^\s*-{3,}\s*$")

SourceLocation = Tuple[str, int]


def qualified_name(cls: type) -> str:
    """Return the dotted name used to derive the keys of *cls*."""
    qualname = cls.__qualname__.replace("<locals>.", "")
    module = cls.__module__
    if module in _STRIPPED_MODULES:
        return qualname
    if module.startswith(CODECS_PACKAGE + "."):
        module = module[len(CODECS_PACKAGE) + 1:]
    elif module == CODECS_PACKAGE:
        return qualname
    return f"{module}.{qualname}"


def default_keys(obj: Any) -> List[str]:
    """Derive the canonical and leaf keys of *obj*.

    Only classes have default keys; any other object must be registered
    with explicit aliases.

    Example::

        default_keys(memio.core.codecs.clang.CStr)  # ['clang/c_str', 'c_str']
    """
    if not isinstance(obj, type):
        return []
    snake = underscore(qualified_name(obj))
    return list(dict.fromkeys([snake, posixpath.basename(snake)]))


def _trim_docstring(text: str) -> str:
    """Keep the description part of *text*, dropping numpydoc sections."""
    lines = text.splitlines()
    for index in range(1, len(lines)):
        if _SECTION_UNDERLINE_RE.match(lines[index]) and lines[index - 1].strip():
            lines = lines[: index - 1]
            break
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines) + "\n" if lines else ""


def _strip_comments(lines: Iterable[str]) -> str:
    stripped = []
    for line in lines:
        line = line.strip()
        stripped.append(line[2:] if line.startswith("# ") else line[1:])
    return _trim_docstring("\n".join(stripped))


def comments_above(filename: str, lineno: int) -> str:
    """Return the ``#`` comment block directly above line *lineno* of *filename*."""
    block: List[str] = []
    for number in range(lineno - 1, 0, -1):
        line = linecache.getline(filename, number).strip()
        if not line.startswith("#"):
            break
        block.insert(0, line)
    return _strip_comments(block)


class CodecEntry:
    """A registered codec together with the keys it can be found by.

    The documentation string is computed on first access from, in order:
    the ``doc`` given at registration, the comment block above *location*,
    the class docstring, the comment block above the class definition.
    """

    def __init__(
        self,
        obj: Any,
        keys: List[str],
        doc: Optional[str] = None,
        location: Optional[SourceLocation] = None,
    ):
        self.obj = obj
        self.keys = tuple(keys)
        self._forced_doc = doc
        self._location = location
        self._doc: Optional[str] = None

    @property
    def doc(self) -> str:
        if self._doc is None:
            self._doc = self._compute_doc()
        return self._doc

    def _compute_doc(self) -> str:
        if self._forced_doc is not None:
            return self._forced_doc
        if self._location is not None:
            return comments_above(*self._location)
        if isinstance(self.obj, type):
            own = self.obj.__dict__.get("__doc__")
            if own:
                return _trim_docstring(inspect.cleandoc(own))
            try:
                comments = inspect.getcomments(self.obj)
            except (OSError, TypeError):
                comments = None
            if comments:
                return _strip_comments(comments.splitlines())
        return ""

    def __repr__(self) -> str:
        return f"CodecEntry(obj={self.obj!r}, keys={list(self.keys)!r})"


class Registry:
    """String key -> :class:`CodecEntry` table.

    Usage::

        registry = Registry()
        registry.register(MyCodec, aliases=["mine"])
        registry.find("mine").obj  # MyCodec
    """

    def __init__(self) -> None:
        self._map: Dict[str, CodecEntry] = {}
        self._frozen = False

    # -- lifecycle ---------------------------------------------------------

    @property
    def frozen(self) -> bool:
        """Whether the startup (registration) phase is over."""
        return self._frozen

    def freeze(self) -> None:
        """End the registration phase.

        Later calls to :meth:`register` fail unless made with ``late=True``.
        """
        self._frozen = True

    # -- registration ------------------------------------------------------

    def register(
        self,
        obj: Any,
        aliases: Union[str, Iterable[str]] = (),
        doc: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        late: bool = False,
    ) -> List[str]:
        """Register *obj* and return the keys it can be found by.

        Parameters
        ----------
        obj:
            Any object with ``read(stream)`` and ``write(stream, value)``;
            usually a :class:`~memio.core.codecs.Codec` subclass.
        aliases:
            Extra key(s), appended after the keys derived from the class name.
        doc:
            Documentation string; derived lazily when omitted.
        location:
            ``(filename, lineno)`` whose preceding comment block documents *obj*.
        late:
            Allow registration after :meth:`freeze`.

        Raises
        ------
        RegistrationError
            If every candidate key is already taken, or *obj* has no
            candidate key at all.

        Example::

            registry.register(clang.CStr, aliases="meow")
            # ['clang/c_str', 'c_str', 'meow']
            registry.register(OtherCStr, aliases=["c_str", "c_str2"])
            # ['other/c_str', 'c_str2']
        """
        if self._frozen and not late:
            raise RegistrationError(
                f"Cannot register {obj!r}: the codec registry is frozen. "
                "Pass late=True to register after startup."
            )

        if isinstance(aliases, str):
            aliases = [aliases]
        candidates = list(dict.fromkeys(default_keys(obj) + list(aliases)))
        if not candidates:
            raise RegistrationError(
                f"Cannot register {obj!r}: it has no class name to derive a key from. "
                "Specify an alias such as `register(obj, aliases='custom_name')`."
            )

        keys = [key for key in candidates if key not in self._map]
        if not keys:
            raise RegistrationError(
                f"Register {obj!r} fails because other objects with the same name "
                "have been registered.\n"
                "Specify an alias such as `register(MyClass, aliases='custom_alias_name')`."
            )

        entry = CodecEntry(obj, keys, doc=doc, location=location)
        for key in keys:
            self._map[key] = entry
        logger.debug("Registered %r as %s", obj, ", ".join(keys))
        return keys

    # -- lookup ------------------------------------------------------------

    def find(self, key: str) -> Optional[CodecEntry]:
        """Exact lookup; no normalization of *key*."""
        return self._map.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def keys(self) -> List[str]:
        """All registered keys, in registration order."""
        return list(self._map)

    def entries(self) -> List[CodecEntry]:
        """Unique entries, in registration order."""
        seen: Dict[int, CodecEntry] = {}
        for entry in self._map.values():
            seen.setdefault(id(entry), entry)
        return list(seen.values())


# The process-wide registry populated by codec definitions.
registry = Registry()
