"""
=============================================================================
QUERY STRING PARSING AND BUILDING
=============================================================================

A query string is the part of a URI between "?" and "#":

    http://example.org/search?q=python&page=2&tags[]=web&tags[]=net
                              └────────────────────────────────────┘
                                          query string

=============================================================================
BRACKET SYNTAX
=============================================================================

Parameter names may carry brackets to describe nested structures:

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Input                        Parsed parameters                    │
    ├─────────────────────────────────────────────────────────────────────┤
    │   set                          {"set": None}                        │
    │   empty=                       {"empty": ""}                        │
    │   foo=bar                      {"foo": "bar"}                       │
    │   list[]=a&list[]=b            {"list": ["a", "b"]}                 │
    │   map[x]=1&map[y]=2            {"map": {"x": "1", "y": "2"}}        │
    │   baz[dummy]=a&baz[]=b         {"baz": {"dummy": "a", 0: "b"}}      │
    └─────────────────────────────────────────────────────────────────────┘

A node stays a list as long as values are only appended to it. The first
keyed entry turns it into a dict, and later appends into a dict use the
next free integer key. Integer keys are written back as "[]", so the
structure builds back to exactly the string it was parsed from.

Names that merely contain brackets (for example a path that ended up in
the query string) are stored as one opaque key and percent-encoded on
output.
=============================================================================
"""

from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote_plus, unquote_plus

from ..errors import InvalidArgument


Node = Union[Dict[Any, Any], List[Any]]


def _encode(value: Any) -> str:
    return quote_plus(str(value), safe="")


def _is_stringable(value: Any) -> bool:
    """Check whether an arbitrary object defines its own string form."""
    return type(value).__str__ is not object.__str__


class QueryString:
    """
    Ordered, mutable set of query string parameters.

    Example:
        >>> query = QueryString("foo=bar&list[]=1")
        >>> query.param("list")
        ['1']
        >>> query.add_param("flag", True).build()
        'foo=bar&list[]=1&flag=1'
    """

    def __init__(self, query_string: Optional[str] = None):
        """
        Parse a raw query string.

        Args:
            query_string: The text after "?" without the "?" itself.

        Raises:
            InvalidArgument: If a parameter name has unbalanced brackets.
        """
        self._parameters: Dict[str, Any] = {}
        if query_string:
            for pair in query_string.split("&"):
                self._parse_pair(pair)

    # =========================================================================
    # PARSING
    # =========================================================================

    def _parse_pair(self, pair: str) -> None:
        name, separator, value = pair.partition("=")
        name = unquote_plus(name)
        if name.count("[") != name.count("]"):
            raise InvalidArgument("Unbalanced [] in query string")

        decoded = unquote_plus(value) if separator else None
        start = name.find("[")
        if name.endswith("]") and start > 0:
            self._place(name[:start], self._bracket_path(name, start), decoded)
        else:
            self._parameters[name] = decoded

    @staticmethod
    def _bracket_path(name: str, start: int) -> List[Optional[str]]:
        """
        Split the bracket part of a name into path segments.

        "a[b][]"    -> ["b", None]
        "a[b[c]]"   -> ["b[c]"]

        None stands for an append ("[]").
        """
        segments: List[Optional[str]] = []
        offset = 0
        while start != -1:
            end = name.find("]", offset)
            if end == start + 1:
                segments.append(None)
            else:
                # Nested brackets inside a key move the closing bracket out
                end += name.count("[", start + 1, end)
                segments.append(name[start + 1:end])
            offset = end + 1
            start = name.find("[", offset)
        return segments

    def _place(self, base: str, path: List[Optional[str]], value: Any) -> None:
        """Walk the path below base, creating nodes, and store value at its end."""
        holder: Node = self._parameters
        key: Any = base
        for segment in path:
            node = _child(holder, key)
            if not isinstance(node, (list, dict)):
                node = [] if segment is None else {}
                _assign(holder, key, node)
            elif segment is not None and isinstance(node, list):
                node = dict(enumerate(node))
                _assign(holder, key, node)

            if segment is None:
                key = _next_index(node)
                _assign(node, key, None)
            else:
                key = segment
            holder = node

        _assign(holder, key, value)

    # =========================================================================
    # BUILDING
    # =========================================================================

    def build(self) -> str:
        """
        Build the query string from the current parameters.

        Returns:
            Parameters joined with "&", without a leading "?".
        """
        pairs: List[str] = []
        for name, value in self._parameters.items():
            self._build_pairs(_encode(name), value, pairs)
        return "&".join(pairs)

    def _build_pairs(self, prefix: str, value: Any, pairs: List[str]) -> None:
        if isinstance(value, dict):
            for key, item in value.items():
                postfix = "[]" if isinstance(key, int) else f"[{_encode(key)}]"
                self._build_pairs(prefix + postfix, item, pairs)
        elif isinstance(value, (list, tuple)):
            for item in value:
                self._build_pairs(prefix + "[]", item, pairs)
        elif value is None:
            pairs.append(prefix)
        elif value is True:
            pairs.append(f"{prefix}=1")
        elif value is False:
            pairs.append(f"{prefix}=0")
        else:
            pairs.append(f"{prefix}={_encode(value)}")

    # =========================================================================
    # PARAMETER ACCESS
    # =========================================================================

    def has_params(self) -> bool:
        """Check whether any parameter is set."""
        return len(self._parameters) > 0

    def add_param(self, name: str, value: Any) -> "QueryString":
        """
        Add or replace a parameter.

        Args:
            name: Parameter name.
            value: str, bool, None, number, list/tuple/dict of those, or an
                object with its own __str__.

        Returns:
            self for chaining.

        Raises:
            InvalidArgument: If the value can not be rendered.
        """
        if not isinstance(name, str):
            raise InvalidArgument(
                f"Parameter name must be a string, but was {type(name).__name__}"
            )

        self._parameters[name] = _check_value(name, value)
        return self

    def remove_param(self, name: str) -> "QueryString":
        """Remove a parameter, silently ignoring unknown names."""
        self._parameters.pop(name, None)
        return self

    def contains_param(self, name: str) -> bool:
        """Check whether a parameter is set, even as a flag without value."""
        return name in self._parameters

    def param(self, name: str, default: Any = None) -> Any:
        """Return the value of a parameter, or default if it is not set."""
        return self._parameters.get(name, default)

    def params(self) -> Dict[str, Any]:
        """Return a shallow copy of all parameters."""
        return dict(self._parameters)

    def __contains__(self, name: str) -> bool:
        return self.contains_param(name)

    def __len__(self) -> int:
        return len(self._parameters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryString):
            return NotImplemented
        return self._parameters == other._parameters

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        return f"QueryString({self.build()!r})"


def _check_value(name: str, value: Any) -> Any:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, dict):
        return {key: _check_value(name, item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_check_value(name, item) for item in value]
    if _is_stringable(value):
        return str(value)
    raise InvalidArgument(
        f"Argument 2 passed to add_param() for {name} must be a string, "
        f"bool, number, list, dict or an object with __str__, "
        f"but was {type(value).__name__}"
    )


def _child(holder: Node, key: Any) -> Any:
    if isinstance(holder, list):
        return holder[key] if 0 <= key < len(holder) else None
    return holder.get(key)


def _assign(holder: Node, key: Any, value: Any) -> None:
    if isinstance(holder, list):
        if key == len(holder):
            holder.append(value)
        else:
            holder[key] = value
    else:
        holder[key] = value


def _next_index(node: Node) -> int:
    if isinstance(node, list):
        return len(node)
    indices = [key for key in node if isinstance(key, int)]
    return max(indices) + 1 if indices else 0
