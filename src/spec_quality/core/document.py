"""Permissive accessors over a decoded specification tree.

Documents come straight out of `json.loads` / `yaml.safe_load`, so any key may
be missing, `None`, or the wrong type. Every helper here answers "absent"
instead of raising, which keeps the category scorers total over any input.
"""

from __future__ import annotations

from typing import Any, Iterator, NamedTuple

# Path-item key that holds shared parameters rather than an operation.
PARAMETERS_KEY = "parameters"


class Operation(NamedTuple):
    """One HTTP-method entry under a path."""

    path: str
    method: str
    node: dict

    @property
    def label(self) -> str:
        return f"{self.method.upper()} {self.path}"

    def get(self, key: str) -> Any:
        return self.node.get(key)


def is_set(value: Any) -> bool:
    """True when a value counts as present.

    `None`, `False`, zero, and the empty string are absent. Containers count as
    present even when empty; emptiness checks are made explicitly where a
    rule asks for a non-empty list or map.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


def as_mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def lookup(node: Any, *keys: str) -> Any:
    """Follow `keys` through nested mappings; `None` once any step is missing."""
    current = node
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def has(node: Any, *keys: str) -> bool:
    return is_set(lookup(node, *keys))


def iter_operations(doc: Any) -> Iterator[Operation]:
    """Yield every operation in document order: path, then method.

    Path items that are not mappings are skipped. An operation value that is
    not a mapping is yielded as an empty operation so it still counts (and is
    reported) as lacking everything.
    """
    for path, item in as_mapping(lookup(doc, "paths")).items():
        if not isinstance(item, dict):
            continue
        for method, node in item.items():
            if method == PARAMETERS_KEY:
                continue
            yield Operation(str(path), str(method), as_mapping(node))


def iter_responses(operation: Operation) -> Iterator[tuple[str, dict]]:
    """Yield (status code, response) pairs in declaration order.

    YAML decodes bare status codes as integers; codes are always returned as
    strings.
    """
    for code, response in as_mapping(operation.get("responses")).items():
        yield str(code), as_mapping(response)


def iter_all_responses(doc: Any) -> Iterator[tuple[Operation, str, dict]]:
    for operation in iter_operations(doc):
        for code, response in iter_responses(operation):
            yield operation, code, response
