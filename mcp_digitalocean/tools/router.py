from __future__ import annotations

import re
from typing import Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class NoRouteError(LookupError):
    """No registered URI template matches the requested URI."""


class AmbiguousTemplateError(ValueError):
    """A template would match exactly the same URIs as one already registered."""


class UriTemplate:
    """
    A resource URI pattern such as `droplets://{id}/actions/{action_id}`.

    Each `{name}` matches one or more characters other than `/`, except a
    placeholder that ends the pattern, which runs to the end of the URI so
    IDs with unusual characters still resolve.
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.variables: List[str] = []

        parts: List[str] = []
        literals: List[str] = []
        pos = 0
        for match in _PLACEHOLDER.finditer(pattern):
            literal = pattern[pos : match.start()]
            if pos > 0 and not literal:
                raise ValueError(f"Adjacent placeholders in URI template '{pattern}'")
            literals.append(literal)
            parts.append(re.escape(literal))

            name = match.group(1)
            if name in self.variables:
                raise ValueError(f"Duplicate variable '{name}' in URI template '{pattern}'")
            self.variables.append(name)
            parts.append(f"(?P<{name}>.+)" if match.end() == len(pattern) else f"(?P<{name}>[^/]+)")
            pos = match.end()

        tail = pattern[pos:]
        literals.append(tail)
        parts.append(re.escape(tail))
        if "{" in "".join(literals) or "}" in "".join(literals):
            raise ValueError(f"Malformed placeholder in URI template '{pattern}'")

        self.specificity = sum(len(lit) for lit in literals)
        self.skeleton = _PLACEHOLDER.sub("{}", pattern)
        self._regex = re.compile("".join(parts))

    def match(self, uri: str) -> Optional[Dict[str, str]]:
        found = self._regex.fullmatch(uri)
        if found is None:
            return None
        return found.groupdict()

    def __repr__(self) -> str:
        return f"UriTemplate({self.pattern!r})"


class ResourceRouter(Generic[T]):
    """
    Maps URIs to targets registered under URI templates.

    When several templates match, the one with the most literal characters
    wins (`things://{id}/sub/{x}` beats `things://{id}`); ties go to the
    template registered first.
    """

    def __init__(self) -> None:
        self._routes: List[Tuple[UriTemplate, T]] = []

    def add(self, pattern: str, target: T) -> UriTemplate:
        template = UriTemplate(pattern)
        for existing, _ in self._routes:
            if existing.skeleton == template.skeleton:
                raise AmbiguousTemplateError(
                    f"URI template '{pattern}' overlaps '{existing.pattern}'"
                )
        self._routes.append((template, target))
        return template

    def route(self, uri: str) -> Tuple[T, Dict[str, str]]:
        best: Optional[Tuple[UriTemplate, T, Dict[str, str]]] = None
        for template, target in self._routes:
            variables = template.match(uri)
            if variables is None:
                continue
            if best is None or template.specificity > best[0].specificity:
                best = (template, target, variables)
        if best is None:
            raise NoRouteError(f"No resource matches URI '{uri}'")
        return best[1], best[2]

    def templates(self) -> List[UriTemplate]:
        return [template for template, _ in self._routes]
