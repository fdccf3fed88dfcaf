"""Named starter programs a host can load into a session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

DEFAULT_TEMPLATE = "hello"


@dataclass(frozen=True, slots=True)
class Template:
    name: str
    source: str
    description: str = ""


BUILTIN_TEMPLATES: tuple[Template, ...] = (
    Template(
        name="hello",
        description="Print a greeting",
        source='# Write your Python code here\nprint("Hello, World!")',
    ),
    Template(
        name="console",
        description="Every console method",
        source=(
            'console.log("log", {"answer": 42})\n'
            'console.info("info")\n'
            'console.warn("careful")\n'
            'console.error("failed")\n'
            'console.table([{"name": "ada", "lang": "python"}])\n'
            'console.time("loop")\n'
            "total = sum(range(1000))\n"
            'console.time_end("loop")\n'
            "total"
        ),
    ),
    Template(
        name="functions",
        description="Define and call a function",
        source=(
            "def greet(name):\n"
            '  return f"Hello, {name}!"\n'
            "\n"
            'greet("sandbox")'
        ),
    ),
    Template(
        name="error",
        description="A runtime error with a line-mapped diagnostic",
        source=(
            "values = [1, 2, 3]\n"
            "total = sum(values)\n"
            "print(total / 0)"
        ),
    ),
)


class TemplateLibrary:
    """Ordered name -> source mapping."""

    def __init__(self, templates: Optional[Iterable[Template]] = None) -> None:
        self._templates: Dict[str, Template] = {}
        for template in BUILTIN_TEMPLATES if templates is None else templates:
            self.add(template)

    def add(self, template: Template, *, replace: bool = False) -> Template:
        if not template.name:
            raise ValueError("template name cannot be empty")
        if template.name in self._templates and not replace:
            raise ValueError(f"Template '{template.name}' already registered")
        self._templates[template.name] = template
        return template

    def get(self, name: str) -> Template:
        try:
            return self._templates[name]
        except KeyError as exc:
            raise KeyError(f"Unknown template '{name}'") from exc

    def source(self, name: str) -> str:
        return self.get(name).source

    def names(self) -> tuple[str, ...]:
        return tuple(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[Template]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)


__all__ = ["Template", "TemplateLibrary", "BUILTIN_TEMPLATES", "DEFAULT_TEMPLATE"]
