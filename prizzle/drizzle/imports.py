"""Import statement collector for generated Drizzle modules."""

from typing import Dict


class ImportsCollector:
    """
    Records every name the generated code references.

    One collector belongs to one generation call. Names keep the order in which
    they were first used, and ``render`` emits at most two statements: one for
    the dialect core module and one for ``drizzle-orm``.
    """

    def __init__(self, core_module: str):
        self.core_module = core_module
        self._core: Dict[str, None] = {}
        self._basic: Dict[str, None] = {}

    def core(self, name: str) -> None:
        self._core.setdefault(name, None)

    def basic(self, name: str) -> None:
        self._basic.setdefault(name, None)

    @property
    def core_names(self):
        return list(self._core)

    @property
    def basic_names(self):
        return list(self._basic)

    def render(self) -> str:
        imports = []

        if self._core:
            imports.append(f'import {{ {", ".join(self._core)} }} from "{self.core_module}";')

        if self._basic:
            imports.append(f'import {{ {", ".join(self._basic)} }} from "drizzle-orm";')

        return "\n".join(imports)

    def __str__(self) -> str:
        return self.render()
