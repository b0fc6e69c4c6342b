"""Where emitters write their code."""

from typing import Optional

from webcomp.compiler.codegen.printer import CodePrinter


class IdCounter:
    """Source of unique numbers for generated identifiers.

    Shared by a context and every context derived from it, so names stay
    unique across the whole generated unit.
    """

    def __init__(self) -> None:
        self._total_ids = 0

    def next_id(self) -> int:
        self._total_ids += 1
        return self._total_ids


class Context:
    """The four code regions of a unit plus naming information.

    ``query_from`` is the expression of the element that id lookups start
    from; ``None`` means the component's own root (``self._root``).

    ``scope`` decides how generated names are stored. With no scope they are
    attributes of the component (``self.name``) declared in the class body.
    Inside a repeated region they live on a per-item namespace object and
    are declared by assigning to it.
    """

    def __init__(
        self,
        declarations: Optional[CodePrinter] = None,
        created: Optional[CodePrinter] = None,
        mounted: Optional[CodePrinter] = None,
        unmounted: Optional[CodePrinter] = None,
        query_from: Optional[str] = None,
        counter: Optional[IdCounter] = None,
        scope: Optional[str] = None,
    ) -> None:
        self.declarations = declarations if declarations is not None else CodePrinter()
        self.created = created if created is not None else CodePrinter()
        self.mounted = mounted if mounted is not None else CodePrinter()
        self.unmounted = unmounted if unmounted is not None else CodePrinter()
        self.query_from = query_from
        self.counter = counter if counter is not None else IdCounter()
        self.scope = scope

    def next_id(self) -> int:
        return self.counter.next_id()

    def field(self, name: str) -> str:
        """Expression referring to the generated name ``name``."""
        return f"{self.scope or 'self'}.{name}"

    def declare(self, name: str) -> None:
        if self.scope is None:
            self.declarations.add(f"{name} = None")
        else:
            self.declarations.add(f"{self.scope}.{name} = None")

    def child(
        self,
        declarations: Optional[CodePrinter] = None,
        created: Optional[CodePrinter] = None,
        mounted: Optional[CodePrinter] = None,
        unmounted: Optional[CodePrinter] = None,
        query_from: Optional[str] = None,
        scope: Optional[str] = None,
    ) -> "Context":
        """A context for nested code that keeps this context's numbering."""
        return Context(
            declarations=declarations,
            created=created,
            mounted=mounted,
            unmounted=unmounted,
            query_from=query_from,
            counter=self.counter,
            scope=scope,
        )


def new_name(context: Context, prefix: str) -> str:
    """Generate a unique identifier in the given ``context``."""
    return f"{prefix}{context.next_id()}"
