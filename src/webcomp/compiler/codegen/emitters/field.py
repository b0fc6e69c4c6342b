from webcomp.compiler.codegen.context import Context
from webcomp.compiler.codegen.emitters.base import Emitter
from webcomp.compiler.info import ElementInfo


class ElementFieldEmitter(Emitter[ElementInfo]):
    """Generates a field for any element that has listeners or bindings."""

    def emit_declarations(self, context: Context) -> None:
        if self.elem_info.field_name is not None:
            context.declare(self.elem_info.field_name)

    def emit_created(self, context: Context) -> None:
        if self.elem_info.field_name is None:
            return

        query_from = context.query_from
        field = context.field(self.elem_info.field_name)
        elem_id = self.elem_info.element_id or ""
        selector = f"#{elem_id}"
        if query_from is not None:
            # The query root may itself be the element we are looking for.
            context.created.add(
                f"""
                if {query_from}.id == {elem_id!r}:
                    {field} = {query_from}
                else:
                    {field} = {query_from}.query({selector!r})
                """
            )
        else:
            context.created.add(f"{field} = self._root.query({selector!r})")
