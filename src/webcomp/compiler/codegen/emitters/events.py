import re

from webcomp.compiler.codegen.context import Context
from webcomp.compiler.codegen.emitters.base import Emitter
from webcomp.compiler.info import ElementInfo


class EventListenerEmitter(Emitter[ElementInfo]):
    """Generates event listeners attached to a node.

    Each listener is kept in a field so that ``unmounted`` can detach it.
    """

    def emit_declarations(self, context: Context) -> None:
        for name, events in self.elem_info.events.items():
            safe_name = re.sub(r"\W", "_", name)
            for event in events:
                event.listener_field = self.new_name(context, f"_listener_{safe_name}_")
                context.declare(event.listener_field)

    def emit_mounted(self, context: Context) -> None:
        if not self.elem_info.events:
            return
        elem_field = self.elem_field(context)
        for events in self.elem_info.events.values():
            for event in events:
                name = event.listener_field
                field = context.field(name)
                context.mounted.add(f"def {name}(e):")
                context.mounted.add(event.action(elem_field, "e"), indent=1)
                context.mounted.add("autogenerated.dispatch()", indent=1)
                context.mounted.add(
                    f"""
                    {field} = {name}
                    {elem_field}.on[{event.event_name!r}].add({field})
                    """
                )

    def emit_unmounted(self, context: Context) -> None:
        if not self.elem_info.events:
            return
        elem_field = self.elem_field(context)
        for events in self.elem_info.events.values():
            for event in events:
                field = context.field(event.listener_field)
                context.unmounted.add(
                    f"""
                    {elem_field}.on[{event.event_name!r}].remove({field})
                    {field} = None
                    """
                )
