from webcomp.compiler.codegen.context import Context
from webcomp.compiler.codegen.emitters.base import Emitter
from webcomp.compiler.info import ElementInfo


class ComponentInstanceEmitter(Emitter[ElementInfo]):
    """Emits code for web component instantiation.

    For example, if the source has::

        <x-hello>John</x-hello>

    And the component has been defined as::

        <element name="x-hello" extends="div" constructor="HelloComponent">
          <template>Hello, <content></content>!</template>
        </element>

    This will ensure that ``HelloComponent`` is created and attached to the
    ``<x-hello>`` node. Values listed for the node are copied into the new
    component before its ``created`` hook runs, so ``data-value="bar:baz"``
    sets the ``bar`` property of the component to ``baz``.
    """

    def _instance_name(self) -> str:
        suffix = self.elem_info.id_as_identifier or self.elem_info.field_name or ""
        return f"component{suffix}"

    def emit_created(self, context: Context) -> None:
        component = self.elem_info.component
        if component is None:
            return

        elem_field = self.elem_field(context)
        instance = self._instance_name()
        context.created.add(f"{instance} = {component.constructor}.for_element({elem_field})")
        for name, value in self.elem_info.values.items():
            context.created.add(f"{instance}.{name} = {value}")
        context.created.add(f"{instance}.created_autogenerated()")

    def emit_mounted(self, context: Context) -> None:
        if self.elem_info.component is None:
            return
        context.mounted.add(f"{self.elem_field(context)}.xtag.mounted_autogenerated()")

    def emit_unmounted(self, context: Context) -> None:
        if self.elem_info.component is None:
            return
        context.unmounted.add(f"{self.elem_field(context)}.xtag.unmounted_autogenerated()")
