from webcomp.compiler.codegen.context import Context
from webcomp.compiler.codegen.emitters.base import Emitter
from webcomp.compiler.info import ElementInfo

DATA_PREFIX = "data-"


def attribute_setter(elem_field: str, name: str) -> str:
    """Assignment target for a bound attribute of ``elem_field``."""
    if name.startswith(DATA_PREFIX):
        datum_name = name[len(DATA_PREFIX) :]
        return f"{elem_field}.data_attributes[{datum_name!r}]"
    if name.isidentifier():
        return f"{elem_field}.{name}"
    return f"{elem_field}.attributes[{name!r}]"


class DataBindingEmitter(Emitter[ElementInfo]):
    """Generates watchers that listen on data changes and update a DOM element."""

    def _stopper_prefix(self) -> str:
        field = (self.elem_info.field_name or "").lstrip("_")
        return f"_stop_watcher_{field}_"

    def emit_declarations(self, context: Context) -> None:
        for attr_info in self.elem_info.attributes.values():
            attr_info.stopper_names = []
            # Only class attributes watch every binding; others watch the first.
            watched = attr_info.bindings if attr_info.is_class else attr_info.bindings[:1]
            for _ in watched:
                stopper_name = self.new_name(context, self._stopper_prefix())
                attr_info.stopper_names.append(stopper_name)
                context.declare(stopper_name)

        if self.elem_info.content_binding is not None:
            self.elem_info.stopper_name = self.new_name(context, self._stopper_prefix())
            context.declare(self.elem_info.stopper_name)

    def emit_mounted(self, context: Context) -> None:
        if not self.elem_info.attributes and self.elem_info.content_binding is None:
            return
        elem_field = self.elem_field(context)

        for name, attr_info in self.elem_info.attributes.items():
            if attr_info.is_class:
                for stopper_name, exp in zip(attr_info.stopper_names, attr_info.bindings):
                    self._watch(
                        context,
                        stopper_name,
                        exp,
                        f"""
                        if e.old_value is not None and e.old_value != '':
                            {elem_field}.classes.discard(e.old_value)
                        if e.new_value is not None and e.new_value != '':
                            {elem_field}.classes.add(e.new_value)
                        """,
                    )
            elif attr_info.bindings:
                setter = attribute_setter(elem_field, name)
                self._watch(
                    context,
                    attr_info.stopper_names[0],
                    attr_info.bound_value,
                    f"{setter} = e.new_value",
                )

        if self.elem_info.content_binding is not None:
            content = self.elem_info.content_expression
            if content is None:
                content = "autogenerated.escape_html(e.new_value)"
            self._watch(
                context,
                self.elem_info.stopper_name,
                self.elem_info.content_binding,
                f"{elem_field}.inner_html = {content}",
            )

    def emit_unmounted(self, context: Context) -> None:
        for attr_info in self.elem_info.attributes.values():
            for stopper_name in attr_info.stopper_names:
                context.unmounted.add(f"{context.field(stopper_name)}()")
        if self.elem_info.content_binding is not None:
            context.unmounted.add(f"{context.field(self.elem_info.stopper_name)}()")

    def _watch(self, context: Context, stopper_name: str, exp: str, body: str) -> None:
        callback = "_update" + stopper_name[len("_stop_watcher") :]
        context.mounted.add(f"def {callback}(e):")
        context.mounted.add(body, indent=1)
        context.mounted.add(
            f"{context.field(stopper_name)} = "
            f"autogenerated.watch_and_invoke(lambda: {exp}, {callback})"
        )
