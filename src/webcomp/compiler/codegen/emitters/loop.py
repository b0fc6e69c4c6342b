from webcomp.compiler.ast_nodes import Element
from webcomp.compiler.codegen.context import Context
from webcomp.compiler.codegen.emitters.base import TemplateEmitter
from webcomp.compiler.codegen.printer import CodePrinter
from webcomp.compiler.info import TemplateInfo


class ListEmitter(TemplateEmitter):
    """Emitter of template lists like ``<template iterate="item in items">``.

    Every change of the iterated value tears down all materialized items and
    builds them again from scratch; there is no diffing. Each item is built by
    its own function call so that listeners and watchers created for it close
    over that item only.
    """

    kind = "list"

    def __init__(self, elem: Element, elem_info: TemplateInfo) -> None:
        super().__init__(elem, elem_info)
        self.children_declarations = CodePrinter()

    @property
    def child_element_name(self) -> str:
        return f"child{self.suffix}"

    @property
    def scope_name(self) -> str:
        return f"_scope{self.suffix}"

    def _fields(self, context: Context) -> dict:
        s = self.suffix
        return {
            "template": context.field(f"_child_template{s}"),
            "stop": context.field(f"_stop_watcher{s}"),
            "removers": context.field(f"_remove_child{s}"),
        }

    def emit_declarations(self, context: Context) -> None:
        s = self.suffix
        context.declarations.add(f"# Fields for template list {self.elem_info.element_id!r}")
        for name in ("_child_template", "_stop_watcher", "_remove_child"):
            context.declare(f"{name}{s}")

    def emit_created(self, context: Context) -> None:
        self.check_single_child()
        elem = self.elem_field(context)
        f = self._fields(context)
        context.created.add(
            f"""
            assert len({elem}.elements) == 1
            {f['template']} = {elem}.elements[0]
            {f['removers']} = []
            {elem}.nodes.clear()
            """
        )

    def emit_mounted(self, context: Context) -> None:
        s = self.suffix
        elem = self.elem_field(context)
        f = self._fields(context)
        child = self.child_element_name
        add_child = f"_add_child{s}"
        dispose_item = f"_dispose_item{s}"
        item = f"_item{s}"

        context.mounted.add(f"def {add_child}({item}):")
        if self.elem_info.loop_variable:
            context.mounted.add(f"{self.elem_info.loop_variable} = {item}", indent=1)
        context.mounted.add(f"{self.scope_name} = autogenerated.Scope()", indent=1)
        context.mounted.add(self.children_declarations, indent=1)
        context.mounted.add(f"{child} = {f['template']}.clone(True)", indent=1)
        context.mounted.add(self.children_created, indent=1)
        context.mounted.add(
            f"""
            {elem}.parent.nodes.append({child})
            # Attach listeners/watchers
            """,
            indent=1,
        )
        context.mounted.add(self.children_mounted, indent=1)
        context.mounted.add(
            f"""
            # Remember to unregister them
            def {dispose_item}():
            """,
            indent=1,
        )
        context.mounted.add(self.children_unmounted, indent=2)
        context.mounted.add(f"{child}.remove()", indent=2)
        context.mounted.add(f"{f['removers']}.append({dispose_item})", indent=1)

        context.mounted.add(
            f"""
            def _on_items{s}(e):
                for remover in {f['removers']}:
                    remover()
                {f['removers']}.clear()
                if autogenerated.is_iterable(e.new_value):
                    for _value in e.new_value:
                        {add_child}(_value)
            {f['stop']} = autogenerated.watch_and_invoke(
                lambda: {self.elem_info.loop_items}, _on_items{s}
            )
            """
        )

    def emit_unmounted(self, context: Context) -> None:
        f = self._fields(context)
        context.unmounted.add(
            f"""
            for remover in {f['removers']}:
                remover()
            {f['removers']}.clear()
            {f['stop']}()
            """
        )

    def context_for_children(self, context: Context) -> Context:
        return context.child(
            declarations=self.children_declarations,
            created=self.children_created,
            mounted=self.children_mounted,
            unmounted=self.children_unmounted,
            query_from=self.child_element_name,
            scope=self.scope_name,
        )
