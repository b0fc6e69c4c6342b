from webcomp.compiler.codegen.context import Context
from webcomp.compiler.codegen.emitters.base import TemplateEmitter


class ConditionalEmitter(TemplateEmitter):
    """Emitter of template conditionals like ``<template instantiate="if test">``.

    At runtime the region is either hidden (no child) or shown (one clone of
    the template child). The watcher only acts when the condition flips.
    """

    kind = "conditional"

    def _fields(self, context: Context) -> dict:
        s = self.suffix
        return {
            "stop": context.field(f"_stop_watcher_if{s}"),
            "template": context.field(f"_child_template{s}"),
            "parent": context.field(f"_parent{s}"),
            "child": context.field(f"_child{s}"),
            "child_id": context.field(f"_child_id{s}"),
        }

    def emit_declarations(self, context: Context) -> None:
        s = self.suffix
        context.declarations.add(f"# Fields for template conditional {self.elem_info.element_id!r}")
        for name in ("_stop_watcher_if", "_child_template", "_parent", "_child", "_child_id"):
            context.declare(f"{name}{s}")

    def emit_created(self, context: Context) -> None:
        self.check_single_child()
        elem = self.elem_field(context)
        f = self._fields(context)
        context.created.add(
            f"""
            assert len({elem}.elements) == 1
            {f['template']} = {elem}.elements[0]
            {f['child_id']} = {f['template']}.id
            if {f['child_id']}:
                {f['template']}.id = ''
            {f['parent']} = {elem}.parent
            {elem}.style.display = 'none'
            {elem}.nodes.clear()
            """
        )

    def emit_mounted(self, context: Context) -> None:
        f = self._fields(context)
        callback = f"_on_condition{self.suffix}"
        condition = self.elem_info.if_condition
        context.mounted.add(
            f"""
            def {callback}(e):
                show_now = bool(e.new_value)
                if {f['child']} is not None and not show_now:
                    # Remove any listeners/watchers on children
            """
        )
        context.mounted.add(self.children_unmounted, indent=2)
        context.mounted.add(
            f"""
            # Remove the actual child
            {f['child']}.remove()
            {f['child']} = None
            """,
            indent=2,
        )
        context.mounted.add(
            f"""
            elif {f['child']} is None and show_now:
                {f['child']} = {f['template']}.clone(True)
                if {f['child_id']}:
                    {f['child']}.id = {f['child_id']}
                # Initialize children
            """,
            indent=1,
        )
        context.mounted.add(self.children_created, indent=2)
        context.mounted.add(
            f"""
            {f['parent']}.nodes.append({f['child']})
            # Attach listeners/watchers
            """,
            indent=2,
        )
        context.mounted.add(self.children_mounted, indent=2)
        context.mounted.add(
            f"{f['stop']} = autogenerated.watch_and_invoke(lambda: {condition}, {callback})"
        )

    def emit_unmounted(self, context: Context) -> None:
        f = self._fields(context)
        context.unmounted.add(
            f"""
            if {f['child']} is not None:
                # Remove any listeners/watchers on children
            """
        )
        context.unmounted.add(self.children_unmounted, indent=1)
        context.unmounted.add(
            f"""
            {f['child']}.remove()
            {f['child']} = None
            """,
            indent=1,
        )
        context.unmounted.add(f"{f['stop']}()")

    def context_for_children(self, context: Context) -> Context:
        return context.child(
            declarations=context.declarations,
            created=self.children_created,
            mounted=self.children_mounted,
            unmounted=self.children_unmounted,
            query_from=context.field(f"_child{self.suffix}"),
            scope=context.scope,
        )
