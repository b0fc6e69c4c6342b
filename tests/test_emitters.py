import re
import unittest

from webcomp.compiler.codegen.context import Context
from webcomp.compiler.codegen.emitters import (
    ComponentInstanceEmitter,
    ConditionalEmitter,
    DataBindingEmitter,
    ElementFieldEmitter,
    EventListenerEmitter,
    ListEmitter,
)
from webcomp.compiler.codegen.emitters.bindings import attribute_setter
from webcomp.compiler.exceptions import TemplateStructureError
from webcomp.compiler.info import AttributeInfo, ComponentInfo, ElementInfo, EventInfo, TemplateInfo

from builders import el


def emit_all(emitter, context):
    emitter.emit_declarations(context)
    emitter.emit_created(context)
    emitter.emit_mounted(context)
    emitter.emit_unmounted(context)


class TestElementFieldEmitter(unittest.TestCase):
    def test_query_from_root(self):
        context = Context()
        info = ElementInfo(field_name="_button", element_id="button")
        emit_all(ElementFieldEmitter(el("button", id="button"), info), context)
        self.assertEqual(context.declarations.format_string(), "_button = None")
        self.assertEqual(
            context.created.format_string(), "self._button = self._root.query('#button')"
        )
        self.assertTrue(context.mounted.is_empty)
        self.assertTrue(context.unmounted.is_empty)

    def test_query_from_region_child(self):
        context = Context(query_from="self._child1")
        info = ElementInfo(field_name="_label", element_id="label")
        emit_all(ElementFieldEmitter(el("span", id="label"), info), context)
        self.assertEqual(
            context.created.format_string(),
            "if self._child1.id == 'label':\n"
            "    self._label = self._child1\n"
            "else:\n"
            "    self._label = self._child1.query('#label')",
        )

    def test_no_field(self):
        context = Context()
        emit_all(ElementFieldEmitter(el("div"), ElementInfo()), context)
        self.assertTrue(context.declarations.is_empty)
        self.assertTrue(context.created.is_empty)


class TestEventListenerEmitter(unittest.TestCase):
    def test_single_listener(self):
        context = Context()
        info = ElementInfo(
            field_name="_btn",
            element_id="btn",
            events={"click": [EventInfo("click", "self.count += 1")]},
        )
        emit_all(EventListenerEmitter(el("button", id="btn"), info), context)

        self.assertEqual(context.declarations.format_string(), "_listener_click_1 = None")
        self.assertEqual(
            context.mounted.format_string(),
            "def _listener_click_1(e):\n"
            "    self.count += 1\n"
            "    autogenerated.dispatch()\n"
            "self._listener_click_1 = _listener_click_1\n"
            "self._btn.on['click'].add(self._listener_click_1)",
        )
        self.assertEqual(
            context.unmounted.format_string(),
            "self._btn.on['click'].remove(self._listener_click_1)\n"
            "self._listener_click_1 = None",
        )

    def test_one_field_attach_and_detach_per_handler(self):
        context = Context()
        info = ElementInfo(
            field_name="_input",
            events={
                "click": [EventInfo("click", "a()"), EventInfo("click", "b()")],
                "key-down": [EventInfo("keydown", "c()")],
            },
        )
        emit_all(EventListenerEmitter(el("input"), info), context)

        declared = re.findall(r"^(_listener_\w+) = None$", context.declarations.format_string(), re.M)
        self.assertEqual(declared, ["_listener_click_1", "_listener_click_2", "_listener_key_down_3"])
        mounted = context.mounted.format_string()
        unmounted = context.unmounted.format_string()
        for name in declared:
            self.assertEqual(mounted.count(f".add(self.{name})"), 1)
            self.assertEqual(unmounted.count(f".remove(self.{name})"), 1)
        self.assertIn("self._input.on['keydown'].add(self._listener_key_down_3)", mounted)

    def test_action_builder(self):
        context = Context()
        action = EventInfo("input", lambda elem, e: f"self.text = {elem}.value")
        info = ElementInfo(field_name="_in", events={"input": [action]})
        emit_all(EventListenerEmitter(el("input"), info), context)
        self.assertIn("    self.text = self._in.value\n", context.mounted.format_string())

    def test_no_events(self):
        context = Context()
        emit_all(EventListenerEmitter(el("div"), ElementInfo()), context)
        self.assertTrue(context.declarations.is_empty)
        self.assertTrue(context.mounted.is_empty)
        self.assertTrue(context.unmounted.is_empty)

    def test_listener_needs_field(self):
        info = ElementInfo(events={"click": [EventInfo("click", "a()")]})
        emitter = EventListenerEmitter(el("button"), info)
        emitter.emit_declarations(Context())
        with self.assertRaises(TemplateStructureError):
            emitter.emit_mounted(Context())


class TestDataBindingEmitter(unittest.TestCase):
    def test_attribute_setter(self):
        self.assertEqual(attribute_setter("self._a", "title"), "self._a.title")
        self.assertEqual(attribute_setter("self._a", "data-user"), "self._a.data_attributes['user']")
        self.assertEqual(attribute_setter("self._a", "aria-label"), "self._a.attributes['aria-label']")

    def test_attribute_binding(self):
        context = Context()
        info = ElementInfo(
            field_name="_link", attributes={"title": AttributeInfo(bindings=["self.title"])}
        )
        emit_all(DataBindingEmitter(el("a"), info), context)

        self.assertEqual(context.declarations.format_string(), "_stop_watcher_link_1 = None")
        self.assertEqual(
            context.mounted.format_string(),
            "def _update_link_1(e):\n"
            "    self._link.title = e.new_value\n"
            "self._stop_watcher_link_1 = autogenerated.watch_and_invoke(lambda: self.title, _update_link_1)",
        )
        self.assertEqual(context.unmounted.format_string(), "self._stop_watcher_link_1()")

    def test_one_disposer_per_installed_watcher(self):
        context = Context()
        info = ElementInfo(
            field_name="_link",
            attributes={"title": AttributeInfo(bindings=["self.title", "self.fallback"])},
        )
        emit_all(DataBindingEmitter(el("a"), info), context)

        self.assertEqual(context.declarations.format_string(), "_stop_watcher_link_1 = None")
        self.assertEqual(context.mounted.format_string().count("watch_and_invoke("), 1)
        self.assertEqual(context.unmounted.format_string(), "self._stop_watcher_link_1()")

    def test_class_bindings(self):
        context = Context()
        info = ElementInfo(
            field_name="_item",
            attributes={
                "class": AttributeInfo(bindings=["self.state", "self.size"], is_class=True)
            },
        )
        emit_all(DataBindingEmitter(el("li"), info), context)

        mounted = context.mounted.format_string()
        self.assertEqual(mounted.count("watch_and_invoke("), 2)
        self.assertIn("lambda: self.state, _update_item_1", mounted)
        self.assertIn("lambda: self.size, _update_item_2", mounted)
        self.assertIn("self._item.classes.discard(e.old_value)", mounted)
        self.assertIn("self._item.classes.add(e.new_value)", mounted)
        self.assertEqual(
            context.unmounted.format_string(),
            "self._stop_watcher_item_1()\nself._stop_watcher_item_2()",
        )

    def test_content_binding(self):
        context = Context()
        info = ElementInfo(
            field_name="_total",
            content_binding="self.total",
            content_expression="str(e.new_value)",
        )
        emit_all(DataBindingEmitter(el("span"), info), context)
        self.assertIn("self._total.inner_html = str(e.new_value)", context.mounted.format_string())
        self.assertEqual(info.stopper_name, "_stop_watcher_total_1")

    def test_content_binding_is_escaped_by_default(self):
        context = Context()
        info = ElementInfo(field_name="_total", content_binding="self.total")
        emit_all(DataBindingEmitter(el("span"), info), context)
        self.assertIn(
            "self._total.inner_html = autogenerated.escape_html(e.new_value)",
            context.mounted.format_string(),
        )

    def test_nothing_bound(self):
        context = Context()
        emit_all(DataBindingEmitter(el("span"), ElementInfo()), context)
        self.assertTrue(context.declarations.is_empty)
        self.assertTrue(context.mounted.is_empty)
        self.assertTrue(context.unmounted.is_empty)


class TestComponentInstanceEmitter(unittest.TestCase):
    def test_instantiation(self):
        component = ComponentInfo("x-hello", "HelloComponent", "x_hello.py")
        context = Context()
        info = ElementInfo(
            field_name="_hello",
            id_as_identifier="hello",
            component=component,
            values={"bar": "'baz'"},
        )
        emit_all(ComponentInstanceEmitter(el("x-hello"), info), context)

        self.assertEqual(
            context.created.format_string(),
            "componenthello = HelloComponent.for_element(self._hello)\n"
            "componenthello.bar = 'baz'\n"
            "componenthello.created_autogenerated()",
        )
        self.assertEqual(context.mounted.format_string(), "self._hello.xtag.mounted_autogenerated()")
        self.assertEqual(
            context.unmounted.format_string(), "self._hello.xtag.unmounted_autogenerated()"
        )

    def test_plain_element(self):
        context = Context()
        emit_all(ComponentInstanceEmitter(el("div"), ElementInfo(field_name="_d")), context)
        self.assertTrue(context.created.is_empty)


class TestTemplateEmitters(unittest.TestCase):
    def conditional(self, *children):
        info = TemplateInfo(
            field_name="_msg", element_id="msg", id_as_identifier="msg", if_condition="self.show"
        )
        return ConditionalEmitter(el("template", *children, id="msg"), info)

    def test_conditional_fields(self):
        context = Context()
        emit_all(self.conditional(el("p")), context)
        declarations = context.declarations.format_string()
        for name in ("_stop_watcher_ifmsg", "_child_templatemsg", "_parentmsg", "_childmsg", "_child_idmsg"):
            self.assertIn(f"\n{name} = None", declarations)

        created = context.created.format_string()
        self.assertTrue(created.startswith("assert len(self._msg.elements) == 1\n"))
        self.assertIn("self._msg.nodes.clear()", created)

        mounted = context.mounted.format_string()
        self.assertIn("def _on_conditionmsg(e):", mounted)
        self.assertTrue(
            mounted.endswith(
                "self._stop_watcher_ifmsg = autogenerated.watch_and_invoke(lambda: self.show, _on_conditionmsg)"
            )
        )
        self.assertTrue(context.unmounted.format_string().endswith("self._stop_watcher_ifmsg()"))

    def test_conditional_children_context(self):
        context = Context(scope=None)
        emitter = self.conditional(el("p"))
        child_context = emitter.context_for_children(context)
        self.assertIs(child_context.declarations, context.declarations)
        self.assertIs(child_context.created, emitter.children_created)
        self.assertEqual(child_context.query_from, "self._childmsg")

    def test_conditional_with_two_children(self):
        emitter = self.conditional(el("p"), el("p"))
        with self.assertRaises(TemplateStructureError) as cm:
            emitter.emit_created(Context())
        self.assertIn("exactly one child element, found 2", str(cm.exception))

    def test_conditional_without_children(self):
        emitter = self.conditional("only text")
        with self.assertRaises(TemplateStructureError):
            emitter.emit_created(Context())

    def test_list_region(self):
        info = TemplateInfo(
            field_name="_items",
            element_id="items",
            id_as_identifier="items",
            loop_variable="item",
            loop_items="self.items",
        )
        emitter = ListEmitter(el("template", el("li"), id="items"), info)
        context = Context()
        child_context = emitter.context_for_children(context)
        self.assertEqual(child_context.scope, "_scopeitems")
        self.assertEqual(child_context.query_from, "childitems")
        self.assertIs(child_context.declarations, emitter.children_declarations)

        emit_all(emitter, context)
        mounted = context.mounted.format_string()
        self.assertTrue(mounted.startswith("def _add_childitems(_itemitems):\n    item = _itemitems\n"))
        self.assertIn("    _scopeitems = autogenerated.Scope()\n", mounted)
        self.assertIn("    childitems = self._child_templateitems.clone(True)\n", mounted)
        self.assertIn("    self._remove_childitems.append(_dispose_itemitems)\n", mounted)
        self.assertIn("if autogenerated.is_iterable(e.new_value):", mounted)
        self.assertEqual(
            context.unmounted.format_string(),
            "for remover in self._remove_childitems:\n"
            "    remover()\n"
            "self._remove_childitems.clear()\n"
            "self._stop_watcheritems()",
        )

    def test_region_needs_identifier(self):
        emitter = ListEmitter(el("template", el("li")), TemplateInfo(loop_items="self.items"))
        with self.assertRaises(TemplateStructureError):
            emitter.emit_declarations(Context())


if __name__ == "__main__":
    unittest.main()
