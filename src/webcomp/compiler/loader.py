"""Loads analysis results from the JSON interchange format.

A metadata file looks like::

    {
      "filename": "index.html",
      "user_code": "...",
      "document": [<node>, ...],
      "components": [
        {"name": "x-counter", "constructor": "Counter",
         "output_filename": "x_counter.py", "user_code": "...",
         "used_components": ["x-item"]}
      ],
      "external_components": [
        {"name": "x-item", "constructor": "Item", "output_filename": "item.py"}
      ],
      "used_components": ["x-counter"]
    }

where a node is either a string (text) or an object with ``tag``,
``attributes``, ``children`` and an optional ``info`` record.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from webcomp.compiler.ast_nodes import Document, Element, Node, Text
from webcomp.compiler.exceptions import MetadataError
from webcomp.compiler.info import (
    AttributeInfo,
    ComponentInfo,
    ElementInfo,
    EventInfo,
    FileInfo,
    TemplateInfo,
)

_TEMPLATE_KEYS = ("if_condition", "loop_variable", "loop_items")
_SCALAR_KEYS = ("field_name", "element_id", "id_as_identifier", "content_binding", "content_expression")


class _Loader:
    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        self.elements: Dict[Element, ElementInfo] = {}
        # Component tag names referenced by annotated elements, resolved last
        self._pending: List[Tuple[ElementInfo, str, int]] = []

    def error(self, message: str, line: int = 0) -> MetadataError:
        return MetadataError(message, file_path=self.file_path, line=line)

    def load(self, data: Any) -> FileInfo:
        if not isinstance(data, dict):
            raise self.error("metadata must be a JSON object")
        filename = data.get("filename")
        if not isinstance(filename, str) or not filename:
            raise self.error("'filename' is required")

        document = self.document(data.get("document", []))
        info = FileInfo(
            filename=filename,
            document=document,
            elements=self.elements,
            input_filename=data.get("input_filename", ""),
            library_name=data.get("library_name"),
            user_code=data.get("user_code") or "",
            is_page=bool(data.get("is_page", True)),
        )

        components: Dict[str, ComponentInfo] = {}
        for raw in data.get("components", []):
            component = self.component(raw, declared=True)
            component.declaring_file = info
            if not component.input_filename:
                component.input_filename = info.input_filename
            component.element = self._definition(document, component.tag_name)
            components[component.tag_name] = component
            info.declared_components.append(component)
        for raw in data.get("external_components", []):
            component = self.component(raw, declared=False)
            components.setdefault(component.tag_name, component)

        for elem_info, tag, line in self._pending:
            elem_info.component = self._lookup(components, tag, line)
        for raw, component in zip(data.get("components", []), info.declared_components):
            component.used_components = [
                self._lookup(components, tag) for tag in raw.get("used_components", [])
            ]
        info.used_components = [
            self._lookup(components, tag) for tag in data.get("used_components", [])
        ]
        return info

    def document(self, raw: Any) -> Document:
        if isinstance(raw, dict):
            raw = raw.get("children", [])
        if not isinstance(raw, list):
            raise self.error("'document' must be a list of nodes")
        return Document(children=[self.node(n) for n in raw])

    def node(self, raw: Any) -> Node:
        if isinstance(raw, str):
            return Text(raw)
        if not isinstance(raw, dict) or not isinstance(raw.get("tag"), str):
            raise self.error(f"invalid node: {raw!r}")
        line = int(raw.get("line", 0))
        attributes = raw.get("attributes", {})
        if not isinstance(attributes, dict):
            raise self.error("'attributes' must be an object", line)
        elem = Element(
            tag=raw["tag"].lower(),
            attributes={str(k): str(v) for k, v in attributes.items()},
            children=[self.node(c) for c in raw.get("children", [])],
            line=line,
            column=int(raw.get("column", 0)),
        )
        if raw.get("info") is not None:
            self.elements[elem] = self.element_info(raw["info"], elem)
        return elem

    def element_info(self, raw: Any, elem: Element) -> ElementInfo:
        if not isinstance(raw, dict):
            raise self.error("'info' must be an object", elem.line)

        kwargs: Dict[str, Any] = {key: raw.get(key) for key in _SCALAR_KEYS}
        if kwargs["element_id"] is None:
            kwargs["element_id"] = elem.id
        kwargs["events"] = self.events(raw.get("events", {}), elem.line)
        kwargs["attributes"] = self.attributes(raw.get("attributes", {}), elem.line)
        kwargs["values"] = {str(k): str(v) for k, v in raw.get("values", {}).items()}

        if any(raw.get(key) is not None for key in _TEMPLATE_KEYS):
            for key in _TEMPLATE_KEYS:
                kwargs[key] = raw.get(key)
            elem_info: ElementInfo = TemplateInfo(**kwargs)
        else:
            elem_info = ElementInfo(**kwargs)

        if raw.get("component"):
            self._pending.append((elem_info, str(raw["component"]).lower(), elem.line))
        return elem_info

    def events(self, raw: Any, line: int) -> Dict[str, List[EventInfo]]:
        if not isinstance(raw, dict):
            raise self.error("'events' must be an object", line)
        events: Dict[str, List[EventInfo]] = {}
        for name, handlers in raw.items():
            if isinstance(handlers, (str, dict)):
                handlers = [handlers]
            result = []
            for handler in handlers:
                if isinstance(handler, str):
                    handler = {"action": handler}
                if "action" not in handler:
                    raise self.error(f"event '{name}' has a handler without 'action'", line)
                result.append(
                    EventInfo(
                        event_name=handler.get("event_name", name),
                        action_code=handler["action"],
                    )
                )
            events[name] = result
        return events

    def attributes(self, raw: Any, line: int) -> Dict[str, AttributeInfo]:
        if not isinstance(raw, dict):
            raise self.error("'attributes' must be an object", line)
        attributes: Dict[str, AttributeInfo] = {}
        for name, binding in raw.items():
            if isinstance(binding, str):
                binding = {"bindings": [binding]}
            elif isinstance(binding, list):
                binding = {"bindings": binding}
            bindings = binding.get("bindings", [])
            if not bindings:
                raise self.error(f"attribute '{name}' has no bindings", line)
            attributes[name] = AttributeInfo(
                bindings=[str(b) for b in bindings],
                is_class=bool(binding.get("is_class", name == "class")),
            )
        return attributes

    def component(self, raw: Any, declared: bool) -> ComponentInfo:
        if not isinstance(raw, dict) or not raw.get("name"):
            raise self.error(f"invalid component entry: {raw!r}")
        name = str(raw["name"]).lower()
        constructor = raw.get("constructor")
        if not constructor:
            raise self.error(f"component '{name}' has no constructor")
        return ComponentInfo(
            tag_name=name,
            constructor=constructor,
            output_filename=raw.get("output_filename") or f"{name}.py",
            user_code=raw.get("user_code") if declared else None,
            input_filename=raw.get("input_filename", ""),
        )

    def _definition(self, document: Document, tag_name: str) -> Optional[Element]:
        for elem in document.find_by_tag("element"):
            if elem.attributes.get("name", "").lower() == tag_name:
                return elem
        raise self.error(f"no <element name={tag_name!r}> in document")

    def _lookup(self, components: Dict[str, ComponentInfo], tag: str, line: int = 0) -> ComponentInfo:
        component = components.get(tag.lower())
        if component is None:
            raise self.error(f"unknown component '{tag}'", line)
        return component


def load_file_info(path: Path | str) -> FileInfo:
    """Read a metadata file produced by the analysis stage."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise MetadataError("metadata file not found", file_path=str(path)) from e
    except json.JSONDecodeError as e:
        raise MetadataError(f"invalid JSON: {e.msg}", file_path=str(path), line=e.lineno) from e
    return parse_file_info(data, str(path))


def parse_file_info(data: Any, file_path: str = "") -> FileInfo:
    """Build a :class:`FileInfo` from already decoded metadata."""
    return _Loader(file_path).load(data)
