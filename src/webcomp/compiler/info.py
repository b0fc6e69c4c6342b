"""Metadata produced by the analysis stage.

The emitters only read these records, except for the generated names they
assign while emitting declarations (listener fields and watcher disposers),
which later hooks of the same emitter read back.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from webcomp.compiler.ast_nodes import Document, Element

# (element reference, event variable) -> statement
ActionBuilder = Callable[[str, str], str]


@dataclass
class EventInfo:
    """One handler attached to an event of an element."""

    event_name: str
    # Statement run by the listener. Either literal code, which may use the
    # listener argument ``e``, or a callable building it from references.
    action_code: Union[str, ActionBuilder]
    listener_field: Optional[str] = None

    def action(self, elem_field: str, event_var: str) -> str:
        if callable(self.action_code):
            return self.action_code(elem_field, event_var)
        return self.action_code


@dataclass
class AttributeInfo:
    """Data bindings of one attribute."""

    bindings: List[str] = field(default_factory=list)
    is_class: bool = False
    stopper_names: List[str] = field(default_factory=list)

    @property
    def bound_value(self) -> str:
        return self.bindings[0]


@dataclass
class ElementInfo:
    """Analysis results for a single element."""

    field_name: Optional[str] = None
    element_id: Optional[str] = None
    id_as_identifier: Optional[str] = None
    events: Dict[str, List[EventInfo]] = field(default_factory=dict)
    attributes: Dict[str, AttributeInfo] = field(default_factory=dict)
    content_binding: Optional[str] = None
    content_expression: Optional[str] = None
    component: Optional["ComponentInfo"] = None
    # Initial values copied into a nested component when it is created
    values: Dict[str, str] = field(default_factory=dict)
    stopper_name: Optional[str] = None

    @property
    def has_if_condition(self) -> bool:
        return False

    @property
    def has_iterate(self) -> bool:
        return False


@dataclass
class TemplateInfo(ElementInfo):
    """Analysis results for a conditional or repeated template node."""

    if_condition: Optional[str] = None
    loop_variable: Optional[str] = None
    loop_items: Optional[str] = None

    @property
    def has_if_condition(self) -> bool:
        return self.if_condition is not None

    @property
    def has_iterate(self) -> bool:
        return self.loop_items is not None


@dataclass(eq=False)
class ComponentInfo:
    """A component definition, as declared by an ``<element>`` tag."""

    tag_name: str
    constructor: str
    output_filename: str
    element: Optional[Element] = None
    user_code: Optional[str] = None
    input_filename: str = ""
    declaring_file: Optional["FileInfo"] = None
    used_components: List["ComponentInfo"] = field(default_factory=list)

    @property
    def template(self) -> Optional[Element]:
        if self.element is None:
            return None
        for child in self.element.elements:
            if child.tag == "template":
                return child
        return None

    @property
    def apply_author_styles(self) -> bool:
        return (
            self.element is not None
            and self.element.attributes.get("apply-author-styles") is not None
        )

    @property
    def module_name(self) -> str:
        return module_name_for(self.output_filename)


@dataclass
class FileInfo:
    """Everything known about one input file."""

    filename: str
    document: Document
    elements: Dict[Element, ElementInfo] = field(default_factory=dict)
    input_filename: str = ""
    library_name: Optional[str] = None
    user_code: str = ""
    is_page: bool = True
    declared_components: List[ComponentInfo] = field(default_factory=list)
    used_components: List[ComponentInfo] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.input_filename:
            self.input_filename = self.filename
        if self.library_name is None:
            self.library_name = module_name_for(self.filename)

    @property
    def module_name(self) -> str:
        return module_name_for(self.filename)


def module_name_for(filename: str) -> str:
    """Python module name for a generated file, e.g. ``x-hello.html`` -> ``x_hello``."""
    stem = Path(filename).name
    for suffix in (".py", ".html", ".htm"):
        if stem.endswith(suffix):
            stem = stem[: -len(suffix)]
    name = re.sub(r"[^0-9a-zA-Z_]", "_", stem)
    if not name or name[0].isdigit():
        name = f"_{name}"
    return name
