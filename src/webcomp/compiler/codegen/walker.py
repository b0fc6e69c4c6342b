"""Recursive application of the emitters over a markup tree."""

import logging
from typing import FrozenSet, List, Optional, Tuple, Union

from webcomp.compiler.ast_nodes import Document, Element, Text
from webcomp.compiler.codegen.context import Context
from webcomp.compiler.codegen.emitters import (
    ComponentInstanceEmitter,
    ConditionalEmitter,
    DataBindingEmitter,
    ElementFieldEmitter,
    Emitter,
    EventListenerEmitter,
    ListEmitter,
    TemplateEmitter,
)
from webcomp.compiler.info import ElementInfo, FileInfo, TemplateInfo

log = logging.getLogger(__name__)


def emitters_for(
    elem: Element, elem_info: ElementInfo
) -> Tuple[List[Emitter], Optional[TemplateEmitter]]:
    """Emitters for one element, in the order their hooks must run.

    Later emitters use names declared by earlier ones, so the order is fixed.
    The second value is the region emitter, if the element starts one.
    """
    emitters: List[Emitter] = [
        ElementFieldEmitter(elem, elem_info),
        EventListenerEmitter(elem, elem_info),
        DataBindingEmitter(elem, elem_info),
        ComponentInstanceEmitter(elem, elem_info),
    ]

    region: Optional[TemplateEmitter] = None
    if isinstance(elem_info, TemplateInfo):
        if elem_info.has_if_condition:
            region = ConditionalEmitter(elem, elem_info)
        elif elem_info.has_iterate:
            region = ListEmitter(elem, elem_info)
    if region is not None:
        emitters.append(region)
    return emitters, region


class RecursiveEmitter:
    """Applies the feature emitters recursively on a markup tree.

    Elements inside a conditional or repeated region are emitted into the
    private context of that region instead of the unit's own context.
    """

    # Elements with these tags, and everything below them, are not visited.
    skipped_tags: FrozenSet[str] = frozenset()

    def __init__(self, info: FileInfo) -> None:
        self._info = info
        self._context = Context()

    @property
    def context(self) -> Context:
        return self._context

    def visit(self, node: Union[Document, Element, Text]) -> None:
        if isinstance(node, Element):
            self.visit_element(node)
        elif isinstance(node, Document):
            for child in node.children:
                self.visit(child)

    def visit_element(self, elem: Element) -> None:
        if elem.tag in self.skipped_tags:
            return

        elem_info = self._info.elements.get(elem)
        if elem_info is None:
            self._visit_children(elem)
            return

        emitters, region = emitters_for(elem, elem_info)
        child_context = self._context
        if region is not None:
            log.debug("Entering %s region %s", region.kind, elem_info.element_id)
            child_context = region.context_for_children(self._context)

        for emitter in emitters:
            emitter.emit_declarations(self._context)
            emitter.emit_created(self._context)
            emitter.emit_mounted(self._context)
            emitter.emit_unmounted(self._context)

        old_context = self._context
        self._context = child_context
        try:
            self._visit_children(elem)
        finally:
            self._context = old_context

    def _visit_children(self, elem: Element) -> None:
        for child in elem.children:
            self.visit(child)
