"""Base emitter."""

from typing import Generic, TypeVar

from webcomp.compiler.ast_nodes import Element
from webcomp.compiler.codegen.context import Context, new_name
from webcomp.compiler.codegen.printer import CodePrinter
from webcomp.compiler.exceptions import TemplateStructureError
from webcomp.compiler.info import ElementInfo, TemplateInfo

T = TypeVar("T", bound=ElementInfo)


class Emitter(Generic[T]):
    """An emitter for a web component feature.

    It collects all the logic for emitting a particular feature (such as
    data-binding or event hookup) with respect to a single HTML element.
    """

    def __init__(self, elem: Element, elem_info: T) -> None:
        self.elem = elem
        self.elem_info = elem_info

    def emit_declarations(self, context: Context) -> None:
        """Emit declarations needed by this emitter's feature."""

    def emit_created(self, context: Context) -> None:
        """Emit feature-related statements in the ``created`` method."""

    def emit_mounted(self, context: Context) -> None:
        """Emit feature-related statements in the ``mounted`` method."""

    def emit_unmounted(self, context: Context) -> None:
        """Emit feature-related statements in the ``unmounted`` method."""

    def context_for_children(self, context: Context) -> Context:
        return context

    def new_name(self, context: Context, prefix: str) -> str:
        return new_name(context, prefix)

    def elem_field(self, context: Context) -> str:
        """Reference to the field holding this emitter's element."""
        if self.elem_info.field_name is None:
            raise TemplateStructureError(
                f"<{self.elem.tag}> needs a field to attach "
                f"{type(self).__name__} code to",
                line=self.elem.line,
            )
        return context.field(self.elem_info.field_name)


class TemplateEmitter(Emitter[TemplateInfo]):
    """Shared plumbing of the emitters for ``<template>`` regions.

    The region's children are emitted into private printers that get
    spliced into the code which materializes the region at runtime.
    """

    kind = "template"

    def __init__(self, elem: Element, elem_info: TemplateInfo) -> None:
        super().__init__(elem, elem_info)
        self.children_created = CodePrinter()
        self.children_mounted = CodePrinter()
        self.children_unmounted = CodePrinter()

    @property
    def suffix(self) -> str:
        suffix = self.elem_info.id_as_identifier or self.elem_info.field_name
        if not suffix:
            raise TemplateStructureError(
                f"{self.kind} region <{self.elem.tag}> has no identifier",
                line=self.elem.line,
            )
        return suffix

    def check_single_child(self) -> None:
        count = len(self.elem.elements)
        if count != 1:
            raise TemplateStructureError(
                f"{self.kind} region '{self.elem_info.element_id}' must have "
                f"exactly one child element, found {count}",
                line=self.elem.line,
            )
