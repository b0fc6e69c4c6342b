from webcomp.compiler.codegen.emitters.base import Emitter, TemplateEmitter
from webcomp.compiler.codegen.emitters.bindings import DataBindingEmitter
from webcomp.compiler.codegen.emitters.component import ComponentInstanceEmitter
from webcomp.compiler.codegen.emitters.conditional import ConditionalEmitter
from webcomp.compiler.codegen.emitters.events import EventListenerEmitter
from webcomp.compiler.codegen.emitters.field import ElementFieldEmitter
from webcomp.compiler.codegen.emitters.loop import ListEmitter

__all__ = [
    "ComponentInstanceEmitter",
    "ConditionalEmitter",
    "DataBindingEmitter",
    "ElementFieldEmitter",
    "Emitter",
    "EventListenerEmitter",
    "ListEmitter",
    "TemplateEmitter",
]
