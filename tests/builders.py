"""Shortcuts for building annotated trees in tests."""

from webcomp.compiler.ast_nodes import Document, Element, Text
from webcomp.compiler.info import FileInfo
from webcomp.config import CompilerOptions

FAKE_RUNTIME = CompilerOptions(runtime_module="fake_runtime")


def el(tag, *children, **attributes):
    """``el("div", "text", el("span"), id="x")``; ``class_`` maps to ``class``."""
    attrs = {k.rstrip("_").replace("_", "-"): v for k, v in attributes.items()}
    nodes = [Text(c) if isinstance(c, str) else c for c in children]
    return Element(tag=tag, attributes=attrs, children=nodes)


def page(*children, **kwargs):
    """A FileInfo whose document is ``<html><body>children</body></html>``."""
    body = el("body", *children)
    document = Document(children=[el("html", body)])
    return FileInfo(filename="index.html", document=document, **kwargs)


def run_module(source, name="generated"):
    namespace = {"__name__": name}
    exec(compile(source, f"<{name}>", "exec"), namespace)
    return namespace
