"""Assemblers turning annotated markup into generated Python modules."""

import logging
import re
from typing import List, Optional, Tuple

from webcomp.compiler.ast_nodes import Document
from webcomp.compiler.codegen import template as codegen
from webcomp.compiler.codegen.template import python_string
from webcomp.compiler.codegen.walker import RecursiveEmitter
from webcomp.compiler.info import ComponentInfo, FileInfo, module_name_for
from webcomp.compiler.messages import Messages
from webcomp.config import CompilerOptions

log = logging.getLogger(__name__)

# A leading module docstring and/or the ``from __future__`` imports after it.
# Generated imports must go after this part of the user's code.
_DECLARATION_RE = re.compile(
    r"\A(?:[ \t]*(?:#[^\n]*)?\n)*"
    r"(?P<docstring>[rRuU]?(?:\"\"\"[\s\S]*?\"\"\"|'''[\s\S]*?''')[ \t]*(?:\n|\Z))?"
    r"(?:[ \t]*\n|(?P<future>from __future__ import [^\n]*)(?:\n|\Z))*"
)


class UnitEmitter(RecursiveEmitter):
    """Common driver of the two assemblers."""

    def __init__(
        self,
        info: FileInfo,
        options: Optional[CompilerOptions] = None,
        messages: Optional[Messages] = None,
    ) -> None:
        super().__init__(info)
        self.options = options or CompilerOptions()
        self.messages = messages if messages is not None else Messages()

    def _preamble(self, code: str, filename: str, library_name: str) -> Tuple[str, int]:
        """Header for a generated module and where the user's code resumes.

        A declaration at the top of the user's code is kept; otherwise a
        full header is generated.
        """
        match = _DECLARATION_RE.match(code)
        if match is None or not (match.group("docstring") or match.group("future")):
            return codegen.header(filename, library_name, self.options), 0
        parts = [
            codegen.generated_comment(filename, self.options),
            code[: match.end()].rstrip("\n"),
            "",
            codegen.imports(self.options),
        ]
        return "\n".join(parts), match.end()


class WebComponentEmitter(UnitEmitter):
    """Generates the class corresponding to a single web component."""

    def run(self, info: ComponentInfo) -> str:
        created = self._context.created
        if info.apply_author_styles:
            created.add(
                """
                if isinstance(self._root, autogenerated.ShadowRoot):
                    self._root.apply_author_styles = True
                """
            )
        if info.template is not None:
            markup = info.template.inner_html().strip()
            created.add(f"self._root.inner_html = {python_string(markup)}")

        if info.element is not None:
            self.visit(info.element)

        code = info.user_code
        if code is None:
            indent = " " * self.options.indent_width
            code = f"class {info.constructor}(autogenerated.WebComponent):\n{indent}pass\n"

        match = re.search(rf"^class {re.escape(info.constructor)}\b[^:]*:", code, re.M)
        if match is None:
            self.messages.error(
                f"please provide a class definition for {info.constructor}:\n{code}",
                filename=info.input_filename,
            )
            return code

        declaring_file = info.declaring_file
        filename = declaring_file.filename if declaring_file else info.input_filename
        preamble, start = self._preamble(code, filename, module_name_for(info.tag_name))
        log.debug("Assembling component %s", info.constructor)

        parts: List[str] = [preamble]
        # Import only those components used by this component.
        component_imports = codegen.import_list(info.used_components)
        if component_imports:
            parts.append(component_imports)
        parts.append("")
        parts.append(code[start : match.end()].strip("\n"))
        parts.append(
            codegen.component_code(
                info.constructor,
                self._context.declarations,
                self._context.created,
                self._context.mounted,
                self._context.unmounted,
                self.options,
            )
        )
        return "\n".join(parts) + code[match.end() :]


class MainPageEmitter(UnitEmitter):
    """Generates the program corresponding to the main html page."""

    # Each <element> is generated as its own component by WebComponentEmitter.
    skipped_tags = frozenset({"element"})
    page_class = "MainPage"

    def run(self, document: Optional[Document] = None) -> str:
        if document is None:
            document = self._info.document
        self.visit(document)

        code = self._info.user_code or ""
        preamble, start = self._preamble(
            code, self._info.filename, self._info.library_name or self._info.module_name
        )

        parts: List[str] = [preamble]
        # Import only those components used by the page.
        component_imports = codegen.import_list(self._info.used_components)
        if component_imports:
            parts.append(component_imports)
        parts.append("")
        parts.append(
            codegen.main_code(
                code[start:],
                self.page_class,
                self._context.declarations,
                self._context.created,
                self._context.mounted,
                self._context.unmounted,
                document.body_html(self.skipped_tags).strip(),
                self.options,
            )
        )
        return "\n".join(parts) + "\n"
