"""Source templates the assemblers splice generated code into."""

from typing import Any, Dict, Iterable

from jinja2 import Environment, PackageLoader, StrictUndefined

from webcomp.compiler.codegen.printer import CodePrinter
from webcomp.compiler.info import ComponentInfo
from webcomp.config import CompilerOptions


def python_string(value: str) -> str:
    """A Python literal evaluating to ``value``."""
    return repr(value)


# Output is Python source, so nothing is escaped.
_env = Environment(
    loader=PackageLoader("webcomp", "templates"),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)
_env.filters["python_string"] = python_string


def render_template(template_name: str, context: Dict[str, Any]) -> str:
    """Render a Jinja2 template with the given context.

    Args:
        template_name: Name of the template relative to src/webcomp/templates/
        context: Dictionary of variables to pass to the template

    Returns:
        Rendered source code
    """
    template = _env.get_template(template_name)
    return template.render(**context)


def imports(options: CompilerOptions) -> str:
    return f"import {options.runtime_module} as autogenerated"


def import_list(components: Iterable[ComponentInfo]) -> str:
    """One import per used component, without duplicates."""
    lines = []
    for component in components:
        line = f"from {component.module_name} import {component.constructor}"
        if line not in lines:
            lines.append(line)
    return "\n".join(lines)


def generated_comment(filename: str, options: CompilerOptions) -> str:
    return f"# Generated from {filename}. {options.header_comment}"


def header(filename: str, library_name: str, options: CompilerOptions) -> str:
    return render_template(
        "header.py.jinja",
        {
            "filename": filename,
            "library_name": library_name,
            "header_comment": options.header_comment,
            "imports": imports(options),
        },
    )


def method_body(printer: CodePrinter, level: int, options: CompilerOptions) -> str:
    """Render ``printer`` as a method body, which must not be empty."""
    if printer.is_empty:
        return " " * (options.indent_width * level) + "pass"
    return printer.format_string(level, options.indent_width)


def component_code(
    constructor: str,
    declarations: CodePrinter,
    created: CodePrinter,
    mounted: CodePrinter,
    unmounted: CodePrinter,
    options: CompilerOptions,
) -> str:
    """Class body members added to a component's class."""
    return render_template(
        "component.py.jinja",
        {
            "i": " " * options.indent_width,
            "constructor": constructor,
            "declarations": declarations.format_string(1, options.indent_width),
            "created": method_body(created, 2, options),
            "mounted": method_body(mounted, 2, options),
            "unmounted": method_body(unmounted, 2, options),
        },
    )


def main_code(
    user_code: str,
    page_class: str,
    declarations: CodePrinter,
    created: CodePrinter,
    mounted: CodePrinter,
    unmounted: CodePrinter,
    html: str,
    options: CompilerOptions,
) -> str:
    """The program generated for a whole document."""
    return render_template(
        "document.py.jinja",
        {
            "i": " " * options.indent_width,
            "user_code": user_code.strip("\n"),
            "page_class": page_class,
            "declarations": declarations.format_string(1, options.indent_width),
            "created": created.format_string(2, options.indent_width),
            "mounted": method_body(mounted, 2, options),
            "unmounted": method_body(unmounted, 2, options),
            "html": html,
        },
    )
