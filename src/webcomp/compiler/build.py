"""Build driver writing generated modules to disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from webcomp.compiler.codegen.generator import MainPageEmitter, WebComponentEmitter
from webcomp.compiler.info import FileInfo
from webcomp.compiler.messages import Messages
from webcomp.config import CompilerOptions

log = logging.getLogger(__name__)


@dataclass
class BuildSummary:
    pages: int
    components: int
    errors: int
    out_dir: Path
    outputs: List[Path] = field(default_factory=list)


def compile_file(
    info: FileInfo,
    options: Optional[CompilerOptions] = None,
    messages: Optional[Messages] = None,
) -> Dict[str, str]:
    """Generate every unit of ``info``.

    Returns a mapping of output module name to generated source. Each unit
    gets its own emitter, and therefore its own emission context.
    """
    options = options or CompilerOptions()
    messages = messages if messages is not None else Messages()
    outputs: Dict[str, str] = {}

    for component in info.declared_components:
        log.debug("Compiling component %s", component.tag_name)
        emitter = WebComponentEmitter(info, options, messages)
        outputs[component.module_name] = emitter.run(component)

    if info.is_page:
        log.debug("Compiling page %s", info.filename)
        outputs[info.module_name] = MainPageEmitter(info, options, messages).run()

    return outputs


def build_file(
    info: FileInfo,
    out_dir: Optional[Path] = None,
    options: Optional[CompilerOptions] = None,
    messages: Optional[Messages] = None,
) -> BuildSummary:
    """Compile ``info`` and write one ``.py`` file per unit into ``out_dir``."""
    options = options or CompilerOptions()
    messages = messages if messages is not None else Messages()
    out_dir = (out_dir or Path(options.out_dir)).resolve()
    out_dir.mkdir(parents=True, exist_ok=True)

    errors_before = len(messages.errors)
    sources = compile_file(info, options, messages)

    summary = BuildSummary(
        pages=1 if info.is_page else 0,
        components=len(info.declared_components),
        errors=len(messages.errors) - errors_before,
        out_dir=out_dir,
    )
    for module_name, source in sources.items():
        path = out_dir / f"{module_name}.py"
        path.write_text(source, encoding="utf-8")
        summary.outputs.append(path)
        log.info("Wrote %s", path)
    return summary
