try:
    from ._version import __version__
except ImportError:
    from importlib.metadata import version, PackageNotFoundError

    try:
        __version__ = version("webcomp")
    except PackageNotFoundError:
        __version__ = "unknown"

from webcomp.config import CompilerOptions, load_config
from webcomp.compiler.build import BuildSummary, build_file
from webcomp.compiler.codegen.generator import MainPageEmitter, WebComponentEmitter
from webcomp.compiler.exceptions import (
    ConfigError,
    MetadataError,
    TemplateStructureError,
    WebCompError,
)
from webcomp.compiler.loader import load_file_info

__all__ = [
    "BuildSummary",
    "CompilerOptions",
    "ConfigError",
    "MainPageEmitter",
    "MetadataError",
    "TemplateStructureError",
    "WebCompError",
    "WebComponentEmitter",
    "build_file",
    "load_config",
    "load_file_info",
]
