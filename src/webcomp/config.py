"""Configuration for the webcomp compiler."""

import importlib.util
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from webcomp.compiler.exceptions import ConfigError

DEFAULT_CONFIG_FILENAME = "webcomp.config.py"


@dataclass(frozen=True)
class CompilerOptions:
    """Options shared by the assemblers and the build driver."""

    # Module imported as ``autogenerated`` by every generated unit
    runtime_module: str = "web_components"
    # Spaces per indentation level; must match the scaffold's class bodies
    indent_width: int = 4
    out_dir: str = "out"
    header_comment: str = "DO NOT EDIT."

    def merged(self, **overrides: Any) -> "CompilerOptions":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        values = {k: v for k, v in overrides.items() if k in known and v is not None}
        return replace(self, **values)


def load_config(path: Path | str | None = None) -> Dict[str, Any]:
    """
    Load configuration from a python file.

    If path is provided, loads from there.
    Otherwise, looks for webcomp.config.py in the current working directory.

    Returns a dictionary of option names mapped from the uppercase variables
    found in the config module.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if not path.exists():
            return {}
    else:
        path = Path(path)
        if not path.exists():
            raise ConfigError("Config file not found", file_path=str(path))

    spec = importlib.util.spec_from_file_location("webcomp_config", path)
    if spec is None or spec.loader is None:
        raise ConfigError("Config file could not be loaded", file_path=str(path))

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigError(f"Error executing config: {e}", file_path=str(path)) from e

    config = {key: getattr(module, key) for key in dir(module) if key.isupper()}

    # RUNTIME_MODULE -> runtime_module
    # INDENT_WIDTH -> indent_width
    # OUT_DIR -> out_dir
    # HEADER_COMMENT -> header_comment
    mapped_config: Dict[str, Any] = {}
    if "RUNTIME_MODULE" in config:
        mapped_config["runtime_module"] = str(config["RUNTIME_MODULE"])
    if "INDENT_WIDTH" in config:
        width = config["INDENT_WIDTH"]
        if not isinstance(width, int) or width <= 0:
            raise ConfigError(
                f"INDENT_WIDTH must be a positive integer, got {width!r}",
                file_path=str(path),
            )
        mapped_config["indent_width"] = width
    if "OUT_DIR" in config:
        # Path objects are accepted but stored as strings
        mapped_config["out_dir"] = str(config["OUT_DIR"])
    if "HEADER_COMMENT" in config:
        mapped_config["header_comment"] = str(config["HEADER_COMMENT"])

    return mapped_config


def resolve_options(
    config_path: Optional[Path | str] = None, **overrides: Any
) -> CompilerOptions:
    """Build options from the config file, then apply explicit overrides."""
    options = CompilerOptions().merged(**load_config(config_path))
    return options.merged(**overrides)
