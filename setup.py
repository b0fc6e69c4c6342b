import logging
from pathlib import Path

from setuptools import find_packages, setup
from setuptools.command.build_py import build_py

log = logging.getLogger(__name__)

ROOT = Path(__file__).parent
TEMPLATES_DIR = ROOT / "src" / "webcomp" / "templates"


def check_templates():
    """Fail early if the code templates are missing from the source tree."""
    templates = sorted(TEMPLATES_DIR.glob("*.jinja"))
    if not templates:
        raise RuntimeError(f"No code templates found in {TEMPLATES_DIR}")
    log.info(f"Packaging {len(templates)} code templates")


class BuildPy(build_py):
    def run(self):
        check_templates()
        super().run()


setup(
    name="webcomp",
    version="0.3.0",
    description="Compiles annotated HTML templates into Python web component classes.",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"webcomp": ["templates/*.jinja"]},
    include_package_data=True,
    install_requires=[
        "jinja2>=3.1",
        "rich>=13.0",
        "rich-click>=1.7",
    ],
    extras_require={
        "test": [
            "click>=8.0",
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "webcomp=webcomp.cli.main:cli",
        ],
    },
    cmdclass={
        "build_py": BuildPy,
    },
    zip_safe=False,
)
