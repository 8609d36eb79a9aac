from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup


def _version():
    init = Path("src") / "persistent_factor" / "__init__.py"
    for line in init.read_text().splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip('"')
    raise RuntimeError(f"No __version__ in {init}")


setup(
    name="persistent-factor",
    version=_version(),
    description="Exact row factorization of sparse boundary matrix oracles restricted to persistence pairs",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy",
        "scipy",
        "gudhi",
        "fire",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
