"""
Setup script for the edugame-engine package.

Installs the ``edugame`` package from ``src/``. The public API
(errors.py, types.py, callbacks.py, config.py, cli.py) sits at the
package root; the interpreter internals live in the ``_spec``,
``_engine``, ``_handlers`` and ``_shared`` subpackages.
"""

from setuptools import setup, find_packages


setup(
    name="edugame-engine",
    version="1.0.0",
    description="Universal Game Engine - interpreter for declarative educational GameSpec documents",
    author="Edugame Team",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "edugame=edugame.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
