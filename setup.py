# graphsample/setup.py
from pathlib import Path
from setuptools import setup, find_packages

here = Path(__file__).parent.resolve()

# Prefer a local README; else empty.
long_description = ""
long_description_content_type = "text/plain"
readme = here / "README.md"
if readme.exists():
    long_description = readme.read_text(encoding="utf-8")
    long_description_content_type = "text/markdown"

setup(
    name="graphsample",
    version="1.0.0",
    description="Graph sampling primitives (uniform, random walk, frontier/BFS) served over line-delimited JSON-RPC",
    long_description=long_description,
    long_description_content_type=long_description_content_type,
    license="MIT",
    keywords=["graph sampling", "random walk", "BFS", "subgraph", "JSON-RPC"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src", exclude=("tests", "docs", "examples")),
    include_package_data=True,
    install_requires=[
        "numpy>=1.26",
        "pyyaml>=6.0",
    ],
    extras_require={
        "tools": [
            "networkx>=3.0",
            "tqdm>=4.62",
        ],
        "dev": ["black>=24.0", "ruff>=0.4", "mypy>=1.8", "pre-commit>=3.5"],
        "test": ["pytest>=7.4", "pytest-cov>=4.1", "networkx>=3.0"],
        "all": [
            "networkx>=3.0",
            "tqdm>=4.62",
            "black>=24.0",
            "ruff>=0.4",
            "mypy>=1.8",
            "pre-commit>=3.5",
            "pytest>=7.4",
            "pytest-cov>=4.1",
        ],
    },
    entry_points={
        "console_scripts": [
            "graphsample-serve=graphsample.cli:main",
        ]
    },
    zip_safe=False,
)
