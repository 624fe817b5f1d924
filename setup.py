# setup.py
from setuptools import setup, find_packages

setup(
    name="plang",
    version="0.1.0",
    description="Tree-walking interpreter for Plang, a small class-based scripting language",
    packages=find_packages(include=["plang", "plang.*", "plang_lsp", "plang_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "plang=plang.cli:main",
            "plang-ls=plang_lsp.server:main",
        ],
    },
    zip_safe=False,
)
