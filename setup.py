# setup.py
from setuptools import setup, find_packages

setup(
    name="stutter",
    version="0.1.0",
    description="A minimal Lisp-like expression language with a tree-walking interpreter",
    python_requires=">=3.11",
    packages=find_packages(include=["stutter", "stutter.*", "stutter_lsp", "stutter_lsp.*"]),
    package_data={"stutter": ["prelude/*.lisp"]},
    install_requires=[
        "pyrsistent>=0.19",
        "pygls>=1.1,<2",
    ],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": [
            "stutter=stutter.repl:main",
            "stutter-ls=stutter_lsp.server:main",
        ],
    },
    zip_safe=False,
)
