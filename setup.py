# setup.py
from setuptools import setup, find_packages

setup(
    name="lazo",
    version="0.1.0",
    description="Lisp like programming language",
    packages=find_packages(include=["lazo", "lazo.*"]),
    python_requires=">=3.10",
    install_requires=[
        "termcolor",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["lazo = lazo.cli:main"],
    },
    zip_safe=False,
)
