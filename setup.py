# setup.py
from setuptools import setup, find_packages

setup(
    name="swisp",
    version="0.1.0",
    description="A small Lisp with Q-expressions, partial application and errors as values",
    packages=find_packages(include=["swisp", "swisp.*"]),
    package_data={"swisp": ["prelude/*.swisp"]},
    python_requires=">=3.11",
    install_requires=[],
    extras_require={"test": ["pytest", "hypothesis"]},
    entry_points={"console_scripts": ["swisp=swisp.repl:main"]},
    zip_safe=False,
)
