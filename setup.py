# setup.py
from setuptools import setup, find_packages

setup(
    name="lishp",
    version="0.1.0",
    description="A Lisp-flavoured command shell",
    packages=find_packages(include=["lishp", "lishp.*"]),
    package_data={"lishp": ["prelude/*.lisp"]},
    python_requires=">=3.10",
    install_requires=[],
    extras_require={"test": ["pytest", "hypothesis"]},
    entry_points={"console_scripts": ["lishp = lishp.repl:main"]},
    zip_safe=False,
)
