#!/usr/bin/env python
import os

from setuptools import setup

here = os.path.abspath(os.path.dirname(__file__))


def read_requirements():
    with open(os.path.join(here, "requirements.txt")) as fp:
        return [row.strip() for row in fp if row.strip()]


about = {}
with open(os.path.join(here, "multiseek", "__init__.py"), "r") as f:
    for line in f:
        if line.startswith("VERSION"):
            exec(line, about)


def readme():
    with open(os.path.join(here, "README.md")) as f:
        return f.read()


setup(
    name="multiseek",
    version=about["VERSION"],
    description="Read an ordered sequence of seekable sources as one seekable stream",
    long_description=readme(),
    long_description_content_type="text/markdown",
    license="BSD",
    python_requires=">=3.8",
    packages=[
        "multiseek",
        "multiseek.commands",
    ],
    entry_points="""
      [console_scripts]
      multiseek=multiseek.commands.__main__:main
      """,
    install_requires=read_requirements(),
    extras_require={"test": ["pytest"]},
)
