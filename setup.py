# setup.py
from setuptools import setup, find_packages

setup(
    name="scrap-lang",
    version="0.4.0",
    description="Evaluation core of the Scrap scripting language",
    packages=find_packages(include=["scrap", "scrap.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["scrap=scrap.__main__:main"],
    },
    zip_safe=False,
)
