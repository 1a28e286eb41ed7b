"""Setup for PanelTimer.

Install for development:
    pip install -e ".[test]"

Run a countdown from the terminal:
    paneltimer 1h 2m 3s
"""

from setuptools import setup, find_namespace_packages

setup(
    name="PanelTimer",
    version="0.1.0",
    description="Countdown timer engine for a desktop panel, with alarm playback.",
    packages=find_namespace_packages(include=["paneltimer", "paneltimer.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6",
        "numpy",
        "click",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["paneltimer = paneltimer.__main__:main"],
    },
)
