"""Setup configuration for orgmetrics"""

from setuptools import setup, find_packages

setup(
    name="github-org-metrics-generator",
    version="0.1.0",
    description=(
        "CLI tool for GitHub organization metrics: pull request and issue close "
        "times, contributors, weekly cadence and adopters."
    ),
    author="GitHub Org Metrics Generator Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
        "markdown-it-py>=3.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "github-org-metrics=orgmetrics.main:main",
        ],
    },
)
