#!/usr/bin/env python
"""Setup script to make genmix directly installable with pip."""

from pathlib import Path

from setuptools import find_packages, setup

readme_path = Path(__file__).parent / "README.rst"
long_description = readme_path.read_text()

setup(
    name="catalystcoop.genmix",
    version="0.1.0",
    description="U.S. electricity generation mix, net flows and renewable capacity.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    author="Catalyst Cooperative",
    author_email="pudl@catalyst.coop",
    url="https://github.com/catalyst-cooperative/genmix",
    project_urls={
        "Source": "https://github.com/catalyst-cooperative/genmix",
        "Issue Tracker": "https://github.com/catalyst-cooperative/genmix/issues",
    },
    license="MIT",
    keywords=[
        "electricity",
        "energy",
        "data",
        "generation",
        "renewables",
        "eia",
        "eia api",
        "seds",
        "nrel",
        "solar",
        "wind",
        "climate change",
    ],
    python_requires=">=3.11",
    install_requires=[
        "click>=8.1,<9",
        "coloredlogs>=15.0,<15.1",
        "httpx>=0.25,<1",
        "pandas>=2,<3",
        "plotly>=5.15,<7",
        "pydantic>=2,<3",
        "pydantic-settings>=2,<3",
    ],
    extras_require={
        "dev": [
            "black>=23",
            "isort>=5.0",
        ],
        "test": [
            "coverage>=7",
            "pytest>=7.4",
            "pytest-console-scripts>=1.4",
            "pytest-cov>=4",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
    ],
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    # This defines the interfaces to the command line scripts we're including:
    entry_points={
        "console_scripts": [
            "genmix_summary = genmix.cli:main",
        ]
    },
)
