"""
Setup script for Resource Finder.
"""

from setuptools import setup, find_packages

setup(
    name="resourcefinder",
    version="0.1.0",
    author="Resource Finder Team",
    description="Community resource directory search engine",
    long_description="Facet filtering, typo-tolerant search and proximity ranking for a directory of community resources.",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.31.0",
        "python-dotenv>=1.0.0",
        "click>=8.1.0",
        "tqdm>=4.66.0",
        "rapidfuzz>=3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "responses>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "resourcefinder=resourcefinder.cli:cli",
        ],
    },
)
