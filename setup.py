from setuptools import setup, find_packages

setup(
    name="citation_fixtures",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pydantic",
        "lxml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "citation-fixtures=citation_fixtures.cli.main:main",
        ],
    },
    python_requires=">=3.10",
)
