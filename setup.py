from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="linkbudget",
    version="0.1.0",
    description="Link-budget and capacity engine for telecom network topologies.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={
        "linkbudget.data": ["*.yaml"],
        "linkbudget.schemas": ["*.json"],
    },
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "PyYAML",
        "jsonschema",
        "networkx",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "linkbudget=linkbudget.cli:main",
        ],
    },
)
