from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="symsize",
    version="0.1.0",
    description="Symbol size analysis of linked binaries by C++ template family.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"symsize.schemas": ["*.json"]},
    python_requires=">=3.10",
    install_requires=["pandas", "PyYAML", "jsonschema"],
    extras_require={"dev": ["pytest"]},
    tests_require=["pytest"],
    entry_points={"console_scripts": ["symsize=symsize.cli:main"]},
)
