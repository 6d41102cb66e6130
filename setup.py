from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="rollback",
    version="0.3.0",
    description="Concurrent asyncio task batches with per-task outcomes and rollback on failure.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Framework :: AsyncIO",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.11",
    extras_require={"test": ["pytest"]},
)
