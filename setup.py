from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="flowgraph",
    version="0.3.0",
    author="Andrey Golovanov",
    description="Flow-network algorithms: max flow, min cut and min-cost flow.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.10",
    install_requires=["networkx", "numpy"],
    extras_require={"test": ["pytest"]},
    tests_require=["pytest", "networkx"],
)
