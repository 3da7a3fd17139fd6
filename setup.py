from setuptools import find_packages, setup

setup(
    name="lockstep",
    version="0.1.0",
    description="Lock-step collection combinators with container-kind resolution",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": [],
    },
)
