from setuptools import setup, find_packages

setup(
    name="vclock",
    version="0.1.0",
    description="Immutable version vectors (vector clocks) for detecting causality between replicated writes",
    author="adamfilli",
    packages=find_packages(include=["vclock", "vclock.*"]),
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    include_package_data=True,
    python_requires=">=3.13",
)
