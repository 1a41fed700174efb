from setuptools import setup, find_packages

setup(
    name="surprise-lift",
    version="0.1.0",
    description="A virtual elevator that opens onto a random floor",
    author="adamfilli",
    packages=find_packages(include=["surpriselift", "surpriselift.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "surprise-lift=surpriselift.cli:main",
        ],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
