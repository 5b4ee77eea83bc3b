from setuptools import setup, find_packages

setup(
    name="figsnap",
    version="0.1.0",
    description="Deterministic JSON snapshots of scene-graph selections",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2",
        "python-slugify",
        "rich",
        "toml",
    ],
    extras_require={
        "dev": ["pytest"],
    },
    entry_points={"console_scripts": ["figsnap=figsnap.main:main"]},
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3.11",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: POSIX :: Linux",
        "Operating System :: MacOS",
    ],
)
